"""Per-interaction state machine turning raw positions into handle moves."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    # Touch start seen, not yet known whether the user drags or scrolls
    DETECTING_GESTURE = "detecting_gesture"
    ACTIVE = "active"


@dataclass
class DragFrame:
    index: int
    start_value: float
    # None for focus sessions, which have no pointer reference
    start_position: Optional[float] = None
    start_orthogonal: Optional[float] = None
    track_length: float = 0.0
    moved: bool = False


@dataclass(frozen=True)
class SessionCallbacks:
    """Capabilities a session needs from its owner.

    ``resolve_move(index, proposed)`` resolves, commits and returns whether
    the value changed.
    """

    resolve_move: Callable[[int, float], bool]
    notify_before: Callable[[], None]
    notify_change: Callable[[], None]
    notify_after: Callable[[], None]


class InteractionSession:
    def __init__(self, callbacks: SessionCallbacks, span: float, invert: bool = False):
        self._callbacks = callbacks
        self._span = float(span)
        self._invert = bool(invert)
        self._state = SessionState.IDLE
        self._frame: Optional[DragFrame] = None
        self._last_frame: Optional[DragFrame] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def frame(self) -> Optional[DragFrame]:
        return self._frame

    @property
    def last_frame(self) -> Optional[DragFrame]:
        """Frame of the most recently finished session."""
        return self._last_frame

    @property
    def is_idle(self) -> bool:
        return self._state is SessionState.IDLE

    def reconfigure(self, span: float, invert: bool) -> None:
        self._span = float(span)
        self._invert = bool(invert)

    def begin(
        self,
        index: int,
        start_value: float,
        position: Optional[float] = None,
        track_length: float = 0.0,
        orthogonal: Optional[float] = None,
        detect_gesture: bool = False,
    ) -> bool:
        if not self.is_idle:
            logger.debug("Ignoring start for handle %d: session already %s", index, self._state.value)
            return False

        self._frame = DragFrame(
            index=index,
            start_value=float(start_value),
            start_position=position,
            start_orthogonal=orthogonal,
            track_length=float(track_length),
        )
        if detect_gesture and position is not None and orthogonal is not None:
            self._state = SessionState.DETECTING_GESTURE
        else:
            self._state = SessionState.ACTIVE
        logger.debug("Session started for handle %d (%s)", index, self._state.value)
        self._callbacks.notify_before()
        return True

    def move(self, position: float, orthogonal: Optional[float] = None) -> bool:
        frame = self._frame
        if frame is None or frame.start_position is None:
            return False

        if self._state is SessionState.DETECTING_GESTURE:
            if self._is_scroll(frame, position, orthogonal):
                logger.debug("Gesture on handle %d is a scroll, ending session", frame.index)
                self.end()
                return False
            self._state = SessionState.ACTIVE

        frame.moved = True
        if frame.track_length <= 0:
            return False

        delta = position - frame.start_position
        if self._invert:
            delta = -delta
        proposed = frame.start_value + delta / frame.track_length * self._span
        return self._apply(frame.index, proposed)

    def end(self) -> bool:
        if self._frame is None:
            return False
        logger.debug("Session ended for handle %d", self._frame.index)
        self._last_frame = self._frame
        self._frame = None
        self._state = SessionState.IDLE
        self._callbacks.notify_after()
        return True

    cancel = end

    def forget_last(self) -> None:
        self._last_frame = None

    def _apply(self, index: int, proposed: float) -> bool:
        changed = self._callbacks.resolve_move(index, proposed)
        if changed:
            self._callbacks.notify_change()
        return changed

    @staticmethod
    def _is_scroll(frame: DragFrame, position: float, orthogonal: Optional[float]) -> bool:
        if orthogonal is None or frame.start_orthogonal is None:
            return False
        main_delta = position - (frame.start_position or 0.0)
        cross_delta = orthogonal - frame.start_orthogonal
        return abs(cross_delta) > abs(main_delta)


def nudge(
    callbacks: SessionCallbacks,
    index: int,
    current_value: float,
    direction: int,
    step: float,
    modifier: bool = False,
    multiplier: int = 10,
) -> bool:
    """One-shot keyboard move by one step, or ``multiplier`` steps with a modifier."""
    if direction == 0:
        return False
    amount = step * (multiplier if modifier else 1)
    proposed = current_value + (amount if direction > 0 else -amount)
    changed = callbacks.resolve_move(index, proposed)
    if changed:
        callbacks.notify_change()
    return changed
