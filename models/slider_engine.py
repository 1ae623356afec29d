from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple, Union

from models.alignment import ValueLike, trim_align, undo_ensure_list, value_at_offset
from models.collision import resolve
from models.errors import HandleIndexError
from models.handle_set import HandleSet
from models.interaction import InteractionSession, SessionCallbacks, SessionState, nudge
from models.reconcile import reconcile, validate_sequence
from models.slider_model import Bounds, SliderConfig

logger = logging.getLogger(__name__)

SliderValue = Union[float, List[float]]
ValueCallback = Callable[[SliderValue], None]


class SliderEngine:
    """Single owner of a slider's handle values and interaction state.

    Positions passed to the interaction methods are pixel coordinates along
    the slider axis, measured from the start of the usable track and never
    inverted; the engine applies ``invert`` itself. Values reported to the
    callbacks are a scalar for a one-handle slider and a list otherwise.
    """

    def __init__(
        self,
        config: Optional[SliderConfig] = None,
        value: ValueLike = None,
        default_value: ValueLike = 0.0,
        handle_count: Optional[int] = None,
        on_before_change: Optional[ValueCallback] = None,
        on_change: Optional[ValueCallback] = None,
        on_after_change: Optional[ValueCallback] = None,
        on_slider_click: Optional[Callable[[float], None]] = None,
    ):
        self._config = config or SliderConfig()
        self._handle_count = handle_count
        self.on_before_change = on_before_change
        self.on_change = on_change
        self.on_after_change = on_after_change
        self.on_slider_click = on_slider_click

        bounds = self._config.bounds
        initial = reconcile(value, default_value, handle_count, bounds)
        validate_sequence(initial, bounds)
        self._handles = HandleSet(initial)
        self._callbacks = SessionCallbacks(
            resolve_move=self._resolve_move,
            notify_before=lambda: self._fire(self.on_before_change),
            notify_change=lambda: self._fire(self.on_change),
            notify_after=self._notify_after,
        )
        self._session = InteractionSession(self._callbacks, bounds.span, self._config.invert)

    # --------------- State ---------------
    @property
    def config(self) -> SliderConfig:
        return self._config

    @property
    def bounds(self) -> Bounds:
        return self._config.bounds

    @property
    def handles(self) -> HandleSet:
        return self._handles

    @property
    def values(self) -> Tuple[float, ...]:
        return self._handles.values

    @property
    def session_state(self) -> SessionState:
        return self._session.state

    @property
    def active_index(self) -> Optional[int]:
        return self._handles.active_index

    @property
    def handle_count(self) -> Optional[int]:
        return self._handle_count

    def get_value(self) -> SliderValue:
        return undo_ensure_list(self._handles.values)

    # --------------- External updates ---------------
    def set_value(self, value: ValueLike) -> Tuple[float, ...]:
        """Apply an externally controlled value; no change callbacks fire."""
        bounds = self.bounds
        merged = reconcile(value, list(self._handles.values), self._handle_count, bounds)
        validate_sequence(merged, bounds)
        if len(merged) != len(self._handles) and not self._session.is_idle:
            self._session.cancel()
        self._handles.reset(merged)
        return self._handles.values

    def configure(
        self,
        config: SliderConfig,
        value: ValueLike = None,
        handle_count: Optional[int] = None,
    ) -> Tuple[float, ...]:
        """Switch to new bounds/options, re-deriving the handle values.

        A running session is cancelled first. Nothing changes if the new
        configuration cannot hold the resulting values.
        """
        count = self._handle_count if handle_count is None else handle_count
        bounds = config.bounds
        merged = reconcile(value, list(self._handles.values), count, bounds)
        validate_sequence(merged, bounds)

        if not self._session.is_idle:
            self._session.cancel()
        self._config = config
        self._handle_count = count
        self._session.reconfigure(bounds.span, config.invert)
        self._handles.reset(merged)
        return self._handles.values

    # --------------- Interaction ---------------
    def start_drag(
        self,
        index: int,
        position: float,
        track_length: float,
        orthogonal: Optional[float] = None,
        detect_gesture: bool = False,
    ) -> bool:
        if self._config.disabled or not self._accepts_index(index):
            return False
        return self._begin(index, position, track_length, orthogonal, detect_gesture)

    def drag_to(self, position: float, orthogonal: Optional[float] = None) -> bool:
        if self._config.disabled:
            return False
        return self._session.move(position, orthogonal)

    def end_drag(self) -> bool:
        return self._session.end()

    def focus(self, index: int) -> bool:
        if self._config.disabled or not self._accepts_index(index):
            return False
        return self._begin(index, None, 0.0, None, False)

    blur = end_drag
    cancel = end_drag

    def nudge(self, direction: int, modifier: bool = False, index: Optional[int] = None) -> bool:
        if self._config.disabled:
            return False
        if index is None:
            index = self.active_index if self.active_index is not None else self._handles.front_index
        if not self._accepts_index(index):
            return False
        return nudge(
            self._callbacks,
            index,
            self._handles[index],
            direction,
            self.bounds.step,
            modifier=modifier,
            multiplier=self._config.page_multiplier,
        )

    def move_handle(self, index: int, raw_value: float) -> bool:
        """Move one handle toward a typed-in value."""
        if self._config.disabled or not self._accepts_index(index):
            return False
        changed = self._resolve_move(index, float(raw_value))
        if changed:
            self._fire(self.on_change)
        return changed

    def press_track(self, position: float, track_length: float) -> Optional[int]:
        """Pointer pressed on the track away from any handle.

        Unless snap dragging is disabled, the closest handle jumps to the
        pressed value and a drag session starts for it. Returns that index.
        """
        if self._config.disabled or not self._session.is_idle:
            return None
        self._session.forget_last()
        if self._config.snap_drag_disabled:
            return None
        return self._snap_to_position(position, track_length)

    def click_track(self, position: float, track_length: float) -> Optional[float]:
        """Pointer released without dragging; reports the value under it."""
        if self._config.disabled or not self._session.is_idle:
            return None
        last = self._session.last_frame
        if last is not None and last.moved:
            return None
        value = trim_align(self.value_at_position(position, track_length), self.bounds)
        if self.on_slider_click:
            self.on_slider_click(value)
        return value

    def value_at_position(self, position: float, track_length: float) -> float:
        bounds = self.bounds
        offset = track_length - position if self._config.invert else position
        return value_at_offset(offset, track_length, bounds.minimum, bounds.maximum)

    def closest_index(self, value: float) -> int:
        """Index of the handle nearest ``value``; ties go to the later handle."""
        closest = 0
        best = float("inf")
        for i, v in enumerate(self._handles.values):
            distance = abs(value - v)
            if distance <= best:
                best = distance
                closest = i
        return closest

    # --------------- Internals ---------------
    def _begin(
        self,
        index: int,
        position: Optional[float],
        track_length: float,
        orthogonal: Optional[float],
        detect_gesture: bool,
    ) -> bool:
        if not self._session.is_idle:
            return False
        self._handles.activate(index)
        return self._session.begin(
            index,
            self._handles[index],
            position=position,
            track_length=track_length,
            orthogonal=orthogonal,
            detect_gesture=detect_gesture,
        )

    def _snap_to_position(self, position: float, track_length: float) -> Optional[int]:
        bounds = self.bounds
        raw = self.value_at_position(position, track_length)
        index = self.closest_index(raw)
        values = list(self._handles.values)
        values[index] = trim_align(raw, bounds)

        for a, b in zip(values, values[1:]):
            if b - a < bounds.min_distance:
                logger.warning(
                    "Snap of handle %d to %s rejected: handles closer than %s",
                    index,
                    values[index],
                    bounds.min_distance,
                )
                return None

        changed = tuple(values) != self._handles.values
        self._handles.commit(values)
        if changed:
            self._fire(self.on_change)
        self._begin(index, position, track_length, None, False)
        return index

    def _resolve_move(self, index: int, proposed: float) -> bool:
        try:
            resolution = resolve(
                self._handles.values, index, proposed, self.bounds, self._config.pearling
            )
        except HandleIndexError as exc:
            logger.warning("Move rejected: %s", exc)
            return False
        if resolution.changed:
            self._handles.commit(resolution.values)
            logger.debug("Handle %d -> %s", index, resolution.values[index])
        return resolution.changed

    def _accepts_index(self, index: int) -> bool:
        try:
            self._handles.check_index(index)
        except HandleIndexError as exc:
            logger.warning("Interaction rejected: %s", exc)
            return False
        return True

    def _notify_after(self) -> None:
        self._handles.deactivate()
        self._fire(self.on_after_change)

    def _fire(self, callback: Optional[ValueCallback]) -> None:
        if callback:
            callback(self.get_value())
