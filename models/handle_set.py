from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from models.errors import HandleIndexError
from models.slider_model import ActiveState

logger = logging.getLogger(__name__)


class HandleSet:
    """Canonical handle values plus the active handle and visual stacking order.

    Values are replaced wholesale through ``commit``; there is no
    element-wise setter.
    """

    def __init__(self, values: Sequence[float]):
        self._values: Tuple[float, ...] = tuple(float(v) for v in values)
        self._state = ActiveState.identity(len(self._values))

    @property
    def values(self) -> Tuple[float, ...]:
        return self._values

    @property
    def active_index(self) -> Optional[int]:
        return self._state.active_index

    @property
    def z_order(self) -> Tuple[int, ...]:
        return tuple(self._state.z_order)

    @property
    def front_index(self) -> int:
        """Handle drawn on top, i.e. the most recently activated one."""
        return self._state.z_order[-1]

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> float:
        self.check_index(index)
        return self._values[index]

    def check_index(self, index: int) -> None:
        if not 0 <= index < len(self._values):
            raise HandleIndexError(index, len(self._values))

    def z_index(self, index: int) -> int:
        self.check_index(index)
        return self._state.z_order.index(index)

    def commit(self, values: Sequence[float]) -> None:
        new_values = tuple(float(v) for v in values)
        if len(new_values) != len(self._values):
            raise ValueError(
                f"Cannot commit {len(new_values)} values onto {len(self._values)} handles"
            )
        self._values = new_values

    def reset(self, values: Sequence[float]) -> None:
        """Replace the values; stacking state restarts when the arity changes."""
        new_values = tuple(float(v) for v in values)
        if len(new_values) != len(self._values):
            logger.debug("Handle count changed %d -> %d", len(self._values), len(new_values))
            self._state = ActiveState.identity(len(new_values))
        self._values = new_values

    def activate(self, index: int) -> None:
        self.check_index(index)
        z_order = self._state.z_order
        z_order.remove(index)
        z_order.append(index)
        self._state.active_index = index

    def deactivate(self) -> None:
        self._state.active_index = None
