from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from models.errors import ConfigurationError


class Orientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, raw: "Orientation | str") -> "Orientation":
        if isinstance(raw, Orientation):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise ConfigurationError(f"Unknown orientation: {raw!r}") from None


@dataclass(frozen=True)
class Bounds:
    """Numeric limits shared by every handle of one slider.

    ``step`` is the alignment granularity relative to ``minimum``;
    ``min_distance`` is the smallest gap allowed between adjacent handles
    (0 lets handles sit on top of each other).
    """

    minimum: float = 0.0
    maximum: float = 100.0
    step: float = 1.0
    min_distance: float = 0.0

    @property
    def span(self) -> float:
        return self.maximum - self.minimum

    def validate(self, handle_count: Optional[int] = None) -> None:
        if self.step <= 0:
            raise ConfigurationError(f"step must be greater than zero, got {self.step}")
        if self.minimum >= self.maximum:
            raise ConfigurationError(
                f"min must be smaller than max, got min={self.minimum} max={self.maximum}"
            )
        if self.min_distance < 0:
            raise ConfigurationError(
                f"min_distance must not be negative, got {self.min_distance}"
            )
        if handle_count is not None and handle_count > 1:
            required = self.min_distance * (handle_count - 1)
            if required > self.span:
                raise ConfigurationError(
                    f"{handle_count} handles need {required} units of spacing "
                    f"but the range only spans {self.span}"
                )


@dataclass(frozen=True)
class SliderConfig:
    minimum: float = 0.0
    maximum: float = 100.0
    step: float = 1.0
    min_distance: float = 0.0
    pearling: bool = False
    invert: bool = False
    orientation: Orientation = Orientation.HORIZONTAL
    disabled: bool = False
    snap_drag_disabled: bool = False
    # Keyboard nudge multiplier applied while the modifier key is held
    page_multiplier: int = 10

    def __post_init__(self):
        object.__setattr__(self, "orientation", Orientation.parse(self.orientation))
        if self.page_multiplier < 1:
            raise ConfigurationError(
                f"page_multiplier must be at least 1, got {self.page_multiplier}"
            )
        self.bounds.validate()

    @property
    def bounds(self) -> Bounds:
        return Bounds(
            minimum=float(self.minimum),
            maximum=float(self.maximum),
            step=float(self.step),
            min_distance=float(self.min_distance),
        )

    @property
    def is_vertical(self) -> bool:
        return self.orientation == Orientation.VERTICAL

    def with_changes(self, **changes) -> "SliderConfig":
        return replace(self, **changes)


@dataclass
class ActiveState:
    """Which handle is being interacted with and how handles stack visually.

    ``z_order`` lists handle indices back to front; the last entry is drawn on
    top. It is independent of the value order.
    """

    active_index: Optional[int] = None
    z_order: List[int] = field(default_factory=list)

    @classmethod
    def identity(cls, count: int) -> "ActiveState":
        return cls(active_index=None, z_order=list(range(count)))
