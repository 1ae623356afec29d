"""Pure numeric helpers: clamping, step alignment and offset/value mapping."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterable, List, Sequence, Union

from models.slider_model import Bounds

# Digits kept after alignment so repeated snapping does not accumulate drift
ALIGN_PRECISION = 5

ValueLike = Union[float, Sequence[float], None]


def clamp(value: float, minimum: float, maximum: float) -> float:
    if value <= minimum:
        return minimum
    if value >= maximum:
        return maximum
    return value


def align_to_step(value: float, minimum: float, step: float) -> float:
    """Snap ``value`` to the nearest multiple of ``step`` counted from ``minimum``.

    Halfway points round away from ``minimum`` in the direction of the
    remainder. The remainder keeps the sign of ``value - minimum``.
    """
    remainder = math.fmod(value - minimum, step)
    aligned = value - remainder
    if abs(remainder) * 2 >= step:
        aligned += step if remainder > 0 else -step
    return round(aligned, ALIGN_PRECISION)


def trim_align(value: float, bounds: Bounds) -> float:
    """Clamp into bounds, then align to the step grid.

    When ``max - min`` is not a multiple of ``step`` the grid point nearest
    ``max`` may lie beyond it; the next lower grid point is used instead.
    """
    clamped = clamp(float(value), bounds.minimum, bounds.maximum)
    aligned = align_to_step(clamped, bounds.minimum, bounds.step)
    if aligned > bounds.maximum:
        aligned = round(aligned - bounds.step, ALIGN_PRECISION)
    return aligned


def value_at_offset(offset: float, length: float, minimum: float, maximum: float) -> float:
    """Linear pixel offset -> value along a track of ``length`` pixels."""
    if length <= 0:
        return minimum
    return offset / length * (maximum - minimum) + minimum


def offset_of_value(value: float, length: float, minimum: float, maximum: float) -> float:
    if maximum == minimum:
        return 0.0
    return (value - minimum) / (maximum - minimum) * length


def linspace(minimum: float, maximum: float, count: int) -> List[float]:
    """Spread ``count`` values evenly over ``[minimum, maximum]``."""
    if count <= 0:
        return []
    if count == 1:
        return [float(minimum)]
    interval = (maximum - minimum) / (count - 1)
    return [minimum + interval * i for i in range(count)]


def ensure_list(value: ValueLike) -> List[float]:
    if value is None:
        return []
    if isinstance(value, Real):
        return [float(value)]
    return [float(v) for v in value]


def undo_ensure_list(values: Iterable[float]) -> Union[float, List[float]]:
    items = list(values)
    if len(items) == 1:
        return items[0]
    return items


def is_non_decreasing(values: Sequence[float]) -> bool:
    return all(a <= b for a, b in zip(values, values[1:]))
