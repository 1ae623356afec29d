"""Merge an externally supplied value with the slider's own sequence."""

from __future__ import annotations

from typing import List, Optional

from models.alignment import (
    ALIGN_PRECISION,
    ValueLike,
    align_to_step,
    ensure_list,
    is_non_decreasing,
    linspace,
    trim_align,
)
from models.errors import ConfigurationError
from models.slider_model import Bounds


def choose_arity(
    external: List[float],
    fallback: List[float],
    handle_count: Optional[int],
    bounds: Bounds,
) -> List[float]:
    """Pick the raw sequence whose length fits the declared handle count.

    Without a declared count the external value wins whenever it is non-empty.
    With a count, the first candidate of matching length wins; if none
    matches, the handles are spread evenly over the range.
    """
    count = handle_count or 0
    if count == 0:
        return list(external) if external else list(fallback)
    if len(external) == count:
        return list(external)
    if len(fallback) == count:
        return list(fallback)
    return linspace(bounds.minimum, bounds.maximum, count)


def reconcile(
    external: ValueLike,
    fallback: ValueLike,
    handle_count: Optional[int],
    bounds: Bounds,
) -> List[float]:
    """Trim-align the chosen sequence and spread handles that sit too close.

    Unsorted input is returned as is so that ``validate_sequence`` can
    reject it.
    """
    chosen = choose_arity(ensure_list(external), ensure_list(fallback), handle_count, bounds)
    values = [trim_align(v, bounds) for v in chosen]
    if bounds.min_distance > 0 and is_non_decreasing(values):
        _spread(values, bounds)
    return values


def _spread(values: List[float], bounds: Bounds) -> None:
    # Push forward like pearling, then pull back from the upper bound.
    distance = bounds.min_distance
    for i in range(1, len(values)):
        floor = values[i - 1] + distance
        if values[i] < round(floor, ALIGN_PRECISION):
            values[i] = _align_up(floor, bounds)
    ceiling = bounds.maximum
    for i in range(len(values) - 1, -1, -1):
        if values[i] > round(ceiling, ALIGN_PRECISION):
            values[i] = _align_down(ceiling, bounds)
        ceiling = values[i] - distance


def _align_up(value: float, bounds: Bounds) -> float:
    aligned = align_to_step(value, bounds.minimum, bounds.step)
    if aligned < round(value, ALIGN_PRECISION):
        aligned = round(aligned + bounds.step, ALIGN_PRECISION)
    return aligned


def _align_down(value: float, bounds: Bounds) -> float:
    aligned = align_to_step(value, bounds.minimum, bounds.step)
    if aligned > round(value, ALIGN_PRECISION):
        aligned = round(aligned - bounds.step, ALIGN_PRECISION)
    return aligned


def validate_sequence(values: List[float], bounds: Bounds) -> None:
    """Reject reconciled sequences the engine must never hold."""
    if not values:
        raise ConfigurationError("A slider needs at least one handle")
    if not is_non_decreasing(values):
        raise ConfigurationError(f"Handle values must be sorted, got {values}")
    bounds.validate(len(values))
    if values[0] < bounds.minimum or values[-1] > bounds.maximum:
        raise ConfigurationError(
            f"Handle values {values} do not fit between {bounds.minimum} and {bounds.maximum}"
        )
    distance = round(bounds.min_distance, ALIGN_PRECISION)
    for left, right in zip(values, values[1:]):
        if round(right - left, ALIGN_PRECISION) < distance:
            raise ConfigurationError(
                f"Handles {left} and {right} are closer than min_distance {bounds.min_distance}"
            )
