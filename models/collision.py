"""Collision resolution between neighbouring handles.

Two mutually exclusive policies are supported:

* blocking: the moved handle stops ``min_distance`` away from its immediate
  neighbours; no other handle moves.
* pearling: the moved handle pushes its neighbours along (like pearls on a
  string) and the pushed run is trimmed back so nothing leaves the bounds.

The input sequence is never modified; a new tuple is returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from models.alignment import align_to_step, trim_align
from models.errors import HandleIndexError
from models.slider_model import Bounds


@dataclass(frozen=True)
class Resolution:
    values: Tuple[float, ...]
    changed: bool


def resolve(
    sequence: Sequence[float],
    index: int,
    proposed: float,
    bounds: Bounds,
    pearling: bool,
) -> Resolution:
    length = len(sequence)
    if not 0 <= index < length:
        raise HandleIndexError(index, length)

    values = [float(v) for v in sequence]
    old_value = values[index]
    new_value = trim_align(proposed, bounds)

    if not pearling:
        new_value = _block(values, index, new_value, bounds.min_distance)
        values[index] = new_value
    else:
        values[index] = new_value
        if length > 1:
            if new_value > old_value:
                _push_succeeding(values, index, bounds)
                _trim_succeeding(values, bounds)
            elif new_value < old_value:
                _push_preceding(values, index, bounds)
                _trim_preceding(values, bounds)

    return Resolution(values=tuple(values), changed=values[index] != old_value)


def _block(values: List[float], index: int, new_value: float, min_distance: float) -> float:
    if 0 < index < len(values) - 1:
        # Neighbours already closer than twice min_distance pin the handle.
        if values[index - 1] + min_distance > values[index + 1] - min_distance:
            return values[index]
    if index > 0:
        floor = values[index - 1] + min_distance
        if new_value < floor:
            new_value = floor
    if index < len(values) - 1:
        ceiling = values[index + 1] - min_distance
        if new_value > ceiling:
            new_value = ceiling
    return new_value


def _push_succeeding(values: List[float], index: int, bounds: Bounds) -> None:
    for i in range(index, len(values) - 1):
        padding = values[i] + bounds.min_distance
        if padding <= values[i + 1]:
            break
        values[i + 1] = align_to_step(padding, bounds.minimum, bounds.step)


def _trim_succeeding(values: List[float], bounds: Bounds) -> None:
    last = len(values) - 1
    for k in range(len(values)):
        ceiling = bounds.maximum - k * bounds.min_distance
        if values[last - k] > ceiling:
            values[last - k] = ceiling


def _push_preceding(values: List[float], index: int, bounds: Bounds) -> None:
    for i in range(index, 0, -1):
        padding = values[i] - bounds.min_distance
        if padding >= values[i - 1]:
            break
        values[i - 1] = align_to_step(padding, bounds.minimum, bounds.step)


def _trim_preceding(values: List[float], bounds: Bounds) -> None:
    for k in range(len(values)):
        floor = bounds.minimum + k * bounds.min_distance
        if values[k] < floor:
            values[k] = floor
