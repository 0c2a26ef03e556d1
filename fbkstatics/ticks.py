"""Axis label values chosen from a fixed ladder of round steps."""

from __future__ import annotations

from itertools import pairwise

_PLUS_STEPS = (
    10000000.0, 5000000.0, 100000.0, 50000.0, 10000.0, 5000.0, 1000.0, 500.0,
    100.0, 50.0, 10.0, 5.0, 2.0, 1.0, 0.5, 0.1,
)
_MINUS_STEPS = tuple(-s for s in _PLUS_STEPS)


def snap_step(step: float) -> float:
    """Round a step up in size to the next value on the ladder."""
    if step < 0:
        if step < _MINUS_STEPS[0]:
            step = _MINUS_STEPS[0]
        for larger, smaller in pairwise(_MINUS_STEPS):
            if larger < step < smaller:
                step = larger
    else:
        if step > _PLUS_STEPS[0]:
            step = _PLUS_STEPS[0]
        for larger, smaller in pairwise(_PLUS_STEPS):
            if smaller < step < larger:
                step = larger
    return step


def compute_ticks(
    min_value: float, max_value: float, window_height: int, font_height: int
) -> list[float]:
    """Return label values spanning the range, spaced to fit the window."""
    count = int(window_height / (font_height * 1.5))
    if count == 0:
        raise ValueError("window too small for a single label")
    if max_value == min_value:
        raise ValueError("value range is empty")
    step = snap_step((max_value - min_value) / count)

    value = (int(min_value / step) + 1) * step
    if step < 0 and value < max_value:
        raise ValueError("labels would never reach the maximum")
    values = [value]
    while value < max_value:
        value += step
        values.append(value)
    return values