import math

import pytest

from fbkstatics.ticks import compute_ticks, snap_step


@pytest.mark.parametrize(
    "step, expected",
    [
        (3, 5.0),
        (7, 10.0),
        (5, 5),
        (20000000, 10000000.0),
        (-3, -5.0),
        (-20000000, -10000000.0),
        (0.05, 0.05),
    ],
)
def test_snap_step(step, expected):
    assert snap_step(step) == expected


def test_snap_step_never_shrinks():
    for step in (0.3, 1.7, 42.0, 777.0, 123456.0):
        assert snap_step(step) >= step
        assert snap_step(-step) <= -step


def test_ticks_even_spacing_and_cover_range():
    ticks = compute_ticks(0, 100, 150, 10)
    assert ticks[0] > 0
    assert ticks[-1] >= 100
    gaps = {round(b - a, 9) for a, b in zip(ticks, ticks[1:])}
    assert gaps == {snap_step(10)}


def test_ticks_use_snapped_step():
    ticks = compute_ticks(0, 30, 150, 10)
    assert ticks[0] == snap_step(3)
    assert math.isclose(ticks[1] - ticks[0], snap_step(3))
    assert ticks[-2] < 30 <= ticks[-1]


def test_ticks_descending_range():
    ticks = compute_ticks(10, 0, 150, 10)
    assert ticks == [9.0]


def test_window_too_small():
    with pytest.raises(ValueError):
        compute_ticks(0, 100, 5, 10)


def test_empty_range():
    with pytest.raises(ValueError):
        compute_ticks(5, 5, 150, 10)