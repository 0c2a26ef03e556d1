import math

import pytest

from fbkstatics.geometry import Point, Point3D, PrecisePoint, Segment


def test_precise_point_matches_within_tolerance():
    p = PrecisePoint(10.0, 10.0, 2.0)
    assert p.matches(Point(11.5, 8.5))
    assert not p.matches(Point(12.5, 10.0))


def test_precise_point_zero_tolerance_is_exact():
    p = PrecisePoint(3.0, 4.0)
    assert p.matches(Point3D(3.0, 4.0, 99.0))
    assert not p.matches(Point(3.0, 4.000001))


def test_point3d_keeps_coordinates():
    p = Point3D(1.0, 2.0, 3.0)
    assert (p.x, p.y, p.z) == (1.0, 2.0, 3.0)


def test_segment_precision_is_truncated():
    assert Segment(0, 0, 1, 1, precision=2.7).precision == 2


def test_length():
    assert Segment(0, 0, 3, 4).length() == 5.0


def test_cross_diagonals_on_both():
    a = Segment(0, 0, 2, 2)
    b = Segment(0, 2, 2, 0)
    point, on_line = a.cross(b, True)
    assert point == Point(1.0, 1.0)
    assert on_line


def test_cross_outside_segments():
    a = Segment(0, 0, 1, 1)
    b = Segment(4, 0, 3, 1)
    point, on_line = a.cross(b, True)
    assert point.x == point.y
    assert not on_line


def test_cross_not_checked_reports_false():
    a = Segment(0, 0, 2, 2)
    b = Segment(0, 2, 2, 0)
    _, on_line = a.cross(b)
    assert on_line is False


def test_cross_other_vertical():
    a = Segment(0, 0, 2, 2)
    b = Segment(1, -5, 1, 5)
    point, on_line = a.cross(b, True)
    assert point == Point(1.0, 1.0)
    assert on_line


def test_cross_parallel_apart_has_no_meeting():
    a = Segment(0, 0, 1, 0)
    b = Segment(0, 1, 1, 1)
    point, on_line = a.cross(b, True)
    assert point == Point(-1.0, -1.0)
    assert not on_line


def test_cross_collinear_reports_end_of_other():
    a = Segment(0, 0, 4, 0)
    b = Segment(1, 0, 9, 0)
    point, _ = a.cross(b)
    assert point == Point(b.x1, b.y1)


def test_cross_in_crossing_segments():
    crossed, point = Segment(0, 0, 2, 2).cross_in(Segment(0, 2, 2, 0))
    assert crossed
    assert math.isclose(point.x, point.y)


def test_cross_in_disjoint_segments():
    crossed, _ = Segment(0, 0, 1, 1).cross_in(Segment(4, 0, 3, 1))
    assert not crossed


def test_cross_in_shared_end_is_not_a_crossing():
    crossed, _ = Segment(0, 0, 2, 2).cross_in(Segment(2, 2, 4, 0))
    assert not crossed


def test_cross_in_same_segment_reversed():
    a = Segment(0, 0, 3, 5)
    crossed, point = a.cross_in(Segment(3, 5, 0, 0))
    assert crossed
    assert point == Point(a.x1, a.y1)


def test_cross_in_collinear_overlap():
    crossed, point = Segment(0, 0, 2, 0).cross_in(Segment(1, 0, 3, 0))
    assert crossed
    assert 1 <= point.x <= 2


def test_cross_in_parallel_vertical_apart():
    crossed, _ = Segment(0, 0, 0, 5).cross_in(Segment(1, 0, 1, 5))
    assert not crossed


def test_cross_in_vertical_and_sloped():
    crossed, point = Segment(1, -5, 1, 5).cross_in(Segment(0, 0, 2, 2))
    assert crossed
    assert point.x == 1


def test_distance_to_vertical_line():
    assert Segment(0, 0, 0, 5).distance(Point(3, 0)) == 3.0


def test_distance_is_symmetric_across_line():
    s = Segment(0, 0, 2, 2)
    assert math.isclose(s.distance(Point(0, 2)), s.distance(Point(2, 0)))


def test_distance_horizontal_raises():
    with pytest.raises(ValueError):
        Segment(0, 1, 5, 1).distance(Point(0, 0))


def test_equals_with_tolerance():
    a = Segment(0, 0, 10, 10, precision=1)
    assert a.equals(Segment(10.5, 9.5, 0.5, 0))
    assert not a.equals(Segment(0, 0, 12, 10))


def test_between_swaps_and_is_strict():
    s = Segment()
    assert s.between(5, 10, 0)
    assert not s.between(10, 0, 10)
    assert s.between(10.5, 0, 10, precision=1)


def test_between_uses_own_precision():
    s = Segment(precision=2)
    assert s.between(11, 0, 10)


def test_point_a_and_b():
    s = Segment(1, 2, 3, 4)
    assert s.point_a() == PrecisePoint(1, 2)
    assert s.point_b() == PrecisePoint(3, 4)


def test_contains_point_cases():
    s = Segment(0, 0, 4, 4)
    assert s.contains_point(Point(2, 2))
    assert not s.contains_point(Point(0, 0))
    assert not s.contains_point(Point(2, 3))
    assert not s.contains_point(Point(5, 5))


def test_contains_point_vertical_and_degenerate():
    assert Segment(1, 0, 1, 4).contains_point(Point(1, 2))
    assert not Segment(1, 0, 1, 4).contains_point(Point(1, 4))
    assert not Segment(1, 1, 1, 1).contains_point(Point(1, 1))


def test_perpendicular_foot_is_perpendicular():
    s = Segment(0, 0, 4, 2)
    p = Point(1, 5)
    foot = s.perpendicular_foot(p)
    dot = (p.x - foot.x) * (s.x2 - s.x1) + (p.y - foot.y) * (s.y2 - s.y1)
    assert math.isclose(dot, 0.0, abs_tol=1e-9)


def test_perpendicular_foot_axis_aligned():
    assert Segment(2, 0, 2, 9).perpendicular_foot(Point(7, 3)) == PrecisePoint(2, 3)
    assert Segment(0, 4, 9, 4).perpendicular_foot(Point(7, 3)) == PrecisePoint(7, 4)