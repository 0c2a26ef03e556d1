"""Plane points and line segments with tolerance-aware comparisons."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

_NO_VALUE = -9999.0


@dataclass
class Point:
    """A point in the plane."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class Point3D(Point):
    """A point in space."""

    z: float = 0.0


@dataclass
class PrecisePoint(Point):
    """A point that compares to others within a square tolerance."""

    precision: float = field(default=0.0, compare=False)

    def matches(self, other: Point) -> bool:
        """Return True if this point lies within ``precision`` of ``other`` on both axes."""
        p = self.precision
        return (
            other.x - p <= self.x <= other.x + p
            and other.y - p <= self.y <= other.y + p
        )


@dataclass
class Segment:
    """A segment from (x1, y1) to (x2, y2).

    The tolerance is held as a whole number of units; fractions are dropped.
    """

    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    precision: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        self.precision = int(self.precision)

    def _slopes(self, other: Segment) -> tuple[float | None, float | None]:
        k1 = None if self.x1 == self.x2 else (self.y2 - self.y1) / (self.x2 - self.x1)
        k2 = (
            None
            if other.x1 == other.x2
            else (other.y2 - other.y1) / (other.x2 - other.x1)
        )
        return k1, k2

    def length(self) -> float:
        """Return the length of the segment."""
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)

    def cross(self, other: Segment, check_on_line: bool = False) -> tuple[Point, bool]:
        """Meet the line through this segment with the line through ``other``.

        Returns the meeting point and, when ``check_on_line`` is set, whether
        that point lies on both segments.  Parallel lines meet only when one
        end of ``other`` lies (within half a unit) on this segment; otherwise
        the point is (-1, -1) and the flag is False.
        """
        k1, k2 = self._slopes(other)
        self_vertical = k1 is None
        other_vertical = k2 is None
        crossed = False
        x = y = -1.0

        if self_vertical and not other_vertical:
            x = self.x1
            y = k2 * (x - self.x1) + self.y1
            crossed = True
        elif other_vertical and not self_vertical:
            x = other.x1
            y = k1 * (x - self.x1) + self.y1
            crossed = True
        elif (self_vertical and other_vertical) or k1 == k2:
            own = self.length()
            l1 = math.hypot(other.x1 - self.x1, other.y1 - self.y1) + math.hypot(
                other.x1 - self.x2, other.y1 - self.y2
            )
            l2 = math.hypot(other.x2 - self.x1, other.y2 - self.y1) + math.hypot(
                other.x2 - self.x2, other.y2 - self.y2
            )
            if l1 - own < 0.5:
                x, y = other.x1, other.y1
                crossed = True
            elif l2 - own < 0.5:
                x, y = other.x2, other.y2
                crossed = True
        else:
            x = (k2 * other.x1 - k1 * self.x1 - other.y1 + self.y1) / (k2 - k1)
            y = k1 * (x - self.x1) + self.y1
            crossed = True

        on_line = False
        if crossed and check_on_line:
            products = (
                (self.x1 - x) * (self.x2 - x),
                (self.y1 - y) * (self.y2 - y),
                (other.x1 - x) * (other.x2 - x),
                (other.y1 - y) * (other.y2 - y),
            )
            on_line = all(p <= 0 for p in products)
        return Point(x, y), on_line

    def cross_in(self, other: Segment) -> tuple[bool, Point]:
        """Tell whether the two segments cross, and where their lines meet."""
        if self.equals(other):
            return True, Point(self.x1, self.y1)

        x1, y1, x2, y2 = self.x1, self.y1, self.x2, self.y2
        ox1, oy1, ox2, oy2 = other.x1, other.y1, other.x2, other.y2
        k1, k2 = self._slopes(other)
        between = self.between
        crossed = False
        x = y = -1.0

        if k1 is None and k2 is not None:
            x = x1
            y = k2 * (x - ox1) + oy1
            crossed = between(y, y1, y2) and between(x, ox1, ox2)
            if oy1 != oy2:
                crossed = crossed and between(y, oy1, oy2)
        elif k2 is None and k1 is not None:
            x = ox1
            y = k1 * (x - x1) + y1
            crossed = between(x, x1, x2) and between(y, oy1, oy2)
            if y2 != y1:
                crossed = crossed and between(y, y1, y2)
        elif k1 is None and k2 is None:
            if x1 != ox1:
                x = 0.0
            else:
                crossed = (
                    between(oy1, y1, y2)
                    or between(oy2, y1, y2)
                    or between(y1, oy1, oy2)
                    or between(y2, oy1, oy2)
                )
                x, y = x1, _NO_VALUE
        elif k1 == k2:
            if -k1 * x1 + y1 != -k2 * ox1 + oy1:
                x = y = _NO_VALUE
            else:
                flags = (
                    (between(ox1, x1, x2), ox1),
                    (between(ox2, x1, x2), ox2),
                    (between(x1, ox1, ox2), x1),
                    (between(x2, ox1, ox2), x2),
                )
                crossed = any(flag for flag, _ in flags)
                x = x1
                for flag, value in flags:
                    if flag:
                        x = value
                y = y2
        else:
            x = (k2 * ox1 - k1 * x1 - oy1 + y1) / (k2 - k1)
            y = k1 * (x - x1) + y1
            own_ends = (PrecisePoint(x1, y1), PrecisePoint(x2, y2))
            other_ends = (PrecisePoint(ox1, oy1), PrecisePoint(ox2, oy2))
            if any(a.matches(b) for a in own_ends for b in other_ends):
                crossed = False
            elif k1 == 0:
                crossed = (
                    between(x, x1, x2) and between(x, ox1, ox2) and between(y, oy1, oy2)
                )
            elif k2 == 0:
                crossed = (
                    between(x, x1, x2) and between(y, y1, y2) and between(x, ox1, ox2)
                )
            else:
                crossed = (
                    between(x, x1, x2)
                    and between(y, y1, y2)
                    and between(x, ox1, ox2)
                    and between(y, oy1, oy2)
                )

        return crossed, Point(x, y)

    def distance(self, point: Point) -> float:
        """Return the distance from ``point`` to the line through this segment."""
        if self.y2 == self.y1:
            raise ValueError("distance is undefined for a horizontal segment")
        k = (self.x2 - self.x1) / (self.y2 - self.y1)
        c = k * self.y1 - self.x1
        return abs(point.x - k * point.y + c) / math.sqrt(1 + k * k)

    def equals(self, other: Segment) -> bool:
        """Return True if both ends match, in either order, within the tolerance."""
        p = self.precision
        a1 = PrecisePoint(self.x1, self.y1, p)
        a2 = PrecisePoint(self.x2, self.y2, p)
        b1 = PrecisePoint(other.x1, other.y1, p)
        b2 = PrecisePoint(other.x2, other.y2, p)
        return (a1.matches(b1) and a2.matches(b2)) or (a1.matches(b2) and a2.matches(b1))

    def between(
        self, value: float, low: float, high: float, precision: float | None = None
    ) -> bool:
        """Return True if ``value`` lies strictly inside the widened interval."""
        if high < low:
            low, high = high, low
        if precision is None:
            precision = self.precision
        return low - precision < value < high + precision

    def point_a(self) -> PrecisePoint:
        """Return the first end."""
        return PrecisePoint(self.x1, self.y1)

    def point_b(self) -> PrecisePoint:
        """Return the second end."""
        return PrecisePoint(self.x2, self.y2)

    def contains_point(self, point: Point) -> bool:
        """Return True if ``point`` lies inside the segment, ends excluded."""
        x1, y1, x2, y2 = self.x1, self.y1, self.x2, self.y2
        if x1 == x2 and y1 == y2:
            return False
        if x1 == x2:
            return point.x == x1 and min(y1, y2) < point.y < max(y1, y2)
        if y1 == y2:
            return point.y == y1 and min(x1, x2) < point.x < max(x1, x2)
        if point.x in (x1, x2) or point.y in (y1, y2):
            return False
        k = (y2 - y1) / (x2 - x1)
        y = k * (point.x - x1) + y1
        if not y - self.precision <= point.y <= y + self.precision:
            return False
        if not min(x1, x2) <= point.x <= max(x1, x2):
            return False
        return min(y1, y2) <= point.y <= max(y1, y2)

    def perpendicular_foot(self, point: Point) -> PrecisePoint:
        """Return the foot of the perpendicular from ``point`` to the line."""
        if self.x2 == self.x1:
            return PrecisePoint(self.x1, point.y)
        if self.y2 == self.y1:
            return PrecisePoint(point.x, self.y1)
        k1 = (self.y2 - self.y1) / (self.x2 - self.x1)
        k2 = -1 / k1
        x = (k2 * point.x - k1 * self.x1 - point.y + self.y1) / (k2 - k1)
        y = k1 * (x - self.x1) + self.y1
        return PrecisePoint(x, y)