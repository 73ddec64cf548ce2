"""Glyph outline geometry: flattening curves into lines and normalising them.

Outlines are fed in font units through ``move_to``/``line_to``/``quad_to``/
``curve_to``/``close``. Curves are split into straight lines until each
piece is within a fixed error of the true curve at the target scale.
``finalize`` moves every line so that the top-left corner of the outline's
bounding box is the origin, with Y pointing down.
"""

import math
from dataclasses import dataclass, field
from typing import Tuple

from .fmath import F32_MAX, F32_MIN, f32, fabs, sqrt, to_bits

_FLOOR_NUDGE = 0
_CEIL_NUDGE = 1
_ERROR_THRESHOLD = 3.0  # In pixels.


@dataclass(frozen=True)
class Point:
    """A point with 32-bit float coordinates."""

    x: float = 0.0
    y: float = 0.0

    def scale(self, factor):
        return Point(f32(self.x * factor), f32(self.y * factor))

    def distance_squared(self, other):
        dx = f32(self.x - other.x)
        dy = f32(self.y - other.y)
        return f32(f32(dx * dx) + f32(dy * dy))

    def distance(self, other):
        return sqrt(self.distance_squared(other))

    def midpoint(self, other):
        return Point(f32(f32(self.x + other.x) / 2.0), f32(f32(self.y + other.y) / 2.0))


@dataclass(frozen=True)
class Line:
    """A line segment with the precomputed values the rasteriser walks with.

    ``coords`` is (x0, y0, x1, y1); ``nudge`` holds integers subtracted from
    the coordinates' bit patterns; ``adjustment`` is (x_first_adj,
    y_first_adj, 0, 0); ``params`` is (1/dx, 1/dy, dx, dy).
    """

    coords: Tuple[float, float, float, float]
    nudge: Tuple[int, int, int, int]
    adjustment: Tuple[float, float, float, float]
    params: Tuple[float, float, float, float]

    @classmethod
    def between(cls, start, end):
        """Build the line running from start to end."""
        if end.x >= start.x:
            x_start_nudge, x_first_adj = _FLOOR_NUDGE, 1.0
        else:
            x_start_nudge, x_first_adj = _CEIL_NUDGE, 0.0
        if end.y >= start.y:
            y_start_nudge, y_first_adj = _FLOOR_NUDGE, 1.0
        else:
            y_start_nudge, y_first_adj = _CEIL_NUDGE, 0.0
        x_end_nudge = _CEIL_NUDGE if end.x > start.x else _FLOOR_NUDGE
        y_end_nudge = _CEIL_NUDGE if end.y > start.y else _FLOOR_NUDGE

        dx = f32(end.x - start.x)
        dy = f32(end.y - start.y)
        tdx = F32_MAX if dx == 0.0 else f32(1.0 / dx)
        tdy = _reciprocal(dy)
        return cls(
            coords=(start.x, start.y, end.x, end.y),
            nudge=(x_start_nudge, y_start_nudge, x_end_nudge, y_end_nudge),
            adjustment=(x_first_adj, y_first_adj, 0.0, 0.0),
            params=(tdx, tdy, dx, dy),
        )


def _reciprocal(value):
    if value == 0.0:
        return math.copysign(math.inf, value)
    return f32(1.0 / value)


@dataclass(frozen=True)
class OutlineBounds:
    """Bounds of a glyph's outline: lower-left corner, width and height."""

    xmin: float = 0.0
    ymin: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def scale(self, factor):
        return OutlineBounds(
            f32(self.xmin * factor),
            f32(self.ymin * factor),
            f32(self.width * factor),
            f32(self.height * factor),
        )


@dataclass
class GlyphOutline:
    """Finished outline: vertical lines, other lines, and the outline bounds."""

    v_lines: list = field(default_factory=list)
    m_lines: list = field(default_factory=list)
    bounds: OutlineBounds = field(default_factory=OutlineBounds)


def _quad_point(a, b, c, t):
    tm = f32(1.0 - t)
    wa = f32(tm * tm)
    wb = f32(f32(2.0 * tm) * t)
    wc = f32(t * t)
    x = f32(f32(f32(wa * a.x) + f32(wb * b.x)) + f32(wc * c.x))
    y = f32(f32(f32(wa * a.y) + f32(wb * b.y)) + f32(wc * c.y))
    return Point(x, y)


def _cube_point(a, b, c, d, t):
    tm = f32(1.0 - t)
    tm2 = f32(tm * tm)
    t2 = f32(t * t)
    wa = f32(tm2 * tm)
    wb = f32(f32(3.0 * tm2) * t)
    wc = f32(f32(3.0 * tm) * t2)
    wd = f32(t2 * t)
    x = f32(f32(f32(f32(wa * a.x) + f32(wb * b.x)) + f32(wc * c.x)) + f32(wd * d.x))
    y = f32(f32(f32(f32(wa * a.y) + f32(wb * b.y)) + f32(wc * c.y)) + f32(wd * d.y))
    return Point(x, y)


class Geometry:
    """Collects an outline in font units and turns it into lines."""

    def __init__(self, scale, units_per_em):
        self._v_lines = []
        self._m_lines = []
        self._xmin = F32_MAX
        self._xmax = F32_MIN
        self._ymin = F32_MAX
        self._ymax = F32_MIN
        self._start_point = Point()
        self._previous_point = Point()
        self._area = 0.0
        self._max_area = f32(_ERROR_THRESHOLD * 2.0 * f32(units_per_em / scale))

    def move_to(self, x, y):
        point = Point(f32(x), f32(y))
        self._start_point = point
        self._previous_point = point

    def line_to(self, x, y):
        point = Point(f32(x), f32(y))
        self._push(self._previous_point, point)
        self._previous_point = point

    def quad_to(self, x0, y0, x1, y1):
        start = self._previous_point
        control = Point(f32(x0), f32(y0))
        end = Point(f32(x1), f32(y1))
        self._flatten(lambda t: _quad_point(start, control, end, t), start, end)
        self._previous_point = end

    def curve_to(self, x0, y0, x1, y1, x2, y2):
        start = self._previous_point
        first = Point(f32(x0), f32(y0))
        second = Point(f32(x1), f32(y1))
        end = Point(f32(x2), f32(y2))
        self._flatten(lambda t: _cube_point(start, first, second, end, t), start, end)
        self._previous_point = end

    def close(self):
        if self._start_point != self._previous_point:
            self._push(self._previous_point, self._start_point)
        self._previous_point = self._start_point

    def _flatten(self, point_at, start, end):
        stack = [(start, 0.0, end, 1.0)]
        while stack:
            a, at, c, ct = stack.pop()
            bt = f32(f32(at + ct) * 0.5)
            b = point_at(bt)
            # Twice the area of the triangle a, b, c.
            area = f32(
                f32(f32(b.x - a.x) * f32(c.y - a.y)) - f32(f32(c.x - a.x) * f32(b.y - a.y))
            )
            if fabs(area) > self._max_area:
                stack.append((a, at, b, bt))
                stack.append((b, bt, c, ct))
            else:
                self._push(a, c)

    def _push(self, start, end):
        if to_bits(start.y) == to_bits(end.y):
            return
        self._area = f32(self._area + f32(f32(end.y - start.y) * f32(end.x + start.x)))
        line = Line.between(start, end)
        if to_bits(start.x) == to_bits(end.x):
            self._v_lines.append(line)
        else:
            self._m_lines.append(line)
        for point in (start, end):
            self._xmin = min(self._xmin, point.x)
            self._xmax = max(self._xmax, point.x)
            self._ymin = min(self._ymin, point.y)
            self._ymax = max(self._ymax, point.y)

    def finalize(self):
        """Return the outline with lines moved so the box's top-left is the origin."""
        if not self._v_lines and not self._m_lines:
            return GlyphOutline([], [], OutlineBounds())
        reverse = self._area > 0.0
        v_lines = [self._reposition(line, reverse) for line in self._v_lines]
        m_lines = [self._reposition(line, reverse) for line in self._m_lines]
        bounds = OutlineBounds(
            xmin=self._xmin,
            ymin=self._ymin,
            width=f32(self._xmax - self._xmin),
            height=f32(self._ymax - self._ymin),
        )
        return GlyphOutline(v_lines, m_lines, bounds)

    def _reposition(self, line, reverse):
        x0, y0, x1, y1 = line.coords
        if reverse:
            x0, y0, x1, y1 = x1, y1, x0, y0
        start = Point(f32(x0 - self._xmin), fabs(f32(y0 - self._ymax)))
        end = Point(f32(x1 - self._xmin), fabs(f32(y1 - self._ymax)))
        return Line.between(start, end)