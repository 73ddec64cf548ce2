"""Coverage rasteriser for glyph outlines.

Lines are drawn as signed area deltas into a float buffer. A running sum over
that buffer gives each pixel's coverage, which is then scaled to 0..255.
"""

import math

from .fmath import as_i32, clamp, copysign, f32, fabs, fract, from_bits, to_bits, trunc

_COVERAGE_SCALE = f32(255.9)


def get_bitmap(deltas, length):
    """Turn area deltas into ``length`` coverage bytes, 0 (empty) to 255 (full)."""
    if length > len(deltas):
        raise ValueError(f"bitmap length {length} exceeds {len(deltas)} accumulated values")
    output = bytearray(length)
    height = 0.0
    for position, delta in enumerate(deltas[:length]):
        height = f32(height + delta)
        value = clamp(f32(fabs(height) * _COVERAGE_SCALE), 0.0, 255.0)
        output[position] = 0 if math.isnan(value) else int(value)
    return bytes(output)


def _nudged_trunc(coords, nudge):
    """Step each coordinate down by its nudge in bit-pattern units, then truncate."""
    return tuple(trunc(from_bits(to_bits(value) - step)) for value, step in zip(coords, nudge))


class Raster:
    """A width x height canvas that accumulates glyph line coverage."""

    def __init__(self, width, height):
        if width < 0 or height < 0:
            raise ValueError("raster dimensions must not be negative")
        self.width = width
        self.height = height
        # Three spare cells take the contributions that land just past the end.
        self._a = [0.0] * (width * height + 3)

    def draw(self, outline, scale_x, scale_y, offset_x, offset_y):
        """Draw a finished glyph outline, scaled and then offset in pixels."""
        scale_x = f32(scale_x)
        scale_y = f32(scale_y)
        offset_x = f32(offset_x)
        offset_y = f32(offset_y)
        scale = (scale_x, scale_y, scale_x, scale_y)
        offset = (offset_x, offset_y, offset_x, offset_y)
        params = (f32(1.0 / scale_x), f32(1.0 / scale_y), scale_x, scale_y)

        def transform(coords):
            return tuple(f32(f32(c * s) + o) for c, s, o in zip(coords, scale, offset))

        for line in outline.v_lines:
            self._v_line(line, transform(line.coords))
        for line in outline.m_lines:
            scaled = tuple(f32(p * q) for p, q in zip(line.params, params))
            self._m_line(line, transform(line.coords), scaled)

    def bitmap(self):
        """Coverage bytes, row by row from the top-left corner."""
        return get_bitmap(self._a, self.width * self.height)

    def _add(self, index, height, mid_x):
        if index < 0:
            raise IndexError(f"raster index {index} out of range")
        m = f32(height * mid_x)
        self._a[index] = f32(self._a[index] + f32(height - m))
        self._a[index + 1] = f32(self._a[index + 1] + m)

    def _index(self, x, y):
        return as_i32(f32(x + f32(y * self.width)))

    def _v_line(self, line, coords):
        x0, y0, _, y1 = coords
        start_x, start_y, end_x, end_y = _nudged_trunc(coords, line.nudge)
        target_y = f32(start_y + line.adjustment[1])
        sy = copysign(1.0, f32(y1 - y0))
        y_prev = y0
        index = self._index(start_x, start_y)
        index_y_inc = as_i32(copysign(float(self.width), sy))
        dist = as_i32(fabs(f32(start_y - end_y)))
        mid_x = fract(x0)
        for _ in range(max(dist, 0)):
            self._add(index, f32(y_prev - target_y), mid_x)
            index += index_y_inc
            y_prev = target_y
            target_y = f32(target_y + sy)
        self._add(self._index(end_x, end_y), f32(y_prev - y1), mid_x)

    def _m_line(self, line, coords, params):
        x0, y0, x1, y1 = coords
        start_x, start_y, end_x, end_y = _nudged_trunc(coords, line.nudge)
        tdx, tdy, dx, dy = params
        target_x = f32(start_x + line.adjustment[0])
        target_y = f32(start_y + line.adjustment[1])
        sx = copysign(1.0, tdx)
        sy = copysign(1.0, tdy)
        tmx = f32(tdx * f32(target_x - x0))
        tmy = f32(tdy * f32(target_y - y0))
        tdx = fabs(tdx)
        tdy = fabs(tdy)
        x_prev = x0
        y_prev = y0
        index = self._index(start_x, start_y)
        index_x_inc = as_i32(sx)
        index_y_inc = as_i32(copysign(float(self.width), sy))
        dist = as_i32(f32(fabs(f32(start_x - end_x)) + fabs(f32(start_y - end_y))))
        for _ in range(max(dist, 0)):
            prev_index = index
            if tmx < tmy:
                y_next = f32(f32(tmx * dy) + y0)
                x_next = target_x
                tmx = f32(tmx + tdx)
                target_x = f32(target_x + sx)
                index += index_x_inc
            else:
                y_next = target_y
                x_next = f32(f32(tmy * dx) + x0)
                tmy = f32(tmy + tdy)
                target_y = f32(target_y + sy)
                index += index_y_inc
            self._add(prev_index, f32(y_prev - y_next), fract(f32(f32(x_prev + x_next) / 2.0)))
            x_prev = x_next
            y_prev = y_next
        self._add(
            self._index(end_x, end_y),
            f32(y_prev - y1),
            fract(f32(f32(x_prev + x1) / 2.0)),
        )