import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fontraster.geometry import Geometry
from fontraster.raster import Raster, get_bitmap


def _rectangle(width, height):
    geometry = Geometry(40.0, 40.0)
    geometry.move_to(0.0, 0.0)
    geometry.line_to(width, 0.0)
    geometry.line_to(width, height)
    geometry.line_to(0.0, height)
    geometry.close()
    return geometry.finalize()


def _triangle(size):
    geometry = Geometry(40.0, 40.0)
    geometry.move_to(0.0, 0.0)
    geometry.line_to(size, 0.0)
    geometry.line_to(0.0, size)
    geometry.close()
    return geometry.finalize()


def test_get_bitmap_running_sum():
    assert get_bitmap([1.0, 0.0, -1.0, 0.0], 3) == bytes([255, 255, 0])


def test_get_bitmap_uses_absolute_value():
    assert get_bitmap([-1.0, 0.0], 2) == bytes([255, 255])


def test_get_bitmap_clamps_large_values():
    assert get_bitmap([4.0], 1) == bytes([255])


def test_get_bitmap_nan_is_zero():
    assert get_bitmap([math.nan, 0.0], 2) == bytes([0, 0])


def test_get_bitmap_length_too_large():
    with pytest.raises(ValueError):
        get_bitmap([0.0, 0.0], 3)


def test_raster_rejects_negative_size():
    with pytest.raises(ValueError):
        Raster(-1, 2)


def test_empty_raster_is_blank():
    raster = Raster(3, 2)
    assert raster.bitmap() == bytes(6)


def test_full_square_is_fully_covered():
    raster = Raster(4, 4)
    raster.draw(_rectangle(4.0, 4.0), 1.0, 1.0, 0.0, 0.0)
    bitmap = raster.bitmap()
    assert len(bitmap) == 16
    assert set(bitmap) == {255}


def test_left_half_covered():
    raster = Raster(4, 4)
    raster.draw(_rectangle(2.0, 4.0), 1.0, 1.0, 0.0, 0.0)
    bitmap = raster.bitmap()
    for row in range(4):
        assert bitmap[row * 4: row * 4 + 4] == bytes([255, 255, 0, 0])


def test_subpixel_width_is_tripled():
    raster = Raster(12, 4)
    raster.draw(_rectangle(4.0, 4.0), 3.0, 1.0, 0.0, 0.0)
    assert raster.bitmap() == bytes([255]) * 48


def test_scaled_square():
    raster = Raster(8, 8)
    raster.draw(_rectangle(4.0, 4.0), 2.0, 2.0, 0.0, 0.0)
    assert raster.bitmap() == bytes([255]) * 64


def test_triangle_coverage_matches_area():
    raster = Raster(4, 4)
    raster.draw(_triangle(4.0), 1.0, 1.0, 0.0, 0.0)
    bitmap = raster.bitmap()
    assert len(bitmap) == 16
    assert abs(sum(bitmap) / 255.0 - 8.0) < 0.5
    assert max(bitmap) == 255
    assert min(bitmap) == 0


def test_triangle_fractional_offset_keeps_area():
    raster = Raster(5, 5)
    raster.draw(_triangle(4.0), 1.0, 1.0, 0.5, 0.25)
    bitmap = raster.bitmap()
    assert abs(sum(bitmap) / 255.0 - 8.0) < 0.5


@settings(max_examples=40, deadline=None)
@given(
    st.integers(min_value=1, max_value=5),
    st.integers(min_value=1, max_value=5),
    st.integers(min_value=0, max_value=3),
    st.integers(min_value=0, max_value=3),
)
def test_offset_rectangle_covers_exact_pixels(rect_w, rect_h, off_x, off_y):
    width = rect_w + off_x + 1
    height = rect_h + off_y + 1
    raster = Raster(width, height)
    raster.draw(_rectangle(float(rect_w), float(rect_h)), 1.0, 1.0, float(off_x), float(off_y))
    bitmap = raster.bitmap()
    for row in range(height):
        for col in range(width):
            inside = off_x <= col < off_x + rect_w and off_y <= row < off_y + rect_h
            assert bitmap[row * width + col] == (255 if inside else 0)