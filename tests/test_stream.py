import struct

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fontraster.stream import Stream, StreamError


def test_scalar_round_trip():
    values = (200, 54321, 3000000000, -100, -30000, -2000000000)
    stream = Stream(struct.pack(">BHIbhi", *values))
    read = (
        stream.read_u8(),
        stream.read_u16(),
        stream.read_u32(),
        stream.read_i8(),
        stream.read_i16(),
        stream.read_i32(),
    )
    assert read == values
    assert stream.offset == len(stream)


def test_offset_advances_by_size():
    stream = Stream(bytes(7))
    stream.read_u8()
    assert stream.offset == 1
    stream.read_u16()
    assert stream.offset == 3
    stream.read_u32()
    assert stream.offset == 7


def test_read_past_end_raises_and_keeps_offset():
    stream = Stream(b"\x01")
    with pytest.raises(StreamError):
        stream.read_u16()
    assert stream.offset == 0
    assert stream.read_u8() == 1


def test_stream_error_is_value_error():
    with pytest.raises(ValueError):
        Stream(b"").read_u8()


def test_seek_skip_reset():
    stream = Stream(struct.pack(">HHH", 10, 20, 30))
    stream.skip(2)
    assert stream.read_u16() == 20
    stream.seek(4)
    assert stream.read_u16() == 30
    stream.reset()
    assert stream.offset == 0
    assert stream.read_u16() == 10


def test_skip_past_end_then_read_raises():
    stream = Stream(bytes(4))
    stream.skip(10)
    with pytest.raises(StreamError):
        stream.read_u8()


def test_read_tag():
    stream = Stream(b"kernrest")
    assert stream.read_tag() == b"kern"
    assert stream.offset == 4


@pytest.mark.parametrize("raw", [16384, -16384, 0, 8192, -1])
def test_f2dot14(raw):
    stream = Stream(struct.pack(">h", raw))
    assert stream.read_f2dot14() * 16384 == raw


def test_arrays_round_trip():
    stream = Stream(
        struct.pack(">3B2H2I2b2h2i", 1, 2, 3, 400, 500, 70000, 80000, -1, -2, -300, 300, -70000, 70000)
    )
    assert stream.read_u8_array(3) == (1, 2, 3)
    assert stream.read_u16_array(2) == (400, 500)
    assert stream.read_u32_array(2) == (70000, 80000)
    assert stream.read_i8_array(2) == (-1, -2)
    assert stream.read_i16_array(2) == (-300, 300)
    assert stream.read_i32_array(2) == (-70000, 70000)


def test_empty_array():
    stream = Stream(b"")
    assert stream.read_u16_array(0) == ()


def test_short_array_raises_and_keeps_offset():
    stream = Stream(bytes(5))
    with pytest.raises(StreamError):
        stream.read_u16_array(3)
    assert stream.offset == 0


@given(st.lists(st.integers(min_value=0, max_value=0xFFFF), max_size=50))
def test_u16_array_hypothesis(values):
    stream = Stream(struct.pack(f">{len(values)}H", *values))
    assert list(stream.read_u16_array(len(values))) == values


@given(st.integers(min_value=-(2**31), max_value=2**31 - 1))
def test_i32_hypothesis(value):
    assert Stream(struct.pack(">i", value)).read_i32() == value