"""Big-endian reader over the bytes of a font table."""

import struct

from .fmath import f32

_F2DOT14_SCALE = 1.0 / (1 << 14)


class StreamError(ValueError):
    """Raised when a read would run past the end of the data."""


class Stream:
    """Cursor that reads big-endian integers from a byte buffer."""

    def __init__(self, data):
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self):
        """Current read position in bytes."""
        return self._offset

    def __len__(self):
        return len(self._data)

    def reset(self):
        """Move the cursor back to the start."""
        self._offset = 0

    def seek(self, offset):
        """Move the cursor to an absolute position."""
        self._offset = offset

    def skip(self, count):
        """Move the cursor forward by count bytes."""
        self._offset += count

    def _take(self, size):
        start = self._offset
        end = start + size
        if start < 0 or size < 0 or end > len(self._data):
            raise StreamError(
                f"cannot read {size} byte(s) at offset {start} of {len(self._data)}"
            )
        self._offset = end
        return self._data[start:end]

    def _unpack(self, code, count=1):
        fmt = struct.Struct(f">{count}{code}")
        return fmt.unpack(self._take(fmt.size))

    def read_u8(self):
        return self._unpack("B")[0]

    def read_u16(self):
        return self._unpack("H")[0]

    def read_u32(self):
        return self._unpack("I")[0]

    def read_i8(self):
        return self._unpack("b")[0]

    def read_i16(self):
        return self._unpack("h")[0]

    def read_i32(self):
        return self._unpack("i")[0]

    def read_f2dot14(self):
        """Read a signed 2.14 fixed-point number."""
        return f32(self.read_i16() * _F2DOT14_SCALE)

    def read_tag(self):
        """Read a four-byte table tag."""
        return self._take(4)

    def read_u8_array(self, count):
        return self._unpack("B", count)

    def read_u16_array(self, count):
        return self._unpack("H", count)

    def read_u32_array(self, count):
        return self._unpack("I", count)

    def read_i8_array(self, count):
        return self._unpack("b", count)

    def read_i16_array(self, count):
        return self._unpack("h", count)

    def read_i32_array(self, count):
        return self._unpack("i", count)