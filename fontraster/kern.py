"""Reader for the horizontal pairs of a TrueType/OpenType 'kern' table."""

from dataclasses import dataclass

from .stream import Stream, StreamError


def kern_key(left, right):
    """Combine two glyph indices into one lookup key."""
    return (left << 16) | right


@dataclass(frozen=True)
class _SubtableHeader:
    length: int
    format: int
    is_horizontal: bool


def _read_ot_subtable(stream):
    stream.read_u16()  # version
    length = stream.read_u16()
    table_format = stream.read_u8()
    coverage = stream.read_u8()
    return _SubtableHeader(length, table_format, coverage & 0x01 == 0x01)


def _read_aat_subtable(stream):
    length = stream.read_u32()
    coverage = stream.read_u8()
    table_format = stream.read_u8()
    stream.read_u16()  # tuple index
    return _SubtableHeader(length, table_format, coverage & 0x80 != 0x80)


def _read_format0(stream):
    pairs = stream.read_u16()
    stream.skip(6)  # searchRange, entrySelector, rangeShift
    mappings = {}
    for _ in range(pairs):
        left = stream.read_u16()
        right = stream.read_u16()
        mappings[kern_key(left, right)] = stream.read_i16()
    return mappings


def _read_format3(stream):
    glyph_count = stream.read_u16()
    value_count = stream.read_u8()
    left_class_count = stream.read_u8()
    right_class_count = stream.read_u8()
    stream.skip(1)  # flags
    values = stream.read_i16_array(value_count)
    left_classes = stream.read_u8_array(glyph_count)
    right_classes = stream.read_u8_array(glyph_count)
    indices = stream.read_u8_array(left_class_count * right_class_count)

    mappings = {}
    for left, left_class in enumerate(left_classes):
        for right, right_class in enumerate(right_classes):
            if left_class > left_class_count or right_class > right_class_count:
                continue
            index = left_class * right_class_count + right_class
            if index >= len(indices) or indices[index] >= len(values):
                raise StreamError("kerning class index out of range")
            mappings[kern_key(left, right)] = values[indices[index]]
    return mappings


def _parse(stream):
    version = stream.read_u16()
    if version == 0x0000:
        count = stream.read_u16()
        read_subtable = _read_ot_subtable
    elif version == 0x0001:
        stream.read_u16()  # minor version
        count = stream.read_u32()
        read_subtable = _read_aat_subtable
    else:
        return None

    for _ in range(count):
        start = stream.offset
        header = read_subtable(stream)
        if header.format == 0:
            if header.is_horizontal:
                return _read_format0(stream)
        elif header.format == 3:
            if header.is_horizontal:
                return _read_format3(stream)
        else:
            stream.seek(start + header.length)
    return None


def parse_kern(data):
    """Return a dict from kern_key(left, right) to kerning in font units.

    Returns None when the table is malformed, of an unknown version, or has
    no horizontal subtable in format 0 or 3.
    """
    try:
        return _parse(Stream(data))
    except StreamError:
        return None