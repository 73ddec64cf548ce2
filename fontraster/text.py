"""Text decoding and per-character classification used by layout."""

import enum
from dataclasses import dataclass
from typing import ClassVar


def decode_utf16(data):
    """Decode big-endian UTF-16, as stored in a font's name table."""
    data = bytes(data)
    if len(data) % 2:
        raise ValueError("UTF-16 data must have an even number of bytes")
    return data.decode("utf-16-be", errors="replace")


class Linebreak(enum.IntFlag):
    """Linebreak opportunity; ordered by priority HARD > SOFT > NONE."""

    NONE = 0
    SOFT = 1
    HARD = 2


def linebreak_mask(wrap_soft_breaks, wrap_hard_breaks, has_width):
    """Mask of the linebreak kinds that layout should act on."""
    mask = Linebreak.NONE
    if wrap_hard_breaks:
        mask |= Linebreak.HARD
    if wrap_soft_breaks and has_width:
        mask |= Linebreak.SOFT
    return mask


_WHITESPACE_CHARS = frozenset("\t\n\x0c\r ")


@dataclass(frozen=True)
class CharacterData:
    """Layout hints about a character and its glyph."""

    bits: int = 0

    WHITESPACE: ClassVar[int] = 0b001
    CONTROL: ClassVar[int] = 0b010
    MISSING: ClassVar[int] = 0b100

    @classmethod
    def classify(cls, character, index):
        """Classify a character given its glyph index in the font."""
        bits = 0
        if index == 0:
            bits |= cls.MISSING
        if character in _WHITESPACE_CHARS:
            bits |= cls.WHITESPACE
        code = ord(character)
        if code <= 0x1F or code == 0x7F:
            bits |= cls.CONTROL
        return cls(bits)

    def rasterize(self):
        """False for missing glyphs, whitespace and control characters."""
        return self.bits == 0

    def is_whitespace(self):
        return bool(self.bits & self.WHITESPACE)

    def is_control(self):
        return bool(self.bits & self.CONTROL)

    def is_missing(self):
        return bool(self.bits & self.MISSING)