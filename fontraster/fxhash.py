"""Fast non-cryptographic 64-bit hash used to fingerprint font files."""

import struct

_SEED = 0x517CC1B727220A95
_MASK64 = 0xFFFFFFFFFFFFFFFF
_ROTATE = 5


def _mix(state, word):
    rotated = ((state << _ROTATE) | (state >> (64 - _ROTATE))) & _MASK64
    return ((rotated ^ word) * _SEED) & _MASK64


def fxhash(data):
    """Hash a bytes-like object to an unsigned 64-bit integer.

    Words are read little-endian: eight bytes at a time, then one
    four-byte word if enough remain, then single bytes.
    """
    buffer = bytes(memoryview(data))
    state = 0
    whole = len(buffer) - len(buffer) % 8
    for (word,) in struct.iter_unpack("<Q", buffer[:whole]):
        state = _mix(state, word)
    rest = buffer[whole:]
    if len(rest) >= 4:
        state = _mix(state, int.from_bytes(rest[:4], "little"))
        rest = rest[4:]
    for byte in rest:
        state = _mix(state, byte)
    return state