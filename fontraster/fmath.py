"""Bit-exact single-precision float helpers.

Every function takes and returns Python floats that hold 32-bit float
values. Intermediate results are rounded to 32-bit precision, so they
match what single-precision arithmetic produces.
"""

import math
import struct

_F32 = struct.Struct("<f")
_U32 = struct.Struct("<I")
_MASK32 = 0xFFFFFFFF
_SIGN_BIT = 0x80000000
_ABS_MASK = 0x7FFFFFFF


def f32(value):
    """Round a number to the nearest 32-bit float, overflowing to infinity."""
    value = float(value)
    try:
        return _F32.unpack(_F32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def to_bits(value):
    """Return the IEEE 754 bit pattern of the 32-bit float nearest to value."""
    return _U32.unpack(_F32.pack(f32(value)))[0]


def from_bits(bits):
    """Return the 32-bit float with the given bit pattern."""
    return _F32.unpack(_U32.pack(bits & _MASK32))[0]


F32_MAX = from_bits(0x7F7FFFFF)
F32_MIN = -F32_MAX


def fabs(value):
    """Clear the sign bit."""
    return from_bits(to_bits(value) & _ABS_MASK)


def is_negative(value):
    """True when the sign bit is set, including for -0.0."""
    return to_bits(value) >= _SIGN_BIT


def is_positive(value):
    """True when the sign bit is clear, including for +0.0."""
    return to_bits(value) < _SIGN_BIT


def flipsign(value):
    """Invert the sign bit."""
    return from_bits(to_bits(value) ^ _SIGN_BIT)


def copysign(value, sign):
    """Give value the sign bit of sign."""
    return from_bits((to_bits(value) & _ABS_MASK) | (to_bits(sign) & _SIGN_BIT))


def clamp(value, minimum, maximum):
    """Limit value to the range [minimum, maximum]; NaN passes through."""
    result = value
    if result < minimum:
        result = minimum
    if result > maximum:
        result = maximum
    return result


def as_i32(value):
    """Convert to a 32-bit integer, truncating toward zero and saturating."""
    value = f32(value)
    if math.isnan(value):
        return 0
    if value >= 2147483648.0:
        return 2147483647
    if value <= -2147483648.0:
        return -2147483648
    return int(value)


def trunc(x):
    """Round toward zero, keeping the sign of zero."""
    x = f32(x)
    bits = to_bits(x)
    shift = ((bits >> 23) & 0xFF) - 0x7F + 9
    if shift >= 23 + 9:
        return x
    if shift < 9:
        shift = 1
    mask = _MASK32 >> shift
    if bits & mask == 0:
        return x
    return from_bits(bits & ~mask & _MASK32)


def fract(value):
    """Fractional part, with the sign of the input."""
    value = f32(value)
    return f32(value - trunc(value))


def ceil(x):
    """Round toward positive infinity."""
    x = f32(x)
    bits = to_bits(x)
    exponent = ((bits >> 23) & 0xFF) - 0x7F
    if exponent >= 23:
        return x
    if exponent >= 0:
        mask = 0x007FFFFF >> exponent
        if bits & mask == 0:
            return x
        if bits >> 31 == 0:
            bits += mask
        bits &= ~mask & _MASK32
    elif bits >> 31 != 0:
        return -0.0
    elif (bits << 1) & _MASK32 != 0:
        return 1.0
    return from_bits(bits)


def floor(x):
    """Round toward negative infinity."""
    x = f32(x)
    bits = to_bits(x)
    exponent = ((bits >> 23) & 0xFF) - 0x7F
    if exponent >= 23:
        return x
    if exponent >= 0:
        mask = 0x007FFFFF >> exponent
        if bits & mask == 0:
            return x
        if bits >> 31 != 0:
            bits += mask
        bits &= ~mask & _MASK32
    elif bits >> 31 == 0:
        bits = 0
    elif (bits << 1) & _MASK32 != 0:
        return -1.0
    return from_bits(bits)


def sqrt(x):
    """Correctly rounded square root; NaN for negative input."""
    x = f32(x)
    if math.isnan(x) or x == math.inf or x == 0.0:
        return x
    if x < 0.0:
        return math.nan
    return f32(math.sqrt(x))


_ATAN_HI = tuple(f32(v) for v in (4.6364760399e-01, 7.8539812565e-01, 9.8279368877e-01, 1.5707962513e00))
_ATAN_LO = tuple(f32(v) for v in (5.0121582440e-09, 3.7748947079e-08, 3.4473217170e-08, 7.5497894159e-08))
_A_T = tuple(
    f32(v)
    for v in (3.3333328366e-01, -1.9999158382e-01, 1.4253635705e-01, -1.0648017377e-01, 6.1687607318e-02)
)
_X1P_120 = from_bits(0x03800000)


def atan(x):
    """Arctangent with single-precision accuracy."""
    x = f32(x)
    bits = to_bits(x)
    negative = (bits >> 31) != 0
    bits &= _ABS_MASK

    if bits >= 0x4C800000:
        if math.isnan(x):
            return x
        z = f32(_ATAN_HI[3] + _X1P_120)
        return -z if negative else z

    if bits < 0x3EE00000:
        if bits < 0x39800000:
            return x
        index = -1
    else:
        x = fabs(x)
        if bits < 0x3F980000:
            if bits < 0x3F300000:
                x = f32(f32(f32(2.0 * x) - 1.0) / f32(2.0 + x))
                index = 0
            else:
                x = f32(f32(x - 1.0) / f32(x + 1.0))
                index = 1
        elif bits < 0x401C0000:
            x = f32(f32(x - 1.5) / f32(1.0 + f32(1.5 * x)))
            index = 2
        else:
            x = f32(-1.0 / x)
            index = 3

    z = f32(x * x)
    w = f32(z * z)
    s1 = f32(z * f32(_A_T[0] + f32(w * f32(_A_T[2] + f32(w * _A_T[4])))))
    s2 = f32(w * f32(_A_T[1] + f32(w * _A_T[3])))
    poly = f32(x * f32(s1 + s2))
    if index < 0:
        return f32(x - poly)
    z = f32(_ATAN_HI[index] - f32(f32(poly - _ATAN_LO[index]) - x))
    return -z if negative else z


_PI = f32(3.1415927410e00)
_PI_LO = f32(-8.7422776573e-08)
_PI_HALF = f32(_PI / 2.0)
_PI_QUARTER = f32(_PI / 4.0)
_PI_3_QUARTERS = f32(f32(3.0 * _PI) / 4.0)


def atan2f(y, x):
    """Two-argument arctangent of y/x with single-precision accuracy."""
    y = f32(y)
    x = f32(x)
    if math.isnan(x) or math.isnan(y):
        return f32(x + y)
    ix = to_bits(x)
    iy = to_bits(y)
    if ix == 0x3F800000:
        return atan(y)
    quadrant = ((iy >> 31) & 1) | ((ix >> 30) & 2)
    ix &= _ABS_MASK
    iy &= _ABS_MASK

    if iy == 0:
        if quadrant in (0, 1):
            return y
        return _PI if quadrant == 2 else -_PI
    if ix == 0:
        return -_PI_HALF if quadrant & 1 else _PI_HALF
    if ix == 0x7F800000:
        if iy == 0x7F800000:
            return (_PI_QUARTER, -_PI_QUARTER, _PI_3_QUARTERS, -_PI_3_QUARTERS)[quadrant]
        return (0.0, -0.0, _PI, -_PI)[quadrant]
    if ix + (26 << 23) < iy or iy == 0x7F800000:
        return -_PI_HALF if quadrant & 1 else _PI_HALF

    if quadrant & 2 and iy + (26 << 23) < ix:
        z = 0.0
    else:
        z = atan(fabs(f32(y / x)))
    if quadrant == 0:
        return z
    if quadrant == 1:
        return -z
    if quadrant == 2:
        return f32(_PI - f32(z - _PI_LO))
    return f32(f32(z - _PI_LO) - _PI)


_APPROX_PI = f32(math.pi)
_APPROX_HALF = f32(_APPROX_PI / 2.0)
_APPROX_QUARTER = f32(_APPROX_PI / 4.0)
_APPROX_3_QUARTERS = f32(_APPROX_QUARTER * 3.0)
_CUBIC = f32(0.1963)
_LINEAR = f32(0.9817)


def atan2(x, y):
    """Fast polynomial approximation of the angle of the vector (x, y)."""
    x = f32(x)
    y = f32(y)
    abs_y = fabs(y)
    if x == 0.0:
        if y > 0.0:
            return _APPROX_HALF
        if y == 0.0:
            return 0.0
        return -_APPROX_HALF
    if x > 0.0:
        r = f32(f32(x - abs_y) / f32(x + abs_y))
        offset = _APPROX_QUARTER
    else:
        r = f32(f32(x + abs_y) / f32(abs_y - x))
        offset = _APPROX_3_QUARTERS
    cubic = f32(f32(f32(_CUBIC * r) * r) * r)
    r = f32(f32(cubic - f32(_LINEAR * r)) + offset)
    return copysign(r, y)