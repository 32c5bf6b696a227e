"""Degree-based trigonometry and range normalization.

All astronomical formulas in salah are written in degrees; these wrappers do
the radian conversion. Nothing here raises: out-of-domain inverse functions
return NaN and callers decide what that means.
"""

import math


def normalize(value: float, modulus: float) -> float:
    """Map value into [0, modulus) using mathematical (floored) modulo.

    normalize(-80.0, 360.0) == 280.0
    """
    if math.isnan(value):
        return value
    result = value - modulus * math.floor(value / modulus)
    # floor() can leave result == modulus for tiny negative inputs
    return 0.0 if result >= modulus else result


def normalize_angle(angle: float) -> float:
    return normalize(angle, 360.0)


def normalize_hour(hour: float) -> float:
    return normalize(hour, 24.0)


def sin(d: float) -> float:
    return math.sin(math.radians(d))


def cos(d: float) -> float:
    return math.cos(math.radians(d))


def tan(d: float) -> float:
    return math.tan(math.radians(d))


def asin(x: float) -> float:
    if not -1.0 <= x <= 1.0:
        return math.nan
    return math.degrees(math.asin(x))


def acos(x: float) -> float:
    if not -1.0 <= x <= 1.0:
        return math.nan
    return math.degrees(math.acos(x))


def atan(x: float) -> float:
    return math.degrees(math.atan(x))


def atan2(y: float, x: float) -> float:
    return math.degrees(math.atan2(y, x))


def acot(x: float) -> float:
    """Inverse cotangent in degrees, atan(1/x). acot(0) is 90."""
    if x == 0:
        return math.degrees(math.atan(math.inf))
    return math.degrees(math.atan(1.0 / x))
