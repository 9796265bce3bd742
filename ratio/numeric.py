"""Arithmetic helpers that follow IEEE-754 semantics instead of raising."""
from __future__ import annotations

import math
import numbers
from decimal import Decimal
from typing import Union

Number = Union[int, float]

NAN = float("nan")
INF = float("inf")

# Whole floats below this magnitude convert to ``int`` without loss.
_EXACT_INTEGER_LIMIT = 2**53


def is_nan(value: Number) -> bool:
    return isinstance(value, float) and value != value


def is_finite(value: Number) -> bool:
    """Return ``True`` for ints and for floats that are neither NaN nor infinite."""
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def is_truthy(value: Number) -> bool:
    """Mirror the truthiness of an IEEE double, where NaN counts as false."""
    return not is_nan(value) and value != 0


def normalize(value: Number) -> Number:
    """Return *value* as ``int`` when it is a whole number that fits exactly."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if math.isfinite(value) and value.is_integer() and abs(value) < _EXACT_INTEGER_LIMIT:
        return int(value)
    return value


def true_divide(a: Number, b: Number) -> float:
    """Divide like a double would: ``x/0`` is signed infinity and ``0/0`` is NaN."""
    if b == 0:
        if a == 0 or is_nan(a):
            return NAN
        return math.copysign(INF, a)
    try:
        return a / b
    except OverflowError:
        negative = (a < 0) != (b < 0)
        return -INF if negative else INF


def exact_divide(a: Number, b: Number) -> Number:
    """Divide, keeping ``int`` results when *b* divides *a* evenly."""
    if isinstance(a, int) and isinstance(b, int) and b != 0 and a % b == 0:
        return a // b
    return normalize(true_divide(a, b))


def remainder(a: Number, b: Number) -> Number:
    """Truncated remainder: the result carries the sign of *a*."""
    if is_nan(a) or is_nan(b) or b == 0 or not is_finite(a):
        return NAN
    if not is_finite(b):
        return a
    if isinstance(a, int) and isinstance(b, int):
        result = abs(a) % abs(b)
        return -result if a < 0 else result
    return normalize(math.fmod(a, b))


def power(base: Number, exponent: Number) -> Number:
    if isinstance(base, int) and isinstance(exponent, int) and exponent >= 0:
        return base**exponent
    if base == 0 and exponent < 0:
        return INF
    try:
        return normalize(math.pow(base, exponent))
    except OverflowError:
        odd = is_finite(exponent) and float(exponent).is_integer() and int(exponent) % 2 == 1
        return -INF if base < 0 and odd else INF
    except ValueError:
        # Fractional power of a negative base.
        return NAN


def round_half_up(value: Number) -> Number:
    """Round to the nearest integer, ties toward positive infinity."""
    if isinstance(value, int) or not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def number_to_string(value: Number) -> str:
    """Render *value* the way a JavaScript ``Number`` prints itself.

    Integers print in full. Floats use the shortest digit string that
    round-trips, laid out in positional notation when the decimal exponent
    lies in ``[-7, 21)`` and in ``d.ddde±x`` notation otherwise. Whole floats
    never carry a trailing ``.0``.
    """
    if isinstance(value, numbers.Integral):
        return str(int(value))
    value = float(value)
    if is_nan(value):
        return "NaN"
    if math.isinf(value):
        return "-Infinity" if value < 0 else "Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    shortest = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in shortest.digits)
    k = len(digits)
    n = shortest.exponent + k

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        body = "0." + "0" * -n + digits
    else:
        exponent = n - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        body = f"{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"
    return sign + body


def to_precision(value: Number, precision: int) -> str:
    """Format *value* with *precision* significant digits (``Number#toPrecision``)."""
    if not is_finite(value):
        return number_to_string(value)
    value = float(value)
    mantissa, exponent = f"{value:.{precision - 1}e}".split("e")
    exponent = int(exponent)
    if exponent < -6 or exponent >= precision:
        return f"{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"
    return f"{value:.{precision - 1 - exponent}f}"
