"""Rendering of ratios as fraction and mixed-number text."""
from __future__ import annotations

import math
import re

from .classify import to_number
from .numeric import (
    INF,
    Number,
    exact_divide,
    is_nan,
    number_to_string,
    remainder,
    round_half_up,
    to_precision,
    true_divide,
)

DEFAULT_SEPARATOR = "/"
ERROR_RATE = 1e-9

_LONG_DIGIT_RUN = re.compile(r"\.\d+(0|9){8,}\d?e")
_MANTISSA_FRACTION = re.compile(r"(?:\d+\.)(\d+)(?:e.*)")
_TRAILING_RUN = re.compile(r"(0|9)+\d$")


def get_clean_e_notation(value) -> str:
    """Round away a run of 8+ trailing 0s or 9s in a scientific-notation number.

    The result is returned as a string so that the cleaned value survives.

    >>> get_clean_e_notation("1.1000000000000003e-30")
    '1.1e-30'
    >>> get_clean_e_notation("9.999999999999999e+22")
    '1e+23'
    """
    number = to_number(value)
    if number is None or is_nan(number):
        number = 0
    try:
        number = float(number)
    except OverflowError:
        number = INF if number > 0 else -INF
    text = number_to_string(number)
    if _LONG_DIGIT_RUN.search(text):
        fraction_digits = _MANTISSA_FRACTION.search(text).group(1)
        precision = len(_TRAILING_RUN.sub("", fraction_digits)) + 1
        text = to_precision(float(text), precision)
    return text


def format_fraction(numerator: Number, denominator: Number, separator: str = DEFAULT_SEPARATOR) -> str:
    return number_to_string(numerator) + separator + number_to_string(denominator)


def format_mixed(numerator: Number, denominator: Number, separator: str = DEFAULT_SEPARATOR) -> str:
    """Render a ratio for people: a whole number, a mixed number, or ``a/b``.

    ``NaN`` and infinite values print as their numeric text.
    """
    value = true_divide(numerator, denominator)
    if is_nan(value):
        return "NaN"
    if denominator == 1:
        return number_to_string(numerator)
    integral = isinstance(numerator, int) and isinstance(denominator, int) and denominator != 0
    if integral and numerator % denominator == 0:
        return number_to_string(exact_divide(numerator, denominator))
    if not math.isfinite(value) or value % 1 == 0:
        return number_to_string(value)
    if abs(value) > 1:
        nearest = round_half_up(value)
        if abs(value - nearest) < ERROR_RATE:
            return number_to_string(nearest)
        if integral:
            whole = abs(numerator) // denominator
            whole = -whole if numerator < 0 else whole
        else:
            whole = math.trunc(value)
        rest = remainder(abs(numerator), denominator)
        return f"{whole} {number_to_string(rest)}{separator}{number_to_string(denominator)}"
    return format_fraction(numerator, denominator, separator)
