"""Exact fractions parsed from numbers, decimals, scientific notation and fraction text."""

from .classify import NumberType, get_type_guess, is_numeric, tokenize
from .formatting import DEFAULT_SEPARATOR, ERROR_RATE, get_clean_e_notation
from .numtheory import gcd, get_prime_factors
from .parsing import get_numerator_with_sign, parse_to_array
from .rational import (
    VERSION,
    Ratio,
    __version__,
    as_ratio_array,
    parse,
    rationalize,
    reduce,
    zeros,
    zeros_like,
)
from .repeating import MIN_REPEAT_DIGITS, get_repeat_props

__all__ = [
    "Ratio",
    "parse",
    "reduce",
    "rationalize",
    "is_numeric",
    "gcd",
    "get_numerator_with_sign",
    "get_type_guess",
    "parse_to_array",
    "get_repeat_props",
    "get_prime_factors",
    "get_clean_e_notation",
    "tokenize",
    "NumberType",
    "as_ratio_array",
    "zeros",
    "zeros_like",
    "DEFAULT_SEPARATOR",
    "ERROR_RATE",
    "MIN_REPEAT_DIGITS",
    "VERSION",
    "__version__",
]
