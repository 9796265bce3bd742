"""Conversion of classified input into an exact ``[numerator, denominator]`` pair."""
from __future__ import annotations

import logging
from typing import Any, List

from .classify import NumberType, TokenKind, get_type_guess, to_number, tokenize
from .numeric import NAN, Number, is_nan, is_truthy, normalize, number_to_string

logger = logging.getLogger(__name__)


def get_numerator_with_sign(top: Any, bottom: Any) -> Number:
    """Return ``abs(top)`` carrying the sign of ``top / bottom``.

    A zero or NaN *bottom* counts as 1.

    >>> get_numerator_with_sign(1, -2)
    -1
    """
    top = _number_or_nan(top)
    bottom = _number_or_nan(bottom)
    if not is_truthy(bottom):
        bottom = 1
    negative = top != 0 and (top < 0) != (bottom < 0)
    return normalize(-abs(top) if negative else abs(top))


def _number_or_nan(value: Any) -> Number:
    number = to_number(value)
    return NAN if number is None else number


def _parse_decimal(number: float) -> List[Number]:
    integer_part, fraction_part = number_to_string(number).split(".")
    denominator = 10 ** len(fraction_part)
    numerator = abs(int(integer_part)) * denominator + int(fraction_part)
    if integer_part.startswith("-"):
        numerator = -numerator
    return [numerator, denominator]


def _parse_scientific(number: Number) -> List[Number]:
    text = number_to_string(number)
    if "e" not in text:
        # Exact or positional values such as "22e31" or "1.2345e2".
        if number % 1:
            return _parse_decimal(number)
        return [normalize(number), 1]
    mantissa, exponent = text.split("e")
    top, bottom = parse_to_array(mantissa)
    scale = 10 ** abs(int(exponent))
    if abs(number) < 1:
        return [top, normalize(bottom * scale)]
    return [normalize(top * scale), bottom]


def _parse_fraction(text: str) -> List[Number]:
    parts = text.split("/")
    top = to_number(parts[0])
    bottom = to_number(parts[1])
    if top is None or bottom is None:
        logger.debug("Could not parse %r as a fraction", text)
        return [NAN, 1]
    return [get_numerator_with_sign(top, bottom), abs(bottom)]


def _parse_mixed(text: str) -> List[Number]:
    tokens = tokenize(text)
    while tokens[0].kind is TokenKind.SPACE:
        tokens.pop(0)
    split = next(i for i, token in enumerate(tokens) if token.kind is TokenKind.SPACE)
    whole_text = "".join(token.text for token in tokens[:split])
    top, bottom = parse_to_array("".join(token.text for token in tokens[split + 1:]))
    whole = to_number(whole_text)
    if whole is None or is_nan(top):
        logger.debug("Could not parse %r as a mixed number", text)
        return [NAN, 1]
    negative = whole_text.startswith("-") != (top < 0)
    magnitude = normalize(abs(top) + abs(whole * bottom))
    return [-magnitude if negative else magnitude, bottom]


def parse_to_array(value: Any) -> List[Number]:
    """Convert *value* into ``[numerator, denominator]``.

    Unrecognised input yields ``[nan, 1]``.

    >>> parse_to_array(0.125)
    [125, 1000]
    >>> parse_to_array("3 1/7")
    [22, 7]
    """
    kind = get_type_guess(value)
    if kind is NumberType.MIXED:
        return _parse_mixed(value)
    if kind is NumberType.FRACTION:
        return _parse_fraction(value)
    if kind is NumberType.DECIMAL:
        return _parse_decimal(to_number(value))
    if kind is NumberType.E:
        return _parse_scientific(to_number(value))
    if kind is NumberType.NUMBER:
        return [normalize(to_number(value)), 1]
    if kind is NumberType.RATIO:
        return [normalize(value.numerator), normalize(value.denominator)]
    if value is not None:
        logger.debug("Could not parse %r as a number", value)
    return [NAN, 1]
