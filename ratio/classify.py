"""Classification of raw numeric input.

Strings are split into a short run of tokens (sign, digit run, radix point,
exponent marker, fraction separator, whitespace) and the token sequence
decides which parsing strategy applies. Everything here is a pure function of
its input.
"""
from __future__ import annotations

import enum
import itertools
import numbers
import string
from decimal import Decimal
from typing import Any, List, NamedTuple, Optional

from .numeric import Number, is_finite, is_nan, number_to_string, true_divide

# Whole-valued literals with a larger decimal exponent stay floats.
_MAX_EXACT_EXPONENT = 308

# Magnitude from which a double prints in exponent form.
_POSITIONAL_LIMIT = 10**21

_WHITESPACE = " \t\n\r\f\v"


class NumberType(str, enum.Enum):
    """Tag naming the parsing strategy for a value."""

    NAN = "NaN"
    RATIO = "Ratio"
    NUMBER = "number"
    E = "e"
    DECIMAL = "decimal"
    MIXED = "mixed"
    FRACTION = "fraction"


class TokenKind(enum.Enum):
    SIGN = "sign"
    DIGITS = "digits"
    POINT = "point"
    EXPONENT = "exponent"
    SLASH = "slash"
    SPACE = "space"
    OTHER = "other"


class Token(NamedTuple):
    kind: TokenKind
    text: str


# Kinds whose consecutive characters merge into a single token.
_RUN_KINDS = {TokenKind.DIGITS, TokenKind.SPACE, TokenKind.OTHER}

_FRACTION_PATTERNS = (
    (TokenKind.DIGITS, TokenKind.SLASH),
    (TokenKind.DIGITS, TokenKind.SPACE, TokenKind.SLASH),
)
_MIXED_PATTERNS = (
    (TokenKind.DIGITS, TokenKind.SPACE, TokenKind.DIGITS),
    (TokenKind.DIGITS, TokenKind.SPACE, TokenKind.SIGN, TokenKind.DIGITS),
)


def _char_kind(char: str) -> TokenKind:
    if char in string.digits:
        return TokenKind.DIGITS
    if char in _WHITESPACE:
        return TokenKind.SPACE
    if char in "+-":
        return TokenKind.SIGN
    if char == ".":
        return TokenKind.POINT
    if char in "eE":
        return TokenKind.EXPONENT
    if char == "/":
        return TokenKind.SLASH
    return TokenKind.OTHER


def tokenize(text: str) -> List[Token]:
    """Split *text* into tokens.

    >>> [t.kind.value for t in tokenize("3 1/7")]
    ['digits', 'space', 'digits', 'slash', 'digits']
    """
    tokens = []
    for kind, group in itertools.groupby(text, key=_char_kind):
        chars = "".join(group)
        if kind in _RUN_KINDS:
            tokens.append(Token(kind, chars))
        else:
            tokens.extend(Token(kind, char) for char in chars)
    return tokens


def _literal_kind(tokens: List[Token]) -> Optional[str]:
    """Return ``"integer"`` or ``"real"`` when *tokens* spell one numeric literal."""
    kinds = [token.kind for token in tokens]
    while kinds and kinds[0] is TokenKind.SPACE:
        kinds.pop(0)
    while kinds and kinds[-1] is TokenKind.SPACE:
        kinds.pop()

    def accept(kind: TokenKind) -> bool:
        if kinds and kinds[0] is kind:
            kinds.pop(0)
            return True
        return False

    accept(TokenKind.SIGN)
    has_digits = accept(TokenKind.DIGITS)
    has_point = accept(TokenKind.POINT)
    if has_point:
        has_digits = accept(TokenKind.DIGITS) or has_digits
    if not has_digits:
        return None
    has_exponent = accept(TokenKind.EXPONENT)
    if has_exponent:
        accept(TokenKind.SIGN)
        if not accept(TokenKind.DIGITS):
            return None
    if kinds:
        return None
    return "real" if has_point or has_exponent else "integer"


def _contains(kinds: List[TokenKind], patterns) -> bool:
    return any(
        tuple(kinds[i:i + len(pattern)]) == pattern
        for pattern in patterns
        for i in range(len(kinds))
    )


def _has_exponent(value: Any) -> bool:
    return isinstance(value, str) and any(
        token.kind is TokenKind.EXPONENT for token in tokenize(value)
    )


def _is_ratio_like(value: Any) -> bool:
    if isinstance(value, (numbers.Integral, str)):
        return False
    return hasattr(value, "numerator") and hasattr(value, "denominator")


def to_number(value: Any) -> Optional[Number]:
    """Convert a scalar or numeric literal to ``int``/``float``.

    Returns ``None`` for anything that is not a single number, including
    fraction strings and ratio objects.
    """
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, Decimal):
        value = str(value)
    if isinstance(value, numbers.Real) and not _is_ratio_like(value):
        return float(value)
    if not isinstance(value, str):
        return None

    kind = _literal_kind(tokenize(value))
    if kind is None:
        return None
    text = value.strip(_WHITESPACE)
    if kind == "integer":
        return int(text)
    literal = Decimal(text)
    if literal == literal.to_integral_value() and literal.adjusted() <= _MAX_EXACT_EXPONENT:
        return int(literal)
    return float(literal)


def is_numeric(value: Any) -> bool:
    """Return ``True`` if *value* is, or spells, a finite number.

    >>> is_numeric("1.0e3")
    True
    """
    if _is_ratio_like(value):
        number = true_divide(value.numerator, value.denominator)
    else:
        number = to_number(value)
    return number is not None and not is_nan(number) and is_finite(number)


def get_type_guess(value: Any) -> NumberType:
    """Return the :class:`NumberType` naming how *value* should be parsed.

    >>> get_type_guess("1/3")
    <NumberType.FRACTION: 'fraction'>
    """
    if _is_ratio_like(value):
        return NumberType.RATIO

    number = to_number(value)
    if number is not None and not is_nan(number):
        if is_finite(number) and (_has_exponent(value) or abs(number) >= _POSITIONAL_LIMIT):
            return NumberType.E
        if isinstance(number, int):
            return NumberType.NUMBER
        if "e" in number_to_string(number):
            return NumberType.E
        if is_finite(number) and number % 1:
            return NumberType.DECIMAL
        return NumberType.NUMBER

    if isinstance(value, str):
        kinds = [token.kind for token in tokenize(value)]
        if _contains(kinds, _FRACTION_PATTERNS):
            if _contains(kinds, _MIXED_PATTERNS):
                return NumberType.MIXED
            return NumberType.FRACTION
    return NumberType.NAN
