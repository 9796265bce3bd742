"""Ratio value type with NumPy interoperability."""
from __future__ import annotations

import logging
import numbers
import operator
from fractions import Fraction
from typing import Any, List, Optional, Tuple

try:  # NumPy is optional but recommended for array workflows.
    import numpy as np  # type: ignore
except ModuleNotFoundError:  # pragma: no cover - optional dependency may be absent.
    np = None  # type: ignore

from .classify import to_number
from .formatting import (
    DEFAULT_SEPARATOR,
    ERROR_RATE,
    format_fraction,
    format_mixed,
    get_clean_e_notation,
)
from .numeric import (
    NAN,
    Number,
    exact_divide,
    is_finite,
    is_nan,
    is_truthy,
    normalize,
    number_to_string,
    power,
    remainder,
    round_half_up,
    true_divide,
)
from .numtheory import gcd
from .parsing import get_numerator_with_sign, parse_to_array
from .repeating import get_repeat_props

__version__ = "0.3.5"
VERSION = __version__

logger = logging.getLogger(__name__)


def _is_plain_decimal(value: Number) -> bool:
    """``True`` for values that print as ``digits.digits`` (optionally negative)."""
    integer, point, fraction = number_to_string(value).lstrip("-").partition(".")
    return bool(point) and integer.isdigit() and fraction.isdigit()


def _clean_field(value: Number) -> Number:
    if not isinstance(value, float) or not (is_truthy(value) and is_finite(value)):
        return value
    return to_number(get_clean_e_notation(value))


def _reduce_pair(top: Number, bottom: Number) -> List[Number]:
    props = get_repeat_props(true_divide(top, bottom))
    if props:
        integer, fraction, cycle = props
        top = int(integer + fraction + cycle) - int(integer + fraction)
        bottom = 10 ** len(fraction) * (10 ** len(cycle) - 1)
        logger.debug("Rebuilt repeating decimal %s.%s(%s) as %d/%d", integer, fraction, cycle, top, bottom)
    factor = gcd(top, bottom)
    return [exact_divide(top, factor), exact_divide(bottom, factor)]


def _correct(top: Any, bottom: Any, always_reduce: bool) -> Tuple[Number, Number]:
    """Coerce, move the sign onto the numerator and optionally reduce."""
    top = to_number(top)
    bottom = to_number(bottom)
    top = NAN if top is None else top
    bottom = NAN if bottom is None else bottom
    denominator = normalize(abs(bottom))
    numerator = get_numerator_with_sign(top, bottom)
    if always_reduce and is_truthy(denominator):
        numerator, denominator = _reduce_pair(numerator, denominator)
    return numerator, denominator


class Ratio:
    """Exact numerator/denominator pair built from numbers or numeric text.

    ``Ratio()`` is ``0/1``. A single argument may be an int, float, numeric
    string, scientific notation (``"1.1e-30"``), a fraction (``"22/7"``), a
    mixed number (``"3 1/7"``) or another ratio. With two arguments the
    second is parsed the same way and divides the first. The denominator is
    never negative. Instances are immutable except for the cosmetic
    ``separator`` used when printing. With ``always_reduce=True`` the value
    and every ratio derived from it are kept in lowest terms.
    """

    __slots__ = ("_numerator", "_denominator", "_always_reduce", "_separator")
    __array_priority__ = 1000.0  # Prefer Ratio semantics in NumPy expressions.

    VERSION = VERSION

    def __init__(
        self,
        numerator: Any = None,
        denominator: Any = None,
        always_reduce: bool = False,
        *,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        if numerator is None and denominator is None:
            top, bottom = 0, 1
        else:
            top, bottom = parse_to_array(numerator)
            if denominator is not None:
                other_top, other_bottom = parse_to_array(denominator)
                top, bottom = top * other_bottom, bottom * other_top
        self._always_reduce = bool(always_reduce)
        self.separator = separator
        self._numerator, self._denominator = _correct(top, bottom, self._always_reduce)

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def _from_pair(
        cls,
        top: Any,
        bottom: Any,
        always_reduce: bool = False,
        separator: str = DEFAULT_SEPARATOR,
    ) -> "Ratio":
        """Build a ratio from raw field values without parsing them."""
        ratio = cls.__new__(cls)
        ratio._always_reduce = bool(always_reduce)
        ratio.separator = separator
        ratio._numerator, ratio._denominator = _correct(top, bottom, ratio._always_reduce)
        return ratio

    @classmethod
    def rationalize(cls, value: Any, denominator: Any = None) -> "Ratio":
        """Return *value* as a :class:`Ratio`, parsing it when needed."""
        if isinstance(value, Ratio) and denominator is None:
            return value
        return parse(value, denominator)

    def clone(
        self,
        numerator: Any = None,
        denominator: Any = None,
        always_reduce: Optional[bool] = None,
    ) -> "Ratio":
        """Return a copy, overriding whichever fields are given."""
        return Ratio._from_pair(
            self._numerator if numerator is None else numerator,
            self._denominator if denominator is None else denominator,
            self._always_reduce if always_reduce is None else always_reduce,
            self._separator,
        )

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> Number:
        return self._numerator

    @property
    def denominator(self) -> Number:
        return self._denominator

    @property
    def always_reduce(self) -> bool:
        return self._always_reduce

    @property
    def separator(self) -> str:
        return self._separator

    @separator.setter
    def separator(self, value: str) -> None:
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError(f"separator must be a single character, got {value!r}")
        self._separator = value

    def to_array(self) -> List[Number]:
        return [self._numerator, self._denominator]

    def value_of(self) -> float:
        return true_divide(self._numerator, self._denominator)

    def _scalar(self) -> Number:
        if self._denominator == 1:
            return self._numerator
        return self.value_of()

    def as_fraction(self) -> Fraction:
        """Return a :class:`Fraction` with the same value."""
        return Fraction(self._numerator) / Fraction(self._denominator)

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:
        return float(self.value_of())

    def __int__(self) -> int:
        if isinstance(self._numerator, int) and isinstance(self._denominator, int) and self._denominator:
            whole = abs(self._numerator) // self._denominator
            return -whole if self._numerator < 0 else whole
        return int(self.value_of())

    def __bool__(self) -> bool:
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        return f"Ratio({number_to_string(self._numerator)}, {number_to_string(self._denominator)})"

    def to_string(self) -> str:
        """``numerator + separator + denominator``, never reduced."""
        return format_fraction(self._numerator, self._denominator, self._separator)

    __str__ = to_string

    def to_locale_string(self) -> str:
        """Human-facing text: ``"4"``, ``"3 1/7"``, ``"1/10"`` or ``"NaN"``."""
        return format_mixed(self._numerator, self._denominator, self._separator)

    def __format__(self, format_spec: str) -> str:
        if format_spec in ("", "r", "R"):
            return self.to_string()
        if format_spec == "L":
            return self.to_locale_string()
        try:
            return format(float(self), format_spec)
        except (ValueError, TypeError):
            return format(str(self), format_spec)

    def clean_format(self) -> "Ratio":
        """Return a copy whose fields are free of floating-point artifacts.

        Decimal fields are re-parsed into an all-integer pair, while
        scientific-notation fields are rounded to drop long 0/9 runs.
        """
        if _is_plain_decimal(self._numerator) or _is_plain_decimal(self._denominator):
            top, bottom = parse(self._numerator, self._denominator).to_array()
            return self.clone(top, bottom)
        return self.clone(_clean_field(self._numerator), _clean_field(self._denominator))

    # ------------------------------------------------------------------
    # Arithmetic
    def reduce(self) -> "Ratio":
        top, bottom = reduce(self._numerator, self._denominator)
        return self.clone(top, bottom)

    def add(self, other: Any) -> "Ratio":
        other = Ratio.rationalize(other)
        if self._denominator == other._denominator:
            top = self._numerator + other._numerator
            bottom = self._denominator
        else:
            factor = gcd(self._denominator, other._denominator)
            top = exact_divide(
                self._numerator * other._denominator + self._denominator * other._numerator,
                factor,
            )
            bottom = exact_divide(self._denominator * other._denominator, factor)
        return self.clone(top, bottom)

    def subtract(self, other: Any) -> "Ratio":
        return self.add(Ratio.rationalize(other).negate())

    def multiply(self, other: Any) -> "Ratio":
        other = Ratio.rationalize(other)
        return self.clone(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def divide(self, other: Any) -> "Ratio":
        other = Ratio.rationalize(other)
        return self.clone(
            self._numerator * other._denominator,
            self._denominator * other._numerator,
        )

    def pow(self, exponent: Any) -> "Ratio":
        exponent = Ratio.rationalize(exponent)._scalar()
        return self.clone(power(self._numerator, exponent), power(self._denominator, exponent))

    def scale(self, factor: Any) -> "Ratio":
        """Multiply both fields by *factor*; the value is unchanged."""
        factor = Ratio.rationalize(factor)._scalar()
        return self.clone(self._numerator * factor, self._denominator * factor)

    def descale(self, factor: Any) -> "Ratio":
        """Divide both fields by *factor*; the value is unchanged."""
        factor = Ratio.rationalize(factor)._scalar()
        return self.clone(exact_divide(self._numerator, factor), exact_divide(self._denominator, factor))

    def mod(self) -> "Ratio":
        return self.clone(remainder(self._numerator, self._denominator), 1)

    def negate(self) -> "Ratio":
        return self.clone(-self._numerator)

    def abs(self) -> "Ratio":
        return self.clone(abs(self._numerator))

    def reciprocal(self) -> "Ratio":
        return self.clone(self._denominator, self._numerator)

    # ------------------------------------------------------------------
    # Queries
    def equals(self, other: Any) -> bool:
        """Value equality, so ``Ratio(1, 2).equals("2/4")`` holds."""
        return self._compare(Ratio.rationalize(other), operator.eq)

    def deep_equals(self, other: Any) -> bool:
        """Field-for-field equality without any reduction."""
        return (
            isinstance(other, Ratio)
            and self._numerator == other._numerator
            and self._denominator == other._denominator
        )

    def is_proper(self) -> bool:
        return abs(self._numerator) < self._denominator

    def find_x(self, pattern: Any) -> Optional["Ratio"]:
        """Solve ``a/b = x/n`` or ``a/b = n/x`` for ``x``.

        ``Ratio(1, 4).find_x("x/20")`` equals 5. Returns ``None`` unless
        *pattern* splits into exactly two parts on ``/``.
        """
        parts = str(pattern).split("/")
        if len(parts) != 2:
            return None
        left, right = parts
        if to_number(left) is None:
            return Ratio(right).multiply(self)
        return Ratio(left).divide(self)

    def approximate_to(self, base: Any) -> "Ratio":
        """Closest ratio with denominator *base*; a plain copy if *base* is not a number."""
        base = to_number(base)
        if base is None or is_nan(base):
            return self.clone()
        return self.clone(round_half_up(self.value_of() * base), base)

    def to_quantity_of(self, *bases: Any) -> "Ratio":
        """Best :meth:`approximate_to` among *bases*.

        Stops at the first candidate within ``ERROR_RATE`` of the true value.
        """
        if not bases:
            return self.clone(NAN, 1)
        value = self.value_of()
        best = self.approximate_to(bases[0])
        for base in bases[1:]:
            if abs(best.value_of() - value) <= ERROR_RATE:
                break
            candidate = self.approximate_to(base)
            if abs(candidate.value_of() - value) <= abs(best.value_of() - value):
                best = candidate
        return best

    # ------------------------------------------------------------------
    # Internal helpers
    def _binary_operation(self, other: Any, op):
        if np is not None and isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self, Ratio.rationalize(x)),
                otypes=[object],
            )
            return vectorised(other)
        if not isinstance(other, (Ratio, numbers.Real)):
            return NotImplemented
        return op(self, Ratio.rationalize(other))

    def _reflected_operation(self, other: Any, op):
        if np is not None and isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(Ratio.rationalize(x), self),
                otypes=[object],
            )
            return vectorised(other)
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return op(Ratio.rationalize(other), self)

    def _is_exact(self) -> bool:
        return (
            isinstance(self._numerator, int)
            and isinstance(self._denominator, int)
            and self._denominator != 0
        )

    def _compare(self, other: "Ratio", op) -> bool:
        if self._is_exact() and other._is_exact():
            return op(
                self._numerator * other._denominator,
                other._numerator * self._denominator,
            )
        return op(self.value_of(), other.value_of())

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, Ratio.add)

    def __radd__(self, other: Any) -> Any:
        return self._reflected_operation(other, Ratio.add)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, Ratio.subtract)

    def __rsub__(self, other: Any) -> Any:
        return self._reflected_operation(other, Ratio.subtract)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, Ratio.multiply)

    def __rmul__(self, other: Any) -> Any:
        return self._reflected_operation(other, Ratio.multiply)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, Ratio.divide)

    def __rtruediv__(self, other: Any) -> Any:
        return self._reflected_operation(other, Ratio.divide)

    def __pow__(self, exponent: Any) -> Any:
        return self._binary_operation(exponent, Ratio.pow)

    def __neg__(self) -> "Ratio":
        return self.negate()

    def __pos__(self) -> "Ratio":
        return self

    def __abs__(self) -> "Ratio":
        return self.abs()

    # ------------------------------------------------------------------
    # Comparisons
    def _rich_compare(self, other: Any, op):
        if not isinstance(other, (Ratio, numbers.Real)):
            return NotImplemented
        return self._compare(Ratio.rationalize(other), op)

    def __eq__(self, other: Any) -> bool:
        return self._rich_compare(other, operator.eq)

    def __lt__(self, other: Any) -> bool:
        return self._rich_compare(other, operator.lt)

    def __le__(self, other: Any) -> bool:
        return self._rich_compare(other, operator.le)

    def __gt__(self, other: Any) -> bool:
        return self._rich_compare(other, operator.gt)

    def __ge__(self, other: Any) -> bool:
        return self._rich_compare(other, operator.ge)

    def __hash__(self) -> int:
        if self._is_exact():
            return hash(Fraction(self._numerator, self._denominator))
        return hash(self.value_of())

    # ------------------------------------------------------------------
    # NumPy interoperability
    if np is not None:
        _UFUNC_DISPATCH = {
            np.add: operator.add,
            np.subtract: operator.sub,
            np.multiply: operator.mul,
            np.divide: operator.truediv,
            np.true_divide: operator.truediv,
            np.negative: operator.neg,
            np.positive: operator.pos,
            np.absolute: operator.abs,
            np.power: operator.pow,
        }
    else:  # pragma: no cover - executed when NumPy unavailable
        _UFUNC_DISPATCH = {}

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if np is None:
            return NotImplemented
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Ratio ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, Ratio):
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(Ratio.rationalize, otypes=[object])
                coerced.append(vectorised(value))
                has_array = True
            else:
                coerced.append(Ratio.rationalize(value))
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


def parse(numerator: Any, denominator: Any = None) -> Ratio:
    """Parse *numerator* (divided by *denominator*, if given) into a :class:`Ratio`.

    >>> parse("3 1/7").to_string()
    '22/7'
    >>> parse("1/2", "1/3").to_string()
    '3/2'
    """
    top, bottom = parse_to_array(numerator)
    if denominator is not None:
        other_top, other_bottom = parse_to_array(denominator)
        top, bottom = top * other_bottom, bottom * other_top
    return Ratio._from_pair(top, bottom)


def reduce(numerator: Any, denominator: Any = None) -> List[Number]:
    """Lowest-terms ``[numerator, denominator]`` of the parsed input.

    When the quotient prints as a repeating decimal the exact fraction behind
    that decimal is used, so ``reduce(0.3333333333333333)`` is ``[1, 3]``.

    >>> reduce("9/12")
    [3, 4]
    """
    ratio = parse(numerator, denominator)
    return _reduce_pair(ratio.numerator, ratio.denominator)


def rationalize(value: Any, denominator: Any = None) -> Ratio:
    """Public helper to convert *value* into :class:`Ratio`."""

    return Ratio.rationalize(value, denominator)


def as_ratio_array(
    values: Any,
    *,
    always_reduce: bool = False,
    copy: bool = True,
) -> "np.ndarray":
    """Return a ``numpy.ndarray`` of :class:`Ratio` values.

    ``values`` can be any iterable of parseable entries or an existing NumPy
    array. When ``copy`` is ``False`` and ``values`` is already an object
    array holding only ratios, that array is returned as is.
    """

    if np is None:
        raise RuntimeError("NumPy is required to construct Ratio arrays")

    def convert(item: Any) -> Ratio:
        ratio = Ratio.rationalize(item)
        if always_reduce and not ratio.always_reduce:
            ratio = ratio.clone(always_reduce=True)
        return ratio

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype == object and all(isinstance(item, Ratio) for item in array.flat) and not always_reduce:
            return array
        vectorised = np.vectorize(convert, otypes=[object])
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        # Build the array explicitly so numpy cannot unpack anything.
        array = np.empty(len(values), dtype=object)
        array[:] = [convert(item) for item in values]
        return array

    return as_ratio_array(list(values), always_reduce=always_reduce, copy=copy)


def zeros(length: int, *, always_reduce: bool = False) -> "np.ndarray":
    """Return a one-dimensional array of length ``length`` filled with ``0/1``."""

    if length < 0:
        raise ValueError("length must be non-negative")
    return as_ratio_array([Ratio(0, 1, always_reduce) for _ in range(length)])


def zeros_like(values: Any, *, always_reduce: bool = False) -> "np.ndarray":
    """Return a zero-filled array that matches the shape of ``values``."""

    shape = np.shape(values)
    array = np.empty(shape, dtype=object)
    for index in np.ndindex(*shape):
        array[index] = Ratio(0, 1, always_reduce)
    return array


__all__ = [
    "Ratio",
    "parse",
    "reduce",
    "rationalize",
    "as_ratio_array",
    "zeros",
    "zeros_like",
    "VERSION",
]
