"""Integer helpers: greatest common divisor and prime factorisation."""
from __future__ import annotations

import math
from typing import Any, List

from .classify import to_number
from .numeric import Number, is_finite, is_truthy, normalize


def _usable(value: Any) -> bool:
    return value is not None and is_truthy(value) and is_finite(value)


def gcd(a: Any, b: Any) -> Number:
    """Greatest common divisor by the Euclidean algorithm.

    The result is never negative. When either operand is zero, NaN, infinite
    or not a number at all the result is 1, so dividing by it leaves a pair
    unchanged.

    >>> gcd(20, 12)
    4
    """
    a, b = to_number(a), to_number(b)
    if not (_usable(a) and _usable(b)):
        return 1
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return normalize(a)


def get_prime_factors(n: Any) -> List[int]:
    """Prime factors of ``floor(n)`` in ascending order, with multiplicity.

    >>> get_prime_factors(20)
    [2, 2, 5]
    """
    number = to_number(n)
    if number is None or not is_finite(number):
        return []
    number = math.floor(number)
    factors = []
    if number <= 1:
        return factors
    while number % 2 == 0:
        factors.append(2)
        number //= 2
    candidate = 3
    while candidate * candidate <= number:
        while number % candidate == 0:
            factors.append(candidate)
            number //= candidate
        candidate += 2
    if number > 1:
        factors.append(number)
    return factors
