"""Best-effort detection of repeating decimals in a number's printed form.

The detector works on the shortest round-trip rendering of a double, not on
the exact rational value. It misses cycles when fewer than
``MIN_REPEAT_DIGITS`` fractional digits are printed, when the value needs
more than about 15 significant digits to render, or when rounding of the
last printed digit hides the cycle.
"""
from __future__ import annotations

import re
from typing import Any, List

from .classify import to_number
from .numeric import is_truthy, number_to_string

MIN_REPEAT_DIGITS = 10

_REPEATING_TAIL = re.compile(r"(?:[^.]+\.\d*)(\d{2,})+(?:\1)$")
_DOUBLED = re.compile(r"^(\d+)(?:\1)$")
_LAST_DIGIT = re.compile(r"\d$")
_ENOUGH_DIGITS = re.compile(r"\.\d{%d}" % MIN_REPEAT_DIGITS)


def get_repeat_props(value: Any) -> List[str]:
    """Split a repeating decimal into ``[integer, non_repeating, cycle]``.

    Returns an empty list when no cycle is found. The last printed digit is
    dropped and the search retried once, since it is usually rounded.

    >>> get_repeat_props(22 / 7)
    ['3', '14', '285714']
    """
    if isinstance(value, str):
        text = value
    else:
        number = to_number(value)
        text = number_to_string(number) if number is not None and is_truthy(number) else ""
    if text.count(".") != 1:
        return []

    match = _REPEATING_TAIL.search(text)
    if not match:
        text = _LAST_DIGIT.sub("", text)
        match = _REPEATING_TAIL.search(text)
    if not match or not _ENOUGH_DIGITS.search(match.group(0)):
        return []

    cycle = match.group(1)
    doubled = _DOUBLED.match(cycle)
    if doubled:
        cycle = doubled.group(1)
    integer, fraction = text.split(".")
    fraction = re.sub("(%s)+$" % cycle, "", fraction)
    return [integer, fraction, cycle]
