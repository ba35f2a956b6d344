import re

import math

from decimal import Decimal


decimal_pattern = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


def number(value: str) -> float:
    """
    Attempt to parse a decimal number (e.g. 3.14 or 123). A '.' must be used
    as the decimal separator. Throws a :py:exc:`ValueError` if this fails or
    the number is not finite.
    """
    if decimal_pattern.fullmatch(value) is None:
        raise ValueError(f"could not convert string to number: {value!r}")

    parsed = float(value)
    if not math.isfinite(parsed):
        raise ValueError(f"number out of range: {value!r}")
    return parsed


def format_number(value: float) -> str:
    """
    Format a number such that :py:func:`number` parses it back to exactly the
    same value. Scientific notation is never used and trailing zeros after
    the decimal point are dropped, along with the trailing decimal point.
    """
    formatted = format(Decimal(repr(value)), "f")
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted
