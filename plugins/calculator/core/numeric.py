"""Number parsing, rounding and formatting for the calculator core."""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext

NUMBER_FORMAT = "{:.15f}"
MAX_FACTORIAL = 170  # 171! overflows a double

_NUMBER_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(text: str) -> float:
    """Parse the leading numeric prefix of ``text``; ``0.0`` when there is none."""

    if not text:
        return 0.0
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(0))


def round_half_away(value: float, decimals: int) -> float:
    """Round ``value`` to ``decimals`` places, halves away from zero.

    The exact binary value of the double is rounded, not its shortest decimal
    repr: ``1.005`` is stored as ``1.00499999999999989…`` and rounds to ``1.0``.
    """

    if not math.isfinite(value):
        return value
    exact = Decimal(value)
    with localcontext() as context:
        # Room for every integer digit plus the requested decimals.
        context.prec = len(exact.as_tuple().digits) + decimals + 2
        return float(exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP))


def factorial(n: int) -> float:
    if n < 2:
        return 1.0
    if n > MAX_FACTORIAL:
        return math.inf
    return float(math.factorial(n))


def format_number(value: float) -> str:
    return NUMBER_FORMAT.format(value)


def trim_number(text: str) -> str:
    """Drop trailing fractional zeros from a fixed-format number."""

    if "." not in text:
        return text
    trimmed = text.rstrip("0").rstrip(".")
    return "0" if trimmed in {"-0", ""} else trimmed


__all__ = [
    "NUMBER_FORMAT",
    "MAX_FACTORIAL",
    "parse_number",
    "round_half_away",
    "factorial",
    "format_number",
    "trim_number",
]
