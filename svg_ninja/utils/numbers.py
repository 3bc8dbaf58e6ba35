"""
Numeric helpers for SVG length attributes.
"""
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_DECIMAL = re.compile(r"\d*(?:\.\d*)?")
_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_HUNDREDTHS = Decimal("0.01")


def coerce_length(value: Optional[str]) -> float:
    """
    Coerce a length attribute such as ``"100px"`` to a number.

    Every character other than digits and ``.`` is deleted, then the leading
    decimal number is read. Units are discarded this way, but percentages and
    exponents are misread ("1e3" becomes 13).
    """
    if not value:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", value)
    match = _LEADING_DECIMAL.match(cleaned).group()
    try:
        return float(match)
    except ValueError:
        return 0.0


def leading_number(token: Optional[str]) -> float:
    """Read the leading number of a token, 0 when there is none."""
    if not token:
        return 0.0
    match = _LEADING_NUMBER.match(token)
    return float(match.group()) if match else 0.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def format_length(value: float) -> str:
    """Format with up to two decimals, halves away from zero, trimming trailing zeros."""
    text = str(Decimal(repr(value)).quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP))
    return text.rstrip("0").rstrip(".")
