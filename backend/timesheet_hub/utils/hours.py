"""
Hour value parsing and formatting.

Hours are stored as strings ("4", "7.5", "00:00"). Sums read only the leading
numeric prefix, so "07:30" counts as 7.0 hours.
"""

import re
from typing import Any

ZERO_HOURS = "00:00"
# Width of the stored hours column
MAX_HOURS_LENGTH = 10

_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_hours(value: Any) -> float:
    """Numeric value of a stored hours field; unparseable input counts as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMERIC_PREFIX.match(str(value))
    return float(match.group(1)) if match else 0.0


def format_hours(value: Any) -> str:
    """
    Storage form of an hours value.

    Strings are kept as given; numbers drop trailing zeros and zero becomes
    the "00:00" sentinel.
    """
    if isinstance(value, str):
        text = value.strip()
        return text or ZERO_HOURS
    number = parse_hours(value)
    if number == 0:
        return ZERO_HOURS
    return ("%f" % number).rstrip("0").rstrip(".")
