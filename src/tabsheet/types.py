import math
import re

NUMBER_REGEX = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?")
# Longest numeric prefix accepted when reading a displayed value back as a number
LEADING_NUMBER_REGEX = re.compile(
    r"\s*[+-]?((?:[0-9]+(\.[0-9]+)?|\.[0-9]+)([eE][+-]?[0-9]+)?)"
)


def is_number(val: str) -> bool:
    """Return True if the string is a plain signed decimal number."""
    return NUMBER_REGEX.fullmatch(val) is not None


def parse_number(val: str) -> float:
    return float(val)


def coerce_to_number(val: str) -> float:
    """Convert a displayed cell value to a float.

    Reads the longest leading number of the text ("3.50" -> 3.5,
    "12 apples" -> 12.0). Text without a leading number, including the empty
    string, counts as 0.
    """
    match = LEADING_NUMBER_REGEX.match(val)
    if match is None:
        return 0.0
    return parse_number(match.group(0))


def format_number(value: float) -> str:
    """Format a computed number for display.

    Integral values drop the decimal point, everything else is shown with two
    decimals.
    """
    value = float(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return "%.2f" % value
