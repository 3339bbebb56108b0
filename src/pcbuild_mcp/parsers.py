"""Spec value parsing for PC component specifications.

Catalog specs are free-form strings like "4.5 GHz", "24 GB", "1,000 W" or
"384-bit". Comparisons only need the leading magnitude, so the unit and any
trailing text are dropped. Ranges such as "500-2000 RPM" yield the first
number only.
"""

import re
from typing import Any


# Leading digits with optional thousands separators and a single decimal point.
# ".5" is accepted, "1.2.3" stops at "1.2".
_LEADING_NUMBER_PATTERN = re.compile(r"^(\d[\d,]*(?:\.\d*)?|\.\d+)")


def parse_spec_number(value: Any) -> float | None:
    """Parse the leading numeric magnitude of a spec value.

    '4.5 GHz' -> 4.5, '1,000 W' -> 1000, '384-bit' -> 384, 16 -> 16.0,
    'PCIe 4.0' -> None, True -> None, None -> None
    """
    # bool is an int subclass; "True"/"False" carry no magnitude
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_NUMBER_PATTERN.match(str(value).strip())
    if not match:
        return None
    return float(match.group(1).replace(",", ""))


def parse_spec_number_or(value: Any, fallback: float) -> float:
    """Parse a spec value, substituting `fallback` when it has no positive magnitude."""
    parsed = parse_spec_number(value)
    if parsed is None or parsed <= 0:
        return fallback
    return parsed
