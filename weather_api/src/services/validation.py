"""
Coordinate validation.

Query parameters are checked here before anything is sent to the weather
provider.
"""

import re
from typing import Optional

from weather_api.src.exceptions import InvalidFormatError, OutOfRangeError

# Plain decimal literal: optional sign, digits with optional fraction, optional exponent.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _parse_bounded(raw: Optional[str], field: str, limit: float) -> float:
    if raw is None or not _DECIMAL_RE.fullmatch(raw):
        raise InvalidFormatError(field, f"invalid {field} format: {raw}")

    value = float(raw)
    if value < -limit or value > limit:
        raise OutOfRangeError(
            field,
            f"{field} out of range ({-limit:g} to {limit:g} degrees): {value}",
        )
    return value


def validate_latitude(raw: Optional[str]) -> float:
    """
    Parse a latitude string.

    Args:
        raw: Raw query parameter value

    Returns:
        The parsed latitude, unchanged

    Raises:
        InvalidFormatError: If the value is not a decimal number
        OutOfRangeError: If the value is outside [-90, 90]
    """
    return _parse_bounded(raw, "latitude", 90)


def validate_longitude(raw: Optional[str]) -> float:
    """
    Parse a longitude string.

    Args:
        raw: Raw query parameter value

    Returns:
        The parsed longitude, unchanged

    Raises:
        InvalidFormatError: If the value is not a decimal number
        OutOfRangeError: If the value is outside [-180, 180]
    """
    return _parse_bounded(raw, "longitude", 180)
