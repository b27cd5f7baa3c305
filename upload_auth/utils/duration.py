"""
Parsing of token lifetimes.

Accepts a positive number of seconds or a short duration string made of a
number and a single unit suffix: "30s", "15m", "1h", "7d".
"""

import re

from upload_auth.exceptions import InvalidExpiresInError

SECONDS_PER_UNIT: dict[str, int] = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 60 * 60 * 24,
}

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd])\s*$", re.IGNORECASE)


def parse_expires_in(value: int | str) -> int:
    """
    Convert an expires_in value to a number of seconds.

    Args:
        value: Seconds as an int, or a duration string like "1h"

    Returns:
        Lifetime in seconds (always positive)

    Raises:
        InvalidExpiresInError: If the value is not a positive lifetime
    """
    # bool is an int subclass
    if isinstance(value, bool):
        raise InvalidExpiresInError(value)

    if isinstance(value, int):
        seconds = value
    elif isinstance(value, str):
        match = _DURATION_RE.match(value)
        if not match:
            raise InvalidExpiresInError(value)
        amount, unit = match.groups()
        seconds = int(amount) * SECONDS_PER_UNIT[unit.lower()]
    else:
        raise InvalidExpiresInError(value)

    if seconds <= 0:
        raise InvalidExpiresInError(value)
    return seconds
