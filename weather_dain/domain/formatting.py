from __future__ import annotations

import locale
from datetime import datetime
from typing import Union


def as_reported(value: float) -> Union[int, float]:
    """Collapse integral floats to int so 18.0 serializes as 18."""
    number = float(value)
    if number.is_integer():
        return int(number)
    return number


def format_number(value: float) -> str:
    """Render a provider number the way it was reported (18.0 -> "18")."""
    return repr(as_reported(value))


def format_location(latitude: float, longitude: float) -> str:
    return f"{latitude:.2f}, {longitude:.2f}"


def use_process_locale() -> bool:
    """Adopt the environment's LC_TIME so `%c` follows the host locale.

    Returns False when the environment names a locale the host lacks; the
    C locale stays in effect then.
    """
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error:
        return False
    return True


def format_timestamp(timestamp_ms: int) -> str:
    """Locale date/time representation of an epoch-millisecond timestamp."""
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%c")
