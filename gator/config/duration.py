"""Parsing of human duration strings such as ``1m`` or ``1h30m``."""

import re
from datetime import timedelta

_UNITS = {
    "us": timedelta(microseconds=1),
    "µs": timedelta(microseconds=1),
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
}

_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(us|µs|ms|s|m|h)")


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration like ``500ms``, ``30s``, ``1m`` or ``1h30m``.

    Raises:
        ValueError: if the text is not a sequence of number+unit pairs or
            the total is not positive.
    """
    value = text.strip()
    if not value:
        raise ValueError("Empty duration")

    total = timedelta()
    pos = 0
    while pos < len(value):
        match = _PART.match(value, pos)
        if not match:
            raise ValueError(f"Invalid duration '{text}'")
        total += _UNITS[match.group(2)] * float(match.group(1))
        pos = match.end()

    if total <= timedelta():
        raise ValueError(f"Duration must be positive, got '{text}'")
    return total
