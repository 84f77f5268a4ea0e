"""Human-readable reference numbers such as ``IT-000123``."""

from __future__ import annotations

import re

DEFAULT_WIDTH = 6

_TRAILING_DIGITS = re.compile(r"(\d+)\s*$")


def parse_reference_number(prefix: str, value: str | None) -> int:
    """Return the numeric part of *value*, or 0 if there is none."""
    if not value:
        return 0
    text = value.strip()
    if prefix and text.lower().startswith(prefix.lower()):
        text = text[len(prefix):]
    match = _TRAILING_DIGITS.search(text)
    if match is None:
        return 0
    return int(match.group(1))


def next_reference_code(prefix: str, latest: str | None, width: int = DEFAULT_WIDTH) -> str:
    """Allocate the number that follows *latest*.

    >>> next_reference_code("IT-", "IT-000123")
    'IT-000124'
    >>> next_reference_code("IT-", None)
    'IT-000001'
    """
    return f"{prefix}{str(parse_reference_number(prefix, latest) + 1).zfill(width)}"
