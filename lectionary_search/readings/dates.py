"""
Reading date formatting.

Two date encodings exist across reading collections:
- ISO-8601 dates ("2025-01-20", optionally with a time part)
- Compact MMDDYY tokens ("012025" -> January 20, 2025)

Tokens that cannot be decoded render as "Invalid Date" instead of raising.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Final

INVALID_DATE: Final[str] = "Invalid Date"
COMPACT_TOKEN_LENGTH: Final[int] = 6
CENTURY_PREFIX: Final[str] = "20"


class DateEncoding(str, Enum):
    """How date tokens in a collection are encoded."""

    AUTO = "auto"
    ISO = "iso"
    COMPACT = "compact"


def _parse_compact(token: str) -> date | None:
    if len(token) != COMPACT_TOKEN_LENGTH or not token.isdigit():
        return None

    month, day, year = token[0:2], token[2:4], token[4:6]
    try:
        return date(int(CENTURY_PREFIX + year), int(month), int(day))
    except ValueError:
        return None


def _parse_iso(token: str) -> date | None:
    try:
        return date.fromisoformat(token)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(token).date()
    except ValueError:
        return None


def parse_reading_date(
    token: str,
    encoding: DateEncoding = DateEncoding.AUTO,
) -> date | None:
    """Decode a reading's date token.

    Args:
        token: Date token from the data source.
        encoding: Expected encoding; AUTO treats 6-digit tokens as MMDDYY.

    Returns:
        The calendar date, or None if the token does not decode.
    """
    token = token.strip()
    if encoding is DateEncoding.COMPACT:
        return _parse_compact(token)
    if encoding is DateEncoding.ISO:
        return _parse_iso(token)

    if len(token) == COMPACT_TOKEN_LENGTH and token.isdigit():
        return _parse_compact(token)
    return _parse_iso(token)


def format_reading_date(
    token: str,
    encoding: DateEncoding = DateEncoding.AUTO,
) -> str:
    """Format a date token as a short US date ("1/20/2025").

    Args:
        token: Date token from the data source.
        encoding: Expected encoding of the token.

    Returns:
        "M/D/YYYY", or INVALID_DATE when the token does not decode.
    """
    parsed = parse_reading_date(token, encoding)
    if parsed is None:
        return INVALID_DATE
    return f"{parsed.month}/{parsed.day}/{parsed.year}"
