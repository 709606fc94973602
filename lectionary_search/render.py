"""
Plain-text rendering of search outcomes.

NO_QUERY renders nothing; NO_MATCHES renders an explicit empty state;
MATCHED renders a header followed by one block per reading. Collapsed
blocks show a preview of the text, expanded blocks the full text.
"""

from __future__ import annotations

from typing import Final

from lectionary_search.readings.dates import DateEncoding, format_reading_date
from lectionary_search.readings.models import Reading
from lectionary_search.search.matcher import SearchOutcome, SearchStatus

DEFAULT_PREVIEW_CHARS: Final[int] = 200
ELLIPSIS: Final[str] = "..."


def preview(text: str, limit: int = DEFAULT_PREVIEW_CHARS) -> str:
    """Shorten text to at most limit characters plus an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + ELLIPSIS


def render_header(outcome: SearchOutcome) -> str:
    count = len(outcome)
    noun = "Result" if count == 1 else "Results"
    kind = "verse reference" if outcome.classification.is_verse_reference else "search term"
    return f"{count} {noun} found for {kind}: {outcome.query}"


def render_reading(
    reading: Reading,
    expanded: bool = False,
    preview_chars: int = DEFAULT_PREVIEW_CHARS,
    date_encoding: DateEncoding = DateEncoding.AUTO,
) -> str:
    body = reading.text if expanded else preview(reading.text, preview_chars)
    when = format_reading_date(reading.date, date_encoding)
    return f"{reading.source}  ({when})\n{body}"


def render_outcome(
    outcome: SearchOutcome,
    expanded: bool = False,
    preview_chars: int = DEFAULT_PREVIEW_CHARS,
    date_encoding: DateEncoding = DateEncoding.AUTO,
) -> str:
    """Render a search outcome for a terminal.

    Args:
        outcome: Outcome from search().
        expanded: Show full reading text instead of a preview.
        preview_chars: Preview length for collapsed display.
        date_encoding: Encoding of the collection's date tokens.

    Returns:
        Rendered text; empty string when no query was entered.
    """
    status = outcome.status
    if status is SearchStatus.NO_QUERY:
        return ""
    if status is SearchStatus.NO_MATCHES:
        return f"No results found for: {outcome.query}"

    blocks = [render_header(outcome)]
    blocks.extend(
        render_reading(r, expanded, preview_chars, date_encoding)
        for r in outcome.results
    )
    return "\n\n".join(blocks)
