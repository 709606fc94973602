"""
Verse Reference Classifier.

Decides whether a query string is a structured verse reference such as
"Genesis 1:1" or free text, and extracts the book, chapter and verse.

Grammar: one word token, whitespace, integer, colon, integer. Verse ranges
("Exodus 3:1-12") and multi-chapter spans do not parse.

Chapter and verse stay strings. "07" and "7" are different references.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

# =============================================================================
# Constants
# =============================================================================

# Word and digit characters are ASCII only; whitespace includes the Unicode
# space separators (no-break space, ideographic space, BOM) but not the
# \x1c-\x1f control characters.
WHITESPACE_CLASS: Final[str] = (
    r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"
)

# fullmatch() anchors both ends; a trailing newline is not tolerated.
VERSE_REFERENCE_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"([A-Za-z0-9_]+){WHITESPACE_CLASS}+([0-9]+):([0-9]+)"
)

TERM_SEPARATOR: Final[str] = ","


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True, slots=True)
class VerseReference:
    """A parsed "<Book> <Chapter>:<Verse>" citation.

    Attributes:
        book: Book token exactly as written (case preserved).
        chapter: Chapter digits exactly as written.
        verse: Verse digits exactly as written.
    """

    book: str
    chapter: str
    verse: str

    def __str__(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse}"


class QueryMode(str, Enum):
    """Matching mode selected for a query, in dispatch precedence order."""

    EMPTY = "empty"
    VERSE_REFERENCE = "verse_reference"
    TERMS = "terms"
    PHRASE = "phrase"


@dataclass(frozen=True, slots=True)
class QueryClassification:
    """How a raw query will be matched.

    Attributes:
        query: The raw query as received.
        mode: Selected matching mode.
        reference: Parsed reference when mode is VERSE_REFERENCE.
        terms: Lower-cased search terms for TERMS (one per comma piece,
            empty pieces kept) and PHRASE (a single term) modes.
    """

    query: str
    mode: QueryMode
    reference: VerseReference | None = None
    terms: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_verse_reference(self) -> bool:
        return self.mode is QueryMode.VERSE_REFERENCE


# =============================================================================
# Classification
# =============================================================================


def classify(text: str) -> VerseReference | None:
    """Parse text as a verse reference.

    No trimming is applied: surrounding whitespace makes the text free text.

    Args:
        text: Query string or a reading's source citation.

    Returns:
        VerseReference on a full grammar match, None otherwise.

    Example:
        >>> classify("Gen 1:1")
        VerseReference(book='Gen', chapter='1', verse='1')
        >>> classify("Exodus 3:1-12") is None
        True
    """
    match = VERSE_REFERENCE_PATTERN.fullmatch(text)
    if match is None:
        return None

    book, chapter, verse = match.groups()
    return VerseReference(book=book, chapter=chapter, verse=verse)


def classify_query(query: str) -> QueryClassification:
    """Select the matching mode for a raw query.

    Precedence:
    1. Blank after trimming -> EMPTY (no search is performed)
    2. Trimmed query parses as a verse reference -> VERSE_REFERENCE
    3. Trimmed query contains a comma -> TERMS
    4. Otherwise -> PHRASE

    Args:
        query: The query exactly as the user typed it.

    Returns:
        QueryClassification describing the mode and its inputs.
    """
    trimmed = query.strip()
    if not trimmed:
        return QueryClassification(query=query, mode=QueryMode.EMPTY)

    reference = classify(trimmed)
    if reference is not None:
        return QueryClassification(
            query=query,
            mode=QueryMode.VERSE_REFERENCE,
            reference=reference,
        )

    if TERM_SEPARATOR in trimmed:
        # Empty pieces from ",," or a trailing comma stay as "" terms
        terms = tuple(piece.strip().lower() for piece in trimmed.split(TERM_SEPARATOR))
        return QueryClassification(query=query, mode=QueryMode.TERMS, terms=terms)

    return QueryClassification(
        query=query,
        mode=QueryMode.PHRASE,
        terms=(trimmed.lower(),),
    )
