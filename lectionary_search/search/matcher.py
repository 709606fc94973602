"""
Reading Matcher.

Filters a reading collection with one of three strategies, chosen by
classify_query():

1. VerseReferenceStrategy: book prefix + exact chapter/verse strings
2. TermsStrategy: every comma-separated term appears in text or source
3. PhraseStrategy: the whole query appears in text or source

Pattern: Strategy with a dispatch table keyed by QueryMode.
Results keep the collection order; nothing is ranked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

from lectionary_search.classifiers.verse_reference import (
    QueryClassification,
    QueryMode,
    VerseReference,
    classify,
    classify_query,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lectionary_search.readings.models import Reading


# =============================================================================
# Outcome
# =============================================================================


class SearchStatus(str, Enum):
    """Display state produced by a search.

    NO_QUERY renders nothing at all; NO_MATCHES renders an explicit
    empty state.
    """

    NO_QUERY = "no_query"
    NO_MATCHES = "no_matches"
    MATCHED = "matched"


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    """Result of one search pass.

    Attributes:
        classification: How the query was interpreted.
        results: Matching readings in collection order.
    """

    classification: QueryClassification
    results: tuple[Reading, ...] = field(default_factory=tuple)

    @property
    def query(self) -> str:
        return self.classification.query

    @property
    def mode(self) -> QueryMode:
        return self.classification.mode

    @property
    def status(self) -> SearchStatus:
        if self.classification.mode is QueryMode.EMPTY:
            return SearchStatus.NO_QUERY
        if not self.results:
            return SearchStatus.NO_MATCHES
        return SearchStatus.MATCHED

    def __len__(self) -> int:
        return len(self.results)


# =============================================================================
# Strategies
# =============================================================================


@runtime_checkable
class MatchStrategyProtocol(Protocol):
    """A predicate deciding whether one reading matches a classified query."""

    def matches(self, classification: QueryClassification, reading: Reading) -> bool:
        ...


def _contains(term: str, reading: Reading) -> bool:
    """Case-insensitive substring test against text OR source."""
    return term in reading.text.lower() or term in reading.source.lower()


class VerseReferenceStrategy:
    """Match readings whose source cites the queried verse.

    The book comparison is a one-way prefix test: the reading's book must
    start with the queried book, so "Gen 1:1" finds "Genesis 1:1" but
    "Genesis 1:1" does not find "Gen 1:1". Sources that do not parse as a
    single verse (ranges, prose) never match.
    """

    def matches(self, classification: QueryClassification, reading: Reading) -> bool:
        wanted = classification.reference
        if wanted is None:
            return False

        cited = classify(reading.source)
        if cited is None:
            return False

        return self._same_verse(wanted, cited)

    @staticmethod
    def _same_verse(wanted: VerseReference, cited: VerseReference) -> bool:
        return (
            cited.book.lower().startswith(wanted.book.lower())
            and cited.chapter == wanted.chapter
            and cited.verse == wanted.verse
        )


class TermsStrategy:
    """Match readings containing every comma-separated term.

    An empty term ("a,,b" or "a,") is a substring of everything.
    """

    def matches(self, classification: QueryClassification, reading: Reading) -> bool:
        return all(_contains(term, reading) for term in classification.terms)


class PhraseStrategy:
    """Match readings containing the whole query as one phrase."""

    def matches(self, classification: QueryClassification, reading: Reading) -> bool:
        return any(_contains(term, reading) for term in classification.terms)


STRATEGIES: Final[dict[QueryMode, MatchStrategyProtocol]] = {
    QueryMode.VERSE_REFERENCE: VerseReferenceStrategy(),
    QueryMode.TERMS: TermsStrategy(),
    QueryMode.PHRASE: PhraseStrategy(),
}


# =============================================================================
# Public API
# =============================================================================


def _filter(
    classification: QueryClassification,
    readings: Sequence[Reading],
) -> tuple[Reading, ...]:
    strategy = STRATEGIES.get(classification.mode)
    if strategy is None:
        # EMPTY: no search performed
        return ()

    return tuple(r for r in readings if strategy.matches(classification, r))


def match(query: str, readings: Sequence[Reading]) -> list[Reading]:
    """Return the readings matching query, in collection order.

    Args:
        query: Raw query string (may be empty).
        readings: Validated reading collection.

    Returns:
        New list of matching readings; empty for a blank query.
    """
    return list(_filter(classify_query(query), readings))


def search(query: str, readings: Sequence[Reading]) -> SearchOutcome:
    """Run match() and keep the classification alongside the results.

    Use SearchOutcome.status to tell "no query" from "no matches".

    Args:
        query: Raw query string (may be empty).
        readings: Validated reading collection.

    Returns:
        SearchOutcome for display.
    """
    classification = classify_query(query)
    return SearchOutcome(
        classification=classification,
        results=_filter(classification, readings),
    )
