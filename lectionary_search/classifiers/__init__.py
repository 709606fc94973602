"""Query classification: verse reference vs. free text."""
from lectionary_search.classifiers.verse_reference import (
    VERSE_REFERENCE_PATTERN,
    QueryClassification,
    QueryMode,
    VerseReference,
    classify,
    classify_query,
)

__all__ = [
    "VERSE_REFERENCE_PATTERN",
    "QueryClassification",
    "QueryMode",
    "VerseReference",
    "classify",
    "classify_query",
]
