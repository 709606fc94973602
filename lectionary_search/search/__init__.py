"""Reading matcher: strategy dispatch and search outcomes."""
from lectionary_search.search.matcher import (
    MatchStrategyProtocol,
    PhraseStrategy,
    SearchOutcome,
    SearchStatus,
    TermsStrategy,
    VerseReferenceStrategy,
    match,
    search,
)

__all__ = [
    "MatchStrategyProtocol",
    "PhraseStrategy",
    "SearchOutcome",
    "SearchStatus",
    "TermsStrategy",
    "VerseReferenceStrategy",
    "match",
    "search",
]
