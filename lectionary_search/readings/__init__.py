"""Reading records: model, validation, loading, and date formatting."""
from lectionary_search.readings.dates import (
    INVALID_DATE,
    DateEncoding,
    format_reading_date,
    parse_reading_date,
)
from lectionary_search.readings.loader import (
    DiscardedRecord,
    FakeReadingSource,
    FileReadingSource,
    HttpReadingSource,
    LoadState,
    ReadingSourceProtocol,
    ReadingStore,
    ValidationReport,
    source_from_location,
    validate_records,
)
from lectionary_search.readings.models import Reading

__all__ = [
    "INVALID_DATE",
    "DateEncoding",
    "DiscardedRecord",
    "FakeReadingSource",
    "FileReadingSource",
    "HttpReadingSource",
    "LoadState",
    "Reading",
    "ReadingSourceProtocol",
    "ReadingStore",
    "ValidationReport",
    "format_reading_date",
    "parse_reading_date",
    "source_from_location",
    "validate_records",
]
