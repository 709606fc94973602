"""
Reading data model.

A reading is one searchable excerpt: its text body, the date token it is
appointed for, and the citation it comes from (e.g. "Exodus 3:1-12").
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Final

READING_FIELDS: Final[tuple[str, ...]] = ("text", "date", "source")


@dataclass(frozen=True, slots=True)
class Reading:
    """An immutable reading record.

    Attributes:
        text: The excerpt body.
        date: Date token as provided by the data source (ISO or MMDDYY).
        source: Citation, often but not always a "<Book> <Chapter>:<Verse>".
    """

    text: str
    date: str
    source: str

    def to_dict(self) -> dict[str, str]:
        """Return the record in data-source form."""
        return asdict(self)
