"""Lectionary Search: verse-reference and keyword search over dated readings.

The package classifies a query as either a verse reference ("Genesis 1:1")
or free text, then filters an in-memory reading collection:
- Verse reference: book prefix + exact chapter/verse match
- Comma-separated terms: every term must appear
- Plain phrase: substring match on text or source
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
