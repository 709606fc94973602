"""
Lectionary Search - Custom Exceptions

Namespaced exceptions so that nothing shadows builtins like ConnectionError.
"""


class LectionarySearchError(Exception):
    """Base exception for Lectionary Search.

    All custom exceptions inherit from this base class.
    """
    pass


class ReadingsLoadError(LectionarySearchError):
    """Raised when the reading collection cannot be fetched or parsed.

    Covers missing files, HTTP failures, invalid JSON and payloads whose
    top level is not a JSON array.

    Attributes:
        location: Where the collection was being loaded from, if known.
        status_code: HTTP status code for remote sources, if any.
    """

    def __init__(
        self,
        message: str,
        location: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.location = location
        self.status_code = status_code


class ConfigurationError(LectionarySearchError):
    """Raised when configuration is invalid or missing."""
    pass
