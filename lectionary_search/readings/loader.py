"""
Reading collection loading and validation.

The collection is a JSON array of {"text", "date", "source"} objects,
fetched once at startup from a file or an HTTP(S) URL. Records missing a
field, holding a non-string, or blank after trimming are dropped and
recorded for operator diagnostics.

Patterns Applied:
- Repository Pattern: ReadingSourceProtocol for duck typing (file, HTTP, fake)
- Connection pooling: one httpx.AsyncClient per HttpReadingSource
- Retry with exponential backoff on transport errors and 5xx
- Custom namespaced exceptions (ReadingsLoadError)
"""

from __future__ import annotations

import asyncio
import json
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

import httpx

from lectionary_search.core.exceptions import ConfigurationError, ReadingsLoadError
from lectionary_search.core.logging import get_logger
from lectionary_search.core.tracing import get_tracer
from lectionary_search.readings.models import READING_FIELDS, Reading

logger = get_logger(__name__)
tracer = get_tracer(__name__)

# =============================================================================
# Constants
# =============================================================================

# Shown to users; details stay in the logs
LOAD_FAILURE_NOTICE: Final[str] = "Unable to load readings."

REASON_NOT_AN_OBJECT: Final[str] = "not_an_object"
URL_SCHEMES: Final[tuple[str, ...]] = ("http://", "https://")


# =============================================================================
# Validation
# =============================================================================


@dataclass(frozen=True, slots=True)
class DiscardedRecord:
    """A record excluded from the searchable collection.

    Attributes:
        index: Position of the record in the source array.
        reason: Reason code, e.g. "missing_date" or "blank_text".
    """

    index: int
    reason: str


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Admitted readings plus diagnostics about dropped records."""

    readings: tuple[Reading, ...] = field(default_factory=tuple)
    discarded: tuple[DiscardedRecord, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return len(self.readings) + len(self.discarded)

    def discard_counts(self) -> dict[str, int]:
        """Aggregate discarded records by reason."""
        return dict(Counter(d.reason for d in self.discarded))


def _rejection_reason(record: Any) -> str | None:
    if not isinstance(record, dict):
        return REASON_NOT_AN_OBJECT

    for name in READING_FIELDS:
        if name not in record or record[name] is None:
            return f"missing_{name}"
        value = record[name]
        if not isinstance(value, str):
            return f"invalid_{name}"
        if not value.strip():
            return f"blank_{name}"

    return None


def validate_records(raw: Any) -> ValidationReport:
    """Validate a decoded data-source payload.

    Args:
        raw: Decoded JSON; must be a list.

    Returns:
        ValidationReport with admitted readings in source order.

    Raises:
        ReadingsLoadError: If the payload is not a JSON array.
    """
    if not isinstance(raw, list):
        raise ReadingsLoadError(
            f"Expected a JSON array of readings, got {type(raw).__name__}"
        )

    readings: list[Reading] = []
    discarded: list[DiscardedRecord] = []

    for index, record in enumerate(raw):
        reason = _rejection_reason(record)
        if reason is not None:
            discarded.append(DiscardedRecord(index=index, reason=reason))
            logger.warning("record_discarded", index=index, reason=reason)
            continue

        readings.append(
            Reading(text=record["text"], date=record["date"], source=record["source"])
        )

    return ValidationReport(readings=tuple(readings), discarded=tuple(discarded))


# =============================================================================
# Sources
# =============================================================================


@runtime_checkable
class ReadingSourceProtocol(Protocol):
    """Protocol for reading sources.

    Enables FakeReadingSource for testing without disk or network access.
    """

    location: str

    async def fetch(self) -> Any:
        """Fetch and decode the raw JSON payload.

        Raises:
            ReadingsLoadError: On any fetch or decode failure
        """
        ...


class FileReadingSource:
    """Reads the collection from a UTF-8 JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.location = str(self.path)

    async def fetch(self) -> Any:
        if not self.path.exists():
            raise ReadingsLoadError(
                f"Readings file not found: {self.path}", location=self.location
            )

        try:
            with self.path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise ReadingsLoadError(
                f"Cannot read readings file: {e}", location=self.location
            ) from e
        except (ValueError, RecursionError) as e:
            # ValueError also covers integer literals past the digit limit
            raise ReadingsLoadError(
                f"Invalid JSON in readings file: {e}", location=self.location
            ) from e


class HttpReadingSource:
    """Fetches the collection over HTTP(S).

    Attributes:
        url: Address of the JSON document.
        timeout: Request timeout in seconds (default: 10)
        max_retries: Maximum attempts (default: 3)
        retry_delay: Initial delay between retries in seconds (default: 0.5)
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        max_retries: int = 3,
        retry_delay: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP source.

        Args:
            url: Address of the JSON document
            timeout: Request timeout in seconds
            max_retries: Maximum attempts
            retry_delay: Initial delay between retries
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.url = url
        self.location = url
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            transport=transport,
            follow_redirects=True,
        )

    async def fetch(self) -> Any:
        """GET the document with retry logic.

        Redirects are followed. 4xx responses fail immediately; transport
        errors and 5xx are retried with exponential backoff.

        Raises:
            ReadingsLoadError: On HTTP errors after retries exhausted
        """
        last_error: Exception | None = None

        for attempt in range(self.max_retries):
            try:
                response = await self._client.get(self.url)

                if 400 <= response.status_code < 500:
                    raise ReadingsLoadError(
                        f"Client error fetching readings: HTTP {response.status_code}",
                        location=self.location,
                        status_code=response.status_code,
                    )
                if 300 <= response.status_code < 400:
                    raise ReadingsLoadError(
                        f"Unfollowed redirect fetching readings: HTTP {response.status_code}",
                        location=self.location,
                        status_code=response.status_code,
                    )
                if response.status_code >= 500:
                    last_error = ReadingsLoadError(
                        f"Server error fetching readings: HTTP {response.status_code}",
                        location=self.location,
                        status_code=response.status_code,
                    )
                else:
                    return self._decode(response)

            except httpx.TimeoutException:
                last_error = TimeoutError("Connection timed out")
            except httpx.RequestError as e:
                last_error = e

            if attempt < self.max_retries - 1:
                delay = self.retry_delay * (2**attempt)
                logger.debug(
                    "readings_fetch_retry", url=self.url, attempt=attempt + 1, delay=delay
                )
                await asyncio.sleep(delay)

        raise ReadingsLoadError(
            f"Fetching readings failed after {self.max_retries} attempts: {last_error}",
            location=self.location,
        )

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except (ValueError, RecursionError) as e:
            raise ReadingsLoadError(
                f"Invalid JSON in readings response: {e}", location=self.location
            ) from e

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self._client.aclose()


class FakeReadingSource:
    """Fake source for unit testing without disk or network.

    Implements ReadingSourceProtocol for duck typing.
    """

    def __init__(
        self,
        payload: Any = None,
        error: Exception | None = None,
        location: str = "fake://readings",
    ) -> None:
        """Initialize with a payload to return or an error to raise.

        Args:
            payload: Decoded JSON to hand back (defaults to an empty array)
            error: Exception raised by fetch() instead
            location: Reported location
        """
        self.payload = [] if payload is None else payload
        self.error = error
        self.location = location
        self.fetch_count = 0

    async def fetch(self) -> Any:
        self.fetch_count += 1
        if self.error is not None:
            raise self.error
        return self.payload


def source_from_location(
    location: str,
    timeout: float = 10.0,
    max_retries: int = 3,
) -> ReadingSourceProtocol:
    """Build the source matching a configured location.

    Args:
        location: http(s) URL or filesystem path.
        timeout: HTTP timeout in seconds.
        max_retries: HTTP retry attempts.

    Raises:
        ConfigurationError: If location is blank.
    """
    location = location.strip()
    if not location:
        raise ConfigurationError("readings_location must not be empty")

    if location.lower().startswith(URL_SCHEMES):
        return HttpReadingSource(location, timeout=timeout, max_retries=max_retries)
    return FileReadingSource(location)


# =============================================================================
# Store
# =============================================================================


class LoadState(str, Enum):
    """Lifecycle of the one-time collection load."""

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class ReadingStore:
    """Holds the searchable collection and its load state.

    Readings are empty until a load succeeds; after that they never change.

    Usage:
        store = ReadingStore()
        await store.load(FileReadingSource("readings.json"))
        if store.state is LoadState.READY:
            outcome = search("mountain", store.readings)
    """

    def __init__(self) -> None:
        self._state = LoadState.PENDING
        self._report = ValidationReport()
        self._error: str | None = None
        self._location: str | None = None

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def readings(self) -> tuple[Reading, ...]:
        return self._report.readings

    @property
    def report(self) -> ValidationReport:
        return self._report

    @property
    def location(self) -> str | None:
        return self._location

    @property
    def error(self) -> str | None:
        """Internal failure detail, for logs and diagnostics only."""
        return self._error

    @property
    def notice(self) -> str | None:
        """User-facing failure notice, None unless the load failed."""
        return LOAD_FAILURE_NOTICE if self._state is LoadState.FAILED else None

    async def load(self, source: ReadingSourceProtocol) -> LoadState:
        """Fetch, validate and publish the collection.

        Never raises: failures leave an empty collection in FAILED state.

        Args:
            source: Where to fetch the collection from.

        Returns:
            The resulting LoadState.
        """
        self._location = source.location
        with tracer.start_as_current_span("readings.load") as span:
            span.set_attribute("readings.location", source.location)
            try:
                report = validate_records(await source.fetch())
            except ReadingsLoadError as e:
                self._state = LoadState.FAILED
                self._report = ValidationReport()
                self._error = str(e)
                logger.error(
                    "readings_load_failed", location=source.location, error=str(e)
                )
                return self._state

            self._report = report
            self._error = None
            self._state = LoadState.READY
            span.set_attribute("readings.admitted", len(report.readings))
            span.set_attribute("readings.discarded", len(report.discarded))

        logger.info(
            "readings_loaded",
            location=source.location,
            admitted=len(report.readings),
            discarded=len(report.discarded),
            discard_counts=report.discard_counts(),
        )
        return self._state
