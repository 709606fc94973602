"""
Debounced search session.

Holds the transient state a search box needs (current query, last outcome)
and delivers at most one search per idle window while the user types.

Debouncer resets its timer on every trigger; only the last trigger in a
burst fires. A search that already ran is never undone: whichever search
finishes last owns the displayed outcome.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Final

from lectionary_search.classifiers.verse_reference import classify_query
from lectionary_search.core.logging import get_logger
from lectionary_search.readings.loader import ReadingStore
from lectionary_search.readings.models import Reading
from lectionary_search.search.matcher import SearchOutcome, search

logger = get_logger(__name__)

DEFAULT_DEBOUNCE_SECONDS: Final[float] = 0.3


class Debouncer:
    """Timer-reset debouncer bound to the running asyncio loop.

    Usage:
        debouncer = Debouncer(0.3, run_search)
        debouncer.trigger("mou")
        debouncer.trigger("mountain")  # only this call reaches run_search
    """

    def __init__(self, delay: float, callback: Callable[[str], object]) -> None:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self.delay = delay
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._pending_value: str | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, value: str) -> None:
        """(Re)arm the timer with the latest value.

        Raises:
            RuntimeError: If called outside a running event loop
        """
        loop = asyncio.get_running_loop()
        self.cancel()
        self._pending_value = value
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending_value = None

    def flush(self) -> bool:
        """Fire the pending call now.

        Returns:
            True if a pending call was fired.
        """
        if self._handle is None:
            return False
        self._handle.cancel()
        self._fire()
        return True

    def _fire(self) -> None:
        value = self._pending_value
        self._handle = None
        self._pending_value = None
        if value is not None:
            self._callback(value)


class SearchSession:
    """Search-box state driven by explicit submits and debounced edits.

    The reading collection is read from the store on every pass, so a
    session created before loading finishes sees the readings once ready.
    """

    def __init__(
        self,
        readings: ReadingStore | Sequence[Reading],
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        on_results: Callable[[SearchOutcome], object] | None = None,
    ) -> None:
        self._readings = readings
        self._on_results = on_results
        self._debouncer = Debouncer(debounce_seconds, self._run)
        self.query = ""
        self.outcome = SearchOutcome(classification=classify_query(""))
        self.passes = 0

    @property
    def debounce_seconds(self) -> float:
        return self._debouncer.delay

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def _collection(self) -> Sequence[Reading]:
        if isinstance(self._readings, ReadingStore):
            return self._readings.readings
        return self._readings

    def submit(self, query: str) -> SearchOutcome:
        """Search immediately, superseding any pending debounced search."""
        self._debouncer.cancel()
        self.query = query
        return self._run(query)

    def update(self, query: str) -> None:
        """Record an edit; the search runs once typing pauses."""
        self.query = query
        self._debouncer.trigger(query)

    def flush(self) -> bool:
        """Run a pending debounced search now."""
        return self._debouncer.flush()

    def close(self) -> None:
        self._debouncer.cancel()

    def _run(self, query: str) -> SearchOutcome:
        outcome = search(query, self._collection())
        self.outcome = outcome
        self.passes += 1
        logger.debug(
            "search_completed",
            mode=outcome.mode.value,
            status=outcome.status.value,
            results=len(outcome),
        )
        if self._on_results is not None:
            self._on_results(outcome)
        return outcome
