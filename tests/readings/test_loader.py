"""
Tests for reading validation, sources, and the reading store.

Covers:
- validate_records(): admission rules and discard reasons
- FileReadingSource / HttpReadingSource / source_from_location()
- ReadingStore load lifecycle (PENDING -> READY | FAILED)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from lectionary_search.core.exceptions import ConfigurationError, ReadingsLoadError
from lectionary_search.readings.loader import (
    LOAD_FAILURE_NOTICE,
    FakeReadingSource,
    FileReadingSource,
    HttpReadingSource,
    LoadState,
    ReadingSourceProtocol,
    ReadingStore,
    source_from_location,
    validate_records,
)
from lectionary_search.readings.models import Reading

READINGS_URL = "https://example.org/readings.json"


# =============================================================================
# validate_records()
# =============================================================================


class TestValidateRecords:
    def test_valid_records_admitted_in_order(self, sample_records: list[dict]) -> None:
        report = validate_records(sample_records)

        assert [r.source for r in report.readings] == [
            "Exodus 3:1-12",
            "Revelation 7:10",
            "Genesis 1:1",
        ]
        assert report.discarded == ()
        assert all(isinstance(r, Reading) for r in report.readings)

    def test_values_are_not_trimmed(self) -> None:
        report = validate_records([{"text": " body ", "date": "2025-01-20", "source": "Gen 1:1"}])

        assert report.readings[0].text == " body "

    def test_extra_fields_ignored(self) -> None:
        record = {"text": "t", "date": "d", "source": "s", "title": "extra"}

        assert validate_records([record]).readings == (Reading("t", "d", "s"),)

    @pytest.mark.parametrize(
        ("record", "reason"),
        [
            ({"date": "2025-01-20", "source": "Gen 1:1"}, "missing_text"),
            ({"text": "t", "source": "Gen 1:1"}, "missing_date"),
            ({"text": "t", "date": "2025-01-20", "source": None}, "missing_source"),
            ({"text": "   ", "date": "2025-01-20", "source": "Gen 1:1"}, "blank_text"),
            ({"text": "t", "date": "", "source": "Gen 1:1"}, "blank_date"),
            ({"text": "t", "date": "2025-01-20", "source": "\t"}, "blank_source"),
            ({"text": "t", "date": 20250120, "source": "Gen 1:1"}, "invalid_date"),
            (["t", "d", "s"], "not_an_object"),
            ("text", "not_an_object"),
        ],
    )
    def test_discard_reasons(self, record: Any, reason: str) -> None:
        report = validate_records([record])

        assert report.readings == ()
        assert len(report.discarded) == 1
        assert report.discarded[0].reason == reason
        assert report.discarded[0].index == 0

    def test_first_failing_field_wins(self) -> None:
        report = validate_records([{"text": "", "date": ""}])

        assert report.discarded[0].reason == "blank_text"

    def test_mixed_collection(self, sample_records: list[dict]) -> None:
        raw = [sample_records[0], {"text": "x"}, sample_records[1], {}, 7]

        report = validate_records(raw)

        assert len(report.readings) == 2
        assert [d.index for d in report.discarded] == [1, 3, 4]
        assert report.total == 5
        assert report.discard_counts() == {"missing_date": 1, "missing_text": 1, "not_an_object": 1}

    def test_empty_array(self) -> None:
        report = validate_records([])

        assert report.readings == ()
        assert report.total == 0

    @pytest.mark.parametrize("raw", [{"readings": []}, "[]", None, 3])
    def test_non_array_payload_raises(self, raw: Any) -> None:
        with pytest.raises(ReadingsLoadError):
            validate_records(raw)


# =============================================================================
# Sources
# =============================================================================


class TestFileReadingSource:
    @pytest.mark.asyncio
    async def test_reads_json(self, tmp_path: Path, sample_records: list[dict]) -> None:
        path = tmp_path / "readings.json"
        path.write_text(json.dumps(sample_records), encoding="utf-8")

        assert await FileReadingSource(path).fetch() == sample_records

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ReadingsLoadError, match="not found"):
            await FileReadingSource(tmp_path / "absent.json").fetch()

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "readings.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(ReadingsLoadError, match="Invalid JSON"):
            await FileReadingSource(path).fetch()

    @pytest.mark.asyncio
    async def test_oversized_integer_literal(self, tmp_path: Path) -> None:
        path = tmp_path / "readings.json"
        path.write_text(
            '[{"text": "t", "date": "d", "source": "s", "n": ' + "9" * 5000 + "}]",
            encoding="utf-8",
        )

        with pytest.raises(ReadingsLoadError, match="Invalid JSON"):
            await FileReadingSource(path).fetch()

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        assert isinstance(FileReadingSource(tmp_path / "r.json"), ReadingSourceProtocol)


def _http_source(handler: Any, **kwargs: Any) -> HttpReadingSource:
    return HttpReadingSource(
        READINGS_URL,
        transport=httpx.MockTransport(handler),
        retry_delay=0.0,
        **kwargs,
    )


class TestHttpReadingSource:
    def test_defaults(self) -> None:
        source = HttpReadingSource(READINGS_URL)

        assert source.timeout == 10.0
        assert source.max_retries == 3
        assert source.location == READINGS_URL

    @pytest.mark.asyncio
    async def test_fetches_json(self, sample_records: list[dict]) -> None:
        source = _http_source(lambda request: httpx.Response(200, json=sample_records))

        try:
            assert await source.fetch() == sample_records
        finally:
            await source.close()

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(404)

        source = _http_source(handler)
        with pytest.raises(ReadingsLoadError) as exc_info:
            await source.fetch()
        await source.close()

        assert exc_info.value.status_code == 404
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_server_error_retried_then_succeeds(self, sample_records: list[dict]) -> None:
        responses = [httpx.Response(503), httpx.Response(200, json=sample_records)]

        source = _http_source(lambda request: responses.pop(0))
        result = await source.fetch()
        await source.close()

        assert result == sample_records

    @pytest.mark.asyncio
    async def test_retries_exhausted(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        source = _http_source(handler, max_retries=2)
        with pytest.raises(ReadingsLoadError, match="after 2 attempts"):
            await source.fetch()
        await source.close()

        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_follows_redirect(self, sample_records: list[dict]) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/new":
                return httpx.Response(200, json=sample_records)
            return httpx.Response(301, headers={"Location": "/new"})

        source = _http_source(handler)
        try:
            assert await source.fetch() == sample_records
        finally:
            await source.close()

    @pytest.mark.asyncio
    async def test_invalid_json_body(self) -> None:
        source = _http_source(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ReadingsLoadError, match="Invalid JSON"):
            await source.fetch()
        await source.close()


class TestSourceFromLocation:
    def test_url_gives_http_source(self) -> None:
        assert isinstance(source_from_location(READINGS_URL), HttpReadingSource)

    def test_path_gives_file_source(self, tmp_path: Path) -> None:
        source = source_from_location(str(tmp_path / "readings.json"))

        assert isinstance(source, FileReadingSource)

    def test_blank_location_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            source_from_location("  ")


# =============================================================================
# ReadingStore
# =============================================================================


class TestReadingStore:
    def test_starts_pending_and_empty(self) -> None:
        store = ReadingStore()

        assert store.state is LoadState.PENDING
        assert store.readings == ()
        assert store.notice is None

    @pytest.mark.asyncio
    async def test_successful_load(self, sample_records: list[dict]) -> None:
        store = ReadingStore()
        raw = [*sample_records, {"text": "orphan"}]

        state = await store.load(FakeReadingSource(payload=raw))

        assert state is LoadState.READY
        assert len(store.readings) == 3
        assert len(store.report.discarded) == 1
        assert store.notice is None
        assert store.location == "fake://readings"

    @pytest.mark.asyncio
    async def test_failed_load_leaves_empty_collection(self) -> None:
        store = ReadingStore()
        source = FakeReadingSource(error=ReadingsLoadError("boom"))

        state = await store.load(source)

        assert state is LoadState.FAILED
        assert store.readings == ()
        assert store.notice == LOAD_FAILURE_NOTICE
        assert store.error == "boom"

    @pytest.mark.asyncio
    async def test_undecodable_file_fails_without_raising(self, tmp_path: Path) -> None:
        path = tmp_path / "readings.json"
        path.write_text('[{"n": ' + "1" * 5000 + "}]", encoding="utf-8")
        store = ReadingStore()

        state = await store.load(FileReadingSource(path))

        assert state is LoadState.FAILED
        assert store.readings == ()
        assert store.notice == LOAD_FAILURE_NOTICE

    @pytest.mark.asyncio
    async def test_non_array_payload_fails(self) -> None:
        store = ReadingStore()

        assert await store.load(FakeReadingSource(payload={"a": 1})) is LoadState.FAILED

    @pytest.mark.asyncio
    async def test_loads_bundled_collection(self) -> None:
        from lectionary_search.core.config import DEFAULT_READINGS_PATH

        store = ReadingStore()
        await store.load(FileReadingSource(DEFAULT_READINGS_PATH))

        assert store.state is LoadState.READY
        assert store.readings[0].source == "Exodus 3:1-12"
