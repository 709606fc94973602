"""Tests for reading date formatting (ISO and compact MMDDYY tokens)."""

from __future__ import annotations

from datetime import date

import pytest

from lectionary_search.readings.dates import (
    INVALID_DATE,
    DateEncoding,
    format_reading_date,
    parse_reading_date,
)


class TestIsoDates:
    def test_iso_date(self) -> None:
        assert format_reading_date("2025-01-20") == "1/20/2025"

    def test_iso_datetime(self) -> None:
        assert format_reading_date("2025-12-05T09:30:00") == "12/5/2025"

    def test_explicit_iso_encoding(self) -> None:
        assert format_reading_date("2025-01-21", DateEncoding.ISO) == "1/21/2025"

    def test_invalid_iso_date(self) -> None:
        assert format_reading_date("2025-02-30") == INVALID_DATE


class TestCompactDates:
    def test_mmddyy(self) -> None:
        assert parse_reading_date("012025") == date(2025, 1, 20)

    def test_year_prefixed_with_twenty(self) -> None:
        assert format_reading_date("123199") == "12/31/2099"

    def test_explicit_compact_encoding(self) -> None:
        assert format_reading_date("020325", DateEncoding.COMPACT) == "2/3/2025"

    @pytest.mark.parametrize("token", ["01202", "0120250", "", "2025-01-20"])
    def test_wrong_length_is_invalid(self, token: str) -> None:
        assert format_reading_date(token, DateEncoding.COMPACT) == INVALID_DATE

    @pytest.mark.parametrize("token", ["132025", "013225", "ab2025"])
    def test_undecodable_token_is_invalid(self, token: str) -> None:
        assert format_reading_date(token, DateEncoding.COMPACT) == INVALID_DATE


class TestGarbage:
    @pytest.mark.parametrize("token", ["", "tomorrow", "20/01/2025", "   "])
    def test_never_raises(self, token: str) -> None:
        assert format_reading_date(token) == INVALID_DATE

    def test_surrounding_whitespace_tolerated(self) -> None:
        assert format_reading_date(" 012025 ") == "1/20/2025"

    def test_encoding_from_setting_string(self) -> None:
        assert DateEncoding("compact") is DateEncoding.COMPACT
