"""Shared fixtures: the sample lectionary readings."""

from __future__ import annotations

import pytest

from lectionary_search.readings.models import Reading

EXODUS = Reading(
    text="The Lord said to Moses: Go up this mountain...",
    date="2025-01-20",
    source="Exodus 3:1-12",
)
REVELATION = Reading(
    text="Salvation belongs to our God who sits upon the throne.",
    date="2025-01-21",
    source="Revelation 7:10",
)
GENESIS = Reading(
    text="In the beginning, when God created the heavens and the earth...",
    date="020325",
    source="Genesis 1:1",
)


@pytest.fixture
def exodus() -> Reading:
    return EXODUS


@pytest.fixture
def revelation() -> Reading:
    return REVELATION


@pytest.fixture
def genesis() -> Reading:
    return GENESIS


@pytest.fixture
def sample_readings() -> list[Reading]:
    """The two readings every collection variant ships with."""
    return [EXODUS, REVELATION]


@pytest.fixture
def sample_records() -> list[dict[str, str]]:
    """Raw data-source records for the sample readings plus Genesis."""
    return [EXODUS.to_dict(), REVELATION.to_dict(), GENESIS.to_dict()]
