"""Tests for database URL normalization."""

import pytest

from backend.travel.db.engine import async_database_url, sync_database_url


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("postgresql://u:p@db/travel", "postgresql+asyncpg://u:p@db/travel"),
        ("sqlite:///./travel.db", "sqlite+aiosqlite:///./travel.db"),
        ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
    ],
)
def test_async_database_url(url: str, expected: str) -> None:
    assert async_database_url(url) == expected


def test_async_database_url_rejects_empty() -> None:
    with pytest.raises(ValueError):
        async_database_url("")


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("postgresql+asyncpg://u:p@db/travel", "postgresql://u:p@db/travel"),
        ("sqlite+aiosqlite:///./travel.db", "sqlite:///./travel.db"),
        ("sqlite:///./travel.db", "sqlite:///./travel.db"),
    ],
)
def test_sync_database_url(url: str, expected: str) -> None:
    assert sync_database_url(url) == expected
