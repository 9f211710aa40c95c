"""
Timestamp ordering helpers shared by the feed builders.
Stored timestamps may come back naive (SQLite) or aware (PostgreSQL);
naive values are read as UTC so mixed lists compare cleanly.
"""
from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Protocol, TypeVar


class Timestamped(Protocol):
    created_at: datetime


T = TypeVar("T", bound=Timestamped)


def as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def timestamp_key(item: Timestamped) -> datetime:
    return as_utc(item.created_at)


def newest_first(items: Iterable[T]) -> list[T]:
    """Stable sort, most recent first; ties keep their input order."""
    return sorted(items, key=timestamp_key, reverse=True)


def oldest_first(items: Iterable[T]) -> list[T]:
    return sorted(items, key=timestamp_key)
