"""
compose_store.db.entries

Detached value objects returned by the repositories.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import Row

T = TypeVar("T")


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values; they are UTC by construction (see db.sql).
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class ComposeEntry:
    id: uuid.UUID
    request: Any
    created_at: datetime
    image_name: str | None = None

    @classmethod
    def from_row(cls, row: Row[Any]) -> ComposeEntry:
        return cls(
            id=row.job_id,
            request=row.request,
            created_at=as_utc(row.created_at),
            image_name=row.image_name,
        )


@dataclass(frozen=True)
class CloneEntry:
    id: uuid.UUID
    compose_id: uuid.UUID
    request: Any
    created_at: datetime

    @classmethod
    def from_row(cls, row: Row[Any]) -> CloneEntry:
        return cls(
            id=row.id,
            compose_id=row.compose_id,
            request=row.request,
            created_at=as_utc(row.created_at),
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One page of results plus `total`, the size of the whole matching set.
    `total` comes from its own count query and does not depend on limit/offset.
    """

    items: list[T] = field(default_factory=list)
    total: int = 0
