"""
compose_store.db.repositories.composes

Repository for `Compose` rows.

Responsibilities:
- Insert immutable compose rows stamped with the engine clock.
- Read composes scoped to the owning organization (single row, image type, pages, counts).
"""

from __future__ import annotations

import uuid
from datetime import timedelta
from typing import Any

from sqlalchemy import desc, func, insert, select

from compose_store.db.classify import translate_errors
from compose_store.db.entries import ComposeEntry, Page
from compose_store.db.models import Compose
from compose_store.db.pool import Database
from compose_store.db.sql import age_within, utcnow
from compose_store.errors import ComposeNotFoundError

_COLUMNS = (Compose.job_id, Compose.request, Compose.created_at, Compose.image_name)


def check_paging(limit: int, offset: int) -> None:
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")


def _check_window(since: timedelta) -> None:
    if since < timedelta(0):
        raise ValueError(f"age window must not be negative, got {since}")


def _in_window(org_id: str, since: timedelta):
    # Age is measured against the engine clock: now() - created_at <= since.
    return (Compose.org_id == org_id, age_within(Compose.created_at, since))


class ComposeRepo:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def insert(
        self,
        *,
        job_id: uuid.UUID,
        account_number: str,
        org_id: str,
        image_name: str | None,
        request: Any,
    ) -> None:
        stmt = insert(Compose).values(
            job_id=job_id,
            request=request,
            created_at=utcnow(),
            account_number=account_number,
            org_id=org_id,
            image_name=image_name,
        )
        async with translate_errors(not_found=ComposeNotFoundError):
            async with self._db.transaction() as conn:
                await conn.execute(stmt)

    async def get(self, job_id: uuid.UUID, org_id: str) -> ComposeEntry:
        # A job owned by another org is reported exactly like a missing one.
        stmt = select(*_COLUMNS).where(Compose.org_id == org_id, Compose.job_id == job_id)
        async with translate_errors(not_found=ComposeNotFoundError):
            async with self._db.acquire() as conn:
                row = (await conn.execute(stmt)).one()
        return ComposeEntry.from_row(row)

    async def get_image_type(self, job_id: uuid.UUID, org_id: str) -> str:
        """
        Image type of the first image request in the stored payload
        (`request.image_requests[0].image_type`), extracted by the engine so the
        document never crosses the wire.
        """

        image_type = Compose.request[("image_requests", 0, "image_type")].as_string()
        stmt = select(image_type).where(Compose.org_id == org_id, Compose.job_id == job_id)
        async with translate_errors(not_found=ComposeNotFoundError):
            async with self._db.acquire() as conn:
                value = (await conn.execute(stmt)).scalar_one_or_none()
        if value is None:
            raise ComposeNotFoundError()
        return value

    async def list_for_org(
        self, org_id: str, *, since: timedelta, limit: int, offset: int
    ) -> Page[ComposeEntry]:
        check_paging(limit, offset)
        _check_window(since)
        window = _in_window(org_id, since)
        stmt = (
            select(*_COLUMNS)
            .where(*window)
            .order_by(desc(Compose.created_at), Compose.job_id)
            .limit(limit)
            .offset(offset)
        )
        count_stmt = select(func.count()).select_from(Compose).where(*window)

        async with translate_errors(not_found=ComposeNotFoundError):
            async with self._db.acquire() as conn:
                rows = (await conn.execute(stmt)).all()
                total = (await conn.execute(count_stmt)).scalar_one()
        return Page(items=[ComposeEntry.from_row(r) for r in rows], total=total)

    async def count_since(self, org_id: str, since: timedelta) -> int:
        _check_window(since)
        stmt = select(func.count()).select_from(Compose).where(*_in_window(org_id, since))
        async with translate_errors(not_found=ComposeNotFoundError):
            async with self._db.acquire() as conn:
                return (await conn.execute(stmt)).scalar_one()


# --- Module Notes -----------------------------------------------------------
# The page and its total are two reads without a shared transaction; an insert
# landing in between can make them disagree by that row.
