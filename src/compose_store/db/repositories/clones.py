"""
compose_store.db.repositories.clones

Repository for `Clone` rows.

Responsibilities:
- Insert immutable clone rows referencing a parent compose.
- Read clones scoped transitively through the parent compose's organization.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import desc, func, insert, select

from compose_store.db.classify import translate_errors
from compose_store.db.entries import CloneEntry, Page
from compose_store.db.models import Clone, Compose
from compose_store.db.pool import Database
from compose_store.db.repositories.composes import check_paging
from compose_store.db.sql import utcnow
from compose_store.errors import CloneNotFoundError

_COLUMNS = (Clone.id, Clone.compose_id, Clone.request, Clone.created_at)


def _owned_by(org_id: str):
    # Joins each clone to its parent so ownership is checked in the same statement.
    return (
        select(*_COLUMNS)
        .select_from(Clone)
        .join(Compose, Compose.job_id == Clone.compose_id)
        .where(Compose.org_id == org_id)
    )


class CloneRepo:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def insert(self, *, compose_id: uuid.UUID, clone_id: uuid.UUID, request: Any) -> None:
        # No parent pre-check: the foreign key rejects orphans (-> ConstraintError).
        stmt = insert(Clone).values(
            id=clone_id,
            compose_id=compose_id,
            request=request,
            created_at=utcnow(),
        )
        async with translate_errors(not_found=CloneNotFoundError):
            async with self._db.transaction() as conn:
                await conn.execute(stmt)

    async def list_for_compose(
        self, compose_id: uuid.UUID, org_id: str, *, limit: int, offset: int
    ) -> Page[CloneEntry]:
        """
        Clones of `compose_id`, newest first. A compose that is missing or owned by
        another org yields an empty page rather than an error.
        """

        check_paging(limit, offset)
        stmt = (
            _owned_by(org_id)
            .where(Clone.compose_id == compose_id)
            .order_by(desc(Clone.created_at), Clone.id)
            .limit(limit)
            .offset(offset)
        )
        async with translate_errors(not_found=CloneNotFoundError):
            async with self._db.acquire() as conn:
                rows = (await conn.execute(stmt)).all()
                total = (await conn.execute(self._count_stmt(compose_id, org_id))).scalar_one()
        return Page(items=[CloneEntry.from_row(r) for r in rows], total=total)

    async def count_for_compose(self, compose_id: uuid.UUID, org_id: str) -> int:
        async with translate_errors(not_found=CloneNotFoundError):
            async with self._db.acquire() as conn:
                return (await conn.execute(self._count_stmt(compose_id, org_id))).scalar_one()

    async def get(self, clone_id: uuid.UUID, org_id: str) -> CloneEntry:
        stmt = _owned_by(org_id).where(Clone.id == clone_id)
        async with translate_errors(not_found=CloneNotFoundError):
            async with self._db.acquire() as conn:
                row = (await conn.execute(stmt)).one()
        return CloneEntry.from_row(row)

    @staticmethod
    def _count_stmt(compose_id: uuid.UUID, org_id: str):
        return (
            select(func.count(Clone.id))
            .select_from(Clone)
            .join(Compose, Compose.job_id == Clone.compose_id)
            .where(Clone.compose_id == compose_id, Compose.org_id == org_id)
        )
