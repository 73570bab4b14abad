"""
compose_store.store

Combined store interface consumed by the HTTP/orchestration layer.

Responsibilities:
- Describe every compose and clone operation as one `ComposeStore` protocol.
- Provide the pool-backed implementation and a single "open from settings" entry point.
"""

from __future__ import annotations

import uuid
from datetime import timedelta
from typing import Any, Protocol

from compose_store.db.entries import CloneEntry, ComposeEntry, Page
from compose_store.db.pool import Database
from compose_store.db.repositories.clones import CloneRepo
from compose_store.db.repositories.composes import ComposeRepo
from compose_store.observability.logging import configure_logging
from compose_store.settings import Settings, get_settings


class ComposeStore(Protocol):
    async def insert_compose(
        self,
        job_id: uuid.UUID,
        account_number: str,
        org_id: str,
        image_name: str | None,
        request: Any,
    ) -> None: ...

    async def get_composes(
        self, org_id: str, since: timedelta, limit: int, offset: int
    ) -> Page[ComposeEntry]: ...

    async def get_compose(self, job_id: uuid.UUID, org_id: str) -> ComposeEntry: ...

    async def get_compose_image_type(self, job_id: uuid.UUID, org_id: str) -> str: ...

    async def count_composes_since(self, org_id: str, duration: timedelta) -> int: ...

    async def insert_clone(
        self, compose_id: uuid.UUID, clone_id: uuid.UUID, request: Any
    ) -> None: ...

    async def get_clones_for_compose(
        self, compose_id: uuid.UUID, org_id: str, limit: int, offset: int
    ) -> Page[CloneEntry]: ...

    async def count_clones_for_compose(self, compose_id: uuid.UUID, org_id: str) -> int: ...

    async def get_clone(self, clone_id: uuid.UUID, org_id: str) -> CloneEntry: ...


class DatabaseStore:
    """`ComposeStore` over a pooled `Database`. Stateless apart from the injected pool."""

    def __init__(self, db: Database) -> None:
        self._db = db
        self._composes = ComposeRepo(db)
        self._clones = CloneRepo(db)

    @property
    def database(self) -> Database:
        return self._db

    async def insert_compose(
        self,
        job_id: uuid.UUID,
        account_number: str,
        org_id: str,
        image_name: str | None,
        request: Any,
    ) -> None:
        await self._composes.insert(
            job_id=job_id,
            account_number=account_number,
            org_id=org_id,
            image_name=image_name,
            request=request,
        )

    async def get_composes(
        self, org_id: str, since: timedelta, limit: int, offset: int
    ) -> Page[ComposeEntry]:
        return await self._composes.list_for_org(org_id, since=since, limit=limit, offset=offset)

    async def get_compose(self, job_id: uuid.UUID, org_id: str) -> ComposeEntry:
        return await self._composes.get(job_id, org_id)

    async def get_compose_image_type(self, job_id: uuid.UUID, org_id: str) -> str:
        return await self._composes.get_image_type(job_id, org_id)

    async def count_composes_since(self, org_id: str, duration: timedelta) -> int:
        return await self._composes.count_since(org_id, duration)

    async def insert_clone(self, compose_id: uuid.UUID, clone_id: uuid.UUID, request: Any) -> None:
        await self._clones.insert(compose_id=compose_id, clone_id=clone_id, request=request)

    async def get_clones_for_compose(
        self, compose_id: uuid.UUID, org_id: str, limit: int, offset: int
    ) -> Page[CloneEntry]:
        return await self._clones.list_for_compose(compose_id, org_id, limit=limit, offset=offset)

    async def count_clones_for_compose(self, compose_id: uuid.UUID, org_id: str) -> int:
        return await self._clones.count_for_compose(compose_id, org_id)

    async def get_clone(self, clone_id: uuid.UUID, org_id: str) -> CloneEntry:
        return await self._clones.get(clone_id, org_id)

    async def close(self) -> None:
        await self._db.close()


async def open_store(settings: Settings | None = None) -> DatabaseStore:
    """
    Composition root for processes hosting the store: configure logging, open the
    pool (fail fast on a bad descriptor) and wrap it in a `DatabaseStore`.
    """

    settings = settings or get_settings()
    configure_logging(settings)
    db = await Database.open(settings)
    return DatabaseStore(db)


# --- Module Notes -----------------------------------------------------------
# The store does not log operation failures; callers decide how to report
# NotFoundError / ConstraintError / ConnectivityError.
