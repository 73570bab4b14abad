"""
tests.conftest

Shared fixtures: a file-backed SQLite pool with the schema created.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest_asyncio

from compose_store.db.init_db import init_db
from compose_store.db.pool import Database, open_database
from compose_store.db.repositories.clones import CloneRepo
from compose_store.db.repositories.composes import ComposeRepo


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest_asyncio.fixture
async def db(tmp_path: Path) -> AsyncIterator[Database]:
    database = await open_database(sqlite_url(tmp_path / "store.db"))
    await init_db(database.engine)
    try:
        yield database
    finally:
        await database.close()


@pytest_asyncio.fixture
async def composes(db: Database) -> ComposeRepo:
    return ComposeRepo(db)


@pytest_asyncio.fixture
async def clones(db: Database) -> CloneRepo:
    return CloneRepo(db)


def aws_request(*image_types: str) -> dict[str, Any]:
    return {
        "distribution": "rhel-9",
        "image_requests": [{"image_type": t, "architecture": "x86_64"} for t in image_types],
    }


async def insert_composes(
    repo: ComposeRepo, org_id: str, count: int, *, image_name: str | None = None
) -> list[uuid.UUID]:
    """Insert `count` composes a few ms apart; returns ids oldest first."""

    ids = []
    for _ in range(count):
        job_id = uuid.uuid4()
        await repo.insert(
            job_id=job_id,
            account_number="000001",
            org_id=org_id,
            image_name=image_name,
            request=aws_request("aws"),
        )
        ids.append(job_id)
        # SQLite timestamps have millisecond resolution.
        await asyncio.sleep(0.01)
    return ids
