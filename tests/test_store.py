"""
tests.test_store

End-to-end flows through the combined store interface.
"""

from __future__ import annotations

import asyncio
import uuid
from datetime import timedelta
from pathlib import Path

import pytest

from compose_store.db.init_db import init_db
from compose_store.errors import CloneNotFoundError, ComposeNotFoundError, ConstraintError
from compose_store.settings import Settings
from compose_store.store import DatabaseStore, open_store

from tests.conftest import sqlite_url


@pytest.mark.asyncio
async def test_compose_and_clone_lifecycle(tmp_path: Path) -> None:
    store = await open_store(Settings(env="test", database_url=sqlite_url(tmp_path / "e2e.db")))
    await init_db(store.database.engine)
    try:
        await _exercise(store)
    finally:
        await store.close()


async def _exercise(store: DatabaseStore) -> None:
    c1 = uuid.uuid4()
    await store.insert_compose(
        c1, "000001", "org-a", None, {"image_requests": [{"image_type": "aws"}]}
    )
    assert await store.get_compose_image_type(c1, "org-a") == "aws"
    with pytest.raises(ComposeNotFoundError):
        await store.get_compose_image_type(c1, "org-b")

    for _ in range(2):
        await asyncio.sleep(0.01)
        await store.insert_compose(uuid.uuid4(), "000001", "org-a", "img", {"image_requests": []})

    page = await store.get_composes("org-a", timedelta(hours=24), 2, 0)
    assert len(page.items) == 2
    assert page.total == 3
    assert c1 not in {e.id for e in page.items}
    assert await store.count_composes_since("org-a", timedelta(hours=24)) == 3

    clone_id = uuid.uuid4()
    await store.insert_clone(c1, clone_id, {"region": "eu-west-1"})
    with pytest.raises(ConstraintError):
        await store.insert_clone(uuid.uuid4(), uuid.uuid4(), {"region": "eu-west-1"})

    assert (await store.get_clone(clone_id, "org-a")).compose_id == c1
    with pytest.raises(CloneNotFoundError):
        await store.get_clone(clone_id, "org-b")

    clones = await store.get_clones_for_compose(c1, "org-a", 10, 0)
    assert [c.id for c in clones.items] == [clone_id]
    assert clones.total == 1
    assert await store.count_clones_for_compose(c1, "org-a") == 1
    assert (await store.get_clones_for_compose(c1, "org-b", 10, 0)).total == 0
