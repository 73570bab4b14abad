"""
compose_store.db.base

SQLAlchemy declarative base.

Responsibilities:
- Provide a shared DeclarativeBase for all table models.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# --- Module Notes -----------------------------------------------------------
# All table models should inherit from `Base` so `init_db` can discover them.
