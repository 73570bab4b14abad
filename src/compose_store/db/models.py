"""
compose_store.db.models

Persistence schema for build requests.

Responsibilities:
- Define the two append-only tables:
  - Compose: an image build request, owned by an organization
  - Clone: a follow-up operation derived from exactly one compose
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Uuid as SAUuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from compose_store.db.base import Base

# JSONB on PostgreSQL so path extraction runs engine-side; plain JSON elsewhere.
Document = JSON().with_variant(JSONB(), "postgresql")


class Compose(Base):
    __tablename__ = "composes"

    job_id: Mapped[uuid.UUID] = mapped_column(SAUuid(as_uuid=True), primary_key=True)
    request: Mapped[Any] = mapped_column(Document, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    account_number: Mapped[str] = mapped_column(String(255), nullable=False)
    org_id: Mapped[str] = mapped_column(String(255), nullable=False)
    image_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (Index("ix_composes_org_created", "org_id", "created_at"),)


class Clone(Base):
    __tablename__ = "clones"

    id: Mapped[uuid.UUID] = mapped_column(SAUuid(as_uuid=True), primary_key=True)
    compose_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("composes.job_id"), nullable=False
    )
    request: Mapped[Any] = mapped_column(Document, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("ix_clones_compose_created", "compose_id", "created_at"),)


# --- Module Notes -----------------------------------------------------------
# `created_at` has no client-side default: inserts set it to `sql.utcnow()` so the
# engine clock is the single source of ordering and age windows.
# Tenant ownership of a clone is never stored on the clone row; it is always
# resolved through `composes.org_id`.
