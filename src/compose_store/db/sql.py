"""
compose_store.db.sql

Dialect-aware SQL constructs for engine-side clocks.

Responsibilities:
- `utcnow()`: the storage engine's current timestamp, used as the insertion time.
- `age_within(column, since)`: true when the engine clock minus `column` is at most `since`.

Both render natively on PostgreSQL. On SQLite timestamps are millisecond-resolution
UTC text and ages are compared as Julian day differences.
"""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy import Boolean, DateTime, literal
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

_SQLITE_TS_FORMAT = "'%Y-%m-%d %H:%M:%f'"

# Wider than any age an engine timestamp can have; keeps PostgreSQL intervals in range.
MAX_AGE = timedelta(days=36_500_000)


class utcnow(FunctionElement):
    type = DateTime(timezone=True)
    inherit_cache = True
    name = "utcnow"


class age_within(FunctionElement):
    type = Boolean()
    inherit_cache = True
    name = "age_within"

    def __init__(self, column, since: timedelta) -> None:
        super().__init__(column, literal(min(since, MAX_AGE).total_seconds()))


@compiles(utcnow)
def _default_utcnow(element, compiler, **kw):
    return "CURRENT_TIMESTAMP"


@compiles(utcnow, "sqlite")
def _sqlite_utcnow(element, compiler, **kw):
    return f"strftime({_SQLITE_TS_FORMAT}, 'now')"


@compiles(age_within, "postgresql")
def _pg_age_within(element, compiler, **kw):
    column, seconds = (compiler.process(c, **kw) for c in element.clauses.clauses)
    return f"(CURRENT_TIMESTAMP - {column} <= make_interval(secs => {seconds}))"


@compiles(age_within, "sqlite")
def _sqlite_age_within(element, compiler, **kw):
    column, seconds = (compiler.process(c, **kw) for c in element.clauses.clauses)
    return f"(julianday('now') - julianday({column}) <= ({seconds}) / 86400.0)"
