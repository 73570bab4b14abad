"""
compose_store.db.classify

Maps SQLAlchemy/driver failures onto the store's error taxonomy.

Responsibilities:
- Turn "no matching row" into the operation's not-found error.
- Turn integrity violations into `ConstraintError`.
- Turn everything else coming from the engine or transport into `ConnectivityError`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

from compose_store.errors import ConnectivityError, ConstraintError, NotFoundError, StoreError


def classify(exc: BaseException, *, not_found: type[NotFoundError] = NotFoundError) -> StoreError:
    """Return the store error for `exc`; the caller raises it chained to `exc`."""

    if isinstance(exc, StoreError):
        return exc
    if isinstance(exc, NoResultFound):
        return not_found()
    if isinstance(exc, IntegrityError):
        return ConstraintError(f"constraint violation: {exc.orig}")
    if isinstance(exc, SQLAlchemyError):
        return ConnectivityError(f"database error: {exc}")
    if isinstance(exc, (OSError, TimeoutError)):
        return ConnectivityError(f"transport error: {exc}")
    raise TypeError(f"cannot classify {type(exc).__name__}")


@asynccontextmanager
async def translate_errors(
    *, not_found: type[NotFoundError] = NotFoundError
) -> AsyncIterator[None]:
    """
    Usage:
        async with translate_errors(not_found=ComposeNotFoundError):
            ... pool acquisition and statements ...

    Each failure is classified exactly once; nothing is retried or logged here.
    """

    try:
        yield
    except StoreError:
        raise
    except (SQLAlchemyError, OSError, TimeoutError) as exc:
        raise classify(exc, not_found=not_found) from exc


# --- Module Notes -----------------------------------------------------------
# Cancellation (asyncio.CancelledError) is a BaseException and passes through
# untouched, so deadlines imposed by callers propagate as-is.
