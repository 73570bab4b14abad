"""
compose_store.errors

Error taxonomy surfaced to callers of the store.

Responsibilities:
- Distinguish "row not found" (compose or clone) from constraint violations and
  from connectivity/engine failures.
- Carry a short canonical code that callers can map to transport status codes.
"""

from __future__ import annotations


class StoreError(Exception):
    """
    Base for every failure raised by the store.

    - message: human-friendly text, safe to show to clients
    - error_code: canonical short code ("not_found", "constraint", "connectivity", ...)
    """

    error_code = "store_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(StoreError):
    """No row matches the requested id within the requesting organization."""

    error_code = "not_found"

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class ComposeNotFoundError(NotFoundError):
    def __init__(self, message: str = "Compose not found") -> None:
        super().__init__(message)


class CloneNotFoundError(NotFoundError):
    def __init__(self, message: str = "Clone not found") -> None:
        super().__init__(message)


class ConstraintError(StoreError):
    """Uniqueness or referential violation reported by the storage engine on insert."""

    error_code = "constraint"


class ConnectivityError(StoreError):
    """Pool exhaustion, transport failure or any other unclassified engine failure."""

    error_code = "connectivity"


class ConfigurationError(ConnectivityError):
    """The connection descriptor is malformed or the initial connection failed."""

    error_code = "configuration"


__all__ = [
    "StoreError",
    "NotFoundError",
    "ComposeNotFoundError",
    "CloneNotFoundError",
    "ConstraintError",
    "ConnectivityError",
    "ConfigurationError",
]
