"""
compose_store.db.repositories

Repository package.

Responsibilities:
- Group tenant-scoped data-access repositories for composes and clones.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories are stateless; all mutable state lives in pooled connections.
