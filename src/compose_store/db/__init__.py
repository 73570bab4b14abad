"""
compose_store.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the table models, the connection pool handle and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Repositories talk to `Database` connections directly (SQLAlchemy Core on mapped
# tables); no ORM session or identity map is kept between calls.
