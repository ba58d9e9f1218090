"""FastAPI dependencies for shared services."""
from __future__ import annotations

from typing import Iterator

from sqlalchemy.orm import Session

from .db import SessionLocal


def get_db() -> Iterator[Session]:  # pragma: no cover - thin wrapper for dependency injection
    """Expose a transactional SQLAlchemy session dependency."""

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
