"""SQLAlchemy model package."""
from deliberation.db.models.teacher import Teacher

__all__ = ["Teacher"]
