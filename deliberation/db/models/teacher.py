"""Teacher domain model."""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from deliberation.db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Teacher(Base):
    """A faculty member and their per-period failure metrics."""

    __tablename__ = "teachers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    teacher_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="Active")
    zone: Mapped[str] = mapped_column(String(16), nullable=False, default="green")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    enrolled_students: Mapped[int | None] = mapped_column(Integer, nullable=True)
    p1_failed: Mapped[int | None] = mapped_column(Integer, nullable=True)
    p1_percent: Mapped[float | None] = mapped_column(Float, nullable=True)
    p1_category: Mapped[str | None] = mapped_column(String(32), nullable=True)
    p2_failed: Mapped[int | None] = mapped_column(Integer, nullable=True)
    p2_percent: Mapped[float | None] = mapped_column(Float, nullable=True)
    p2_category: Mapped[str | None] = mapped_column(String(32), nullable=True)
    p3_failed: Mapped[int | None] = mapped_column(Integer, nullable=True)
    p3_percent: Mapped[float | None] = mapped_column(Float, nullable=True)
    p3_category: Mapped[str | None] = mapped_column(String(32), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:  # pragma: no cover - repr not critical
        return f"Teacher(id={self.id!r}, teacher_id={self.teacher_id!r})"
