"""Development fixture helpers."""
from __future__ import annotations

from sqlalchemy.orm import Session

from deliberation.services.teacher_records import get_teacher_by_faculty_no, upsert_teachers

DEMO_TEACHERS: tuple[dict, ...] = (
    {
        "teacher_id": "14-007-F",
        "first_name": "Adormie",
        "last_name": "Macario",
        "department": "Science",
        "position": "Instructor I",
        "enrolled_students": 184,
        "p1_failed": 18,
        "zone": "green",
    },
    {
        "teacher_id": "24-219-F",
        "first_name": "Alexis",
        "last_name": "Larosa",
        "department": "Mathematics",
        "enrolled_students": 307,
        "p1_failed": 9,
        "p2_failed": 41,
        "zone": "yellow",
    },
    {
        "teacher_id": "24-077-F",
        "first_name": "Amber Ann",
        "last_name": "Acaylar",
        "department": "English",
        "status": "On Leave",
        "enrolled_students": 201,
        "p1_failed": 16,
        "p2_failed": 95,
        "zone": "red",
    },
)


def seed_dev_data(session: Session) -> int:
    """Insert demo teachers that are not present yet; return how many were added."""

    missing = [row for row in DEMO_TEACHERS if get_teacher_by_faculty_no(session, row["teacher_id"]) is None]
    if missing:
        upsert_teachers(session, missing)
    session.flush()
    return len(missing)
