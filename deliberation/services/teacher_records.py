"""Repository helpers for teacher performance records."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from deliberation.db.models import Teacher
from deliberation.services.classifier import Period, calc_percent, categorize

LOGGER = logging.getLogger(__name__)

EDITABLE_FIELDS: tuple[str, ...] = (
    "teacher_id",
    "first_name",
    "last_name",
    "middle_name",
    "email",
    "department",
    "position",
    "status",
    "zone",
    "notes",
    "enrolled_students",
    *(
        name
        for period in Period
        for name in (period.failed_field, period.percent_field, period.category_field)
    ),
)


class TeacherRecordError(Exception):
    """Base error for teacher repository operations."""


class DuplicateTeacherError(TeacherRecordError):
    def __init__(self, teacher_id: str) -> None:
        super().__init__(f"Teacher with faculty number {teacher_id!r} already exists")
        self.teacher_id = teacher_id


class TeacherNotFoundError(TeacherRecordError):
    def __init__(self, record_id: int) -> None:
        super().__init__(f"Teacher {record_id} not found")
        self.record_id = record_id


class FailedExceedsEnrolledError(TeacherRecordError):
    def __init__(self, field_name: str, failed: Any, enrolled: Any) -> None:
        super().__init__(f"{field_name} ({failed}) cannot exceed enrolled_students ({enrolled})")
        self.field_name = field_name
        self.failed = failed
        self.enrolled = enrolled


@dataclass(slots=True)
class UpsertOutcome:
    created: list[Teacher] = field(default_factory=list)
    updated: list[Teacher] = field(default_factory=list)
    # (row index, reason) for rows that were not written
    rejected: list[tuple[int, str]] = field(default_factory=list)


def check_failed_within_enrolled(values: Mapping[str, Any]) -> None:
    enrolled = values.get("enrolled_students")
    if enrolled is None:
        return
    for period in Period:
        failed = values.get(period.failed_field)
        if failed is not None and failed > enrolled:
            raise FailedExceedsEnrolledError(period.failed_field, failed, enrolled)


def derive_period_metrics(values: dict[str, Any]) -> dict[str, Any]:
    """Fill ``p*_percent``/``p*_category`` from failed and enrolled counts.

    Periods whose percent cannot be computed keep the submitted values. A
    stored percent without a category still receives a derived category.
    Raises ``FailedExceedsEnrolledError`` when a failed count is larger
    than the enrollment it is measured against.
    """

    check_failed_within_enrolled(values)
    enrolled = values.get("enrolled_students")
    for period in Period:
        computed = calc_percent(values.get(period.failed_field), enrolled)
        if computed is not None:
            values[period.percent_field] = round(computed, 2)
            values[period.category_field] = categorize(computed)
            continue
        stored = values.get(period.percent_field)
        if stored is not None and not values.get(period.category_field):
            values[period.category_field] = categorize(float(stored))
    return values


def _clean(data: Mapping[str, Any]) -> dict[str, Any]:
    return derive_period_metrics({key: data.get(key) for key in EDITABLE_FIELDS if key in data})


def list_teachers(session: Session) -> Sequence[Teacher]:
    return session.scalars(select(Teacher).order_by(Teacher.id)).all()


def get_teacher(session: Session, record_id: int) -> Teacher:
    teacher = session.get(Teacher, record_id)
    if teacher is None:
        raise TeacherNotFoundError(record_id)
    return teacher


def get_teacher_by_faculty_no(session: Session, teacher_id: str) -> Teacher | None:
    return session.scalar(select(Teacher).where(Teacher.teacher_id == teacher_id))


def create_teacher(session: Session, data: Mapping[str, Any]) -> Teacher:
    values = _clean(data)
    if get_teacher_by_faculty_no(session, values["teacher_id"]) is not None:
        raise DuplicateTeacherError(values["teacher_id"])

    teacher = Teacher(**values)
    session.add(teacher)
    session.flush()
    LOGGER.info("Created teacher %s (%s)", teacher.id, teacher.teacher_id)
    return teacher


def _merge_into(teacher: Teacher, data: Mapping[str, Any]) -> None:
    # Fields absent from ``data`` keep their stored values.
    merged = {key: getattr(teacher, key) for key in EDITABLE_FIELDS}
    merged.update({key: data[key] for key in EDITABLE_FIELDS if key in data})
    for key, value in derive_period_metrics(merged).items():
        setattr(teacher, key, value)


def update_teacher(session: Session, record_id: int, data: Mapping[str, Any]) -> Teacher:
    teacher = get_teacher(session, record_id)

    new_faculty_no = data.get("teacher_id")
    if new_faculty_no and new_faculty_no != teacher.teacher_id:
        clash = get_teacher_by_faculty_no(session, new_faculty_no)
        if clash is not None and clash.id != teacher.id:
            raise DuplicateTeacherError(new_faculty_no)

    _merge_into(teacher, data)
    session.flush()
    LOGGER.info("Updated teacher %s (%s)", teacher.id, teacher.teacher_id)
    return teacher


def upsert_teachers(
    session: Session,
    rows: Sequence[Mapping[str, Any]],
    defaults: Mapping[str, Any] | None = None,
) -> UpsertOutcome:
    """Insert or update rows keyed by faculty number.

    ``defaults`` only apply to newly created teachers. Rows whose failed
    counts exceed the (merged) enrollment are left out and listed in
    ``outcome.rejected``.
    """

    outcome = UpsertOutcome()
    pending: dict[str, Teacher] = {}
    for index, row in enumerate(rows):
        faculty_no = row["teacher_id"]
        teacher = pending.get(faculty_no) or get_teacher_by_faculty_no(session, faculty_no)
        try:
            if teacher is None:
                teacher = Teacher(**_clean({**(defaults or {}), **row}))
                session.add(teacher)
                outcome.created.append(teacher)
            else:
                _merge_into(teacher, row)
                if faculty_no not in pending:
                    outcome.updated.append(teacher)
        except FailedExceedsEnrolledError as exc:
            LOGGER.warning("Rejected teacher row %s: %s", faculty_no, exc)
            outcome.rejected.append((index, str(exc)))
            continue
        pending[faculty_no] = teacher
    session.flush()
    LOGGER.info(
        "Upserted teachers: %d created, %d updated, %d rejected",
        len(outcome.created),
        len(outcome.updated),
        len(outcome.rejected),
    )
    return outcome


__all__ = [
    "DuplicateTeacherError",
    "EDITABLE_FIELDS",
    "FailedExceedsEnrolledError",
    "TeacherNotFoundError",
    "TeacherRecordError",
    "UpsertOutcome",
    "check_failed_within_enrolled",
    "create_teacher",
    "derive_period_metrics",
    "get_teacher",
    "get_teacher_by_faculty_no",
    "list_teachers",
    "update_teacher",
    "upsert_teachers",
]
