"""CSV template offered to administrators for bulk teacher imports."""
from __future__ import annotations

from typing import Final

SEMESTERS: Final[tuple[str, ...]] = ("1st", "2nd")

BASE_COLUMNS: Final[tuple[str, ...]] = ("FacultyNo", "FacultyName", "EnrolledStudents")


def period_columns(period: str) -> tuple[str, str, str]:
    return (f"{period}_Failed", f"{period}_Percent", f"{period}_Category")


SAMPLE_ROWS: Final[tuple[tuple[str, ...], ...]] = (
    ("14-007-F", "ADORMIE CORRALES MACARIO", "184", "18", "9.78", "GREEN (0.01%-10%)"),
    ("24-219-F", "ALEXIS VIADOR LAROSA", "307", "9", "2.93", "GREEN (0.01%-10%)"),
    ("24-077-F", "AMBER ANN ACAYLAR", "201", "16", "7.96", "GREEN (0.01%-10%)"),
)


def _check_semester(semester: str) -> str:
    if semester not in SEMESTERS:
        raise ValueError(f"Unknown semester {semester!r}; expected one of {', '.join(SEMESTERS)}")
    return semester


def template_periods(semester: str) -> tuple[str, ...]:
    """P3 is only evaluated during the second semester."""

    return ("P1", "P2", "P3") if _check_semester(semester) == "2nd" else ("P1", "P2")


def template_header(semester: str) -> list[str]:
    columns = list(BASE_COLUMNS)
    for period in template_periods(semester):
        columns.extend(period_columns(period))
    return columns


def build_template(semester: str = "1st") -> str:
    """Return the template CSV text: header plus sample rows.

    Sample rows only carry P1 values; later period cells are left blank.
    """

    header = template_header(semester)
    lines = [",".join(header)]
    for sample in SAMPLE_ROWS:
        padding = [""] * (len(header) - len(sample))
        lines.append(",".join([*sample, *padding]))
    return "\n".join(lines)


def template_filename(semester: str) -> str:
    return f"teachers_performance_template_{_check_semester(semester)}_semester.csv"


__all__ = [
    "BASE_COLUMNS",
    "SEMESTERS",
    "build_template",
    "period_columns",
    "template_filename",
    "template_header",
    "template_periods",
]
