"""Validation and parsing of uploaded teacher performance CSV files."""
from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Final

from deliberation.services.classifier import Period, most_severe, resolve_zone

LOGGER = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES: Final[frozenset[str]] = frozenset({"text/csv"})
SPREADSHEET_EXTENSIONS: Final[frozenset[str]] = frozenset({"xlsx", "xls"})

EXCEL_INSTRUCTIONS: Final[tuple[str, ...]] = (
    "1. Open your Excel file",
    "2. Go to File > Save As",
    '3. Choose "CSV (Comma delimited)" format',
    "4. Save the file",
    "5. Upload the CSV file instead",
)


class UploadValidationError(ValueError):
    """Raised when an uploaded file cannot be accepted."""

    def __init__(self, message: str, instructions: tuple[str, ...] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.instructions = list(instructions) if instructions else None


class UnsupportedSpreadsheetError(UploadValidationError):
    def __init__(self) -> None:
        super().__init__(
            "Excel files (.xlsx, .xls) are not directly supported. Please convert to CSV.",
            EXCEL_INSTRUCTIONS,
        )


class InvalidFileTypeError(UploadValidationError):
    def __init__(self) -> None:
        super().__init__("Please upload CSV files only.")


class CsvImportError(ValueError):
    """Raised when a CSV file has no usable structure."""


def file_extension(filename: str | None) -> str:
    return PurePath(filename or "").suffix.lstrip(".").lower()


def check_upload(filename: str | None, content_type: str | None) -> None:
    """Reject spreadsheets with guidance and anything that is not CSV."""

    extension = file_extension(filename)
    if extension in SPREADSHEET_EXTENSIONS:
        raise UnsupportedSpreadsheetError()
    if (content_type or "") not in ALLOWED_CONTENT_TYPES and extension != "csv":
        raise InvalidFileTypeError()


@dataclass(slots=True)
class RowError:
    line: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"


@dataclass(slots=True)
class ParsedUpload:
    rows: list[dict[str, Any]] = field(default_factory=list)
    # source line of each entry in ``rows``
    lines: list[int] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)


def split_faculty_name(name: str) -> tuple[str, str]:
    """Split ``FacultyName`` into ``(first_name, last_name)``.

    The last token is the surname; everything before it is the given name.
    Single-token names are used for both parts.
    """

    parts = name.split()
    if len(parts) == 1:
        return parts[0], parts[0]
    return " ".join(parts[:-1]), parts[-1]


def _cell(row: dict[str, str], column: str) -> str:
    return (row.get(column.lower()) or "").strip()


def _int_cell(row: dict[str, str], column: str) -> int | None:
    raw = _cell(row, column)
    if not raw:
        return None
    try:
        number = float(raw)
    except ValueError as exc:
        raise ValueError(f"{column} must be a number, got {raw!r}") from exc
    if number < 0 or not number.is_integer():
        raise ValueError(f"{column} must be a non-negative whole number, got {raw!r}")
    return int(number)


def _float_cell(row: dict[str, str], column: str) -> float | None:
    raw = _cell(row, column).rstrip("%")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{column} must be a number, got {raw!r}") from exc


def _parse_row(row: dict[str, str]) -> dict[str, Any]:
    faculty_no = _cell(row, "FacultyNo")
    faculty_name = _cell(row, "FacultyName")
    if not faculty_no:
        raise ValueError("FacultyNo is required")
    if not faculty_name:
        raise ValueError("FacultyName is required")

    first_name, last_name = split_faculty_name(faculty_name)
    enrolled = _int_cell(row, "EnrolledStudents")
    record: dict[str, Any] = {
        "teacher_id": faculty_no,
        "first_name": first_name,
        "last_name": last_name,
    }
    if "enrolledstudents" in row:
        record["enrolled_students"] = enrolled
    department = _cell(row, "Department")
    if department:
        record["department"] = department

    zones = []
    for period in Period:
        # Periods missing from the header leave stored values untouched.
        if f"{period.value}_failed".lower() not in row:
            continue
        failed = _int_cell(row, f"{period.value}_Failed")
        if failed is not None and enrolled is not None and failed > enrolled:
            raise ValueError(
                f"{period.value}_Failed ({failed}) exceeds EnrolledStudents ({enrolled})"
            )
        percent = _float_cell(row, f"{period.value}_Percent")
        category = _cell(row, f"{period.value}_Category") or None
        record[period.failed_field] = failed
        record[period.percent_field] = percent
        record[period.category_field] = category
        zones.append(resolve_zone(percent, failed, enrolled, category))

    record["zone"] = most_severe(zones) or "green"
    return record


def parse_teacher_csv(content: bytes | str) -> ParsedUpload:
    """Parse CSV content into teacher dictionaries ready for upsert.

    Rows that fail validation are skipped and reported with their line
    number; a missing header or required column raises ``CsvImportError``.
    """

    if isinstance(content, bytes):
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError:
            text = content.decode("latin-1")
    else:
        text = content

    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        raise CsvImportError("The uploaded file is empty")
    reader.fieldnames = [name.strip().lower() for name in reader.fieldnames]
    missing = [col for col in ("FacultyNo", "FacultyName") if col.lower() not in reader.fieldnames]
    if missing:
        raise CsvImportError(f"Missing required column(s): {', '.join(missing)}")

    parsed = ParsedUpload()
    for row in reader:
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue
        try:
            record = _parse_row(row)
        except ValueError as exc:
            parsed.errors.append(RowError(reader.line_num, str(exc)))
            continue
        parsed.rows.append(record)
        parsed.lines.append(reader.line_num)
    LOGGER.info(
        "Parsed teacher CSV: %d rows accepted, %d rejected",
        len(parsed.rows),
        len(parsed.errors),
    )
    return parsed


__all__ = [
    "CsvImportError",
    "EXCEL_INSTRUCTIONS",
    "InvalidFileTypeError",
    "ParsedUpload",
    "RowError",
    "UnsupportedSpreadsheetError",
    "UploadValidationError",
    "check_upload",
    "file_extension",
    "parse_teacher_csv",
    "split_faculty_name",
]
