"""Tests for upload validation and teacher CSV parsing."""
from __future__ import annotations

import pytest

from deliberation.services.csv_import import (
    EXCEL_INSTRUCTIONS,
    CsvImportError,
    InvalidFileTypeError,
    UnsupportedSpreadsheetError,
    check_upload,
    parse_teacher_csv,
    split_faculty_name,
)


@pytest.mark.parametrize("filename", ["grades.xlsx", "GRADES.XLS"])
def test_spreadsheets_get_conversion_instructions(filename: str) -> None:
    with pytest.raises(UnsupportedSpreadsheetError) as exc_info:
        check_upload(filename, "application/vnd.ms-excel")
    assert exc_info.value.instructions == list(EXCEL_INSTRUCTIONS)


def test_non_csv_rejected() -> None:
    with pytest.raises(InvalidFileTypeError) as exc_info:
        check_upload("notes.txt", "text/plain")
    assert exc_info.value.message == "Please upload CSV files only."
    assert exc_info.value.instructions is None


@pytest.mark.parametrize(
    ("filename", "content_type"),
    [("teachers.csv", None), ("teachers.CSV", "application/octet-stream"), ("export", "text/csv")],
)
def test_csv_accepted_by_extension_or_mime(filename: str, content_type) -> None:
    check_upload(filename, content_type)


def test_split_faculty_name() -> None:
    assert split_faculty_name("AMBER ANN ACAYLAR") == ("AMBER ANN", "ACAYLAR")
    assert split_faculty_name("  Cruz ") == ("Cruz", "Cruz")


def test_parse_rows_compute_zone_from_worst_period() -> None:
    content = (
        "FacultyNo,FacultyName,EnrolledStudents,P1_Failed,P1_Percent,P1_Category,P2_Failed,P2_Percent,P2_Category\n"
        "14-007-F,ADORMIE CORRALES MACARIO,184,18,9.78,GREEN (0.01%-10%),,,\n"
        "24-219-F,ALEXIS VIADOR LAROSA,100,5,,,45,,\n"
        "24-500-F,NO ENROLLMENT,,,,YELLOW (10.01%-40%),,,\n"
    ).encode("utf-8")

    parsed = parse_teacher_csv(content)

    assert parsed.errors == []
    first, second, third = parsed.rows
    assert first["first_name"] == "ADORMIE CORRALES"
    assert first["last_name"] == "MACARIO"
    assert first["enrolled_students"] == 184
    assert first["p1_percent"] == 9.78
    assert first["zone"] == "green"
    assert "department" not in first
    assert "p3_failed" not in first

    assert second["p2_failed"] == 45
    assert second["zone"] == "red"

    assert third["enrolled_students"] is None
    assert third["zone"] == "yellow"


def test_parse_reports_bad_rows_and_keeps_good_ones() -> None:
    content = (
        "FacultyNo,FacultyName,EnrolledStudents,P1_Failed\n"
        ",MISSING NUMBER,10,1\n"
        "01-F,TOO MANY FAILED,10,11\n"
        "02-F,NOT A NUMBER,ten,1\n"
        "\n"
        "03-F,GOOD ROW,10,1\n"
    )

    parsed = parse_teacher_csv(content)

    assert [row["teacher_id"] for row in parsed.rows] == ["03-F"]
    assert parsed.lines == [6]
    assert [error.line for error in parsed.errors] == [2, 3, 4]
    assert "FacultyNo is required" in str(parsed.errors[0])


def test_parse_handles_bom_and_header_case() -> None:
    content = "\ufefffacultyno,FACULTYNAME,department\n07-F,Juan Dela Cruz,History\n".encode("utf-8")
    parsed = parse_teacher_csv(content)
    assert parsed.rows[0]["department"] == "History"
    assert parsed.rows[0]["last_name"] == "Cruz"


def test_missing_required_columns() -> None:
    with pytest.raises(CsvImportError):
        parse_teacher_csv("Name,Enrolled\nA,1\n")


def test_empty_file() -> None:
    with pytest.raises(CsvImportError):
        parse_teacher_csv(b"")
