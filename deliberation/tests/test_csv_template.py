"""Tests for the bulk import CSV template."""
from __future__ import annotations

import pytest

from deliberation.services import csv_template
from deliberation.services.csv_import import parse_teacher_csv


def test_first_semester_template_omits_p3() -> None:
    lines = csv_template.build_template("1st").splitlines()
    assert lines[0] == (
        "FacultyNo,FacultyName,EnrolledStudents,"
        "P1_Failed,P1_Percent,P1_Category,P2_Failed,P2_Percent,P2_Category"
    )
    assert lines[1] == "14-007-F,ADORMIE CORRALES MACARIO,184,18,9.78,GREEN (0.01%-10%),,,"
    assert len(lines) == 4


def test_second_semester_template_adds_p3_columns() -> None:
    lines = csv_template.build_template("2nd").splitlines()
    assert lines[0].endswith(",P2_Category,P3_Failed,P3_Percent,P3_Category")
    header_width = len(lines[0].split(","))
    assert all(len(line.split(",")) == header_width for line in lines[1:])


def test_template_filename() -> None:
    assert csv_template.template_filename("2nd") == "teachers_performance_template_2nd_semester.csv"


def test_unknown_semester_rejected() -> None:
    with pytest.raises(ValueError):
        csv_template.build_template("summer")


def test_template_is_importable() -> None:
    parsed = parse_teacher_csv(csv_template.build_template("2nd"))
    assert parsed.errors == []
    assert [row["teacher_id"] for row in parsed.rows] == ["14-007-F", "24-219-F", "24-077-F"]
