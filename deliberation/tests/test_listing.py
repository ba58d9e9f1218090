"""Tests for the teacher table search, filter, sort and pagination helpers."""
from __future__ import annotations

import pytest

from deliberation.services import listing
from deliberation.services.listing import TeacherFilters


def _teacher(teacher_id: str, first: str, last: str, department: str, zone: str = "green", status: str = "Active", **extra) -> dict:
    return {
        "teacher_id": teacher_id,
        "first_name": first,
        "last_name": last,
        "department": department,
        "zone": zone,
        "status": status,
        **extra,
    }


@pytest.fixture()
def records() -> list[dict]:
    return [
        _teacher("14-007-F", "Adormie", "Macario", "Science", enrolled_students=184),
        _teacher("24-219-F", "alexis", "Larosa", "Mathematics", zone="yellow", enrolled_students=307),
        _teacher("24-077-F", "Amber Ann", "Acaylar", "Science", zone="red", status="On Leave", enrolled_students=201),
        _teacher("19-101-F", "Benjie", "Cruz", "English", zone="red", enrolled_students=None),
        _teacher("20-555-F", "Carla", "Dizon", "Mathematics", status="Inactive", enrolled_students=99),
    ]


def test_search_matches_name_id_and_department_case_insensitively(records) -> None:
    assert [r["teacher_id"] for r in listing.filter_teachers(records, "AMBER ann")] == ["24-077-F"]
    assert [r["teacher_id"] for r in listing.filter_teachers(records, "219")] == ["24-219-F"]
    assert len(listing.filter_teachers(records, "science")) == 2
    assert listing.filter_teachers(records, "   ") == records


def test_filters_are_exact_matches_and_combine(records) -> None:
    filters = TeacherFilters(department="Science", zone="red")
    assert [r["teacher_id"] for r in listing.filter_teachers(records, "", filters)] == ["24-077-F"]
    assert listing.filter_teachers(records, "", TeacherFilters(department="Sci")) == []
    assert len(listing.filter_teachers(records, "", TeacherFilters(status="Active"))) == 3


def test_name_sort_uses_first_then_last_name(records) -> None:
    ordered = listing.sort_teachers(records, "last_name", "asc")
    assert [r["first_name"] for r in ordered] == ["Adormie", "alexis", "Amber Ann", "Benjie", "Carla"]

    descending = listing.sort_teachers(records, "first_name", "desc")
    assert [r["first_name"] for r in descending][0] == "Carla"


def test_numeric_sort_puts_missing_values_first(records) -> None:
    ordered = listing.sort_teachers(records, "enrolled_students", "asc")
    assert [r["enrolled_students"] for r in ordered] == [None, 99, 184, 201, 307]


def test_sort_is_stable_and_idempotent(records) -> None:
    once = listing.sort_teachers(records, "department", "asc")
    twice = listing.sort_teachers(once, "department", "asc")
    assert once == twice
    science = [r["teacher_id"] for r in once if r["department"] == "Science"]
    assert science == ["14-007-F", "24-077-F"]


def test_sort_without_field_keeps_order(records) -> None:
    assert listing.sort_teachers(records, None) == records


def test_toggle_sort() -> None:
    assert listing.toggle_sort(None, "asc", "department") == ("department", "asc")
    assert listing.toggle_sort("department", "asc", "department") == ("department", "desc")
    assert listing.toggle_sort("department", "desc", "department") == ("department", "asc")
    assert listing.toggle_sort("department", "desc", "zone") == ("zone", "asc")


def test_paginate_is_one_indexed_and_clamped(records) -> None:
    page = listing.paginate(records, page=2, page_size=2)
    assert [r["teacher_id"] for r in page.items] == ["24-077-F", "19-101-F"]
    assert (page.total, page.total_pages, page.start_index, page.end_index) == (5, 3, 2, 4)
    assert page.has_prev and page.has_next

    last = listing.paginate(records, page=99, page_size=2)
    assert last.page == 3
    assert len(last.items) == 1
    assert not last.has_next

    first = listing.paginate(records, page=0, page_size=2)
    assert first.page == 1


def test_paginate_empty_input() -> None:
    page = listing.paginate([], page=1, page_size=10)
    assert page.items == []
    assert page.total_pages == 0
    assert page.page == 1


def test_paginate_rejects_invalid_page_size(records) -> None:
    with pytest.raises(ValueError):
        listing.paginate(records, page_size=0)


def test_filter_sort_paginate_composes(records) -> None:
    filters = TeacherFilters(department="Mathematics")
    collected = []
    page_number = 1
    while True:
        page = listing.query_teachers(
            records,
            filters=filters,
            sort_field="teacher_id",
            sort_direction="desc",
            page=page_number,
            page_size=1,
        )
        collected.extend(page.items)
        if not page.has_next:
            break
        page_number += 1

    direct = listing.filter_teachers(records, "", filters)
    assert sorted(r["teacher_id"] for r in collected) == sorted(r["teacher_id"] for r in direct)


def test_filter_options_keep_first_seen_order(records) -> None:
    options = listing.filter_options(records)
    assert options.departments == ["Science", "Mathematics", "English"]
    assert options.zones == ["green", "yellow", "red"]
    assert options.statuses == ["Active", "On Leave", "Inactive"]


def test_summary_stats(records) -> None:
    assert listing.summary_stats(records) == {"departments": 3, "green": 2, "red": 2, "total": 5}
