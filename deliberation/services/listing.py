"""Search, filter, sort and pagination helpers for the teacher table."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Literal, Sequence, TypeVar

T = TypeVar("T")

SortDirection = Literal["asc", "desc"]

TEXT_SORT_FIELDS = frozenset(
    {
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
    }
)
NAME_SORT_FIELDS = frozenset({"first_name", "last_name"})


def _get(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def full_name(record: Any) -> str:
    return f"{_get(record, 'first_name') or ''} {_get(record, 'last_name') or ''}"


@dataclass(frozen=True, slots=True)
class TeacherFilters:
    """Exact-match filters; empty values match everything."""

    department: str = ""
    zone: str = ""
    status: str = ""

    def matches(self, record: Any) -> bool:
        if self.department and _get(record, "department") != self.department:
            return False
        if self.zone and _get(record, "zone") != self.zone:
            return False
        if self.status and _get(record, "status") != self.status:
            return False
        return True


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    page_size: int
    total: int
    total_pages: int
    start_index: int
    end_index: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


@dataclass(slots=True)
class FilterOptions:
    departments: list[str] = field(default_factory=list)
    zones: list[str] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)


def matches_search(record: Any, search: str) -> bool:
    term = search.strip().lower()
    if not term:
        return True
    haystacks = (
        full_name(record),
        str(_get(record, "teacher_id") or ""),
        str(_get(record, "department") or ""),
    )
    return any(term in value.lower() for value in haystacks)


def filter_teachers(
    records: Iterable[T],
    search: str = "",
    filters: TeacherFilters | None = None,
) -> list[T]:
    active = filters or TeacherFilters()
    return [
        record
        for record in records
        if matches_search(record, search) and active.matches(record)
    ]


def _sort_key(field_name: str):
    def key(record: Any) -> tuple[int, Any]:
        if field_name in NAME_SORT_FIELDS:
            value: Any = full_name(record).lower()
        else:
            value = _get(record, field_name)
            if isinstance(value, str) and field_name in TEXT_SORT_FIELDS:
                value = value.lower()
        # Missing values sort ahead of everything else.
        if value is None:
            return (0, 0)
        return (1, value)

    return key


def sort_teachers(
    records: Iterable[T],
    field_name: str | None,
    direction: SortDirection = "asc",
) -> list[T]:
    """Stable single-field sort; ``None`` leaves the input order untouched."""

    items = list(records)
    if not field_name:
        return items
    return sorted(items, key=_sort_key(field_name), reverse=direction == "desc")


def toggle_sort(
    current_field: str | None,
    current_direction: SortDirection,
    field_name: str,
) -> tuple[str, SortDirection]:
    """Flip direction when re-sorting by the same field, else start ascending."""

    if current_field == field_name:
        return field_name, "desc" if current_direction == "asc" else "asc"
    return field_name, "asc"


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if total else 0


def paginate(records: Sequence[T], page: int = 1, page_size: int = 10) -> Page[T]:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total = len(records)
    pages = total_pages(total, page_size)
    current = min(max(page, 1), max(pages, 1))
    start = (current - 1) * page_size
    end = min(start + page_size, total)
    return Page(
        items=list(records[start:end]),
        page=current,
        page_size=page_size,
        total=total,
        total_pages=pages,
        start_index=start,
        end_index=end,
    )


def query_teachers(
    records: Sequence[T],
    *,
    search: str = "",
    filters: TeacherFilters | None = None,
    sort_field: str | None = None,
    sort_direction: SortDirection = "asc",
    page: int = 1,
    page_size: int = 10,
) -> Page[T]:
    """Filter, then sort, then paginate ``records``."""

    filtered = filter_teachers(records, search, filters)
    ordered = sort_teachers(filtered, sort_field, sort_direction)
    return paginate(ordered, page, page_size)


def _distinct(records: Iterable[Any], name: str) -> list[str]:
    seen: dict[str, None] = {}
    for record in records:
        value = _get(record, name)
        if value:
            seen.setdefault(value, None)
    return list(seen)


def filter_options(records: Sequence[Any]) -> FilterOptions:
    return FilterOptions(
        departments=_distinct(records, "department"),
        zones=_distinct(records, "zone"),
        statuses=_distinct(records, "status"),
    )


def summary_stats(records: Sequence[Any]) -> dict[str, int]:
    """Department count plus green/red zone head-counts."""

    return {
        "departments": len({_get(record, "department") for record in records}),
        "green": sum(1 for record in records if _get(record, "zone") == "green"),
        "red": sum(1 for record in records if _get(record, "zone") == "red"),
        "total": len(records),
    }


__all__ = [
    "FilterOptions",
    "Page",
    "SortDirection",
    "TeacherFilters",
    "filter_options",
    "filter_teachers",
    "full_name",
    "matches_search",
    "paginate",
    "query_teachers",
    "sort_teachers",
    "summary_stats",
    "toggle_sort",
    "total_pages",
]
