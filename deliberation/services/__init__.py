"""Convenient re-exports for the service layer."""
from __future__ import annotations

from .classifier import (
    Period,
    calc_percent,
    categorize,
    resolve_percent,
    resolve_zone,
    zone_from_category,
)
from .csv_import import (
    CsvImportError,
    InvalidFileTypeError,
    UnsupportedSpreadsheetError,
    UploadValidationError,
    check_upload,
    parse_teacher_csv,
)
from .csv_template import build_template, template_filename
from .listing import (
    Page,
    TeacherFilters,
    filter_options,
    filter_teachers,
    paginate,
    query_teachers,
    sort_teachers,
    summary_stats,
    toggle_sort,
)
from .reports import (
    build_report_csv,
    category_distribution,
    enrollment_totals,
    period_report,
    top_failure_percent,
)
from .teacher_records import (
    DuplicateTeacherError,
    FailedExceedsEnrolledError,
    TeacherNotFoundError,
    create_teacher,
    get_teacher,
    list_teachers,
    update_teacher,
    upsert_teachers,
)

__all__ = [
    "CsvImportError",
    "DuplicateTeacherError",
    "FailedExceedsEnrolledError",
    "InvalidFileTypeError",
    "Page",
    "Period",
    "TeacherFilters",
    "TeacherNotFoundError",
    "UnsupportedSpreadsheetError",
    "UploadValidationError",
    "build_report_csv",
    "build_template",
    "calc_percent",
    "categorize",
    "category_distribution",
    "check_upload",
    "create_teacher",
    "enrollment_totals",
    "filter_options",
    "filter_teachers",
    "get_teacher",
    "list_teachers",
    "paginate",
    "parse_teacher_csv",
    "period_report",
    "query_teachers",
    "resolve_percent",
    "resolve_zone",
    "sort_teachers",
    "summary_stats",
    "template_filename",
    "toggle_sort",
    "top_failure_percent",
    "update_teacher",
    "upsert_teachers",
    "zone_from_category",
]
