"""View model for the teacher management screen."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any

import requests

from ..client import ApiError, TeacherApiClient
from ..config import DEFAULT_PAGE_SIZE
from ..services import csv_template, listing
from ..services.csv_import import UploadValidationError, check_upload
from .notifications import NotificationLog

LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS = ("teacher_id", "first_name", "last_name", "department")


@dataclass(slots=True)
class TeacherForm:
    """Fields editable in the add and edit dialogs."""

    teacher_id: str = ""
    first_name: str = ""
    last_name: str = ""
    middle_name: str = ""
    email: str = ""
    department: str = ""
    position: str = ""
    status: str = "Active"
    zone: str = "green"
    notes: str = ""

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "TeacherForm":
        return cls(
            teacher_id=record.get("teacher_id") or "",
            first_name=record.get("first_name") or "",
            last_name=record.get("last_name") or "",
            middle_name=record.get("middle_name") or "",
            email=record.get("email") or "",
            department=record.get("department") or "",
            position=record.get("position") or "",
            status=record.get("status") or "Active",
            zone=record.get("zone") or "green",
            notes=record.get("notes") or "",
        )

    def is_complete(self) -> bool:
        return all(getattr(self, name).strip() for name in REQUIRED_FIELDS)

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)


class TeacherListView:
    """Holds the table state and derives the visible rows from fetched records."""

    def __init__(
        self,
        client: TeacherApiClient | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.client = client or TeacherApiClient()
        self.notifications = NotificationLog()
        self.records: list[dict[str, Any]] = []
        self.search = ""
        self.filters = listing.TeacherFilters()
        self.sort_field: str | None = None
        self.sort_direction: listing.SortDirection = "asc"
        self.page = 1
        self.page_size = page_size

    # -- data ---------------------------------------------------------------

    def refresh(self) -> list[dict[str, Any]]:
        """Refetch the full record set; failures leave an empty table."""

        try:
            data = self.client.list_teachers()
        except (ApiError, requests.RequestException) as exc:
            LOGGER.error("Error fetching teachers: %s", exc)
            self.records = []
            self.notifications.error("Error", "Failed to fetch teachers")
            return self.records

        if not isinstance(data, list):
            LOGGER.error("Invalid data format: %r", data)
            self.records = []
            self.notifications.error("Error", "Invalid data format received from server")
            return self.records

        self.records = data
        return self.records

    # -- derived state ------------------------------------------------------

    @property
    def filtered(self) -> list[dict[str, Any]]:
        return listing.filter_teachers(self.records, self.search, self.filters)

    @property
    def ordered(self) -> list[dict[str, Any]]:
        return listing.sort_teachers(self.filtered, self.sort_field, self.sort_direction)

    @property
    def current_page(self) -> listing.Page[dict[str, Any]]:
        return listing.paginate(self.ordered, self.page, self.page_size)

    @property
    def visible(self) -> list[dict[str, Any]]:
        return self.current_page.items

    @property
    def total_pages(self) -> int:
        return listing.total_pages(len(self.filtered), self.page_size)

    @property
    def filter_options(self) -> listing.FilterOptions:
        return listing.filter_options(self.records)

    @property
    def stats(self) -> dict[str, int]:
        return listing.summary_stats(self.records)

    # -- table controls -----------------------------------------------------

    def set_search(self, term: str) -> None:
        self.search = term
        self.page = 1

    def set_filters(self, **changes: str) -> None:
        self.filters = replace(self.filters, **changes)
        self.page = 1

    def clear_filters(self) -> None:
        self.filters = listing.TeacherFilters()
        self.search = ""
        self.page = 1

    def sort_by(self, field_name: str) -> None:
        self.sort_field, self.sort_direction = listing.toggle_sort(
            self.sort_field, self.sort_direction, field_name
        )

    def set_page(self, page: int) -> None:
        self.page = min(max(page, 1), max(self.total_pages, 1))

    def next_page(self) -> None:
        self.set_page(self.page + 1)

    def prev_page(self) -> None:
        self.set_page(self.page - 1)

    def set_page_size(self, size: int) -> None:
        if size < 1:
            raise ValueError("page size must be at least 1")
        self.page_size = size
        self.page = 1

    # -- dialogs ------------------------------------------------------------

    def add_teacher(self, form: TeacherForm) -> bool:
        if not form.is_complete():
            self.notifications.error("Error", "Please fill in all required fields")
            return False
        try:
            self.client.create_teacher(form.to_payload())
        except (ApiError, requests.RequestException) as exc:
            LOGGER.error("Error adding teacher: %s", exc)
            self.notifications.error("Error", "Failed to add teacher")
            return False
        self.notifications.success("Success", "Teacher added successfully")
        self.refresh()
        return True

    def update_teacher(self, record: dict[str, Any] | None, form: TeacherForm) -> bool:
        if record is None or not form.is_complete():
            self.notifications.error("Error", "Please fill in all required fields")
            return False
        try:
            self.client.update_teacher(record["id"], form.to_payload())
        except (ApiError, requests.RequestException) as exc:
            LOGGER.error("Error updating teacher: %s", exc)
            self.notifications.error("Error", "Failed to update teacher")
            return False
        self.notifications.success("Success", "Teacher updated successfully")
        self.refresh()
        return True

    # -- bulk import --------------------------------------------------------

    def upload(self, path: Path, content_type: str | None = None) -> bool:
        try:
            check_upload(path.name, content_type)
        except UploadValidationError as exc:
            title = "Excel file not supported" if exc.instructions else "Invalid file type"
            self.notifications.error(title, exc.message, tuple(exc.instructions or ()))
            return False

        try:
            result = self.client.upload_csv(path)
        except ApiError as exc:
            if exc.instructions:
                self.notifications.error(
                    "Excel file not supported",
                    exc.error or "Unsupported file",
                    tuple(exc.instructions),
                )
            else:
                self.notifications.error("Upload failed", exc.error or "Failed to upload file")
            return False
        except requests.RequestException as exc:
            LOGGER.error("Upload failed: %s", exc)
            self.notifications.error("Upload failed", "Network error occurred during upload")
            return False
        except OSError as exc:
            LOGGER.error("Could not read %s: %s", path, exc)
            self.notifications.error("Upload failed", f"Could not read {path.name}")
            return False

        if not isinstance(result, dict) or not result.get("success"):
            error = result.get("error") if isinstance(result, dict) else None
            self.notifications.error("Upload failed", error or "Failed to upload file")
            return False

        self.notifications.success("Upload successful", result.get("message", ""))
        self.refresh()
        return True

    def download_template(self, semester: str, directory: Path) -> Path:
        destination = directory / csv_template.template_filename(semester)
        destination.write_text(csv_template.build_template(semester), encoding="utf-8")
        LOGGER.info("Wrote template %s", destination)
        return destination


__all__ = ["REQUIRED_FIELDS", "TeacherForm", "TeacherListView"]
