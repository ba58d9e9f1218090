"""View model for the teacher reports screen."""
from __future__ import annotations

import logging
from typing import Any

import requests

from ..client import ApiError, TeacherApiClient
from ..config import TOP_REPORT_LIMIT
from ..services import reports
from ..services.classifier import Period

LOGGER = logging.getLogger(__name__)


class TeacherReportsView:
    """Fetches records once and recomputes chart series on period change."""

    def __init__(self, client: TeacherApiClient | None = None, period: Period = Period.P1) -> None:
        self.client = client or TeacherApiClient()
        self.period = period
        self.records: list[dict[str, Any]] = []

    def load(self) -> list[dict[str, Any]]:
        try:
            data = self.client.list_teachers()
        except (ApiError, requests.RequestException) as exc:
            LOGGER.error("Error fetching teachers for reports: %s", exc)
            data = []
        self.records = data if isinstance(data, list) else []
        return self.records

    def set_period(self, period: Period | str) -> None:
        self.period = reports.coerce_period(period)

    @property
    def top_percent(self) -> list[dict]:
        return reports.top_failure_percent(self.records, self.period, TOP_REPORT_LIMIT)

    @property
    def totals(self) -> dict:
        return reports.enrollment_totals(self.records, self.period)

    @property
    def distribution(self) -> list[dict]:
        return reports.category_distribution(self.records, self.period)


__all__ = ["TeacherReportsView"]
