"""HTTP client for the teacher API used by the dashboard view models."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import requests

from .config import API_BASE_URL, REQUEST_TIMEOUT

LOGGER = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the API answers with a non-success status."""

    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed with status {status_code}")

    @property
    def error(self) -> str | None:
        if isinstance(self.body, dict):
            return self.body.get("error") or self.body.get("detail")
        return None

    @property
    def instructions(self) -> list[str] | None:
        if isinstance(self.body, dict):
            return self.body.get("instructions")
        return None


class TeacherApiClient:
    """Minimal wrapper around the teacher, report and upload endpoints."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _decode(self, response: requests.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            body = response.text
        if not response.ok:
            raise ApiError(response.status_code, body)
        return body

    def list_teachers(self) -> Any:
        response = self.session.get(self._url("teachers"), timeout=self.timeout)
        return self._decode(response)

    def create_teacher(self, payload: dict[str, Any]) -> Any:
        response = self.session.post(self._url("teachers"), json=payload, timeout=self.timeout)
        return self._decode(response)

    def update_teacher(self, record_id: int, payload: dict[str, Any]) -> Any:
        response = self.session.put(
            self._url("teachers"),
            params={"id": record_id},
            json=payload,
            timeout=self.timeout,
        )
        return self._decode(response)

    def upload_csv(self, path: Path, upload_type: str = "teachers") -> Any:
        with path.open("rb") as handle:
            response = self.session.post(
                self._url("upload"),
                files={"file": (path.name, handle, "text/csv")},
                data={"type": upload_type},
                timeout=self.timeout,
            )
        return self._decode(response)


__all__ = ["ApiError", "TeacherApiClient"]
