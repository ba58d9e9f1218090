"""Tests for the requests-based API client."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from deliberation.client import ApiError, TeacherApiClient


class FakeResponse:
    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self._body = body
        self.text = str(body)

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    def __init__(self, response: FakeResponse) -> None:
        self.response = response
        self.requests: list[tuple[str, str, dict]] = []

    def _record(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.requests.append((method, url, kwargs))
        return self.response

    def get(self, url, **kwargs):
        return self._record("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._record("POST", url, **kwargs)

    def put(self, url, **kwargs):
        return self._record("PUT", url, **kwargs)


def test_list_teachers_builds_url() -> None:
    session = FakeSession(FakeResponse(200, [{"id": 1}]))
    client = TeacherApiClient("http://api.local/", session=session, timeout=3)

    assert client.list_teachers() == [{"id": 1}]
    method, url, kwargs = session.requests[0]
    assert (method, url, kwargs["timeout"]) == ("GET", "http://api.local/teachers", 3)


def test_update_sends_id_as_query_parameter() -> None:
    session = FakeSession(FakeResponse(200, {"id": 7}))
    client = TeacherApiClient("http://api.local", session=session)

    client.update_teacher(7, {"department": "Science"})

    method, url, kwargs = session.requests[0]
    assert method == "PUT"
    assert url == "http://api.local/teachers"
    assert kwargs["params"] == {"id": 7}
    assert kwargs["json"] == {"department": "Science"}


def test_error_status_raises_with_body() -> None:
    session = FakeSession(FakeResponse(400, {"error": "bad", "instructions": ["x"]}))
    client = TeacherApiClient("http://api.local", session=session)

    with pytest.raises(ApiError) as exc_info:
        client.create_teacher({})
    assert exc_info.value.status_code == 400
    assert exc_info.value.error == "bad"
    assert exc_info.value.instructions == ["x"]


def test_non_json_error_body() -> None:
    session = FakeSession(FakeResponse(502, ValueError("not json")))
    client = TeacherApiClient("http://api.local", session=session)

    with pytest.raises(ApiError) as exc_info:
        client.list_teachers()
    assert exc_info.value.error is None


def test_upload_posts_file_and_type(tmp_path: Path) -> None:
    path = tmp_path / "teachers.csv"
    path.write_text("FacultyNo,FacultyName\n", encoding="utf-8")
    session = FakeSession(FakeResponse(200, {"success": True, "message": "ok"}))
    client = TeacherApiClient("http://api.local", session=session)

    assert client.upload_csv(path)["success"] is True
    method, url, kwargs = session.requests[0]
    assert url == "http://api.local/upload"
    assert kwargs["data"] == {"type": "teachers"}
    assert kwargs["files"]["file"][0] == "teachers.csv"
