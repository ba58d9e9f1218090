"""Teacher record endpoints: list, create, update, table query and template."""
from __future__ import annotations

import logging
from typing import Annotated, List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from ..config import DEFAULT_PAGE_SIZE
from ..dependencies import get_db
from ..schemas import (
    TeacherCreate,
    TeacherRead,
    TeacherStats,
    TeacherTablePage,
    TeacherUpdate,
)
from ..services import csv_template, listing, teacher_records
from ..services.teacher_records import (
    DuplicateTeacherError,
    FailedExceedsEnrolledError,
    TeacherNotFoundError,
)

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/teachers", tags=["teachers"])

SORTABLE_FIELDS = frozenset(
    {
        "teacher_id",
        "first_name",
        "last_name",
        "department",
        "position",
        "status",
        "zone",
        "enrolled_students",
        "p1_percent",
        "p2_percent",
        "p3_percent",
        "created_at",
    }
)


def _read_all(db: Session) -> list[TeacherRead]:
    return [TeacherRead.model_validate(row) for row in teacher_records.list_teachers(db)]


@router.get("", response_model=List[TeacherRead])
def list_teachers(db: Session = Depends(get_db)) -> list[TeacherRead]:
    return _read_all(db)


@router.get("/table", response_model=TeacherTablePage)
def query_teacher_table(
    search: Annotated[str, Query(max_length=255)] = "",
    department: str = "",
    zone: str = "",
    status_filter: Annotated[str, Query(alias="status")] = "",
    sort: str | None = None,
    direction: Literal["asc", "desc"] = "asc",
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=500)] = DEFAULT_PAGE_SIZE,
    db: Session = Depends(get_db),
) -> TeacherTablePage:
    if sort is not None and sort not in SORTABLE_FIELDS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot sort by {sort!r}",
        )

    records = _read_all(db)
    result = listing.query_teachers(
        records,
        search=search,
        filters=listing.TeacherFilters(department=department, zone=zone, status=status_filter),
        sort_field=sort,
        sort_direction=direction,
        page=page,
        page_size=page_size,
    )
    return TeacherTablePage(
        items=result.items,
        page=result.page,
        page_size=result.page_size,
        total=result.total,
        total_pages=result.total_pages,
        start_index=result.start_index,
        end_index=result.end_index,
        unfiltered_total=len(records),
    )


@router.get("/stats", response_model=TeacherStats)
def teacher_stats(db: Session = Depends(get_db)) -> TeacherStats:
    return TeacherStats(**listing.summary_stats(_read_all(db)))


@router.get("/template")
def download_template(semester: str = "1st") -> Response:
    try:
        content = csv_template.build_template(semester)
        filename = csv_template.template_filename(semester)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/{record_id}", response_model=TeacherRead)
def get_teacher(record_id: int, db: Session = Depends(get_db)) -> TeacherRead:
    try:
        teacher = teacher_records.get_teacher(db, record_id)
    except TeacherNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return TeacherRead.model_validate(teacher)


@router.post("", response_model=TeacherRead, status_code=status.HTTP_201_CREATED)
def create_teacher(payload: TeacherCreate, db: Session = Depends(get_db)) -> TeacherRead:
    try:
        teacher = teacher_records.create_teacher(db, payload.model_dump())
    except DuplicateTeacherError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except FailedExceedsEnrolledError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return TeacherRead.model_validate(teacher)


@router.put("", response_model=TeacherRead)
def update_teacher(
    payload: TeacherUpdate,
    record_id: Annotated[int, Query(alias="id")],
    db: Session = Depends(get_db),
) -> TeacherRead:
    changes = payload.model_dump(exclude_unset=True)
    try:
        teacher = teacher_records.update_teacher(db, record_id, changes)
    except TeacherNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DuplicateTeacherError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except FailedExceedsEnrolledError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return TeacherRead.model_validate(teacher)


__all__ = ["router"]
