"""Route handling CSV bulk uploads of teacher performance records."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..config import IMPORT_DEFAULT_DEPARTMENT
from ..dependencies import get_db
from ..schemas import UploadFailure, UploadSuccess
from ..services.csv_import import (
    CsvImportError,
    RowError,
    UploadValidationError,
    check_upload,
    parse_teacher_csv,
)
from ..services.teacher_records import upsert_teachers

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])

SUPPORTED_UPLOAD_TYPES = frozenset({"teachers"})


def _failure(error: str, instructions: list[str] | None = None, code: int = status.HTTP_400_BAD_REQUEST) -> JSONResponse:
    body = UploadFailure(error=error, instructions=instructions)
    return JSONResponse(status_code=code, content=body.model_dump(exclude_none=True))


@router.post("/upload")
async def upload_records(
    file: UploadFile = File(...),
    type: str = Form(...),
    db: Session = Depends(get_db),
):
    if type not in SUPPORTED_UPLOAD_TYPES:
        return _failure(f"Unsupported upload type {type!r}")

    try:
        check_upload(file.filename, file.content_type)
    except UploadValidationError as exc:
        LOGGER.info("Rejected upload %s: %s", file.filename, exc.message)
        return _failure(exc.message, exc.instructions)

    content = await file.read()
    try:
        parsed = parse_teacher_csv(content)
    except CsvImportError as exc:
        return _failure(str(exc))

    if not parsed.rows:
        detail = "; ".join(str(error) for error in parsed.errors) or "No teacher rows found"
        return _failure(f"No valid rows to import: {detail}")

    try:
        outcome = upsert_teachers(
            db, parsed.rows, defaults={"department": IMPORT_DEFAULT_DEPARTMENT}
        )
    except Exception:  # noqa: BLE001 - convert to a consistent error body
        db.rollback()
        LOGGER.exception("Teacher import failed for %s", file.filename)
        return _failure("Failed to import teachers", code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    errors = parsed.errors + [
        RowError(parsed.lines[index], reason) for index, reason in outcome.rejected
    ]
    errors.sort(key=lambda error: error.line)
    imported = len(outcome.created) + len(outcome.updated)
    if not imported:
        db.rollback()
        detail = "; ".join(str(error) for error in errors)
        return _failure(f"No valid rows to import: {detail}")

    try:
        db.commit()
    except Exception:  # noqa: BLE001 - convert to a consistent error body
        db.rollback()
        LOGGER.exception("Teacher import failed for %s", file.filename)
        return _failure("Failed to import teachers", code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    message = (
        f"Imported {imported} teachers "
        f"({len(outcome.created)} created, {len(outcome.updated)} updated)"
    )
    if errors:
        message += f"; skipped {len(errors)} row(s)"
    LOGGER.info("Upload %s: %s", file.filename, message)
    return UploadSuccess(
        message=message,
        created=len(outcome.created),
        updated=len(outcome.updated),
        skipped=[str(error) for error in errors],
    )


__all__ = ["router"]
