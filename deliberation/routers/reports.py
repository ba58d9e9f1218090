"""Per-period report endpoints backing the charts screen."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ..config import TOP_REPORT_LIMIT
from ..dependencies import get_db
from ..schemas import PeriodReport
from ..services import reports as reports_service
from ..services.teacher_records import list_teachers

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/teachers")
def get_teacher_report(
    period: str = "P1",
    format: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        summary = reports_service.period_report(list_teachers(db), period, TOP_REPORT_LIMIT)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if format is None:
        return PeriodReport(**summary)

    if format.lower() == "csv":
        csv_data = reports_service.build_report_csv(summary).encode("utf-8")
        filename = f"teacher_report_{summary['period'].lower()}"
        return StreamingResponse(
            iter([csv_data]),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}.csv"},
        )

    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unsupported format. Use csv.")


__all__ = ["router"]
