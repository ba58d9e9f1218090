"""Pydantic schemas shared across the deliberation service."""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ZoneName = Literal["green", "yellow", "red"]
StatusName = Literal["Active", "Inactive", "On Leave"]
PERIOD_NAMES = ("p1", "p2", "p3")


# ---------------------------------------------------------------------------
# Teacher records
# ---------------------------------------------------------------------------


class PeriodFields(BaseModel):
    """Optional enrollment and per-period failure fields."""

    enrolled_students: Optional[int] = Field(default=None, ge=0)
    p1_failed: Optional[int] = Field(default=None, ge=0)
    p1_percent: Optional[float] = None
    p1_category: Optional[str] = None
    p2_failed: Optional[int] = Field(default=None, ge=0)
    p2_percent: Optional[float] = None
    p2_category: Optional[str] = None
    p3_failed: Optional[int] = Field(default=None, ge=0)
    p3_percent: Optional[float] = None
    p3_category: Optional[str] = None


class PeriodMetrics(PeriodFields):
    """Period fields as submitted by clients; failed counts are bounded."""

    @model_validator(mode="after")
    def validate_failed_within_enrolled(self):
        enrolled = self.enrolled_students
        if enrolled is None:
            return self
        for period in PERIOD_NAMES:
            failed = getattr(self, f"{period}_failed")
            if failed is not None and failed > enrolled:
                raise ValueError(
                    f"{period}_failed ({failed}) cannot exceed enrolled_students ({enrolled})"
                )
        return self


class TeacherBase(PeriodMetrics):
    teacher_id: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    middle_name: Optional[str] = None
    email: Optional[str] = None
    department: str = Field(..., min_length=1)
    position: Optional[str] = None
    status: StatusName = "Active"
    zone: ZoneName = "green"
    notes: Optional[str] = None

    @field_validator("teacher_id", "first_name", "last_name", "department")
    @classmethod
    def validate_required_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("field is required")
        return value

    @field_validator("middle_name", "email", "position", "notes")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class TeacherCreate(TeacherBase):
    pass


class TeacherUpdate(TeacherBase):
    pass


class TeacherRead(PeriodFields):
    """Stored record as returned by the API; write-side rules are not re-applied."""

    id: int
    teacher_id: str
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    email: Optional[str] = None
    department: str
    position: Optional[str] = None
    status: str = "Active"
    zone: str = "green"
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TeacherStats(BaseModel):
    departments: int
    green: int
    red: int
    total: int


class TeacherTablePage(BaseModel):
    items: List[TeacherRead]
    page: int
    page_size: int
    total: int
    total_pages: int
    start_index: int
    end_index: int
    unfiltered_total: int


# ---------------------------------------------------------------------------
# Upload
# ---------------------------------------------------------------------------


class UploadSuccess(BaseModel):
    success: bool = True
    message: str
    created: int = 0
    updated: int = 0
    skipped: List[str] = Field(default_factory=list)


class UploadFailure(BaseModel):
    error: str
    instructions: Optional[List[str]] = None


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class TopPercentRow(BaseModel):
    name: str
    teacher_id: str
    percent: float
    color: str


class EnrollmentTotals(BaseModel):
    label: str
    enrolled: int
    failed: int


class CategorySlice(BaseModel):
    name: Literal["GREEN", "YELLOW", "RED"]
    value: int
    color: str


class PeriodReport(BaseModel):
    period: Literal["P1", "P2", "P3"]
    generated_at: datetime
    top_percent: List[TopPercentRow]
    totals: EnrollmentTotals
    distribution: List[CategorySlice]


__all__ = [
    "CategorySlice",
    "EnrollmentTotals",
    "PeriodFields",
    "PeriodMetrics",
    "PeriodReport",
    "StatusName",
    "TeacherBase",
    "TeacherCreate",
    "TeacherRead",
    "TeacherStats",
    "TeacherTablePage",
    "TeacherUpdate",
    "TopPercentRow",
    "UploadFailure",
    "UploadSuccess",
    "ZoneName",
]
