"""Attendance Pydantic v2 schemas — request / response validation.

Naming conventions:
  - *Record           → snapshots supplied by the caller
  - *Request          → request bodies
  - *Response / *Summary → derived values
"""


from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from worklog.common.timestamps import ensure_aware
from worklog.time_entries.schemas import TimeEntryRecord


# ═════════════════════════════════════════════════════════════════════
# Attendance record
# ═════════════════════════════════════════════════════════════════════


class AttendanceRecord(BaseModel):
    """One day's clock-in / clock-out."""

    model_config = ConfigDict(from_attributes=True)

    date: date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    break_minutes: int = Field(0, ge=0)
    work_mode: Optional[str] = Field(None, max_length=50)
    sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    note: Optional[str] = None

    @field_validator("clock_in", "clock_out")
    @classmethod
    def attach_local_zone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v)


# ═════════════════════════════════════════════════════════════════════
# Monthly summary
# ═════════════════════════════════════════════════════════════════════


class MonthlySummaryRequest(BaseModel):
    """Attendance of one month plus that month's working days and vacation."""

    attendances: List[AttendanceRecord] = []
    working_days: Optional[int] = Field(
        None, ge=0, description="Unknown working days → no standard/expected hours"
    )
    vacation_hours: float = Field(0, ge=0)


class MonthlySummary(BaseModel):
    """Worked time against the month's standard hours, with a linear forecast."""

    worked_days: int = 0
    total_minutes: int = 0
    standard_hours: Optional[float] = None
    expected_hours: Optional[float] = None
    actual_hours: float = 0.0
    overtime_hours: Optional[float] = None
    forecast_actual_hours: Optional[float] = None
    forecast_overtime_hours: Optional[float] = None
    vacation_hours: float = 0.0


# ═════════════════════════════════════════════════════════════════════
# Daily breakdown (report)
# ═════════════════════════════════════════════════════════════════════


class DailyBreakdownRequest(BaseModel):
    year: int = Field(..., ge=1900, le=2999)
    month: int = Field(..., ge=1, le=12)
    period: Literal["month", "week"] = "month"
    attendances: List[AttendanceRecord] = []
    time_entries: List[TimeEntryRecord] = []


class DailyBreakdownRow(BaseModel):
    date: date
    day_of_week: str
    working_minutes: int = 0
    tracked_seconds: int = 0
    has_attendance: bool = False


class ReportSummary(BaseModel):
    total_working_minutes: int = 0
    total_tracked_seconds: int = 0
    worked_days: int = 0
    total_days: int = 0


class ReportPeriod(BaseModel):
    start: date
    end: date
    type: str


class DailyBreakdownResponse(BaseModel):
    period: ReportPeriod
    daily_data: List[DailyBreakdownRow]
    summary: ReportSummary


# ═════════════════════════════════════════════════════════════════════
# Export / today
# ═════════════════════════════════════════════════════════════════════


class AttendanceExportRequest(BaseModel):
    year: int = Field(..., ge=1900, le=2999)
    month: int = Field(..., ge=1, le=12)
    attendances: List[AttendanceRecord] = []


class WorkingHoursRequest(BaseModel):
    """In-progress day: open clock-out counts up to ``now``."""

    attendance: Optional[AttendanceRecord] = None
    time_entries: List[TimeEntryRecord] = []
    now: Optional[datetime] = None

    @field_validator("now")
    @classmethod
    def attach_local_zone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v)


class WorkingHoursResponse(BaseModel):
    working_hours: Optional[float] = None
    break_minutes: int = 0
