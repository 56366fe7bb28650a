"""Kadmin Pydantic v2 schemas — yearly project work-hours sheet."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

WorkHoursField = Literal["estimated_hours", "actual_hours", "overtime_hours", "working_days"]


# ═════════════════════════════════════════════════════════════════════
# Inputs
# ═════════════════════════════════════════════════════════════════════


class KadminProject(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    code: Optional[str] = None
    name: str
    is_active: bool = True


class WorkHoursRecord(BaseModel):
    """Hours of one project in one fiscal month. Unique per (project, FY, month)."""

    model_config = ConfigDict(from_attributes=True)

    project_id: str
    fiscal_year: str = Field(..., pattern=r"^FY\d{2}$")
    month: int = Field(..., ge=1, le=12)
    estimated_hours: float = 0.0
    actual_hours: float = 0.0
    overtime_hours: float = 0.0
    working_days: int = Field(0, ge=0)


class VacationHoursRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fiscal_year: str = Field(..., pattern=r"^FY\d{2}$")
    month: int = Field(..., ge=1, le=12)
    hours: float = Field(0, ge=0)


class KadminRequest(BaseModel):
    fiscal_year: str = Field(..., pattern=r"^FY\d{2}$")
    projects: List[KadminProject] = []
    work_hours: List[WorkHoursRecord] = []
    vacations: List[VacationHoursRecord] = []
    working_days: dict[int, int] = Field(
        default_factory=dict, description="Explicit month → working days"
    )
    default_working_days: Optional[dict[int, int]] = Field(
        None, description="Fallback table; the FY25 sheet values when omitted"
    )


class ParseNumbersRequest(BaseModel):
    values: List[Optional[str]]


# ═════════════════════════════════════════════════════════════════════
# Outputs
# ═════════════════════════════════════════════════════════════════════


class ProjectYearTotal(BaseModel):
    project_id: str
    project_name: str
    estimated_hours: float = 0.0
    actual_hours: float = 0.0
    recorded_overtime_hours: float = 0.0


class MonthTotal(BaseModel):
    month: int
    estimated_hours: float = 0.0
    actual_hours: float = 0.0
    recorded_overtime_hours: float = Field(0.0, description="Sum of the sheet's overtime column")
    working_days: int = 0
    standard_hours: float = 0.0
    vacation_hours: float = 0.0
    overtime_hours: float = Field(0.0, description="Actual minus (standard minus vacation)")


class KadminSummaryResponse(BaseModel):
    fiscal_year: str
    projects: List[ProjectYearTotal]
    months: List[MonthTotal]
    grand_estimated_hours: float = 0.0
    grand_actual_hours: float = 0.0
    grand_recorded_overtime_hours: float = 0.0
    vacation_total: float = 0.0
    year_standard_hours: float = 0.0
    year_overtime_hours: float = 0.0


class ParseNumbersResponse(BaseModel):
    values: List[float]
