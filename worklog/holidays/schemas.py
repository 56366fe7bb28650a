"""Holiday Pydantic v2 schemas — calendar records and derived counts."""

from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from worklog.common.constants import HolidayType


# ═════════════════════════════════════════════════════════════════════
# Holiday record
# ═════════════════════════════════════════════════════════════════════


class HolidayRecord(BaseModel):
    """One non-working calendar date. At most one record per date."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    date: date
    name: str = Field(..., min_length=1, max_length=100)
    type: HolidayType
    fiscal_year: str = Field(..., pattern=r"^FY\d{2}$")


# ═════════════════════════════════════════════════════════════════════
# Fiscal year
# ═════════════════════════════════════════════════════════════════════


class FiscalYearResponse(BaseModel):
    year: int
    month: int
    fiscal_year: str


# ═════════════════════════════════════════════════════════════════════
# Working days
# ═════════════════════════════════════════════════════════════════════


class WorkingDaysRequest(BaseModel):
    """Holidays of one fiscal year; records of other years are ignored."""

    fiscal_year: str = Field(..., pattern=r"^FY\d{2}$")
    holidays: List[HolidayRecord] = []


class WorkingDaysResponse(BaseModel):
    fiscal_year: str
    working_days: dict[int, int] = Field(
        ..., description="Month number (1-12) → working-day count, fiscal order"
    )


# ═════════════════════════════════════════════════════════════════════
# Stats / bulk validation
# ═════════════════════════════════════════════════════════════════════


class HolidayListRequest(BaseModel):
    holidays: List[HolidayRecord] = []


class HolidayStatsResponse(BaseModel):
    weekend_count: int = 0
    public_holiday_count: int = 0
    special_holiday_count: int = 0
    paid_leave_count: int = 0
    annual_holiday_count: int = Field(
        0, description="Weekend + public + special holidays (paid leave excluded)"
    )


class BulkValidationResponse(BaseModel):
    message: str
    count: int
    holidays: List[HolidayRecord]
