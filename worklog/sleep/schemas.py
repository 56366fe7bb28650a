"""Sleep Pydantic v2 schemas."""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from worklog.attendance.schemas import AttendanceRecord


class SleepStatisticsRequest(BaseModel):
    year: int = Field(..., ge=1900, le=2999)
    month: int = Field(..., ge=1, le=12)
    attendances: List[AttendanceRecord] = []


class DailySleep(BaseModel):
    date: dt.date
    hours: Optional[float] = None


class WeekdayAverage(BaseModel):
    weekday: str
    average_hours: float = 0.0


class SleepStatistics(BaseModel):
    year: int
    month: int
    daily: List[DailySleep]
    recorded_count: int = 0
    missing_count: int = 0
    total_hours: float = 0.0
    average_hours: float = 0.0
    max_hours: float = 0.0
    min_hours: float = 0.0
    hit_rate: float = Field(0.0, description="% of recorded days at or above target")
    recent_average: float = 0.0
    weekday_averages: List[WeekdayAverage] = Field(
        default_factory=list, description="Sunday first"
    )
