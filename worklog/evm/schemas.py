"""EVM Pydantic v2 schemas — PV/AC series per project and per work type."""

from __future__ import annotations

import datetime as dt
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from worklog.common.constants import WorkType
from worklog.holidays.schemas import HolidayRecord
from worklog.time_entries.schemas import ProjectRef, TimeEntryRecord


# ═════════════════════════════════════════════════════════════════════
# Inputs
# ═════════════════════════════════════════════════════════════════════


class FixedTask(BaseModel):
    """Planned work pinned to a specific day."""

    model_config = ConfigDict(from_attributes=True)

    date: dt.date
    title: str
    estimated_minutes: int = Field(..., ge=0)
    project_id: str


class WorkTypeSeries(BaseModel):
    """Daily PV and AC hours of one work type, aligned to the days axis."""

    work_type: WorkType
    label: str
    pv_daily: List[float]
    ac_daily: List[float]
    bac_total: float = 0.0


class WorkTypeRatioRequest(BaseModel):
    year: int = Field(..., ge=1900, le=2999)
    month: int = Field(..., ge=1, le=12)
    days: List[dt.date]
    types: List[WorkTypeSeries]
    today: Optional[dt.date] = Field(
        None, description="Defaults to today in the configured timezone"
    )

    @model_validator(mode="after")
    def _series_match_days(self) -> "WorkTypeRatioRequest":
        expected = len(self.days)
        for series in self.types:
            if len(series.pv_daily) != expected or len(series.ac_daily) != expected:
                raise ValueError(
                    f"{series.work_type.value}: pv_daily and ac_daily must have "
                    f"{expected} values (one per day)"
                )
        return self


class RatioSeriesRequest(WorkTypeRatioRequest):
    mode: Literal["daily", "cumulative"] = "cumulative"


class SeriesBuildRequest(BaseModel):
    """Raw month data for building PV/AC series."""

    year: int = Field(..., ge=1900, le=2999)
    month: int = Field(..., ge=1, le=12)
    projects: List[ProjectRef] = []
    time_entries: List[TimeEntryRecord] = []
    fixed_tasks: List[FixedTask] = []
    holidays: List[HolidayRecord] = []
    estimated_hours: dict[str, float] = Field(
        default_factory=dict, description="project_id → estimated hours for the month"
    )


# ═════════════════════════════════════════════════════════════════════
# Outputs
# ═════════════════════════════════════════════════════════════════════


class Period(BaseModel):
    start: dt.date
    end: dt.date


class ProjectTotals(BaseModel):
    ac_hours: float = 0.0
    pv_hours: float = 0.0
    fixed_hours: float = 0.0
    estimated_hours: float = 0.0


class ProjectSeries(BaseModel):
    project_id: str
    project_name: str
    work_type: WorkType
    ac_series: List[float]
    pv_series: List[float]
    totals: ProjectTotals


class EvmResponse(BaseModel):
    period: Period
    days: List[dt.date]
    working_day_count: int = 0
    projects: List[ProjectSeries]


class WorkTypeReportResponse(BaseModel):
    period: Period
    days: List[dt.date]
    types: List[WorkTypeSeries]


class WorkTypeRatio(BaseModel):
    """Share of one work type in each ratio category, as percentages."""

    work_type: WorkType
    label: str
    pv_ratio: float = 0.0
    bac_ratio: float = 0.0
    ac_ratio: float = 0.0
    forecast_ratio: float = 0.0


class WorkTypeRatioResponse(BaseModel):
    snapshot_index: Optional[int] = None
    snapshot_date: Optional[dt.date] = None
    types: List[WorkTypeRatio] = []


class WorkTypeChartSeries(BaseModel):
    work_type: WorkType
    label: str
    pv_ratio: List[float]
    ac_ratio: List[float]
    bac_series: List[float]
    forecast_series: List[float]


class RatioSeriesResponse(BaseModel):
    mode: str
    days: List[dt.date]
    types: List[WorkTypeChartSeries]
