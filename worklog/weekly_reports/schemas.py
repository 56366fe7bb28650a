"""Weekly report Pydantic v2 schemas."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class WeeklyReportFormatRequest(BaseModel):
    text: str
    width: Optional[int] = Field(
        None, ge=2, description="Display columns; defaults to WEEKLY_REPORT_COLUMNS"
    )


class WeeklyReportFormatResponse(BaseModel):
    text: str
    lines: List[str]
    line_count: int


class WeekRangeResponse(BaseModel):
    week_start: date
    week_end: date
