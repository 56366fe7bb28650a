"""Weekly reports router — text formatting for report submission."""

from datetime import date

from fastapi import APIRouter, Query

from worklog.weekly_reports.schemas import (
    WeekRangeResponse,
    WeeklyReportFormatRequest,
    WeeklyReportFormatResponse,
)
from worklog.weekly_reports.service import WeeklyReportService

router = APIRouter()


# ── POST /format ────────────────────────────────────────────────────

@router.post("/format", response_model=WeeklyReportFormatResponse)
async def format_report(body: WeeklyReportFormatRequest):
    """Convert to full-width and wrap at the report's column width."""
    return WeeklyReportService.format_weekly_report(body.text, body.width)


# ── GET /week ───────────────────────────────────────────────────────

@router.get("/week", response_model=WeekRangeResponse)
async def week_range(day: date = Query(..., description="Any day in the week")):
    start, end = WeeklyReportService.week_range(day)
    return WeekRangeResponse(week_start=start, week_end=end)
