"""Attendance router — monthly summary, daily breakdown, CSV export.

Endpoints are stateless: attendance rows arrive in the request body.
"""

from fastapi import APIRouter
from fastapi.responses import Response

from worklog.attendance.schemas import (
    AttendanceExportRequest,
    DailyBreakdownRequest,
    DailyBreakdownResponse,
    MonthlySummary,
    MonthlySummaryRequest,
    WorkingHoursRequest,
    WorkingHoursResponse,
)
from worklog.attendance.service import AttendanceService

router = APIRouter()


# ── POST /monthly-summary ───────────────────────────────────────────

@router.post("/monthly-summary", response_model=MonthlySummary)
async def monthly_summary(body: MonthlySummaryRequest):
    """Worked days/hours, overtime and month-end forecast for one month."""
    return AttendanceService.monthly_summary(
        body.attendances, body.working_days, body.vacation_hours,
    )


# ── POST /daily-breakdown ───────────────────────────────────────────

@router.post("/daily-breakdown", response_model=DailyBreakdownResponse)
async def daily_breakdown(body: DailyBreakdownRequest):
    """Per-day worked minutes and tracked seconds for a month or week."""
    return AttendanceService.daily_breakdown(
        body.year, body.month, body.attendances, body.time_entries, period=body.period,
    )


# ── POST /working-hours ─────────────────────────────────────────────

@router.post("/working-hours", response_model=WorkingHoursResponse)
async def working_hours(body: WorkingHoursRequest):
    """Hours worked so far today, after recorded and tracked breaks."""
    hours, break_minutes = AttendanceService.working_hours_today(
        body.attendance, body.time_entries, now=body.now,
    )
    return WorkingHoursResponse(working_hours=hours, break_minutes=break_minutes)


# ── POST /export ────────────────────────────────────────────────────

@router.post("/export")
async def export_csv(body: AttendanceExportRequest):
    """Download attendance rows as CSV."""
    return Response(
        content=AttendanceService.to_csv(body.attendances),
        media_type="text/csv",
        headers={
            "Content-Disposition": (
                f'attachment; filename="attendance_{body.year}_{body.month}.csv"'
            ),
        },
    )
