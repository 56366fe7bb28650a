"""Attendance service layer — monthly summary, daily breakdown, CSV export.

Business logic:
  - Worked minutes per day = floor((clock-out − clock-in) / 1 min) − break
  - Negative results from malformed records are surfaced, not corrected
  - Standard hours = working days × 7.5; expected = standard − vacation
  - Month-end forecast assumes the per-worked-day rate so far continues
"""

from __future__ import annotations

import csv
import io
import logging
import math
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from worklog.attendance.schemas import (
    AttendanceRecord,
    DailyBreakdownResponse,
    DailyBreakdownRow,
    MonthlySummary,
    ReportPeriod,
    ReportSummary,
)
from worklog.common.constants import DATE_FORMAT, TIME_FORMAT
from worklog.common.fiscal import days_in_month
from worklog.common.series import safe_divide
from worklog.common.timestamps import ensure_aware
from worklog.config import settings
from worklog.time_entries.schemas import TimeEntryRecord
from worklog.time_entries.service import TimeEntryService

logger = logging.getLogger(__name__)

# ── Constants ───────────────────────────────────────────────────────

CSV_HEADER = ("Date", "Clock In", "Clock Out", "Break (min)", "Working Hours", "Note")


# ═════════════════════════════════════════════════════════════════════
# AttendanceService
# ═════════════════════════════════════════════════════════════════════


class AttendanceService:
    """Pure attendance calculations: summary, breakdown, export."""

    # ── Helpers ─────────────────────────────────────────────────────

    @staticmethod
    def is_closed(record: AttendanceRecord) -> bool:
        return record.clock_in is not None and record.clock_out is not None

    @staticmethod
    def working_minutes(record: AttendanceRecord) -> int:
        """Worked minutes of a closed day; 0 while the day is still open."""
        if not AttendanceService.is_closed(record):
            return 0
        elapsed = (record.clock_out - record.clock_in).total_seconds()
        return math.floor(elapsed / 60) - record.break_minutes

    @staticmethod
    def _period_bounds(year: int, month: int, period: str) -> tuple[date, date]:
        if period == "week":
            # Monday-start week containing the 1st of the month
            first = date(year, month, 1)
            start = first - timedelta(days=first.weekday())
            return start, start + timedelta(days=6)
        return date(year, month, 1), date(year, month, days_in_month(year, month))

    # ── Monthly summary ─────────────────────────────────────────────

    @staticmethod
    def monthly_summary(
        attendances: Sequence[AttendanceRecord],
        working_days: Optional[int],
        vacation_hours: float = 0,
    ) -> MonthlySummary:
        """Worked time, standard/expected hours, overtime and month-end forecast."""
        closed = [a for a in attendances if AttendanceService.is_closed(a)]
        worked_days = len(closed)
        total_minutes = sum(AttendanceService.working_minutes(a) for a in closed)

        standard_hours = (
            None if working_days is None
            else working_days * settings.STANDARD_HOURS_PER_DAY
        )
        expected_hours = None if standard_hours is None else standard_hours - vacation_hours
        actual_hours = total_minutes / 60
        overtime_hours = None if expected_hours is None else actual_hours - expected_hours

        forecast_actual_hours = None
        if working_days:
            daily_rate = safe_divide(actual_hours, worked_days)
            if daily_rate is not None:
                forecast_actual_hours = daily_rate * working_days

        forecast_overtime_hours = (
            None
            if expected_hours is None or forecast_actual_hours is None
            else forecast_actual_hours - expected_hours
        )

        logger.debug(
            "Monthly summary: %d worked days, %d minutes, working_days=%s",
            worked_days, total_minutes, working_days,
        )
        return MonthlySummary(
            worked_days=worked_days,
            total_minutes=total_minutes,
            standard_hours=standard_hours,
            expected_hours=expected_hours,
            actual_hours=actual_hours,
            overtime_hours=overtime_hours,
            forecast_actual_hours=forecast_actual_hours,
            forecast_overtime_hours=forecast_overtime_hours,
            vacation_hours=vacation_hours,
        )

    # ── Daily breakdown ─────────────────────────────────────────────

    @staticmethod
    def daily_breakdown(
        year: int,
        month: int,
        attendances: Iterable[AttendanceRecord],
        time_entries: Iterable[TimeEntryRecord],
        period: str = "month",
    ) -> DailyBreakdownResponse:
        """One row per day of the period with worked minutes and tracked seconds."""
        start, end = AttendanceService._period_bounds(year, month, period)

        by_date = {a.date: a for a in attendances}
        tracked: dict[date, int] = defaultdict(int)
        for entry in time_entries:
            if entry.end_time is None:
                continue
            tracked[entry.start_time.date()] += entry.duration or 0

        rows: list[DailyBreakdownRow] = []
        day = start
        while day <= end:
            attendance = by_date.get(day)
            rows.append(
                DailyBreakdownRow(
                    date=day,
                    day_of_week=day.strftime("%a"),
                    working_minutes=(
                        AttendanceService.working_minutes(attendance) if attendance else 0
                    ),
                    tracked_seconds=tracked.get(day, 0),
                    has_attendance=bool(attendance and attendance.clock_in),
                )
            )
            day += timedelta(days=1)

        summary = ReportSummary(
            total_working_minutes=sum(r.working_minutes for r in rows),
            total_tracked_seconds=sum(r.tracked_seconds for r in rows),
            worked_days=sum(1 for r in rows if r.has_attendance),
            total_days=len(rows),
        )
        return DailyBreakdownResponse(
            period=ReportPeriod(start=start, end=end, type=period),
            daily_data=rows,
            summary=summary,
        )

    # ── In-progress day ─────────────────────────────────────────────

    @staticmethod
    def working_hours_today(
        attendance: Optional[AttendanceRecord],
        time_entries: Iterable[TimeEntryRecord] = (),
        now: Optional[datetime] = None,
    ) -> tuple[Optional[float], int]:
        """Hours worked so far and the break minutes deducted.

        Break time is the recorded break plus entries logged against a break
        project. Returns ``(None, 0)`` before clock-in.
        """
        if attendance is None or attendance.clock_in is None:
            return None, 0

        end = (
            attendance.clock_out
            or ensure_aware(now)
            or datetime.now(attendance.clock_in.tzinfo)
        )
        extra = TimeEntryService.break_minutes_from_entries(time_entries)
        break_minutes = attendance.break_minutes + math.floor(extra + 0.5)
        minutes = (end - attendance.clock_in).total_seconds() / 60 - break_minutes
        return minutes / 60, break_minutes

    # ── CSV export ──────────────────────────────────────────────────

    @staticmethod
    def _format_hours(minutes: int) -> str:
        sign = "-" if minutes < 0 else ""
        hours, mins = divmod(abs(minutes), 60)
        return f"{sign}{hours}:{mins:02d}"

    @staticmethod
    def to_csv(attendances: Iterable[AttendanceRecord]) -> str:
        """Attendance rows as CSV, sorted by date."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)

        for a in sorted(attendances, key=lambda r: r.date):
            working = (
                AttendanceService._format_hours(AttendanceService.working_minutes(a))
                if AttendanceService.is_closed(a)
                else ""
            )
            writer.writerow([
                a.date.strftime(DATE_FORMAT),
                a.clock_in.strftime(TIME_FORMAT) if a.clock_in else "",
                a.clock_out.strftime(TIME_FORMAT) if a.clock_out else "",
                a.break_minutes,
                working,
                a.note or "",
            ])

        return buffer.getvalue().rstrip("\n")
