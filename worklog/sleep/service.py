"""Sleep service layer — monthly sleep statistics from attendance records."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from statistics import fmean
from typing import Iterable

from worklog.attendance.schemas import AttendanceRecord
from worklog.common.constants import (
    RECENT_SLEEP_WINDOW,
    TARGET_SLEEP_HOURS,
    WEEKDAY_LABELS,
)
from worklog.common.fiscal import days_in_month
from worklog.sleep.schemas import DailySleep, SleepStatistics, WeekdayAverage

logger = logging.getLogger(__name__)


def _average(values: list[float]) -> float:
    return fmean(values) if values else 0.0


def _sunday_first(day: date) -> int:
    return (day.weekday() + 1) % 7


class SleepService:
    @staticmethod
    def statistics(
        year: int, month: int, attendances: Iterable[AttendanceRecord]
    ) -> SleepStatistics:
        """Aggregate ``sleep_hours`` over every calendar day of the month.

        Days without a record (or with ``sleep_hours`` unset) count as missing.
        All averages are 0 when nothing was recorded.
        """
        sleep_by_date = {
            a.date: a.sleep_hours for a in attendances if a.sleep_hours is not None
        }
        first = date(year, month, 1)
        days = [first + timedelta(days=i) for i in range(days_in_month(year, month))]
        daily = [DailySleep(date=d, hours=sleep_by_date.get(d)) for d in days]
        values = [item.hours for item in daily if item.hours is not None]

        weekday_values: list[list[float]] = [[] for _ in WEEKDAY_LABELS]
        for item in daily:
            if item.hours is not None:
                weekday_values[_sunday_first(item.date)].append(item.hours)

        hit_days = sum(1 for v in values if v >= TARGET_SLEEP_HOURS)

        stats = SleepStatistics(
            year=year,
            month=month,
            daily=daily,
            recorded_count=len(values),
            missing_count=len(days) - len(values),
            total_hours=sum(values),
            average_hours=_average(values),
            max_hours=max(values, default=0.0),
            min_hours=min(values, default=0.0),
            hit_rate=hit_days / len(values) * 100 if values else 0.0,
            recent_average=_average(values[-RECENT_SLEEP_WINDOW:]),
            weekday_averages=[
                WeekdayAverage(weekday=label, average_hours=_average(bucket))
                for label, bucket in zip(WEEKDAY_LABELS, weekday_values)
            ],
        )
        logger.debug(
            "Sleep %04d-%02d: %d/%d days recorded", year, month,
            stats.recorded_count, len(days),
        )
        return stats
