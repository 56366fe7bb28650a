"""EVM service layer — planned value (PV) / actual cost (AC) series and
work-type ratio snapshots.

Business logic:
  - AC: closed time entries, hours booked on the entry's start day
  - PV: fixed tasks on their day, plus the rest of the month's estimate
    (estimated − fixed, floored at 0) spread evenly over working days
  - Working days here are Mon-Fri minus holiday dates
  - Ratios are shares of the cross-type total at a snapshot day; the
    forecast extends each type's AC at its average daily rate so far
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from worklog.common.constants import WORK_TYPE_LABELS, WorkType
from worklog.common.fiscal import days_in_month
from worklog.common.series import cumulative, linear_forecast, safe_ratio, value_at
from worklog.common.timestamps import now_local
from worklog.evm.schemas import (
    EvmResponse,
    FixedTask,
    Period,
    ProjectSeries,
    ProjectTotals,
    WorkTypeChartSeries,
    WorkTypeRatio,
    WorkTypeReportResponse,
    WorkTypeSeries,
)
from worklog.holidays.schemas import HolidayRecord
from worklog.time_entries.schemas import ProjectRef, TimeEntryRecord

logger = logging.getLogger(__name__)


def _month_days(year: int, month: int) -> list[date]:
    first = date(year, month, 1)
    return [first + timedelta(days=i) for i in range(days_in_month(year, month))]


def _daily_totals(types: Sequence[WorkTypeSeries], attr: str, length: int) -> list[float]:
    return [
        sum(value_at(getattr(t, attr), i) for t in types)
        for i in range(length)
    ]


class EvmService:
    """Pure EVM calculations over caller-supplied snapshots."""

    # ── Snapshot ────────────────────────────────────────────────────

    @staticmethod
    def today() -> date:
        return now_local().date()

    @staticmethod
    def snapshot_index(
        days: Sequence[date],
        year: int,
        month: int,
        today: Optional[date] = None,
    ) -> int:
        """Today's position when viewing the current month, else the last day."""
        today = today or EvmService.today()
        if today.year == year and today.month == month and today in days:
            return list(days).index(today)
        return len(days) - 1

    # ── Ratios ──────────────────────────────────────────────────────

    @staticmethod
    def work_type_ratios(
        days: Sequence[date],
        types: Sequence[WorkTypeSeries],
        snapshot_index: int,
    ) -> list[WorkTypeRatio]:
        """PV / BAC / AC / forecast share of every work type at ``snapshot_index``."""
        if not days:
            return []

        total_pv = cumulative(_daily_totals(types, "pv_daily", len(days)))
        total_ac = cumulative(_daily_totals(types, "ac_daily", len(days)))
        total_bac = sum(t.bac_total for t in types)

        total_pv_now = value_at(total_pv, snapshot_index)
        total_ac_now = value_at(total_ac, snapshot_index)

        elapsed = snapshot_index + 1
        total_forecast = linear_forecast(total_ac_now, elapsed, len(days))

        ratios: list[WorkTypeRatio] = []
        for t in types:
            type_pv_now = value_at(cumulative(t.pv_daily), snapshot_index)
            type_ac_now = value_at(cumulative(t.ac_daily), snapshot_index)
            type_forecast = linear_forecast(type_ac_now, elapsed, len(days))

            ratios.append(
                WorkTypeRatio(
                    work_type=t.work_type,
                    label=t.label,
                    pv_ratio=safe_ratio(type_pv_now, total_pv_now),
                    bac_ratio=safe_ratio(t.bac_total, total_bac),
                    ac_ratio=safe_ratio(type_ac_now, total_ac_now),
                    forecast_ratio=safe_ratio(type_forecast, total_forecast),
                )
            )
        return ratios

    @staticmethod
    def ratio_series(
        days: Sequence[date],
        types: Sequence[WorkTypeSeries],
        mode: str = "cumulative",
    ) -> list[WorkTypeChartSeries]:
        """Per-day ratio lines for charts, daily or cumulative."""
        length = len(days)
        total_pv_daily = _daily_totals(types, "pv_daily", length)
        total_ac_daily = _daily_totals(types, "ac_daily", length)
        total_bac = sum(t.bac_total for t in types)

        if mode == "daily":
            totals_pv, totals_ac = total_pv_daily, total_ac_daily
        else:
            totals_pv, totals_ac = cumulative(total_pv_daily), cumulative(total_ac_daily)
        cumulative_total_ac = cumulative(total_ac_daily)

        result: list[WorkTypeChartSeries] = []
        for t in types:
            pv = list(t.pv_daily) if mode == "daily" else cumulative(t.pv_daily)
            ac = list(t.ac_daily) if mode == "daily" else cumulative(t.ac_daily)
            cumulative_ac = cumulative(t.ac_daily)
            bac_ratio = safe_ratio(t.bac_total, total_bac)

            forecast_series = []
            for i in range(length):
                type_forecast = linear_forecast(value_at(cumulative_ac, i), i + 1, length)
                total_forecast = linear_forecast(value_at(cumulative_total_ac, i), i + 1, length)
                forecast_series.append(safe_ratio(type_forecast, total_forecast))

            result.append(
                WorkTypeChartSeries(
                    work_type=t.work_type,
                    label=t.label,
                    pv_ratio=[safe_ratio(value_at(pv, i), totals_pv[i]) for i in range(length)],
                    ac_ratio=[safe_ratio(value_at(ac, i), totals_ac[i]) for i in range(length)],
                    bac_series=[bac_ratio] * length,
                    forecast_series=forecast_series,
                )
            )
        return result

    # ── Series building ─────────────────────────────────────────────

    @staticmethod
    def working_days(days: Iterable[date], holidays: Iterable[HolidayRecord]) -> list[date]:
        """Mon-Fri days that are not holiday dates."""
        holiday_dates = {h.date for h in holidays}
        return [d for d in days if d.weekday() < 5 and d not in holiday_dates]

    @staticmethod
    def build_project_series(
        year: int,
        month: int,
        projects: Sequence[ProjectRef],
        time_entries: Iterable[TimeEntryRecord],
        fixed_tasks: Iterable[FixedTask],
        holidays: Iterable[HolidayRecord],
        estimated_hours: dict[str, float],
    ) -> EvmResponse:
        """Daily PV and AC hours for every project in the month."""
        days = _month_days(year, month)
        index = {d: i for i, d in enumerate(days)}
        working = set(EvmService.working_days(days, holidays))
        working_count = len(working)

        known = {p.id for p in projects}
        ac: dict[str, list[float]] = {p.id: [0.0] * len(days) for p in projects}
        fixed: dict[str, list[float]] = {p.id: [0.0] * len(days) for p in projects}

        for entry in time_entries:
            if entry.end_time is None or entry.project_id not in known:
                continue
            i = index.get(entry.start_time.date())
            if i is not None:
                ac[entry.project_id][i] += (entry.duration or 0) / 3600

        for task in fixed_tasks:
            i = index.get(task.date)
            if task.project_id in known and i is not None:
                fixed[task.project_id][i] += task.estimated_minutes / 60

        series: list[ProjectSeries] = []
        for project in projects:
            fixed_series = fixed[project.id]
            fixed_total = sum(fixed_series)
            estimated = estimated_hours.get(project.id, 0.0)
            remaining = max(estimated - fixed_total, 0.0)
            daily_allocation = remaining / working_count if working_count > 0 else 0.0

            pv_series = [
                base + daily_allocation if day in working else base
                for day, base in zip(days, fixed_series)
            ]
            ac_series = ac[project.id]

            series.append(
                ProjectSeries(
                    project_id=project.id,
                    project_name=project.name,
                    work_type=project.work_type or WorkType.IN_PROGRESS,
                    ac_series=ac_series,
                    pv_series=pv_series,
                    totals=ProjectTotals(
                        ac_hours=sum(ac_series),
                        pv_hours=sum(pv_series),
                        fixed_hours=fixed_total,
                        estimated_hours=estimated,
                    ),
                )
            )

        logger.debug(
            "EVM %04d-%02d: %d projects, %d working days",
            year, month, len(series), working_count,
        )
        return EvmResponse(
            period=Period(start=days[0], end=days[-1]),
            days=days,
            working_day_count=working_count,
            projects=series,
        )

    @staticmethod
    def build_work_type_series(evm: EvmResponse) -> WorkTypeReportResponse:
        """Sum project series per work type; BAC is the sum of estimates."""
        length = len(evm.days)
        pv: dict[WorkType, list[float]] = defaultdict(lambda: [0.0] * length)
        ac: dict[WorkType, list[float]] = defaultdict(lambda: [0.0] * length)
        bac: dict[WorkType, float] = defaultdict(float)

        for project in evm.projects:
            for i in range(length):
                pv[project.work_type][i] += project.pv_series[i]
                ac[project.work_type][i] += project.ac_series[i]
            bac[project.work_type] += project.totals.estimated_hours

        return WorkTypeReportResponse(
            period=evm.period,
            days=evm.days,
            types=[
                WorkTypeSeries(
                    work_type=wt,
                    label=WORK_TYPE_LABELS[wt],
                    pv_daily=pv[wt],
                    ac_daily=ac[wt],
                    bac_total=bac[wt],
                )
                for wt in WorkType
            ],
        )
