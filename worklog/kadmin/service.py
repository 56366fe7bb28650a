"""Kadmin service layer — project work-hours totals and overtime per fiscal year.

All sums walk the fixed fiscal month list; a month or project without data
contributes 0.
"""

from __future__ import annotations

import logging
import math
import re
from collections import defaultdict
from typing import Mapping, Optional, Sequence

from worklog.common.constants import FALLBACK_WORKING_DAYS, FISCAL_MONTHS
from worklog.config import settings
from worklog.kadmin.schemas import (
    KadminProject,
    KadminSummaryResponse,
    MonthTotal,
    ProjectYearTotal,
    VacationHoursRecord,
    WorkHoursField,
    WorkHoursRecord,
)

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")


class KadminCalculator:
    """Totals over one fiscal year's snapshot of the work-hours sheet."""

    def __init__(
        self,
        fiscal_year: str,
        projects: Sequence[KadminProject],
        work_hours: Sequence[WorkHoursRecord],
        vacations: Sequence[VacationHoursRecord],
        working_days: Optional[Mapping[int, int]] = None,
        default_working_days: Optional[Mapping[int, int]] = None,
    ) -> None:
        self.fiscal_year = fiscal_year
        self.projects = list(projects)
        self.working_days = dict(working_days or {})
        self.default_working_days = dict(default_working_days or {})

        self._hours: dict[str, dict[int, WorkHoursRecord]] = defaultdict(dict)
        for record in work_hours:
            if record.fiscal_year == fiscal_year:
                self._hours[record.project_id][record.month] = record

        self._vacation: dict[int, float] = {
            v.month: v.hours for v in vacations if v.fiscal_year == fiscal_year
        }

    # ── Lookups ─────────────────────────────────────────────────────

    def _value(self, project_id: str, month: int, field: WorkHoursField) -> float:
        record = self._hours.get(project_id, {}).get(month)
        return getattr(record, field) if record is not None else 0.0

    def working_days_for(self, month: int) -> int:
        """Explicit value, else the default table, else 20. Zero counts as unset."""
        return (
            self.working_days.get(month)
            or self.default_working_days.get(month)
            or FALLBACK_WORKING_DAYS
        )

    def vacation_hours(self, month: int) -> float:
        return self._vacation.get(month, 0.0)

    def standard_hours(self, month: int) -> float:
        return self.working_days_for(month) * settings.STANDARD_HOURS_PER_DAY

    # ── Totals ──────────────────────────────────────────────────────

    def year_total(self, project_id: str, field: WorkHoursField) -> float:
        return sum(self._value(project_id, m, field) for m in FISCAL_MONTHS)

    def month_total(self, month: int, field: WorkHoursField) -> float:
        return sum(self._value(p.id, month, field) for p in self.projects)

    def grand_total(self, field: WorkHoursField) -> float:
        return sum(self.month_total(m, field) for m in FISCAL_MONTHS)

    def vacation_total(self) -> float:
        return sum(self.vacation_hours(m) for m in FISCAL_MONTHS)

    def year_standard_hours(self) -> float:
        return sum(self.standard_hours(m) for m in FISCAL_MONTHS)

    def overtime_hours(self, month: int) -> float:
        """Actual hours of all projects minus (standard − vacation)."""
        expected = self.standard_hours(month) - self.vacation_hours(month)
        return self.month_total(month, "actual_hours") - expected

    def year_overtime_hours(self) -> float:
        return sum(self.overtime_hours(m) for m in FISCAL_MONTHS)


class KadminService:
    """Entry points used by the router."""

    @staticmethod
    def summary(calc: KadminCalculator) -> KadminSummaryResponse:
        projects = [
            ProjectYearTotal(
                project_id=p.id,
                project_name=p.name,
                estimated_hours=calc.year_total(p.id, "estimated_hours"),
                actual_hours=calc.year_total(p.id, "actual_hours"),
                recorded_overtime_hours=calc.year_total(p.id, "overtime_hours"),
            )
            for p in calc.projects
        ]
        months = [
            MonthTotal(
                month=m,
                estimated_hours=calc.month_total(m, "estimated_hours"),
                actual_hours=calc.month_total(m, "actual_hours"),
                recorded_overtime_hours=calc.month_total(m, "overtime_hours"),
                working_days=calc.working_days_for(m),
                standard_hours=calc.standard_hours(m),
                vacation_hours=calc.vacation_hours(m),
                overtime_hours=calc.overtime_hours(m),
            )
            for m in FISCAL_MONTHS
        ]
        response = KadminSummaryResponse(
            fiscal_year=calc.fiscal_year,
            projects=projects,
            months=months,
            grand_estimated_hours=calc.grand_total("estimated_hours"),
            grand_actual_hours=calc.grand_total("actual_hours"),
            grand_recorded_overtime_hours=calc.grand_total("overtime_hours"),
            vacation_total=calc.vacation_total(),
            year_standard_hours=calc.year_standard_hours(),
            year_overtime_hours=calc.year_overtime_hours(),
        )
        logger.debug(
            "Kadmin %s: %d projects, year overtime %.1fh",
            calc.fiscal_year, len(projects), response.year_overtime_hours,
        )
        return response

    # ── Spreadsheet paste helpers ───────────────────────────────────

    @staticmethod
    def parse_number(value: Optional[str]) -> float:
        """``"1,234.5"`` → ``1234.5``; blanks and non-numbers → 0."""
        if not value:
            return 0.0
        normalized = value.replace(",", "").strip()
        try:
            parsed = float(normalized)
        except ValueError:
            return 0.0
        return parsed if math.isfinite(parsed) else 0.0

    @staticmethod
    def is_likely_number(value: str) -> bool:
        normalized = value.replace(",", "").strip()
        return bool(normalized) and _NUMBER_RE.match(normalized) is not None

    @staticmethod
    def round_to_tenth(value: float) -> float:
        return math.floor(value * 10 + 0.5) / 10
