"""Holiday service layer — working-day counts and holiday statistics.

Business logic:
  - Working days per fiscal month = calendar days − holiday records
  - Weekends are NOT derived from the calendar; they arrive as WEEKEND records
  - Annual holiday count excludes paid leave
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from worklog.common.constants import ANNUAL_HOLIDAY_TYPES, HolidayType
from worklog.common.exceptions import ValidationException
from worklog.common.fiscal import (
    days_in_month,
    fiscal_calendar_months,
    get_fiscal_year,
)
from worklog.holidays.schemas import HolidayRecord, HolidayStatsResponse

logger = logging.getLogger(__name__)


class HolidayService:
    """Pure holiday calculations over caller-supplied snapshots."""

    # ── Working days ────────────────────────────────────────────────

    @staticmethod
    def working_days(
        fiscal_year: str,
        holidays: Sequence[HolidayRecord],
    ) -> dict[int, int]:
        """Working-day count for every month of ``fiscal_year``, April first."""
        per_month = Counter(
            (h.date.year, h.date.month)
            for h in holidays
            if h.fiscal_year == fiscal_year
        )

        result: dict[int, int] = {}
        for year, month in fiscal_calendar_months(fiscal_year):
            total_days = days_in_month(year, month)
            result[month] = max(0, total_days - per_month[(year, month)])

        logger.debug("Working days for %s: %s", fiscal_year, result)
        return result

    # ── Stats ───────────────────────────────────────────────────────

    @staticmethod
    def stats(holidays: Sequence[HolidayRecord]) -> HolidayStatsResponse:
        counts = Counter(h.type for h in holidays)
        return HolidayStatsResponse(
            weekend_count=counts[HolidayType.WEEKEND],
            public_holiday_count=counts[HolidayType.PUBLIC_HOLIDAY],
            special_holiday_count=counts[HolidayType.SPECIAL_HOLIDAY],
            paid_leave_count=counts[HolidayType.PAID_LEAVE],
            annual_holiday_count=sum(counts[t] for t in ANNUAL_HOLIDAY_TYPES),
        )

    # ── Bulk validation ─────────────────────────────────────────────

    @staticmethod
    def validate_bulk(holidays: Sequence[HolidayRecord]) -> list[HolidayRecord]:
        """Reject duplicate dates and fiscal-year labels that disagree with the date."""
        errors: dict[str, list[str]] = {}

        seen: set = set()
        for h in holidays:
            if h.date in seen:
                errors.setdefault("date", []).append(
                    f"{h.date.isoformat()} appears more than once."
                )
            seen.add(h.date)

            expected = get_fiscal_year(h.date.year, h.date.month)
            if h.fiscal_year != expected:
                errors.setdefault("fiscal_year", []).append(
                    f"{h.date.isoformat()} belongs to {expected}, not {h.fiscal_year}."
                )

        if errors:
            raise ValidationException(errors)
        return sorted(holidays, key=lambda h: h.date)
