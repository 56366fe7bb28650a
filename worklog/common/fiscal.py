"""Fiscal-year helpers — Japanese fiscal year runs April to March."""

from __future__ import annotations

import calendar
import re

from worklog.common.constants import FISCAL_MONTHS
from worklog.common.exceptions import ValidationException

_FISCAL_LABEL_RE = re.compile(r"^FY(\d{2})$")


def get_fiscal_year(year: int, month: int) -> str:
    """Return the ``FY{yy}`` label for a calendar year/month.

    Months 1-3 belong to the fiscal year that started the previous April.
    """
    fiscal_year = year if month >= 4 else year - 1
    return f"FY{fiscal_year % 100:02d}"


def parse_fiscal_year(label: str) -> int:
    """``"FY25"`` → ``2025`` (the calendar year the fiscal year starts in)."""
    match = _FISCAL_LABEL_RE.match(label or "")
    if match is None:
        raise ValidationException(
            {"fiscal_year": [f"'{label}' is not a fiscal year label like 'FY25'."]}
        )
    return int(match.group(1)) + 2000


def calendar_year_for(start_year: int, month: int) -> int:
    """Calendar year of ``month`` inside the fiscal year starting in ``start_year``."""
    return start_year if month >= 4 else start_year + 1


def fiscal_calendar_months(label: str) -> list[tuple[int, int]]:
    """All (year, month) pairs of a fiscal year, April first."""
    start_year = parse_fiscal_year(label)
    return [(calendar_year_for(start_year, m), m) for m in FISCAL_MONTHS]


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]
