"""Enums and constants for Worklog — shared by every domain module."""

from __future__ import annotations

import enum


# ── Holidays ────────────────────────────────────────────────────────

class HolidayType(str, enum.Enum):
    PUBLIC_HOLIDAY = "PUBLIC_HOLIDAY"
    WEEKEND = "WEEKEND"
    SPECIAL_HOLIDAY = "SPECIAL_HOLIDAY"
    PAID_LEAVE = "PAID_LEAVE"


HOLIDAY_TYPE_LABELS: dict[HolidayType, str] = {
    HolidayType.PUBLIC_HOLIDAY: "祝日",
    HolidayType.WEEKEND: "定休日",
    HolidayType.SPECIAL_HOLIDAY: "特別休日",
    HolidayType.PAID_LEAVE: "有給休暇",
}

# Paid leave is excluded from the annual holiday count.
ANNUAL_HOLIDAY_TYPES: tuple[HolidayType, ...] = (
    HolidayType.WEEKEND,
    HolidayType.PUBLIC_HOLIDAY,
    HolidayType.SPECIAL_HOLIDAY,
)


# ── Projects / EVM ──────────────────────────────────────────────────

class WorkType(str, enum.Enum):
    IN_PROGRESS = "IN_PROGRESS"
    SE_TRANSFER = "SE_TRANSFER"
    INDIRECT = "INDIRECT"


WORK_TYPE_LABELS: dict[WorkType, str] = {
    WorkType.IN_PROGRESS: "仕掛稼働",
    WorkType.SE_TRANSFER: "SE振替",
    WorkType.INDIRECT: "間接稼働",
}


# ── Time entries ────────────────────────────────────────────────────

class TimeEntryState(str, enum.Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


BREAK_PROJECT_LABELS = frozenset({"休憩", "break"})
NO_PROJECT_LABEL = "No Project"
NO_WBS_LABEL = "No WBS"
ALLOCATION_TOLERANCE = 0.01


# ── Fiscal calendar ─────────────────────────────────────────────────

# Japanese fiscal year: April → March
FISCAL_MONTHS: tuple[int, ...] = (4, 5, 6, 7, 8, 9, 10, 11, 12, 1, 2, 3)

# FY25 working-day table from the kadmin sheet. Callers pass it explicitly.
DEFAULT_WORKING_DAYS: dict[int, int] = {
    4: 21, 5: 21, 6: 22, 7: 23, 8: 22, 9: 21, 10: 23, 11: 21, 12: 22,
    1: 20, 2: 20, 3: 21,
}
FALLBACK_WORKING_DAYS = 20


# ── Sleep ───────────────────────────────────────────────────────────

TARGET_SLEEP_HOURS = 8.0
RECENT_SLEEP_WINDOW = 7
WEEKDAY_LABELS: tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


# ── Salary ──────────────────────────────────────────────────────────

DEDUCTION_LABELS: dict[str, str] = {
    "health_insurance": "健康保険料",
    "pension": "厚生年金",
    "employment_insurance": "雇用保険料",
    "income_tax": "所得税",
    "resident_tax": "住民税",
    "other_deductions": "その他控除",
}


# ── Misc constants ──────────────────────────────────────────────────

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
