"""Common module — shared utilities for Worklog."""

from worklog.common.constants import (
    DATE_FORMAT,
    DEFAULT_WORKING_DAYS,
    FISCAL_MONTHS,
    HOLIDAY_TYPE_LABELS,
    WORK_TYPE_LABELS,
    HolidayType,
    TimeEntryState,
    WorkType,
)
from worklog.common.exceptions import (
    AppException,
    ConflictError,
    ValidationException,
    register_exception_handlers,
)
from worklog.common.fiscal import (
    fiscal_calendar_months,
    get_fiscal_year,
    parse_fiscal_year,
)
from worklog.common.series import (
    cumulative,
    linear_forecast,
    safe_divide,
    safe_ratio,
)

__all__ = [
    # Constants / Enums
    "HolidayType",
    "TimeEntryState",
    "WorkType",
    "HOLIDAY_TYPE_LABELS",
    "WORK_TYPE_LABELS",
    "FISCAL_MONTHS",
    "DEFAULT_WORKING_DAYS",
    "DATE_FORMAT",
    # Exceptions
    "AppException",
    "ConflictError",
    "ValidationException",
    "register_exception_handlers",
    # Fiscal calendar
    "fiscal_calendar_months",
    "get_fiscal_year",
    "parse_fiscal_year",
    # Series primitives
    "cumulative",
    "linear_forecast",
    "safe_divide",
    "safe_ratio",
]
