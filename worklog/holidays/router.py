"""Holidays router — fiscal-year lookup, working days, holiday statistics.

Endpoints are stateless: holiday records arrive in the request body.
"""

from fastapi import APIRouter, Query

from worklog.common.fiscal import get_fiscal_year
from worklog.holidays.schemas import (
    BulkValidationResponse,
    FiscalYearResponse,
    HolidayListRequest,
    HolidayStatsResponse,
    WorkingDaysRequest,
    WorkingDaysResponse,
)
from worklog.holidays.service import HolidayService

router = APIRouter()


# ── GET /fiscal-year ────────────────────────────────────────────────

@router.get("/fiscal-year", response_model=FiscalYearResponse)
async def fiscal_year(
    year: int = Query(..., ge=1900, le=2999),
    month: int = Query(..., ge=1, le=12),
):
    """Fiscal-year label (FY{yy}) for a calendar year/month."""
    return FiscalYearResponse(
        year=year, month=month, fiscal_year=get_fiscal_year(year, month),
    )


# ── POST /working-days ──────────────────────────────────────────────

@router.post("/working-days", response_model=WorkingDaysResponse)
async def working_days(body: WorkingDaysRequest):
    """Working days per month of a fiscal year (calendar days − holidays)."""
    return WorkingDaysResponse(
        fiscal_year=body.fiscal_year,
        working_days=HolidayService.working_days(body.fiscal_year, body.holidays),
    )


# ── POST /stats ─────────────────────────────────────────────────────

@router.post("/stats", response_model=HolidayStatsResponse)
async def holiday_stats(body: HolidayListRequest):
    """Holiday counts per type and annual holiday total."""
    return HolidayService.stats(body.holidays)


# ── POST /bulk/validate ─────────────────────────────────────────────

@router.post("/bulk/validate", response_model=BulkValidationResponse)
async def validate_bulk(body: HolidayListRequest):
    """Check a holiday batch for duplicate dates and wrong fiscal-year labels."""
    holidays = HolidayService.validate_bulk(body.holidays)
    return BulkValidationResponse(
        message=f"{len(holidays)} holidays are valid",
        count=len(holidays),
        holidays=holidays,
    )
