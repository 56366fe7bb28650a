"""Kadmin router — yearly work-hours sheet totals and paste parsing."""

from fastapi import APIRouter

from worklog.common.constants import DEFAULT_WORKING_DAYS
from worklog.kadmin.schemas import (
    KadminRequest,
    KadminSummaryResponse,
    ParseNumbersRequest,
    ParseNumbersResponse,
)
from worklog.kadmin.service import KadminCalculator, KadminService

router = APIRouter()


# ── POST /summary ───────────────────────────────────────────────────

@router.post("/summary", response_model=KadminSummaryResponse)
async def kadmin_summary(body: KadminRequest):
    """Per-project year totals, per-month totals, standard and overtime hours."""
    defaults = (
        body.default_working_days
        if body.default_working_days is not None
        else DEFAULT_WORKING_DAYS
    )
    calc = KadminCalculator(
        body.fiscal_year,
        body.projects,
        body.work_hours,
        body.vacations,
        working_days=body.working_days,
        default_working_days=defaults,
    )
    return KadminService.summary(calc)


# ── POST /parse-numbers ─────────────────────────────────────────────

@router.post("/parse-numbers", response_model=ParseNumbersResponse)
async def parse_numbers(body: ParseNumbersRequest):
    """Parse pasted spreadsheet cells into hours rounded to 0.1."""
    return ParseNumbersResponse(
        values=[
            KadminService.round_to_tenth(KadminService.parse_number(v))
            for v in body.values
        ]
    )
