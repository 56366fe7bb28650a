"""Salary router — yearly pay summary and next-month helper.

Endpoints are stateless: salary entries arrive in the request body.
"""

from fastapi import APIRouter

from worklog.salary.schemas import (
    NextMonthResponse,
    SalaryListRequest,
    SalarySummaryResponse,
)
from worklog.salary.service import SalaryService

router = APIRouter()


# ── POST /summary ───────────────────────────────────────────────────

@router.post("/summary", response_model=SalarySummaryResponse)
async def salary_summary(body: SalaryListRequest):
    """Totals, per-deduction totals and the 12-month net trend."""
    return SalaryService.summary(body.entries)


# ── POST /next-month ────────────────────────────────────────────────

@router.post("/next-month", response_model=NextMonthResponse)
async def next_month(body: SalaryListRequest):
    """Month number for the next slip of the year (422 once all 12 exist)."""
    return NextMonthResponse(month=SalaryService.next_month(body.entries))
