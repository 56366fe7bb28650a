"""Salary Pydantic v2 schemas — monthly pay slips and yearly summary."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ═════════════════════════════════════════════════════════════════════
# Salary entry
# ═════════════════════════════════════════════════════════════════════


class SalaryEntry(BaseModel):
    """One month's pay slip. All amounts are yen."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    year: int = Field(..., ge=1900, le=2999)
    month: int = Field(..., ge=1, le=12)
    gross: int = 0
    net: int = 0
    health_insurance: int = 0
    pension: int = 0
    employment_insurance: int = 0
    income_tax: int = 0
    resident_tax: int = 0
    other_deductions: int = 0
    bonus: int = 0


class SalaryListRequest(BaseModel):
    entries: List[SalaryEntry] = []


# ═════════════════════════════════════════════════════════════════════
# Summary
# ═════════════════════════════════════════════════════════════════════


class SalaryTotals(BaseModel):
    gross: int = 0
    net: int = 0
    bonus: int = 0
    deductions: int = 0
    average_net: float = 0.0


class DeductionTotal(BaseModel):
    key: str
    label: str
    value: int = 0


class NetTrendItem(BaseModel):
    month: int
    net: int = 0


class SalarySummaryResponse(BaseModel):
    totals: SalaryTotals
    deduction_totals: List[DeductionTotal]
    net_trend: List[NetTrendItem]
    max_net: int = 1


class NextMonthResponse(BaseModel):
    month: int
