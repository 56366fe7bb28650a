"""Salary service layer — yearly totals, deduction breakdown, net trend."""

from __future__ import annotations

import logging
from typing import Sequence

from worklog.common.constants import DEDUCTION_LABELS
from worklog.common.exceptions import ValidationException
from worklog.salary.schemas import (
    DeductionTotal,
    NetTrendItem,
    SalaryEntry,
    SalarySummaryResponse,
    SalaryTotals,
)

logger = logging.getLogger(__name__)


class SalaryService:
    """Business logic for salary summaries."""

    @staticmethod
    def total_deductions(entry: SalaryEntry) -> int:
        return sum(getattr(entry, key) for key in DEDUCTION_LABELS)

    @staticmethod
    def totals(entries: Sequence[SalaryEntry]) -> SalaryTotals:
        net = sum(e.net for e in entries)
        return SalaryTotals(
            gross=sum(e.gross for e in entries),
            net=net,
            bonus=sum(e.bonus for e in entries),
            deductions=sum(SalaryService.total_deductions(e) for e in entries),
            average_net=net / len(entries) if entries else 0.0,
        )

    @staticmethod
    def deduction_totals(entries: Sequence[SalaryEntry]) -> list[DeductionTotal]:
        return [
            DeductionTotal(key=key, label=label, value=sum(getattr(e, key) for e in entries))
            for key, label in DEDUCTION_LABELS.items()
        ]

    @staticmethod
    def net_trend(entries: Sequence[SalaryEntry]) -> list[NetTrendItem]:
        """Net pay for months 1..12; months without a slip are 0."""
        by_month = {e.month: e.net for e in sorted(entries, key=lambda e: e.month)}
        return [NetTrendItem(month=m, net=by_month.get(m, 0)) for m in range(1, 13)]

    @staticmethod
    def next_month(entries: Sequence[SalaryEntry]) -> int:
        """Month to add after the latest slip; a year holds at most 12."""
        month = max((e.month for e in entries), default=0) + 1
        if month > 12:
            raise ValidationException(
                {"month": ["All 12 months already have a salary entry."]}
            )
        return month

    @staticmethod
    def summary(entries: Sequence[SalaryEntry]) -> SalarySummaryResponse:
        trend = SalaryService.net_trend(entries)
        logger.debug("Salary summary over %d entries", len(entries))
        return SalarySummaryResponse(
            totals=SalaryService.totals(entries),
            deduction_totals=SalaryService.deduction_totals(entries),
            net_trend=trend,
            max_net=max([1] + [item.net for item in trend]),
        )
