"""Salary module test suite — deductions, yearly totals, net trend and the
next-month helper.
"""

from __future__ import annotations

import pytest

from worklog.common.exceptions import ValidationException
from worklog.salary.schemas import SalaryEntry
from worklog.salary.service import SalaryService


def _slip(month: int, *, gross=300_000, net=240_000, bonus=0) -> SalaryEntry:
    return SalaryEntry(
        year=2025,
        month=month,
        gross=gross,
        net=net,
        health_insurance=15_000,
        pension=27_000,
        employment_insurance=1_800,
        income_tax=7_000,
        resident_tax=9_000,
        other_deductions=200,
        bonus=bonus,
    )


def test_total_deductions():
    assert SalaryService.total_deductions(_slip(1)) == 60_000


def test_totals():
    totals = SalaryService.totals([_slip(1), _slip(2, net=260_000, bonus=500_000)])
    assert totals.gross == 600_000
    assert totals.net == 500_000
    assert totals.bonus == 500_000
    assert totals.deductions == 120_000
    assert totals.average_net == 250_000


def test_totals_empty():
    totals = SalaryService.totals([])
    assert totals.net == 0
    assert totals.average_net == 0


def test_deduction_totals_follow_label_order():
    result = SalaryService.deduction_totals([_slip(1), _slip(2)])
    assert [d.key for d in result][:2] == ["health_insurance", "pension"]
    assert result[0].label == "健康保険料"
    assert result[0].value == 30_000


def test_net_trend_fills_twelve_months():
    trend = SalaryService.net_trend([_slip(3, net=1), _slip(1, net=2)])
    assert len(trend) == 12
    assert trend[0].net == 2
    assert trend[1].net == 0
    assert trend[2].net == 1


def test_next_month():
    assert SalaryService.next_month([]) == 1
    assert SalaryService.next_month([_slip(1), _slip(4)]) == 5


def test_next_month_rejects_thirteenth():
    with pytest.raises(ValidationException):
        SalaryService.next_month([_slip(12)])


async def test_api_summary(client):
    payload = {"entries": [_slip(1).model_dump(mode="json")]}
    resp = await client.post("/api/v1/salary/summary", json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["totals"]["deductions"] == 60_000
    assert body["max_net"] == 240_000


async def test_api_next_month_full_year(client):
    payload = {"entries": [_slip(12).model_dump(mode="json")]}
    resp = await client.post("/api/v1/salary/next-month", json=payload)
    assert resp.status_code == 422
    assert "month" in resp.json()["errors"]
