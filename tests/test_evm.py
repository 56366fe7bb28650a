"""EVM module test suite — PV/AC series per project and work type, ratio
snapshots and chart series.
"""

from __future__ import annotations

from datetime import date

import pytest

from worklog.common.constants import WorkType
from worklog.evm.schemas import FixedTask, WorkTypeSeries
from worklog.evm.service import EvmService
from tests.conftest import _at, _make_entry, _make_holiday, _make_project

DAYS = [date(2025, 4, 1), date(2025, 4, 2), date(2025, 4, 3)]


def _series(work_type, pv, ac, bac) -> WorkTypeSeries:
    return WorkTypeSeries(work_type=work_type, label=work_type.value, pv_daily=pv, ac_daily=ac, bac_total=bac)


# ═════════════════════════════════════════════════════════════════════
# 1. RATIOS
# ═════════════════════════════════════════════════════════════════════


class TestWorkTypeRatios:

    def test_bac_ratio_shares(self):
        types = [
            _series(WorkType.IN_PROGRESS, [0, 0, 0], [0, 0, 0], 100),
            _series(WorkType.INDIRECT, [0, 0, 0], [0, 0, 0], 300),
        ]
        ratios = EvmService.work_type_ratios(DAYS, types, 2)
        assert [r.bac_ratio for r in ratios] == [25, 75]

    def test_zero_totals_yield_zero_ratios(self):
        types = [
            _series(WorkType.IN_PROGRESS, [0, 0, 0], [0, 0, 0], 0),
            _series(WorkType.INDIRECT, [0, 0, 0], [0, 0, 0], 0),
        ]
        for r in EvmService.work_type_ratios(DAYS, types, 2):
            assert (r.pv_ratio, r.bac_ratio, r.ac_ratio, r.forecast_ratio) == (0, 0, 0, 0)

    def test_snapshot_ratios(self):
        types = [
            _series(WorkType.IN_PROGRESS, [1, 1, 1], [2, 0, 0], 100),
            _series(WorkType.SE_TRANSFER, [1, 1, 1], [2, 2, 0], 300),
        ]
        a, b = EvmService.work_type_ratios(DAYS, types, 1)
        assert a.pv_ratio == pytest.approx(50)
        assert a.ac_ratio == pytest.approx(100 / 3)
        assert b.ac_ratio == pytest.approx(200 / 3)
        # forecast: A 2 → 3, B 4 → 6, total 6 → 9
        assert a.forecast_ratio == pytest.approx(100 / 3)

    def test_empty_days(self):
        assert EvmService.work_type_ratios([], [], 0) == []

    def test_ratios_are_idempotent(self):
        types = [_series(WorkType.IN_PROGRESS, [1, 2, 3], [3, 2, 1], 10)]
        assert EvmService.work_type_ratios(DAYS, types, 1) == EvmService.work_type_ratios(DAYS, types, 1)


class TestSnapshotIndex:

    def test_today_inside_viewed_month(self):
        assert EvmService.snapshot_index(DAYS, 2025, 4, today=date(2025, 4, 2)) == 1

    def test_other_month_uses_last_day(self):
        assert EvmService.snapshot_index(DAYS, 2025, 4, today=date(2025, 6, 10)) == 2


def test_ratio_series_daily_and_cumulative():
    types = [
        _series(WorkType.IN_PROGRESS, [1, 0, 1], [1, 1, 0], 1),
        _series(WorkType.INDIRECT, [1, 2, 1], [1, 3, 0], 3),
    ]
    daily = EvmService.ratio_series(DAYS, types, mode="daily")
    cumulative = EvmService.ratio_series(DAYS, types, mode="cumulative")

    assert daily[0].pv_ratio == [50, 0, 50]
    assert cumulative[0].pv_ratio[:2] == [50, pytest.approx(100 / 4)]
    assert daily[0].bac_series == [25, 25, 25]
    assert daily[1].ac_ratio[2] == 0  # no AC that day


# ═════════════════════════════════════════════════════════════════════
# 2. SERIES BUILDING
# ═════════════════════════════════════════════════════════════════════


def test_build_project_series_spreads_estimate_over_working_days():
    project = _make_project("P1", work_type=WorkType.IN_PROGRESS)
    holidays = [_make_holiday(date(2025, 4, 29))]  # Tuesday
    entry = _make_entry(_at(date(2025, 4, 1), 9), seconds=7200, project=project)

    evm = EvmService.build_project_series(
        2025, 4, [project], [entry], [], holidays, {"P1": 21.0},
    )
    series = evm.projects[0]

    assert evm.working_day_count == 21
    assert series.pv_series[0] == pytest.approx(1.0)   # Tue Apr 1
    assert series.pv_series[4] == 0                      # Sat Apr 5
    assert series.pv_series[28] == 0                     # holiday
    assert series.totals.pv_hours == pytest.approx(21.0)
    assert series.ac_series[0] == pytest.approx(2.0)


def test_build_project_series_fixed_tasks_reduce_spread():
    project = _make_project("P1")
    fixed = FixedTask(date=date(2025, 4, 1), title="Review", estimated_minutes=120, project_id="P1")

    evm = EvmService.build_project_series(2025, 4, [project], [], [fixed], [], {"P1": 24.0})
    series = evm.projects[0]

    # (24 − 2) / 22 working days on top of the fixed 2h
    assert series.pv_series[0] == pytest.approx(2 + 1.0)
    assert series.totals.fixed_hours == 2
    assert series.totals.pv_hours == pytest.approx(24.0)
    assert series.work_type == WorkType.IN_PROGRESS


def test_build_work_type_series_sums_projects():
    p1 = _make_project("P1", work_type=WorkType.IN_PROGRESS)
    p2 = _make_project("P2", name="Support", work_type=WorkType.INDIRECT)
    evm = EvmService.build_project_series(2025, 4, [p1, p2], [], [], [], {"P1": 22.0, "P2": 44.0})
    report = EvmService.build_work_type_series(evm)

    by_type = {t.work_type: t for t in report.types}
    assert set(by_type) == set(WorkType)
    assert by_type[WorkType.INDIRECT].bac_total == 44.0
    assert by_type[WorkType.SE_TRANSFER].bac_total == 0
    assert sum(by_type[WorkType.IN_PROGRESS].pv_daily) == pytest.approx(22.0)


# ═════════════════════════════════════════════════════════════════════
# 3. HTTP API
# ═════════════════════════════════════════════════════════════════════


async def test_api_ratios(client):
    payload = {
        "year": 2025,
        "month": 4,
        "days": [d.isoformat() for d in DAYS],
        "today": "2025-04-03",
        "types": [
            {"work_type": "IN_PROGRESS", "label": "a", "pv_daily": [0, 0, 0], "ac_daily": [0, 0, 0], "bac_total": 100},
            {"work_type": "INDIRECT", "label": "b", "pv_daily": [0, 0, 0], "ac_daily": [0, 0, 0], "bac_total": 300},
        ],
    }
    resp = await client.post("/api/v1/evm/work-types/ratios", json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["snapshot_index"] == 2
    assert [t["bac_ratio"] for t in body["types"]] == [25, 75]


async def test_api_ratios_rejects_misaligned_series(client):
    payload = {
        "year": 2025,
        "month": 4,
        "days": [d.isoformat() for d in DAYS],
        "types": [{"work_type": "IN_PROGRESS", "label": "a", "pv_daily": [1], "ac_daily": [1]}],
    }
    resp = await client.post("/api/v1/evm/work-types/ratios", json=payload)
    assert resp.status_code == 422
