"""Sleep module test suite — monthly statistics from attendance sleep hours."""

from __future__ import annotations

from datetime import date

import pytest

from worklog.sleep.service import SleepService
from tests.conftest import _make_attendance


def _night(day: int, hours):
    return _make_attendance(date(2025, 6, day), sleep_hours=hours)


def test_statistics_basic():
    # June 2025: 1st is a Sunday
    stats = SleepService.statistics(2025, 6, [_night(1, 6.0), _night(2, 8.0), _night(3, 9.0)])

    assert len(stats.daily) == 30
    assert stats.recorded_count == 3
    assert stats.missing_count == 27
    assert stats.total_hours == 23
    assert stats.average_hours == pytest.approx(23 / 3)
    assert stats.max_hours == 9
    assert stats.min_hours == 6
    assert stats.hit_rate == pytest.approx(200 / 3)


def test_weekday_averages_start_on_sunday():
    stats = SleepService.statistics(2025, 6, [_night(1, 6.0), _night(8, 8.0), _night(2, 7.0)])
    sunday, monday = stats.weekday_averages[:2]
    assert sunday.weekday == "Sun"
    assert sunday.average_hours == 7.0
    assert monday.average_hours == 7.0
    assert stats.weekday_averages[6].average_hours == 0


def test_recent_average_uses_last_seven_recorded_days():
    nights = [_night(d, 5.0) for d in range(1, 4)] + [_night(d, 8.0) for d in range(10, 17)]
    stats = SleepService.statistics(2025, 6, nights)
    assert stats.recent_average == 8.0


def test_unrecorded_and_other_month_rows_are_missing():
    rows = [
        _make_attendance(date(2025, 6, 1)),  # no sleep_hours
        _make_attendance(date(2025, 5, 31), sleep_hours=7.0),
    ]
    stats = SleepService.statistics(2025, 6, rows)
    assert stats.recorded_count == 0
    assert stats.average_hours == 0
    assert stats.min_hours == 0
    assert stats.hit_rate == 0
    assert stats.daily[0].hours is None


async def test_api_statistics(client):
    payload = {
        "year": 2025,
        "month": 6,
        "attendances": [_night(2, 8.5).model_dump(mode="json")],
    }
    resp = await client.post("/api/v1/sleep/statistics", json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["recorded_count"] == 1
    assert body["hit_rate"] == 100
