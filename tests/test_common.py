"""Tests for common utilities — fiscal-year helpers, series primitives, errors.

Exercises the pure helpers in worklog/common/* plus the RFC 7807 error
rendering and app-level plumbing (health check, rate limiting).
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from worklog.common.exceptions import ValidationException
from worklog.common.fiscal import (
    calendar_year_for,
    days_in_month,
    fiscal_calendar_months,
    get_fiscal_year,
    parse_fiscal_year,
)
from worklog.common.series import (
    cumulative,
    linear_forecast,
    safe_divide,
    safe_ratio,
    value_at,
)
from worklog.common.timestamps import ensure_aware


# ═════════════════════════════════════════════════════════════════════
# FISCAL YEAR
# ═════════════════════════════════════════════════════════════════════


class TestFiscalYear:
    """Fiscal year runs April → March, labeled by its starting year."""

    def test_march_belongs_to_previous_fiscal_year(self):
        assert get_fiscal_year(2025, 3) == "FY24"

    def test_april_starts_new_fiscal_year(self):
        assert get_fiscal_year(2025, 4) == "FY25"

    @pytest.mark.parametrize("month", [1, 2, 3])
    def test_january_to_march(self, month):
        assert get_fiscal_year(2026, month) == "FY25"

    @pytest.mark.parametrize("month", range(4, 13))
    def test_april_to_december(self, month):
        assert get_fiscal_year(2025, month) == "FY25"

    def test_label_is_zero_padded(self):
        assert get_fiscal_year(2005, 6) == "FY05"
        assert get_fiscal_year(2000, 2) == "FY99"

    def test_parse_round_trip(self):
        assert parse_fiscal_year("FY25") == 2025
        assert parse_fiscal_year(get_fiscal_year(2031, 1)) == 2030

    @pytest.mark.parametrize("label", ["", "FY2025", "fy25", "25", "FYab"])
    def test_parse_rejects_malformed_label(self, label):
        with pytest.raises(ValidationException) as exc_info:
            parse_fiscal_year(label)
        assert "fiscal_year" in exc_info.value.errors

    def test_calendar_months_span_two_years(self):
        months = fiscal_calendar_months("FY25")
        assert months[0] == (2025, 4)
        assert months[8] == (2025, 12)
        assert months[9] == (2026, 1)
        assert months[-1] == (2026, 3)
        assert len(months) == 12

    def test_calendar_year_for(self):
        assert calendar_year_for(2025, 12) == 2025
        assert calendar_year_for(2025, 2) == 2026

    def test_days_in_month_handles_leap_year(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2025, 2) == 28
        assert days_in_month(2025, 4) == 30


# ═════════════════════════════════════════════════════════════════════
# SERIES PRIMITIVES
# ═════════════════════════════════════════════════════════════════════


class TestSeries:

    def test_cumulative(self):
        assert cumulative([1, 2, 3]) == [1, 3, 6]
        assert cumulative([]) == []

    def test_value_at_out_of_range_is_zero(self):
        assert value_at([1.0, 2.0], 1) == 2.0
        assert value_at([1.0, 2.0], 5) == 0.0
        assert value_at([1.0, 2.0], -1) == 0.0

    def test_linear_forecast(self):
        # 10 hours in 5 of 20 days → 40 by month end
        assert linear_forecast(10, 5, 20) == pytest.approx(40)

    def test_linear_forecast_zero_current(self):
        assert linear_forecast(0, 5, 20) == 0.0

    def test_linear_forecast_no_elapsed_days(self):
        assert linear_forecast(7, 0, 20) == 7

    def test_safe_ratio_is_percentage(self):
        assert safe_ratio(1, 4) == 25.0
        assert safe_ratio(5, 0) == 0.0

    def test_safe_divide_returns_none_on_zero(self):
        assert safe_divide(6, 3) == 2
        assert safe_divide(6, 0) is None
        assert safe_divide(6, None) is None


# ═════════════════════════════════════════════════════════════════════
# TIMESTAMPS
# ═════════════════════════════════════════════════════════════════════


def test_ensure_aware_attaches_configured_zone():
    from worklog.config import settings

    value = ensure_aware(datetime(2025, 4, 1, 9))
    assert value.tzinfo == ZoneInfo(settings.TIMEZONE)
    assert value.hour == 9


def test_ensure_aware_keeps_existing_offset_and_none():
    utc = datetime(2025, 4, 1, 0, tzinfo=timezone.utc)
    assert ensure_aware(utc) is utc
    assert ensure_aware(None) is None


# ═════════════════════════════════════════════════════════════════════
# APP PLUMBING
# ═════════════════════════════════════════════════════════════════════


async def test_health_check(client):
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_request_validation_error_is_problem_json(client):
    resp = await client.get("/api/v1/holidays/fiscal-year", params={"year": 2025, "month": 13})
    assert resp.status_code == 422
    assert resp.headers["content-type"].startswith("application/problem+json")
    body = resp.json()
    assert body["type"].endswith("/validation-error")
    assert "month" in body["errors"]


async def test_rate_limit_exceeded_returns_429(client):
    from worklog.config import settings

    limit = int(settings.RATE_LIMIT_DEFAULT.split("/")[0])
    payload = {"text": "x"}
    for _ in range(limit):
        resp = await client.post("/api/v1/weekly-reports/format", json=payload)
        assert resp.status_code == 200

    resp = await client.post("/api/v1/weekly-reports/format", json=payload)
    assert resp.status_code == 429
