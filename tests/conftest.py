"""Shared test fixtures — app, client, record factories.

Reusable across all test modules (holidays, attendance, time entries, EVM, etc.).
Every endpoint is stateless, so no database is involved: factories build the
record snapshots that request bodies carry.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from worklog.attendance.schemas import AttendanceRecord
from worklog.common.constants import HolidayType
from worklog.common.fiscal import get_fiscal_year
from worklog.holidays.schemas import HolidayRecord
from worklog.main import create_app
from worklog.time_entries.schemas import ProjectRef, TimeEntryRecord, WbsRef

JST = timezone(timedelta(hours=9))


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to prevent cross-test interference."""
    from worklog.common.rate_limit import limiter

    limiter.reset()
    yield


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
async def app():
    yield create_app()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ── Record factories ────────────────────────────────────────────────

def _at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=JST)


def _make_holiday(
    day: date,
    *,
    name: str = "Holiday",
    type: HolidayType = HolidayType.PUBLIC_HOLIDAY,
    fiscal_year: Optional[str] = None,
) -> HolidayRecord:
    return HolidayRecord(
        date=day,
        name=name,
        type=type,
        fiscal_year=fiscal_year or get_fiscal_year(day.year, day.month),
    )


def _make_attendance(
    day: date,
    *,
    clock_in: Optional[tuple[int, int]] = (9, 0),
    clock_out: Optional[tuple[int, int]] = (18, 0),
    break_minutes: int = 60,
    sleep_hours: Optional[float] = None,
    note: Optional[str] = None,
) -> AttendanceRecord:
    return AttendanceRecord(
        date=day,
        clock_in=_at(day, *clock_in) if clock_in else None,
        clock_out=_at(day, *clock_out) if clock_out else None,
        break_minutes=break_minutes,
        sleep_hours=sleep_hours,
        note=note,
    )


def _make_project(
    project_id: str = "P1",
    *,
    name: str = "Project One",
    code: Optional[str] = None,
    abbreviation: Optional[str] = None,
    work_type=None,
) -> ProjectRef:
    return ProjectRef(
        id=project_id, name=name, code=code, abbreviation=abbreviation, work_type=work_type,
    )


def _make_entry(
    start: datetime,
    *,
    seconds: Optional[int] = 3600,
    project: Optional[ProjectRef] = None,
    project_id: Optional[str] = None,
    wbs: Optional[WbsRef] = None,
    entry_id: str = "E1",
    **kwargs,
) -> TimeEntryRecord:
    """Closed entry lasting ``seconds``; ``seconds=None`` leaves it open."""
    end = start + timedelta(seconds=seconds) if seconds is not None else None
    return TimeEntryRecord(
        id=entry_id,
        start_time=start,
        end_time=end,
        duration=seconds,
        project_id=project_id or (project.id if project else None),
        project=project,
        wbs_id=wbs.id if wbs else None,
        wbs=wbs,
        **kwargs,
    )
