"""Time-entries router — duration, open/close transitions, WBS summary.

Endpoints are stateless: the caller sends the entry snapshot(s) and stores
the returned record itself.
"""

from datetime import datetime

from fastapi import APIRouter

from worklog.time_entries.schemas import (
    BreakMinutesResponse,
    DurationRequest,
    DurationResponse,
    TimeEntryListRequest,
    TimeEntryResponse,
    TimeEntryStartRequest,
    TimeEntryUpdateRequest,
    WbsSummaryResponse,
)
from worklog.time_entries.service import TimeEntryService

router = APIRouter()


def _response(entry) -> TimeEntryResponse:
    return TimeEntryResponse(entry=entry, state=entry.state)


# ── POST /duration ──────────────────────────────────────────────────

@router.post("/duration", response_model=DurationResponse)
async def duration(body: DurationRequest):
    """Whole seconds between start and end (end defaults to now)."""
    end = body.end_time or datetime.now(body.start_time.tzinfo)
    return DurationResponse(
        start_time=body.start_time,
        end_time=end,
        duration=TimeEntryService.resolve_duration(body.start_time, end),
    )


# ── POST /start ─────────────────────────────────────────────────────

@router.post("/start", response_model=TimeEntryResponse, status_code=201)
async def start_entry(body: TimeEntryStartRequest):
    """Open a new entry. 409 if one of the supplied entries is still open."""
    entry = TimeEntryService.start_entry(body.entries, body.entry)
    return _response(entry)


# ── POST /apply-update ──────────────────────────────────────────────

@router.post("/apply-update", response_model=TimeEntryResponse)
async def apply_update(body: TimeEntryUpdateRequest):
    """Apply an explicit patch (stop, times, project/WBS, task, allocations)."""
    entry = TimeEntryService.apply_update(body.entry, body.update, now=body.now)
    return _response(entry)


# ── POST /wbs-summary ───────────────────────────────────────────────

@router.post("/wbs-summary", response_model=WbsSummaryResponse)
async def wbs_summary(body: TimeEntryListRequest):
    """Tracked hours grouped by project and WBS."""
    items = TimeEntryService.wbs_summary(body.time_entries)
    return WbsSummaryResponse(
        data=items,
        total_hours=round(sum(i.total_hours for i in items), 2),
    )


# ── POST /break-minutes ─────────────────────────────────────────────

@router.post("/break-minutes", response_model=BreakMinutesResponse)
async def break_minutes(body: TimeEntryListRequest):
    """Minutes logged against break projects (休憩 / break)."""
    return BreakMinutesResponse(
        break_minutes=TimeEntryService.break_minutes_from_entries(body.time_entries),
    )
