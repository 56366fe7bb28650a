"""EVM router — PV/AC series per project and work type, ratio snapshots.

Endpoints are stateless: projects, entries and plans arrive in the body.
"""

from fastapi import APIRouter

from worklog.evm.schemas import (
    EvmResponse,
    RatioSeriesRequest,
    RatioSeriesResponse,
    SeriesBuildRequest,
    WorkTypeRatioRequest,
    WorkTypeRatioResponse,
    WorkTypeReportResponse,
)
from worklog.evm.service import EvmService

router = APIRouter()


def _project_series(body: SeriesBuildRequest) -> EvmResponse:
    return EvmService.build_project_series(
        body.year,
        body.month,
        body.projects,
        body.time_entries,
        body.fixed_tasks,
        body.holidays,
        body.estimated_hours,
    )


# ── POST /projects ──────────────────────────────────────────────────

@router.post("/projects", response_model=EvmResponse)
async def project_series(body: SeriesBuildRequest):
    """Daily PV/AC hours per project for one month."""
    return _project_series(body)


# ── POST /work-types ────────────────────────────────────────────────

@router.post("/work-types", response_model=WorkTypeReportResponse)
async def work_type_series(body: SeriesBuildRequest):
    """Daily PV/AC hours and BAC per work type for one month."""
    return EvmService.build_work_type_series(_project_series(body))


# ── POST /work-types/ratios ─────────────────────────────────────────

@router.post("/work-types/ratios", response_model=WorkTypeRatioResponse)
async def work_type_ratios(body: WorkTypeRatioRequest):
    """PV / BAC / AC / forecast share per work type at today (or month end)."""
    if not body.days:
        return WorkTypeRatioResponse()

    index = EvmService.snapshot_index(body.days, body.year, body.month, body.today)
    return WorkTypeRatioResponse(
        snapshot_index=index,
        snapshot_date=body.days[index],
        types=EvmService.work_type_ratios(body.days, body.types, index),
    )


# ── POST /work-types/ratio-series ───────────────────────────────────

@router.post("/work-types/ratio-series", response_model=RatioSeriesResponse)
async def ratio_series(body: RatioSeriesRequest):
    """Per-day ratio lines (daily or cumulative) for charts."""
    return RatioSeriesResponse(
        mode=body.mode,
        days=body.days,
        types=EvmService.ratio_series(body.days, body.types, mode=body.mode),
    )
