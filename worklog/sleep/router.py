"""Sleep router — monthly sleep statistics."""

from fastapi import APIRouter

from worklog.sleep.schemas import SleepStatistics, SleepStatisticsRequest
from worklog.sleep.service import SleepService

router = APIRouter()


@router.post("/statistics", response_model=SleepStatistics)
async def sleep_statistics(body: SleepStatisticsRequest):
    """Recorded/missing days, averages, target hit rate and weekday pattern."""
    return SleepService.statistics(body.year, body.month, body.attendances)
