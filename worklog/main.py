"""Worklog — FastAPI Application Factory."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from worklog.attendance.router import router as attendance_router
from worklog.common.exceptions import register_exception_handlers
from worklog.common.rate_limit import limiter
from worklog.config import settings
from worklog.evm.router import router as evm_router
from worklog.holidays.router import router as holidays_router
from worklog.kadmin.router import router as kadmin_router
from worklog.salary.router import router as salary_router
from worklog.sleep.router import router as sleep_router
from worklog.time_entries.router import router as time_entries_router
from worklog.weekly_reports.router import router as weekly_reports_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Worklog",
        description="Personal work-hours tracking — attendance, time entries, EVM and reports",
        version="1.0.0",
        docs_url="/api/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/api/redoc" if settings.ENVIRONMENT != "production" else None,
    )

    # Exception handlers (RFC 7807)
    register_exception_handlers(app)

    # Rate limiting (slowapi)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/v1/health", tags=["system"])
    @limiter.exempt
    async def health_check():
        return {
            "status": "healthy",
            "version": "1.0.0",
            "environment": settings.ENVIRONMENT,
        }

    # Register routers
    app.include_router(holidays_router, prefix="/api/v1/holidays", tags=["holidays"])
    app.include_router(attendance_router, prefix="/api/v1/attendance", tags=["attendance"])
    app.include_router(time_entries_router, prefix="/api/v1/time-entries", tags=["time-entries"])
    app.include_router(evm_router, prefix="/api/v1/evm", tags=["evm"])
    app.include_router(kadmin_router, prefix="/api/v1/kadmin", tags=["kadmin"])
    app.include_router(weekly_reports_router, prefix="/api/v1/weekly-reports", tags=["weekly-reports"])
    app.include_router(sleep_router, prefix="/api/v1/sleep", tags=["sleep"])
    app.include_router(salary_router, prefix="/api/v1/salary", tags=["salary"])

    return app


app = create_app()
