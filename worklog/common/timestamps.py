"""Timestamp helpers — every datetime is compared in the configured zone."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from worklog.config import settings


def local_zone() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def now_local() -> datetime:
    return datetime.now(local_zone())


def ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    """Attach the configured zone to a timestamp sent without an offset.

    Timestamps that already carry an offset are returned unchanged.
    """
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=local_zone())
