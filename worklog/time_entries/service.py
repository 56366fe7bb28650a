"""Time-entry service layer — durations, open/close transitions, WBS totals.

Business logic:
  - Duration is whole seconds between start and end (floored, never clamped)
  - An entry is OPEN until it gets an end time; there is no reopening
  - Only one entry may be OPEN; checked against the supplied snapshot
  - WBS summary groups by (project, WBS); entries without either are kept
    under "No Project" / "No WBS"
  - Allocated entries split their duration across allocation targets
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Iterable, Optional, Sequence

from worklog.common.constants import (
    ALLOCATION_TOLERANCE,
    BREAK_PROJECT_LABELS,
    NO_PROJECT_LABEL,
    NO_WBS_LABEL,
)
from worklog.common.exceptions import ConflictError, ValidationException
from worklog.common.timestamps import ensure_aware, now_local
from worklog.time_entries.schemas import (
    AllocationInput,
    AllocationRecord,
    ProjectRef,
    TimeEntryRecord,
    TimeEntryStart,
    TimeEntryUpdate,
    WbsRef,
    WbsSummaryItem,
)

logger = logging.getLogger(__name__)


def _now_like(reference: datetime) -> datetime:
    """Current time with the same awareness as ``reference``."""
    return datetime.now(reference.tzinfo)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class TimeEntryService:
    """Pure time-entry operations over caller-supplied snapshots."""

    # ── Duration ────────────────────────────────────────────────────

    @staticmethod
    def resolve_duration(start: datetime, end: datetime) -> int:
        """Elapsed whole seconds from ``start`` to ``end``."""
        return math.floor((end - start).total_seconds())

    # ── Start ───────────────────────────────────────────────────────

    @staticmethod
    def find_active(entries: Iterable[TimeEntryRecord]) -> Optional[TimeEntryRecord]:
        return next((e for e in entries if e.end_time is None), None)

    @staticmethod
    def start_entry(
        entries: Sequence[TimeEntryRecord],
        start: TimeEntryStart,
        now: Optional[datetime] = None,
    ) -> TimeEntryRecord:
        """Open a new entry; fails while another entry is still open."""
        active = TimeEntryService.find_active(entries)
        if active is not None:
            raise ConflictError(
                "end_time",
                None,
                detail="There is already an active time entry.",
            )

        return TimeEntryRecord(
            start_time=start.start_time or now or now_local(),
            project_id=start.project_id,
            wbs_id=start.wbs_id,
            daily_task_id=start.daily_task_id,
            note=start.note,
        )

    # ── Update / close ──────────────────────────────────────────────

    @staticmethod
    def _validate_update(update: TimeEntryUpdate) -> None:
        fields = update.model_fields_set
        if not fields or (fields == {"stop"} and not update.stop):
            raise ValidationException({"update": ["At least one field must be set."]})

        errors: dict[str, list[str]] = {}
        if update.daily_task_id and update.routine_task_id:
            errors["task"] = ["Only one task type can be selected."]
        if "start_time" in fields and update.start_time is None:
            errors["start_time"] = ["start_time cannot be cleared."]
        if update.allocations:
            total = sum(a.percentage for a in update.allocations)
            if abs(total - 100) > ALLOCATION_TOLERANCE:
                errors["allocations"] = ["Allocation percentages must sum to 100%."]
        if errors:
            raise ValidationException(errors)

    @staticmethod
    def _to_allocation(alloc: AllocationInput) -> AllocationRecord:
        return AllocationRecord(
            project_id=alloc.project_id,
            wbs_id=alloc.wbs_id or None,
            percentage=alloc.percentage,
        )

    @staticmethod
    def apply_update(
        entry: TimeEntryRecord,
        update: TimeEntryUpdate,
        now: Optional[datetime] = None,
    ) -> TimeEntryRecord:
        """Return ``entry`` with ``update`` applied; the input is left untouched.

        ``stop`` or an ``end_time`` closes the entry and recomputes the
        duration. A new ``start_time`` alone recomputes the duration of an
        already closed entry against its existing end time.
        """
        TimeEntryService._validate_update(update)
        fields = update.model_fields_set
        data = entry.model_dump()

        if "daily_task_id" in fields:
            data["daily_task_id"] = update.daily_task_id or None
            if update.daily_task_id:
                data["routine_task_id"] = None
        if "routine_task_id" in fields:
            data["routine_task_id"] = update.routine_task_id or None
            if update.routine_task_id:
                data["daily_task_id"] = None

        if update.allocations:
            data.update(project_id=None, wbs_id=None, project=None, wbs=None)
            data["allocations"] = [
                TimeEntryService._to_allocation(a).model_dump()
                for a in update.allocations
            ]
        else:
            if "allocations" in fields:
                data["allocations"] = []
            if "project_id" in fields and update.project_id != entry.project_id:
                data.update(project_id=update.project_id, project=None)
            if "wbs_id" in fields and update.wbs_id != entry.wbs_id:
                data.update(wbs_id=update.wbs_id, wbs=None)

        if "note" in fields:
            data["note"] = update.note

        if "start_time" in fields:
            data["start_time"] = update.start_time

        start = data["start_time"]
        if update.stop or "end_time" in fields:
            end = update.end_time or ensure_aware(now) or _now_like(start)
            data["end_time"] = end
            data["duration"] = TimeEntryService.resolve_duration(start, end)
        elif "start_time" in fields and entry.end_time is not None:
            data["duration"] = TimeEntryService.resolve_duration(start, entry.end_time)

        updated = TimeEntryRecord.model_validate(data)
        logger.debug(
            "Time entry %s updated: fields=%s state=%s duration=%s",
            entry.id, sorted(fields), updated.state.value, updated.duration,
        )
        return updated

    @staticmethod
    def close_entry(
        entry: TimeEntryRecord,
        end_time: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> TimeEntryRecord:
        """OPEN → CLOSED, ending at ``end_time`` (default: now)."""
        if end_time is None:
            update = TimeEntryUpdate(stop=True)
        else:
            update = TimeEntryUpdate(end_time=end_time)
        return TimeEntryService.apply_update(entry, update, now=now)

    # ── Break detection ─────────────────────────────────────────────

    @staticmethod
    def is_break_project(project: Optional[ProjectRef]) -> bool:
        if project is None:
            return False
        labels = (project.code, project.name, project.abbreviation)
        return any(
            label and label.lower() in BREAK_PROJECT_LABELS for label in labels
        )

    @staticmethod
    def break_minutes_from_entries(entries: Iterable[TimeEntryRecord]) -> float:
        """Minutes logged against break projects."""
        seconds = sum(
            e.duration or 0
            for e in entries
            if TimeEntryService.is_break_project(e.project)
        )
        return seconds / 60

    # ── WBS summary ─────────────────────────────────────────────────

    @staticmethod
    def wbs_summary(entries: Iterable[TimeEntryRecord]) -> list[WbsSummaryItem]:
        """Tracked seconds per (project, WBS) pair, in first-seen order."""
        groups: dict[str, dict] = {}

        def add(
            project_id: Optional[str],
            project: Optional[ProjectRef],
            wbs_id: Optional[str],
            wbs: Optional[WbsRef],
            seconds: int,
        ) -> None:
            key = f"{project_id or 'null'}-{wbs_id or 'null'}"
            group = groups.get(key)
            if group is None:
                groups[key] = {
                    "project_id": project_id,
                    "project_name": project.name if project else NO_PROJECT_LABEL,
                    "project_abbreviation": project.abbreviation if project else None,
                    "wbs_id": wbs_id,
                    "wbs_name": wbs.name if wbs else NO_WBS_LABEL,
                    "total_seconds": seconds,
                }
            else:
                group["total_seconds"] += seconds

        for entry in entries:
            duration = entry.duration or 0
            if entry.allocations:
                for alloc in entry.allocations:
                    add(
                        alloc.project_id,
                        alloc.project,
                        alloc.wbs_id,
                        alloc.wbs,
                        _round_half_up(duration * alloc.percentage / 100),
                    )
            else:
                add(entry.project_id, entry.project, entry.wbs_id, entry.wbs, duration)

        return [
            WbsSummaryItem(**g, total_hours=round(g["total_seconds"] / 3600, 2))
            for g in groups.values()
        ]
