"""Time-entry Pydantic v2 schemas — tracked work records and WBS summaries.

Naming conventions:
  - *Record          → snapshots supplied by the caller
  - *Request         → request bodies
  - *Response / Item → derived values
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from worklog.common.constants import TimeEntryState, WorkType
from worklog.common.timestamps import ensure_aware


# ═════════════════════════════════════════════════════════════════════
# Embedded references
# ═════════════════════════════════════════════════════════════════════


class ProjectRef(BaseModel):
    """Project joined onto a time entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    code: Optional[str] = None
    abbreviation: Optional[str] = None
    work_type: Optional[WorkType] = None


class WbsRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class AllocationRecord(BaseModel):
    """Share of one time entry's duration booked against a project/WBS."""

    model_config = ConfigDict(from_attributes=True)

    project_id: str
    wbs_id: Optional[str] = None
    percentage: float = Field(..., ge=0, le=100)
    project: Optional[ProjectRef] = None
    wbs: Optional[WbsRef] = None


# ═════════════════════════════════════════════════════════════════════
# Time entry
# ═════════════════════════════════════════════════════════════════════


class TimeEntryRecord(BaseModel):
    """A tracked stretch of work. ``end_time`` is None while the entry is open."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: Optional[int] = Field(None, description="Seconds; set when closed")
    project_id: Optional[str] = None
    wbs_id: Optional[str] = None
    project: Optional[ProjectRef] = None
    wbs: Optional[WbsRef] = None
    daily_task_id: Optional[str] = None
    routine_task_id: Optional[str] = None
    note: Optional[str] = None
    allocations: List[AllocationRecord] = []

    @field_validator("start_time", "end_time")
    @classmethod
    def attach_local_zone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v)

    @property
    def state(self) -> TimeEntryState:
        return TimeEntryState.OPEN if self.end_time is None else TimeEntryState.CLOSED


class AllocationInput(BaseModel):
    project_id: str
    wbs_id: Optional[str] = None
    percentage: float = Field(..., ge=0, le=100)


class TimeEntryUpdate(BaseModel):
    """Explicit patch for a time entry.

    Only fields present in the payload are applied (``model_fields_set``);
    an explicit ``null`` clears the field. A patch with no fields is rejected.
    """

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    stop: bool = False
    note: Optional[str] = None
    project_id: Optional[str] = None
    wbs_id: Optional[str] = None
    daily_task_id: Optional[str] = None
    routine_task_id: Optional[str] = None
    allocations: Optional[List[AllocationInput]] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def attach_local_zone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v)


class TimeEntryStart(BaseModel):
    """Fields for opening a new entry."""

    start_time: Optional[datetime] = None
    project_id: Optional[str] = None
    wbs_id: Optional[str] = None
    daily_task_id: Optional[str] = None
    note: Optional[str] = None

    @field_validator("start_time")
    @classmethod
    def attach_local_zone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v)


# ═════════════════════════════════════════════════════════════════════
# Requests / responses
# ═════════════════════════════════════════════════════════════════════


class DurationRequest(BaseModel):
    start_time: datetime
    end_time: Optional[datetime] = Field(
        None, description="Defaults to the current time"
    )

    @field_validator("start_time", "end_time")
    @classmethod
    def attach_local_zone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v)


class DurationResponse(BaseModel):
    start_time: datetime
    end_time: datetime
    duration: int = Field(..., description="Whole seconds, may be negative")


class TimeEntryStartRequest(BaseModel):
    entries: List[TimeEntryRecord] = Field(
        default_factory=list, description="Current entries, used for the open-entry check"
    )
    entry: TimeEntryStart = Field(default_factory=TimeEntryStart)


class TimeEntryUpdateRequest(BaseModel):
    entry: TimeEntryRecord
    update: TimeEntryUpdate
    now: Optional[datetime] = None

    @field_validator("now")
    @classmethod
    def attach_local_zone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v)


class TimeEntryResponse(BaseModel):
    entry: TimeEntryRecord
    state: TimeEntryState


class TimeEntryListRequest(BaseModel):
    time_entries: List[TimeEntryRecord] = []


class WbsSummaryItem(BaseModel):
    """Tracked time for one (project, WBS) pair."""

    project_id: Optional[str] = None
    project_name: str
    project_abbreviation: Optional[str] = None
    wbs_id: Optional[str] = None
    wbs_name: str
    total_seconds: int = 0
    total_hours: float = 0.0


class WbsSummaryResponse(BaseModel):
    data: List[WbsSummaryItem]
    total_hours: float = 0.0


class BreakMinutesResponse(BaseModel):
    break_minutes: float = 0.0
