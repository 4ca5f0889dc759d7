# data_models.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


@dataclass(frozen=True)
class TimeRange:
    """A wall-clock range within a day, as "HH:MM" strings."""
    start: str
    end: str


@dataclass(frozen=True)
class MeetingType:
    """A bookable kind of meeting and the schedule it can be booked within."""
    id: str
    title: str
    description: str
    duration_minutes: int
    mode: str
    date_start: str
    date_end: str
    daily_start: str
    daily_end: str
    blocked: Tuple[TimeRange, ...] = ()

    @property
    def in_person(self) -> bool:
        return self.mode == "in-person"


@dataclass
class PendingRequest:
    """A booking request awaiting the administrator's decision."""
    meeting_type_id: str
    meeting_type_title: str
    duration_minutes: int
    name: str
    email: str
    requested_date: str
    requested_time: str
    discussion_details: str
    company: str = ""
    role: str = ""
    timezone: str = ""
    discussion_topics: List[str] = field(default_factory=list)
    id: str = ""
    token: str = ""
    status: RequestStatus = RequestStatus.PENDING
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Appointment:
    """A confirmed meeting, created when a pending request is approved."""
    id: str
    meeting_type_id: str
    meeting_type_title: str
    duration_minutes: int
    name: str
    email: str
    company: str
    role: str
    discussion_topics: Tuple[str, ...]
    discussion_details: str
    start_time: datetime
    end_time: datetime
    timezone: str
    created_at: datetime


@dataclass(frozen=True)
class TimeSlot:
    time: str
    available: bool = True
