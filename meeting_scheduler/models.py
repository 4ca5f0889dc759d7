# models.py
from typing import List, Optional

from pydantic import BaseModel

from meeting_scheduler.data_models import MeetingType


class AvailabilityRequest(BaseModel):
    meeting_type_id: str = ""
    date: str = ""
    # Advisory only, never applied to slot computation
    timezone: Optional[str] = None


class TimeSlotOut(BaseModel):
    time: str
    available: bool


class BookingRequest(BaseModel):
    meeting_type_id: str = ""
    name: str = ""
    email: str = ""
    company: str = ""
    role: str = ""
    date: str = ""
    time: str = ""
    timezone: str = ""
    discussion_topics: Optional[List[str]] = None
    discussion_details: str = ""

    def missing_fields(self) -> List[str]:
        required = ("name", "email", "date", "time", "discussion_details")
        return [field for field in required if not getattr(self, field).strip()]


class BookingResponse(BaseModel):
    success: str = "true"
    id: str


class MeetingTypeOut(BaseModel):
    id: str
    title: str
    description: str
    duration_minutes: int
    mode: str
    date_start: str
    date_end: str

    @classmethod
    def from_meeting_type(cls, meeting_type: MeetingType) -> "MeetingTypeOut":
        return cls(
            id=meeting_type.id,
            title=meeting_type.title,
            description=meeting_type.description,
            duration_minutes=meeting_type.duration_minutes,
            mode=meeting_type.mode,
            date_start=meeting_type.date_start,
            date_end=meeting_type.date_end,
        )


class PendingRequestOut(BaseModel):
    id: str
    meeting_type_id: str
    meeting_type_title: str
    duration_minutes: int
    name: str
    email: str
    company: str
    role: str
    discussion_topics: List[str]
    discussion_details: str
    requested_date: str
    requested_time: str
    timezone: str
    status: str
