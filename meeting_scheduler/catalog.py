# catalog.py
from collections import abc
import json
import logging
from datetime import datetime
from types import MappingProxyType
from typing import Dict, Iterator, List, Literal, Mapping, Optional

from pydantic import BaseModel, field_validator, model_validator

from meeting_scheduler.data_models import MeetingType, TimeRange

logger = logging.getLogger(__name__)

TOPIC_LABELS: Mapping[str, str] = MappingProxyType({
    "collaboration": "Collaboration Opportunity",
    "feedback": "Project Feedback",
    "career": "Career Advice",
    "speaking": "Speaking/Panel Opportunity",
    "technical": "Technical Discussion",
    "networking": "Networking / Catch Up",
})

_GDC_LUNCH_BLOCK = (TimeRange(start="11:45", end="13:15"),)

DEFAULT_MEETING_TYPES = (
    MeetingType(
        id="gdc-pleasant-talk",
        title="GDC: A Pleasant Talk",
        description="Have something you want to talk to me about specifically? "
                    "A little more time will be good for us to run through it all.",
        duration_minutes=40,
        mode="in-person",
        date_start="2026-03-09",
        date_end="2026-03-13",
        daily_start="09:00",
        daily_end="17:00",
        blocked=_GDC_LUNCH_BLOCK,
    ),
    MeetingType(
        id="gdc-quick-chat",
        title="GDC: A Quick Chat",
        description="Let's meet quickly, catch up, and discuss what's happening!",
        duration_minutes=20,
        mode="in-person",
        date_start="2026-03-09",
        date_end="2026-03-13",
        daily_start="09:00",
        daily_end="17:00",
        blocked=_GDC_LUNCH_BLOCK,
    ),
    MeetingType(
        id="gdc-lunch",
        title="GDC: Lunch",
        description="Meet in person for lunch during GDC.",
        duration_minutes=60,
        mode="in-person",
        date_start="2026-03-09",
        date_end="2026-03-13",
        daily_start="12:00",
        daily_end="13:00",
    ),
    MeetingType(
        id="gdc-dinner",
        title="GDC: Dinner",
        description="Meet in person for dinner during GDC.",
        duration_minutes=120,
        mode="in-person",
        date_start="2026-03-09",
        date_end="2026-03-13",
        daily_start="17:30",
        daily_end="19:30",
    ),
)


def topic_labels(topics: List[str]) -> List[str]:
    """Map topic keys to their display labels, passing unknown keys through."""
    return [TOPIC_LABELS.get(topic, topic) for topic in topics]


def _clock(value: str) -> datetime:
    return datetime.strptime(value, "%H:%M")


class TimeRangeConfig(BaseModel):
    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def _check_clock(cls, value: str) -> str:
        _clock(value)
        return value


class MeetingTypeConfig(BaseModel):
    """Schema for meeting types loaded from a JSON file."""
    id: str
    title: str
    description: str = ""
    duration_minutes: int
    mode: Literal["in-person", "virtual"] = "virtual"
    date_start: str
    date_end: str
    daily_start: str
    daily_end: str
    blocked: List[TimeRangeConfig] = []

    @field_validator("date_start", "date_end")
    @classmethod
    def _check_date(cls, value: str) -> str:
        datetime.strptime(value, "%Y-%m-%d")
        return value

    @field_validator("daily_start", "daily_end")
    @classmethod
    def _check_clock(cls, value: str) -> str:
        _clock(value)
        return value

    @model_validator(mode="after")
    def _check_window(self) -> "MeetingTypeConfig":
        if self.duration_minutes <= 0:
            raise ValueError("duration_minutes must be positive")
        if self.date_start > self.date_end:
            raise ValueError("date_start must not be after date_end")
        start, end = _clock(self.daily_start), _clock(self.daily_end)
        if start >= end:
            raise ValueError("daily_start must be before daily_end")
        for block in self.blocked:
            if _clock(block.start) < start or _clock(block.end) > end:
                raise ValueError(f"blocked range {block.start}-{block.end} lies outside the daily window")
        return self

    def to_meeting_type(self) -> MeetingType:
        return MeetingType(
            id=self.id,
            title=self.title,
            description=self.description,
            duration_minutes=self.duration_minutes,
            mode=self.mode,
            date_start=self.date_start,
            date_end=self.date_end,
            daily_start=self.daily_start,
            daily_end=self.daily_end,
            blocked=tuple(TimeRange(start=b.start, end=b.end) for b in self.blocked),
        )


class MeetingTypeCatalog(abc.Mapping):
    """Read-only mapping of meeting type id to MeetingType, in definition order."""

    def __init__(self, meeting_types):
        entries: Dict[str, MeetingType] = {}
        for meeting_type in meeting_types:
            if meeting_type.id in entries:
                raise ValueError(f"Duplicate meeting type id: {meeting_type.id}")
            entries[meeting_type.id] = meeting_type
        self._entries = MappingProxyType(entries)

    def __getitem__(self, meeting_type_id: str) -> MeetingType:
        return self._entries[meeting_type_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def all(self) -> List[MeetingType]:
        return list(self._entries.values())

    @classmethod
    def from_file(cls, path: str) -> "MeetingTypeCatalog":
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
        configs = [MeetingTypeConfig.model_validate(item) for item in raw]
        logger.info("Loaded %d meeting types from %s", len(configs), path)
        return cls(config.to_meeting_type() for config in configs)


def load_catalog(path: Optional[str] = None) -> MeetingTypeCatalog:
    if path:
        return MeetingTypeCatalog.from_file(path)
    return MeetingTypeCatalog(DEFAULT_MEETING_TYPES)
