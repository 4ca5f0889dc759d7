# availability.py
"""
Slot availability for a meeting type on a given day.

All times are naive wall-clock values: the requester's timezone is advisory
and never applied to the computation.
"""
from datetime import date, datetime, timedelta
from typing import Iterator, List, Optional, Tuple, Union

from meeting_scheduler.data_models import MeetingType, TimeSlot

SLOT_INTERVAL_MINUTES = 10

# The end date is padded so the whole final calendar day counts as in range.
END_DATE_PADDING = timedelta(hours=23)


def _parse_clock(value: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value, "%H:%M")
    except (TypeError, ValueError):
        return None


def _at_clock(day: Union[date, datetime], clock: datetime) -> datetime:
    return datetime(day.year, day.month, day.day, clock.hour, clock.minute)


def date_in_range(moment: datetime, date_start: str, date_end: str) -> bool:
    """True if `moment` lies within [date_start, date_end + 23h]."""
    try:
        start = datetime.strptime(date_start, "%Y-%m-%d")
        end = datetime.strptime(date_end, "%Y-%m-%d")
    except (TypeError, ValueError):
        return False
    return start <= moment <= end + END_DATE_PADDING


def build_daily_window(day: Union[date, datetime], meeting_type: MeetingType) -> Optional[Tuple[datetime, datetime]]:
    """Anchor the meeting type's daily window to `day`; None if its clocks are malformed."""
    start_clock = _parse_clock(meeting_type.daily_start)
    end_clock = _parse_clock(meeting_type.daily_end)
    if start_clock is None or end_clock is None:
        return None
    return _at_clock(day, start_clock), _at_clock(day, end_clock)


def overlaps_blocked_range(start: datetime, end: datetime, meeting_type: MeetingType) -> bool:
    """Half-open overlap of [start, end) against the blocked ranges on start's day."""
    for block in meeting_type.blocked:
        block_start_clock = _parse_clock(block.start)
        block_end_clock = _parse_clock(block.end)
        if block_start_clock is None or block_end_clock is None:
            continue
        block_start = _at_clock(start, block_start_clock)
        block_end = _at_clock(start, block_end_clock)
        if start < block_end and end > block_start:
            return True
    return False


def iter_slot_starts(
    daily_start: datetime,
    daily_end: datetime,
    duration: timedelta,
    interval_minutes: int = SLOT_INTERVAL_MINUTES,
) -> Iterator[datetime]:
    """Candidate start times; a slot ending exactly at daily_end is included."""
    if interval_minutes <= 0:
        raise ValueError(f"interval_minutes must be positive, got {interval_minutes}")
    step = timedelta(minutes=interval_minutes)
    slot_start = daily_start
    while slot_start + duration <= daily_end:
        yield slot_start
        slot_start += step


def compute_slots(
    day: Union[date, datetime],
    meeting_type: MeetingType,
    interval_minutes: int = SLOT_INTERVAL_MINUTES,
) -> List[TimeSlot]:
    window = build_daily_window(day, meeting_type)
    if window is None:
        return []
    daily_start, daily_end = window
    duration = timedelta(minutes=meeting_type.duration_minutes)

    slots = []
    for slot_start in iter_slot_starts(daily_start, daily_end, duration, interval_minutes):
        if overlaps_blocked_range(slot_start, slot_start + duration, meeting_type):
            continue
        # Existing appointments never make a slot unavailable.
        slots.append(TimeSlot(time=slot_start.strftime("%H:%M"), available=True))
    return slots
