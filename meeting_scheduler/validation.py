# validation.py
from datetime import datetime, timedelta
from typing import Tuple

from meeting_scheduler.availability import build_daily_window, date_in_range, overlaps_blocked_range
from meeting_scheduler.data_models import MeetingType
from meeting_scheduler.errors import BookingValidationError

INVALID_FORMAT = "Invalid date/time format"
DATE_NOT_AVAILABLE = "Selected date is not available for this meeting type"
OUTSIDE_HOURS = "Selected time is outside of available hours"
OVERLAPS_BLOCKED = "Selected time overlaps a blocked period"


def parse_requested_start(date_str: str, time_str: str) -> datetime:
    return datetime.strptime(f"{date_str} {time_str}", "%Y-%m-%d %H:%M")


def validate_booking(meeting_type: MeetingType, date_str: str, time_str: str) -> Tuple[datetime, datetime]:
    """
    Check a requested date/time against a meeting type's schedule.

    Checks run in order and the first failure raises BookingValidationError:
    format, date range, daily window, blocked ranges.

    Returns:
        (start, end) naive datetimes of the requested meeting.
    """
    try:
        start = parse_requested_start(date_str, time_str)
    except (TypeError, ValueError):
        raise BookingValidationError(INVALID_FORMAT)

    if not date_in_range(start, meeting_type.date_start, meeting_type.date_end):
        raise BookingValidationError(DATE_NOT_AVAILABLE)

    end = start + timedelta(minutes=meeting_type.duration_minutes)

    window = build_daily_window(start, meeting_type)
    if window is None or start < window[0] or end > window[1]:
        raise BookingValidationError(OUTSIDE_HOURS)

    if overlaps_blocked_range(start, end, meeting_type):
        raise BookingValidationError(OVERLAPS_BLOCKED)

    return start, end
