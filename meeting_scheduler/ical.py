# ical.py
from datetime import datetime, timezone
from typing import Optional

from meeting_scheduler.data_models import Appointment, MeetingType

ICAL_TIMESTAMP = "%Y%m%dT%H%M%SZ"


def _escape(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def meeting_location(meeting_type: Optional[MeetingType]) -> str:
    if meeting_type is not None and meeting_type.in_person:
        return "In-person"
    return "Virtual"


def build_invite(
    appointment: Appointment,
    meeting_type: Optional[MeetingType],
    organizer_email: str,
    organizer_name: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Render a confirmed appointment as an iCalendar REQUEST.

    Appointment times are naive wall-clock values and are written as-is
    with a UTC suffix.
    """
    stamp = (now or datetime.now(timezone.utc)).strftime(ICAL_TIMESTAMP)
    domain = organizer_email.rpartition("@")[2] or "localhost"
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:-//{_escape(organizer_name)}//Scheduler//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:REQUEST",
        "BEGIN:VEVENT",
        f"UID:{appointment.id}@{domain}",
        f"DTSTAMP:{stamp}",
        f"DTSTART:{appointment.start_time.strftime(ICAL_TIMESTAMP)}",
        f"DTEND:{appointment.end_time.strftime(ICAL_TIMESTAMP)}",
        f"SUMMARY:{_escape(f'{appointment.meeting_type_title} with {organizer_name}')}",
        f"DESCRIPTION:{_escape(f'Scheduled meeting: {appointment.meeting_type_title}')}",
        f"LOCATION:{meeting_location(meeting_type)}",
        f"ATTENDEE:mailto:{appointment.email}",
        f"ORGANIZER:mailto:{organizer_email}",
        "STATUS:CONFIRMED",
        "SEQUENCE:0",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines)
