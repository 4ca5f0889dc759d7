# service.py
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from meeting_scheduler.availability import SLOT_INTERVAL_MINUTES, compute_slots, date_in_range
from meeting_scheduler.catalog import MeetingTypeCatalog
from meeting_scheduler.config import Settings
from meeting_scheduler.data_models import Appointment, MeetingType, PendingRequest, TimeSlot
from meeting_scheduler.errors import BookingValidationError, MissingFieldsError, NotificationError, UnknownMeetingTypeError
from meeting_scheduler.ical import build_invite
from meeting_scheduler.models import BookingRequest
from meeting_scheduler.notifications import (
    ADMIN_NOTIFICATION,
    APPROVAL,
    DENIAL,
    NotificationGateway,
    admin_notification_payload,
    approval_payload,
    denial_payload,
)
from meeting_scheduler.store import RequestStore
from meeting_scheduler.validation import validate_booking

logger = logging.getLogger(__name__)


class SchedulingService:
    """
    Entry point for everything the HTTP layer does.

    Store mutations happen first; the notify_* methods are meant to run
    afterwards (as background tasks) and never raise.
    """

    def __init__(
        self,
        catalog: MeetingTypeCatalog,
        store: RequestStore,
        gateway: NotificationGateway,
        settings: Optional[Settings] = None,
    ):
        self.catalog = catalog
        self.store = store
        self.gateway = gateway
        self.settings = settings or Settings()

    def meeting_types(self) -> List[MeetingType]:
        return self.catalog.all()

    def get_meeting_type(self, meeting_type_id: str) -> MeetingType:
        if not meeting_type_id:
            raise BookingValidationError("Meeting type is required")
        try:
            return self.catalog[meeting_type_id]
        except KeyError:
            raise UnknownMeetingTypeError(meeting_type_id)

    def availability(self, meeting_type_id: str, date_str: str, timezone: Optional[str] = None) -> List[TimeSlot]:
        # timezone is accepted for the API contract but never applied
        meeting_type = self.get_meeting_type(meeting_type_id)
        try:
            day = datetime.strptime(date_str, "%Y-%m-%d")
        except (TypeError, ValueError):
            raise BookingValidationError("Invalid date format")

        if not date_in_range(day, meeting_type.date_start, meeting_type.date_end):
            return []

        interval = self.settings.slot_interval_minutes or SLOT_INTERVAL_MINUTES
        with self.store.reading():
            return compute_slots(day, meeting_type, interval_minutes=interval)

    def submit_booking(self, booking: BookingRequest) -> PendingRequest:
        meeting_type = self.get_meeting_type(booking.meeting_type_id)
        missing = booking.missing_fields()
        if missing:
            raise MissingFieldsError(missing)

        validate_booking(meeting_type, booking.date, booking.time)

        pending = self.store.submit(PendingRequest(
            meeting_type_id=meeting_type.id,
            meeting_type_title=meeting_type.title,
            duration_minutes=meeting_type.duration_minutes,
            name=booking.name,
            email=booking.email,
            company=booking.company,
            role=booking.role,
            discussion_topics=list(booking.discussion_topics or []),
            discussion_details=booking.discussion_details,
            requested_date=booking.date,
            requested_time=booking.time,
            timezone=booking.timezone,
        ))
        logger.info(
            "New meeting request %s from %s (%s) for %s on %s at %s",
            pending.id, pending.name, pending.email, meeting_type.id, pending.requested_date, pending.requested_time,
        )
        logger.info("Review URL: %s", self.review_url(pending.token))
        return pending

    def review(self, token: str) -> PendingRequest:
        return self.store.find_by_token(token)

    def approve(self, token: str) -> Appointment:
        appointment = self.store.approve(token)
        logger.info("Approved meeting request for %s; appointment %s", appointment.email, appointment.id)
        return appointment

    def deny(self, token: str) -> PendingRequest:
        request = self.store.deny(token)
        logger.info("Declined meeting request %s from %s", request.id, request.email)
        return request

    def review_url(self, token: str) -> str:
        return f"{self.settings.base_url}/admin/review?{urlencode({'token': token})}"

    def invite_for(self, appointment: Appointment) -> str:
        return build_invite(
            appointment,
            self.catalog.get(appointment.meeting_type_id),
            organizer_email=self.settings.organizer_email,
            organizer_name=self.settings.organizer_name,
        )

    def _dispatch(self, event: str, payload: Dict[str, Any]) -> bool:
        try:
            self.gateway.send(event, payload)
        except NotificationError as exc:
            logger.warning("Notification %s not delivered: %s", event, exc.message)
            return False
        return True

    def notify_submitted(self, request: PendingRequest) -> bool:
        return self._dispatch(ADMIN_NOTIFICATION, admin_notification_payload(request, self.review_url(request.token)))

    def notify_approved(self, appointment: Appointment) -> bool:
        return self._dispatch(APPROVAL, approval_payload(appointment, self.invite_for(appointment)))

    def notify_denied(self, request: PendingRequest) -> bool:
        return self._dispatch(DENIAL, denial_payload(request))
