# notifications.py
"""
Outbound email notifications.

Emails are rendered and delivered by an external mail worker; this module
only builds the flat JSON record for each event and POSTs it.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from meeting_scheduler.data_models import Appointment, PendingRequest
from meeting_scheduler.errors import NotificationError

logger = logging.getLogger(__name__)

ADMIN_NOTIFICATION = "admin_notification"
APPROVAL = "approval"
DENIAL = "denial"


class NotificationGateway:
    """Delivers one event record. Implementations raise NotificationError on failure."""

    def send(self, event: str, payload: Dict[str, Any]) -> None:
        raise NotImplementedError


class LoggingGateway(NotificationGateway):
    def send(self, event: str, payload: Dict[str, Any]) -> None:
        logger.info("EMAIL_WORKER_URL not set, skipping %s email", event)


class EmailWorkerGateway(NotificationGateway):
    def __init__(self, worker_url: str, timeout: float = 10.0, client: Optional[httpx.Client] = None):
        self.worker_url = worker_url
        self.timeout = timeout
        self._client = client

    def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self.worker_url, json=payload, timeout=self.timeout)
        with httpx.Client() as http:
            return http.post(self.worker_url, json=payload, timeout=self.timeout)

    def send(self, event: str, payload: Dict[str, Any]) -> None:
        try:
            response = self._post({"type": event, **payload})
        except httpx.HTTPError as exc:
            raise NotificationError(f"Failed to send {event} email: {exc}") from exc
        if response.status_code != 200:
            raise NotificationError(f"Email worker returned status {response.status_code} for {event}")
        logger.info("%s email sent successfully", event)


def build_gateway(worker_url: Optional[str], timeout: float = 10.0) -> NotificationGateway:
    if not worker_url:
        return LoggingGateway()
    return EmailWorkerGateway(worker_url, timeout=timeout)


def admin_notification_payload(request: PendingRequest, review_url: str) -> Dict[str, Any]:
    return {
        "reviewURL": review_url,
        "name": request.name,
        "email": request.email,
        "company": request.company,
        "role": request.role,
        "meetingType": request.meeting_type_title,
        "duration": request.duration_minutes,
        "date": request.requested_date,
        "time": request.requested_time,
        "timezone": request.timezone,
        "topics": list(request.discussion_topics),
        "details": request.discussion_details,
    }


def approval_payload(appointment: Appointment, ics: str) -> Dict[str, Any]:
    return {
        "to": appointment.email,
        "name": appointment.name,
        "email": appointment.email,
        "company": appointment.company,
        "role": appointment.role,
        "meetingType": appointment.meeting_type_title,
        "duration": appointment.duration_minutes,
        "startTime": appointment.start_time.isoformat() + "Z",
        "endTime": appointment.end_time.isoformat() + "Z",
        "timezone": appointment.timezone,
        "topics": list(appointment.discussion_topics),
        "details": appointment.discussion_details,
        "appointmentId": appointment.id,
        "ics": ics,
    }


def denial_payload(request: PendingRequest) -> Dict[str, Any]:
    return {
        "to": request.email,
        "name": request.name,
        "meetingType": request.meeting_type_title,
        "date": request.requested_date,
        "time": request.requested_time,
        "timezone": request.timezone,
    }
