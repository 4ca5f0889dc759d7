# errors.py
from fastapi import status


class SchedulerError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BookingValidationError(SchedulerError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnknownMeetingTypeError(BookingValidationError):
    def __init__(self, meeting_type_id: str):
        super().__init__("Invalid meeting type")
        self.meeting_type_id = meeting_type_id


class MissingFieldsError(BookingValidationError):
    def __init__(self, fields):
        super().__init__("Missing required fields")
        self.fields = list(fields)


class RequestNotFoundError(SchedulerError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Request not found"):
        super().__init__(message)


class RequestAlreadyProcessedError(SchedulerError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current_status: str):
        super().__init__(f"This request has already been {current_status}")
        self.current_status = current_status


class NotificationError(SchedulerError):
    """Outbound notification delivery failed. Logged, never surfaced."""
    status_code = status.HTTP_502_BAD_GATEWAY
