# store.py
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager, nullcontext
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable, ContextManager, Iterator, List, Optional

from meeting_scheduler.auth import generate_id, generate_token
from meeting_scheduler.data_models import Appointment, PendingRequest, RequestStatus
from meeting_scheduler.errors import RequestAlreadyProcessedError, RequestNotFoundError
from meeting_scheduler.validation import parse_requested_start


def _copy(request: PendingRequest) -> PendingRequest:
    return replace(request, discussion_topics=list(request.discussion_topics))


class ReadWriteLock:
    """Many readers or one writer. Waiting writers block new readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class RequestStore(ABC):
    """Owns pending requests and appointments and their lifecycle transitions."""

    @abstractmethod
    def submit(self, request: PendingRequest) -> PendingRequest:
        """Store a new request with a fresh id and token; returns the stored copy."""

    @abstractmethod
    def find_by_token(self, token: str) -> PendingRequest:
        """Raises RequestNotFoundError for unknown tokens."""

    @abstractmethod
    def approve(self, token: str) -> Appointment:
        """Create the appointment for a pending request and mark it approved."""

    @abstractmethod
    def deny(self, token: str) -> PendingRequest:
        """Mark a pending request denied."""

    @abstractmethod
    def pending_requests(self) -> List[PendingRequest]:
        pass

    @abstractmethod
    def appointments(self) -> List[Appointment]:
        pass

    def reading(self) -> ContextManager[None]:
        """Shared section for queries that must not interleave with a decision."""
        return nullcontext()


class InMemoryRequestStore(RequestStore):
    """Process-local store; contents are lost on restart."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._lock = ReadWriteLock()
        self._requests: List[PendingRequest] = []
        self._appointments: List[Appointment] = []
        self._clock = clock

    def reading(self) -> ContextManager[None]:
        return self._lock.read()

    def submit(self, request: PendingRequest) -> PendingRequest:
        stored = replace(
            request,
            id=generate_id(),
            token=generate_token(),
            status=RequestStatus.PENDING,
            discussion_topics=list(request.discussion_topics),
            created_at=self._clock(),
        )
        with self._lock.write():
            self._requests.append(stored)
        return _copy(stored)

    def _find(self, token: str) -> Optional[PendingRequest]:
        for request in self._requests:
            if request.token == token:
                return request
        return None

    def _find_pending(self, token: str) -> PendingRequest:
        request = self._find(token)
        if request is None:
            raise RequestNotFoundError()
        if request.status != RequestStatus.PENDING:
            raise RequestAlreadyProcessedError(request.status.value)
        return request

    def find_by_token(self, token: str) -> PendingRequest:
        with self._lock.read():
            request = self._find(token)
            if request is None:
                raise RequestNotFoundError()
            return _copy(request)

    def approve(self, token: str) -> Appointment:
        with self._lock.write():
            request = self._find_pending(token)
            start = parse_requested_start(request.requested_date, request.requested_time)
            appointment = Appointment(
                id=generate_id(),
                meeting_type_id=request.meeting_type_id,
                meeting_type_title=request.meeting_type_title,
                duration_minutes=request.duration_minutes,
                name=request.name,
                email=request.email,
                company=request.company,
                role=request.role,
                discussion_topics=tuple(request.discussion_topics),
                discussion_details=request.discussion_details,
                start_time=start,
                end_time=start + timedelta(minutes=request.duration_minutes),
                timezone=request.timezone,
                created_at=self._clock(),
            )
            self._appointments.append(appointment)
            request.status = RequestStatus.APPROVED
            return appointment

    def deny(self, token: str) -> PendingRequest:
        with self._lock.write():
            request = self._find_pending(token)
            request.status = RequestStatus.DENIED
            return _copy(request)

    def pending_requests(self) -> List[PendingRequest]:
        with self._lock.read():
            return [_copy(request) for request in self._requests]

    def appointments(self) -> List[Appointment]:
        with self._lock.read():
            return list(self._appointments)
