# main.py
import logging
from pathlib import Path
from typing import List, Optional

import fastapi
from fastapi import BackgroundTasks, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from meeting_scheduler.auth import token_from_form, token_from_query
from meeting_scheduler.catalog import TOPIC_LABELS, load_catalog, topic_labels
from meeting_scheduler.config import configure_logging, get_settings
from meeting_scheduler.data_models import RequestStatus
from meeting_scheduler.errors import SchedulerError
from meeting_scheduler.models import (
    AvailabilityRequest,
    BookingRequest,
    BookingResponse,
    MeetingTypeOut,
    PendingRequestOut,
    TimeSlotOut,
)
from meeting_scheduler.notifications import build_gateway
from meeting_scheduler.service import SchedulingService
from meeting_scheduler.store import InMemoryRequestStore

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def build_service() -> SchedulingService:
    settings = get_settings()
    return SchedulingService(
        catalog=load_catalog(settings.meeting_types_file),
        store=InMemoryRequestStore(),
        gateway=build_gateway(settings.email_worker_url, timeout=settings.email_worker_timeout),
        settings=settings,
    )


def _notice(request: Request, heading: str, message: str = "", status_code: int = 200) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "notice.html", {"heading": heading, "message": message}, status_code=status_code
    )


def create_app(service: Optional[SchedulingService] = None) -> fastapi.FastAPI:
    service = service or build_service()
    configure_logging(service.settings.log_level)

    app = fastapi.FastAPI(title="Meeting Scheduler")
    app.state.service = service
    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    @app.on_event("startup")
    async def startup():
        logger.info(
            "Scheduler ready with %d meeting types; review links use %s",
            len(service.catalog), service.settings.base_url,
        )

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        """Serves the booking page."""
        return templates.TemplateResponse(request, "index.html", {
            "title": f"Schedule a Meeting - {service.settings.organizer_name}",
            "description": f"Book a time to meet with {service.settings.organizer_name} "
                           "for a conference or virtual meeting",
            "meeting_types": service.meeting_types(),
            "topics": TOPIC_LABELS,
        })

    @app.get("/api/meeting-types", response_model=List[MeetingTypeOut])
    def list_meeting_types():
        return [MeetingTypeOut.from_meeting_type(mt) for mt in service.meeting_types()]

    @app.post("/api/availability", response_model=List[TimeSlotOut])
    def availability(query: AvailabilityRequest):
        try:
            slots = service.availability(query.meeting_type_id, query.date, query.timezone)
        except SchedulerError as exc:
            raise HTTPException(status_code=exc.status_code, detail=exc.message)
        return [TimeSlotOut(time=slot.time, available=slot.available) for slot in slots]

    @app.post("/api/book", response_model=BookingResponse)
    def book(booking: BookingRequest, background_tasks: BackgroundTasks):
        try:
            pending = service.submit_booking(booking)
        except SchedulerError as exc:
            raise HTTPException(status_code=exc.status_code, detail=exc.message)
        background_tasks.add_task(service.notify_submitted, pending)
        return BookingResponse(id=pending.id)

    @app.get("/api/request", response_model=PendingRequestOut)
    def get_request(token: str = Depends(token_from_query)):
        try:
            pending = service.review(token)
        except SchedulerError as exc:
            raise HTTPException(status_code=exc.status_code, detail=exc.message)
        return PendingRequestOut(
            id=pending.id,
            meeting_type_id=pending.meeting_type_id,
            meeting_type_title=pending.meeting_type_title,
            duration_minutes=pending.duration_minutes,
            name=pending.name,
            email=pending.email,
            company=pending.company,
            role=pending.role,
            discussion_topics=pending.discussion_topics,
            discussion_details=pending.discussion_details,
            requested_date=pending.requested_date,
            requested_time=pending.requested_time,
            timezone=pending.timezone,
            status=pending.status.value,
        )

    @app.get("/admin/review", response_class=HTMLResponse)
    def admin_review(request: Request, token: str = Depends(token_from_query)):
        try:
            pending = service.review(token)
        except SchedulerError as exc:
            return _notice(request, exc.message, status_code=exc.status_code)

        if pending.status != RequestStatus.PENDING:
            return _notice(request, f"This request has already been {pending.status.value}")

        labels = topic_labels(pending.discussion_topics)
        return templates.TemplateResponse(request, "review.html", {
            "pending": pending,
            "topics": ", ".join(labels) if labels else "None selected",
        })

    @app.post("/admin/approve", response_class=HTMLResponse)
    def admin_approve(request: Request, background_tasks: BackgroundTasks, token: str = Depends(token_from_form)):
        try:
            appointment = service.approve(token)
        except SchedulerError as exc:
            return _notice(request, exc.message, status_code=exc.status_code)
        background_tasks.add_task(service.notify_approved, appointment)
        return _notice(request, "Meeting Approved!", "A calendar invitation has been sent to the attendee.")

    @app.post("/admin/deny", response_class=HTMLResponse)
    def admin_deny(request: Request, background_tasks: BackgroundTasks, token: str = Depends(token_from_form)):
        try:
            pending = service.deny(token)
        except SchedulerError as exc:
            return _notice(request, exc.message, status_code=exc.status_code)
        background_tasks.add_task(service.notify_denied, pending)
        return _notice(request, "Meeting Declined", "A polite message has been sent to the requester.")

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("meeting_scheduler.main:create_app", factory=True, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
