from typing import Any, Dict, List, Tuple

import pytest
from fastapi.testclient import TestClient

from meeting_scheduler.catalog import load_catalog
from meeting_scheduler.config import Settings
from meeting_scheduler.data_models import MeetingType, TimeRange
from meeting_scheduler.errors import NotificationError
from meeting_scheduler.main import create_app
from meeting_scheduler.notifications import NotificationGateway
from meeting_scheduler.service import SchedulingService
from meeting_scheduler.store import InMemoryRequestStore


class RecordingGateway(NotificationGateway):
    def __init__(self, fail: bool = False):
        self.sent: List[Tuple[str, Dict[str, Any]]] = []
        self.fail = fail

    def send(self, event: str, payload: Dict[str, Any]) -> None:
        self.sent.append((event, payload))
        if self.fail:
            raise NotificationError(f"worker down for {event}")


@pytest.fixture
def talk() -> MeetingType:
    return MeetingType(
        id="talk",
        title="A Pleasant Talk",
        description="",
        duration_minutes=40,
        mode="in-person",
        date_start="2026-03-09",
        date_end="2026-03-13",
        daily_start="09:00",
        daily_end="17:00",
        blocked=(TimeRange(start="11:45", end="13:15"),),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url="http://scheduler.test", organizer_email="hello@mike.game")


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def store() -> InMemoryRequestStore:
    return InMemoryRequestStore()


@pytest.fixture
def service(store, gateway, settings) -> SchedulingService:
    return SchedulingService(catalog=load_catalog(), store=store, gateway=gateway, settings=settings)


@pytest.fixture
def client(service) -> TestClient:
    return TestClient(create_app(service))


@pytest.fixture
def booking_payload() -> Dict[str, Any]:
    return {
        "meeting_type_id": "gdc-pleasant-talk",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "company": "Analytical Engines",
        "role": "Engineer",
        "date": "2026-03-09",
        "time": "10:00",
        "timezone": "America/Los_Angeles",
        "discussion_topics": ["technical", "custom-topic"],
        "discussion_details": "Difference engine tooling.",
    }
