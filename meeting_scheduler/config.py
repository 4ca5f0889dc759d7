# config.py
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment (and a local .env file)."""
    port: int = 3001
    base_url: str = "http://localhost:3001"
    email_worker_url: Optional[str] = None
    email_worker_timeout: float = 10.0
    slot_interval_minutes: int = 10
    organizer_name: str = "Mike Sanders"
    organizer_email: str = "hello@mike.game"
    meeting_types_file: Optional[str] = None
    log_level: str = "INFO"


def get_settings() -> Settings:
    slot_interval = int(os.getenv("SLOT_INTERVAL_MINUTES", "10"))
    if slot_interval < 1:
        raise ValueError(f"SLOT_INTERVAL_MINUTES must be at least 1, got {slot_interval}")
    return Settings(
        port=int(os.getenv("PORT", "3001")),
        base_url=os.getenv("BASE_URL", "http://localhost:3001").rstrip("/"),
        email_worker_url=os.getenv("EMAIL_WORKER_URL") or None,
        email_worker_timeout=float(os.getenv("EMAIL_WORKER_TIMEOUT", "10")),
        slot_interval_minutes=slot_interval,
        organizer_name=os.getenv("ORGANIZER_NAME", "Mike Sanders"),
        organizer_email=os.getenv("ORGANIZER_EMAIL", "hello@mike.game"),
        meeting_types_file=os.getenv("MEETING_TYPES_FILE") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
