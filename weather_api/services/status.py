"""Query and status service composing the reading repository with process uptime."""
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import psutil

from weather_api.exceptions import NotFound, StorageFailure
from weather_api.schemas.reading import WeatherReadingDTO
from weather_api.storage.repositories.reading_repo import ReadingRepository
from weather_api.app_logging import get_logger

logger = get_logger(__name__)

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"
NO_READINGS_MESSAGE = "No weather readings found"


def process_started_at() -> datetime:
    """Start time of the current process in UTC."""
    created = psutil.Process(os.getpid()).create_time()
    return datetime.fromtimestamp(created, tz=timezone.utc)


@dataclass(frozen=True)
class StatusReport:
    health: str
    total_readings: int
    last_reading: Optional[datetime]
    uptime: timedelta
    error: Optional[str] = None

    @property
    def is_healthy(self) -> bool:
        return self.health == HEALTHY


class StatusService:
    def __init__(
        self,
        repository: ReadingRepository,
        started_at: datetime,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.repository = repository
        self.started_at = started_at
        self.clock = clock

    def uptime(self) -> timedelta:
        return self.clock() - self.started_at

    def status(self) -> StatusReport:
        """Summarize storage contents. Storage failures are reported, not raised."""
        try:
            latest = self.repository.latest()
            total = self.repository.count()
        except StorageFailure as e:
            logger.error(f"Status check failed: {e.message}")
            return StatusReport(
                health=UNHEALTHY,
                total_readings=0,
                last_reading=None,
                uptime=self.uptime(),
                error=e.message,
            )

        return StatusReport(
            health=HEALTHY,
            total_readings=total,
            last_reading=latest.timestamp if latest else None,
            uptime=self.uptime(),
        )

    def latest_reading(self) -> WeatherReadingDTO:
        latest = self.repository.latest()
        if latest is None:
            raise NotFound(NO_READINGS_MESSAGE)
        return latest
