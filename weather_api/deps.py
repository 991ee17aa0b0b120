"""Common dependencies."""
from datetime import datetime
from typing import Generator
from uuid import uuid4
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from weather_api.services.status import StatusService, process_started_at
from weather_api.storage.db import get_db as get_database_session
from weather_api.storage.repositories.reading_repo import ReadingRepository

_started_at = process_started_at()


def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """Get or generate request ID."""
    return x_request_id or str(uuid4())


def get_db() -> Generator[Session, None, None]:
    """Database session dependency."""
    yield from get_database_session()


def get_started_at() -> datetime:
    """Process start time used for uptime."""
    return _started_at


def get_repository(db: Session = Depends(get_db)) -> ReadingRepository:
    return ReadingRepository(db)


def get_status_service(
    repository: ReadingRepository = Depends(get_repository),
    started_at: datetime = Depends(get_started_at),
) -> StatusService:
    return StatusService(repository, started_at)
