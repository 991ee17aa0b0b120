from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from weather_api.exceptions import NotFound, StorageFailure
from weather_api.schemas.reading import WeatherReadingDTO
from weather_api.services.status import StatusService, process_started_at

STARTED_AT = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
NOW = STARTED_AT + timedelta(hours=2, minutes=5)


def make_service(repository):
    return StatusService(repository, started_at=STARTED_AT, clock=lambda: NOW)


def test_status_on_empty_store(repository):
    report = make_service(repository).status()

    assert report.is_healthy
    assert report.total_readings == 0
    assert report.last_reading is None
    assert report.uptime == timedelta(hours=2, minutes=5)
    assert report.error is None


def test_status_after_append(repository):
    timestamp = datetime(2024, 1, 1, 1, 0, 0, tzinfo=timezone.utc)
    repository.append(WeatherReadingDTO(timestamp=timestamp))

    report = make_service(repository).status()

    assert report.total_readings == 1
    assert report.last_reading == timestamp


def test_status_reports_storage_failure():
    repository = MagicMock()
    repository.latest.side_effect = StorageFailure("latest", "connection refused")

    report = make_service(repository).status()

    assert not report.is_healthy
    assert report.health == "unhealthy"
    assert report.error == "connection refused"
    assert report.uptime == timedelta(hours=2, minutes=5)


def test_latest_reading_not_found(repository):
    with pytest.raises(NotFound) as excinfo:
        make_service(repository).latest_reading()
    assert excinfo.value.message == "No weather readings found"


def test_latest_reading_returns_record(repository):
    reading_id = repository.append(WeatherReadingDTO(timestamp=STARTED_AT, outdoor_temperature=3.5))

    latest = make_service(repository).latest_reading()

    assert latest.id == reading_id
    assert latest.outdoor_temperature == 3.5


def test_process_started_at_is_in_the_past():
    started = process_started_at()
    assert started.tzinfo is not None
    assert started <= datetime.now(timezone.utc)
