import os
from datetime import datetime, timedelta, timezone

import pytest

# Settings are read at import time; each test gets its own database below
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient  # noqa: E402

from weather_api import deps  # noqa: E402
from weather_api.app import app  # noqa: E402
from weather_api.storage.base import Base  # noqa: E402
from weather_api.storage.db import build_engine, build_session_factory, init_db  # noqa: E402
from weather_api.storage.repositories.reading_repo import ReadingRepository  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite engine so several threads can share the database."""
    engine = build_engine(f"sqlite:///{tmp_path / 'weather.db'}", timeout=5)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repository(db_session):
    return ReadingRepository(db_session)


@pytest.fixture
def broken_store(engine):
    """Drop the table so every query fails at the driver."""
    Base.metadata.drop_all(engine)
    return engine


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_started_at] = lambda: datetime.now(timezone.utc) - timedelta(hours=1)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def station_payload():
    """A full WS2900-style webhook body."""
    return {
        "PASSKEY": "0123456789ABCDEF",
        "stationtype": "EasyWeatherV1.6.4",
        "dateutc": "2024-01-01 12:00:00",
        "tempinf": "71.6",
        "humidityin": "40",
        "baromrelin": "29.92",
        "baromabsin": "29.80",
        "tempf": "32",
        "humidity": "45",
        "winddir": "270",
        "windspeedmph": "10",
        "windgustmph": "20",
        "maxdailygust": "25",
        "rainratein": "0.1",
        "eventrainin": "0.5",
        "hourlyrainin": "0.1",
        "dailyrainin": "0.5",
        "weeklyrainin": "1",
        "monthlyrainin": "2",
        "yearlyrainin": "10",
        "totalrainin": "10",
        "solarradiation": "512.3",
        "uv": "4",
        "wh65batt": "0",
        "wh25batt": "1",
        "freq": "868M",
        "model": "WS2900_V2.01.18",
    }
