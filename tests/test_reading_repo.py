import threading
from datetime import datetime, timedelta, timezone

import pytest

from weather_api.exceptions import StorageFailure
from weather_api.normalizer import normalize
from weather_api.schemas.reading import WeatherReadingDTO
from weather_api.storage.models import WeatherReading
from weather_api.storage.repositories.reading_repo import ReadingRepository, quantize

NOON = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_reading(timestamp=NOON, **fields) -> WeatherReadingDTO:
    return WeatherReadingDTO(timestamp=timestamp, **fields)


def test_empty_store(repository):
    assert repository.latest() is None
    assert repository.count() == 0


def test_append_then_latest_returns_same_record(repository):
    reading = make_reading(
        outdoor_temperature=21.5,
        outdoor_humidity=45.0,
        sensor1_temperature=18.25,
        barometric_pressure=1013.25,
        wind_direction=270.0,
        wh65_battery=1,
        station_type="EasyWeatherV1.6.4",
        model="WS2900",
        frequency="868M",
    )

    reading_id = repository.append(reading)

    assert isinstance(reading_id, int)
    assert repository.latest() == reading.model_copy(update={"id": reading_id})
    assert repository.count() == 1


def test_latest_is_by_timestamp_not_insertion(repository):
    repository.append(make_reading(timestamp=NOON + timedelta(hours=1), outdoor_temperature=5.0))
    repository.append(make_reading(timestamp=NOON, outdoor_temperature=1.0))

    latest = repository.latest()
    assert latest.timestamp == NOON + timedelta(hours=1)
    assert latest.outdoor_temperature == 5.0


def test_equal_timestamps_highest_id_wins(repository):
    first = repository.append(make_reading(outdoor_temperature=1.0))
    second = repository.append(make_reading(outdoor_temperature=2.0))

    assert second > first
    assert repository.latest().id == second


def test_values_are_stored_at_two_decimals(repository):
    repository.append(normalize({"dateutc": "2024-01-01 12:00:00", "baromrelin": "29.92", "windspeedmph": "10"}))

    latest = repository.latest()
    assert latest.barometric_pressure == 1013.21
    assert latest.wind_speed == 4.47


def test_value_beyond_column_precision_is_rejected(repository):
    with pytest.raises(StorageFailure):
        repository.append(make_reading(outdoor_temperature=1000.0))
    assert repository.count() == 0


def test_non_finite_value_is_rejected_before_insert(repository):
    with pytest.raises(StorageFailure) as excinfo:
        repository.append(make_reading(outdoor_temperature=float("inf")))
    assert excinfo.value.operation == "append"
    assert repository.count() == 0


def test_quantize_rejects_non_finite_on_every_column():
    with pytest.raises(StorageFailure):
        quantize("wind_direction", float("inf"))
    with pytest.raises(StorageFailure):
        quantize("barometric_pressure", float("nan"))


def test_quantize_leaves_unbounded_columns_alone():
    assert quantize("wind_direction", 123.456) == 123.456
    assert quantize("sensor1_temperature", None) is None
    assert quantize("rain_rate", 2.545) == 2.55


def test_unreachable_table_raises_storage_failure(broken_store, repository):
    with pytest.raises(StorageFailure) as excinfo:
        repository.count()
    assert excinfo.value.operation == "count"
    assert "weather_readings" in excinfo.value.message

    with pytest.raises(StorageFailure):
        repository.append(make_reading())
    with pytest.raises(StorageFailure):
        repository.latest()


def test_concurrent_appends_get_distinct_ids(session_factory):
    ids = []
    errors = []

    def worker(temperature):
        session = session_factory()
        try:
            ids.append(ReadingRepository(session).append(make_reading(outdoor_temperature=temperature)))
        except StorageFailure as e:
            errors.append(e)
        finally:
            session.close()

    threads = [threading.Thread(target=worker, args=(t,)) for t in (10.0, 20.0)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(set(ids)) == 2

    session = session_factory()
    try:
        assert ReadingRepository(session).count() == 2
        assert sorted(row.id for row in session.query(WeatherReading).all()) == sorted(ids)
    finally:
        session.close()
