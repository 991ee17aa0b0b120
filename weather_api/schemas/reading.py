"""Weather reading data transfer objects."""
from datetime import datetime, timedelta, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class WeatherReadingDTO(CamelModel):
    """One normalized, metric-unit snapshot of all sensor channels."""

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    timestamp: datetime

    # Temperature (Celsius)
    outdoor_temperature: float = 0
    indoor_temperature: float = 0
    sensor1_temperature: Optional[float] = None
    sensor2_temperature: Optional[float] = None

    # Humidity (percentage)
    outdoor_humidity: float = 0
    indoor_humidity: float = 0
    sensor1_humidity: Optional[float] = None
    sensor2_humidity: Optional[float] = None

    # Pressure (hPa)
    barometric_pressure: float = 0
    absolute_pressure: float = 0

    # Wind (m/s, degrees)
    wind_speed: float = 0
    wind_gust: float = 0
    max_daily_gust: float = 0
    wind_direction: float = 0

    # Rain (mm)
    rain_rate: float = 0
    event_rain: float = 0
    hourly_rain: float = 0
    daily_rain: float = 0
    weekly_rain: float = 0
    monthly_rain: float = 0
    yearly_rain: float = 0
    total_rain: float = 0

    # Solar
    solar_radiation: float = 0
    uv_index: float = 0

    # Battery status
    wh65_battery: int = 0
    wh25_battery: int = 0
    battery1: int = 0
    battery2: int = 0

    # Station info
    station_type: str = ""
    frequency: str = ""
    model: str = ""

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class WebhookAck(CamelModel):
    status: str = "success"
    timestamp: datetime


class StatusResponse(CamelModel):
    status: str
    total_readings: int
    last_reading: Optional[datetime] = None
    uptime: timedelta
