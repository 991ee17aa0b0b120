"""Weather reading model."""
from typing import Dict, Tuple
from sqlalchemy import Column, String, Integer, Float, DateTime, Index, Numeric

from weather_api.storage.base import Base


def Decimal2(precision: int) -> Numeric:
    """Fixed two-decimal column returned to Python as float."""
    return Numeric(precision, 2, asdecimal=False)


class WeatherReading(Base):
    """One ingested station sample, metric units, append-only."""

    __tablename__ = "weather_readings"
    __table_args__ = (
        Index('idx_weather_readings_timestamp', 'timestamp'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)

    # Temperature (Celsius)
    outdoor_temperature = Column(Decimal2(5), nullable=False, default=0)
    indoor_temperature = Column(Decimal2(5), nullable=False, default=0)
    sensor1_temperature = Column(Decimal2(5))
    sensor2_temperature = Column(Decimal2(5))

    # Humidity (percentage)
    outdoor_humidity = Column(Decimal2(5), nullable=False, default=0)
    indoor_humidity = Column(Decimal2(5), nullable=False, default=0)
    sensor1_humidity = Column(Decimal2(5))
    sensor2_humidity = Column(Decimal2(5))

    # Pressure (hPa)
    barometric_pressure = Column(Decimal2(7), nullable=False, default=0)
    absolute_pressure = Column(Decimal2(7), nullable=False, default=0)

    # Wind (m/s, degrees)
    wind_speed = Column(Decimal2(5), nullable=False, default=0)
    wind_gust = Column(Decimal2(5), nullable=False, default=0)
    max_daily_gust = Column(Decimal2(5), nullable=False, default=0)
    wind_direction = Column(Float, nullable=False, default=0)

    # Rain (mm)
    rain_rate = Column(Decimal2(6), nullable=False, default=0)
    event_rain = Column(Decimal2(6), nullable=False, default=0)
    hourly_rain = Column(Decimal2(6), nullable=False, default=0)
    daily_rain = Column(Decimal2(6), nullable=False, default=0)
    weekly_rain = Column(Decimal2(6), nullable=False, default=0)
    monthly_rain = Column(Decimal2(6), nullable=False, default=0)
    yearly_rain = Column(Decimal2(7), nullable=False, default=0)
    total_rain = Column(Decimal2(7), nullable=False, default=0)

    # Solar
    solar_radiation = Column(Decimal2(7), nullable=False, default=0)
    uv_index = Column(Float, nullable=False, default=0)

    # Battery status
    wh65_battery = Column(Integer, nullable=False, default=0)
    wh25_battery = Column(Integer, nullable=False, default=0)
    battery1 = Column(Integer, nullable=False, default=0)
    battery2 = Column(Integer, nullable=False, default=0)

    # Station info
    station_type = Column(String(100), nullable=False, default="")
    frequency = Column(String(50), nullable=False, default="")
    model = Column(String(100), nullable=False, default="")


# column name -> (precision, scale) for every fixed-point column
NUMERIC_SCALES: Dict[str, Tuple[int, int]] = {
    column.name: (column.type.precision, column.type.scale)
    for column in WeatherReading.__table__.columns
    if isinstance(column.type, Numeric) and not isinstance(column.type, Float)
}
