"""Build a metric WeatherReadingDTO from a raw station webhook payload."""
from datetime import datetime, timezone
from typing import Callable, Dict, Mapping, Optional, Tuple

from weather_api.conversions import (
    fahrenheit_to_celsius,
    inches_to_mm,
    inhg_to_hpa,
    mph_to_ms,
)
from weather_api.parsing import FieldParser
from weather_api.schemas.reading import WeatherReadingDTO

Converter = Optional[Callable[[Optional[float]], Optional[float]]]

# field -> (vendor key, converter)
REQUIRED_NUMBERS: Dict[str, Tuple[str, Converter]] = {
    "outdoor_temperature": ("tempf", fahrenheit_to_celsius),
    "indoor_temperature": ("tempinf", fahrenheit_to_celsius),
    "outdoor_humidity": ("humidity", None),
    "indoor_humidity": ("humidityin", None),
    "barometric_pressure": ("baromrelin", inhg_to_hpa),
    "absolute_pressure": ("baromabsin", inhg_to_hpa),
    "wind_speed": ("windspeedmph", mph_to_ms),
    "wind_gust": ("windgustmph", mph_to_ms),
    "max_daily_gust": ("maxdailygust", mph_to_ms),
    "wind_direction": ("winddir", None),
    "rain_rate": ("rainratein", inches_to_mm),
    "event_rain": ("eventrainin", inches_to_mm),
    "hourly_rain": ("hourlyrainin", inches_to_mm),
    "daily_rain": ("dailyrainin", inches_to_mm),
    "weekly_rain": ("weeklyrainin", inches_to_mm),
    "monthly_rain": ("monthlyrainin", inches_to_mm),
    "yearly_rain": ("yearlyrainin", inches_to_mm),
    "total_rain": ("totalrainin", inches_to_mm),
    "solar_radiation": ("solarradiation", None),
    "uv_index": ("uv", None),
}

# Not every station has the auxiliary sensors, so these stay None when absent
OPTIONAL_NUMBERS: Dict[str, Tuple[str, Converter]] = {
    "sensor1_temperature": ("temp1f", fahrenheit_to_celsius),
    "sensor2_temperature": ("temp2f", fahrenheit_to_celsius),
    "sensor1_humidity": ("humidity1", None),
    "sensor2_humidity": ("humidity2", None),
}

BATTERIES: Dict[str, str] = {
    "wh65_battery": "wh65batt",
    "wh25_battery": "wh25batt",
    "battery1": "batt1",
    "battery2": "batt2",
}

STRINGS: Dict[str, str] = {
    "station_type": "stationtype",
    "model": "model",
    "frequency": "freq",
}

TIMESTAMP_KEY = "dateutc"


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def _convert(parser: FieldParser, key: str, converter: Converter) -> Optional[float]:
    value = parser.optional_number(key)
    return converter(value) if converter else value


def normalize(payload: Mapping[str, str], now: Optional[datetime] = None) -> WeatherReadingDTO:
    """Parse and convert one webhook payload. Nothing is persisted here."""
    parser = FieldParser(payload)
    fields = {"timestamp": parser.timestamp(TIMESTAMP_KEY) or now or utc_now()}

    for name, (key, converter) in REQUIRED_NUMBERS.items():
        value = _convert(parser, key, converter)
        fields[name] = value if value is not None else 0

    for name, (key, converter) in OPTIONAL_NUMBERS.items():
        fields[name] = _convert(parser, key, converter)

    for name, key in BATTERIES.items():
        value = parser.optional_integer(key)
        fields[name] = value if value is not None else 0

    for name, key in STRINGS.items():
        fields[name] = parser.string(key)

    return WeatherReadingDTO(**fields)
