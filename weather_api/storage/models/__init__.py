"""Database models."""
from weather_api.storage.models.weather_reading import WeatherReading, NUMERIC_SCALES

__all__ = ['WeatherReading', 'NUMERIC_SCALES']
