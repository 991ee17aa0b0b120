"""Pydantic schemas."""
from weather_api.schemas.reading import WeatherReadingDTO, WebhookAck, StatusResponse

__all__ = ["WeatherReadingDTO", "WebhookAck", "StatusResponse"]
