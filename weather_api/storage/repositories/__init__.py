"""Repositories."""
from weather_api.storage.repositories.reading_repo import ReadingRepository

__all__ = ["ReadingRepository"]
