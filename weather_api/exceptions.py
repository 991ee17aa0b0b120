"""Error taxonomy for ingestion and queries."""
from typing import Optional


class WeatherApiException(Exception):
    """Base exception for all weather API errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ParseFailure(WeatherApiException):
    """A single payload field could not be coerced. Never leaves the parser."""

    def __init__(self, field: str, raw_value: str, expected: str):
        super().__init__(f"Field '{field}' is not a valid {expected}: {raw_value!r}")


class StorageFailure(WeatherApiException):
    """The store was unreachable, timed out or rejected the operation."""

    def __init__(self, operation: str, message: str):
        super().__init__(message=message, details={"operation": operation})
        self.operation = operation


class NotFound(WeatherApiException):
    """No data available yet."""
    pass
