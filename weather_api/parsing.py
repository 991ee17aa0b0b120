"""Best-effort coercion of form-encoded station fields."""
import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from weather_api.exceptions import ParseFailure
from weather_api.app_logging import get_logger

logger = get_logger(__name__)

# Period as decimal separator, no grouping characters
_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")

# Largest accepted magnitude; keeps every unit conversion finite
MAX_MAGNITUDE = 1e300

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def first_values(form: Any) -> Dict[str, str]:
    """Flatten a multi-valued form into a plain dict keeping the first value per key.

    Non-text values (file uploads) are ignored.
    """
    items = form.multi_items() if hasattr(form, "multi_items") else form.items()
    payload: Dict[str, str] = {}
    for key, value in items:
        if isinstance(value, str):
            payload.setdefault(key, value)
    return payload


def parse_decimal(field: str, raw: str) -> float:
    text = raw.strip()
    if not _DECIMAL_RE.match(text):
        raise ParseFailure(field, raw, "decimal number")
    value = float(text)
    if not math.isfinite(value) or abs(value) > MAX_MAGNITUDE:
        raise ParseFailure(field, raw, "finite decimal number")
    return value


def parse_integer(field: str, raw: str) -> int:
    text = raw.strip()
    if not _INTEGER_RE.match(text):
        raise ParseFailure(field, raw, "integer")
    value = int(text)
    if not INT32_MIN <= value <= INT32_MAX:
        raise ParseFailure(field, raw, "32-bit integer")
    return value


def parse_utc_timestamp(field: str, raw: str) -> datetime:
    """Parse a station date-time and pin it to UTC.

    The station encodes the date/time separator as ``+`` in some firmware
    versions, so every ``+`` becomes a space before parsing. Any offset left
    in the string is dropped: the wall-clock value is taken as UTC.
    """
    text = raw.replace("+", " ").strip()
    if not text:
        raise ParseFailure(field, raw, "date-time")
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ParseFailure(field, raw, "date-time") from None
    return parsed.replace(tzinfo=timezone.utc, microsecond=0)


class FieldParser:
    """Typed, tolerant accessors over a decoded form payload.

    A missing key or malformed value resolves to ``None`` (``""`` for text
    fields); parse failures are logged and never raised to the caller.
    """

    def __init__(self, payload: Mapping[str, str]):
        self.payload = payload

    def _absorb(self, name: str, parse) -> Any:
        raw = self.payload.get(name)
        if raw is None:
            return None
        try:
            return parse(name, raw)
        except ParseFailure as e:
            logger.debug(f"Ignoring malformed field: {e.message}")
            return None

    def optional_number(self, name: str) -> Optional[float]:
        return self._absorb(name, parse_decimal)

    def optional_integer(self, name: str) -> Optional[int]:
        return self._absorb(name, parse_integer)

    def timestamp(self, name: str) -> Optional[datetime]:
        return self._absorb(name, parse_utc_timestamp)

    def string(self, name: str) -> str:
        return self.payload.get(name) or ""
