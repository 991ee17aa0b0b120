"""Repository for weather readings."""
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, Optional, TypeVar
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from weather_api.exceptions import StorageFailure
from weather_api.schemas.reading import WeatherReadingDTO
from weather_api.storage.models import WeatherReading, NUMERIC_SCALES
from weather_api.app_logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def quantize(name: str, value: Optional[float]) -> Optional[float]:
    """Round a value to its column scale, rejecting values the column cannot hold."""
    if value is None:
        return value
    if isinstance(value, float) and not math.isfinite(value):
        raise StorageFailure("append", f"Value {value} for '{name}' is not a finite number")
    if name not in NUMERIC_SCALES:
        return value
    precision, scale = NUMERIC_SCALES[name]
    rounded = Decimal(str(value)).quantize(Decimal(1).scaleb(-scale), rounding=ROUND_HALF_UP)
    if abs(rounded) >= Decimal(10) ** (precision - scale):
        raise StorageFailure(
            "append",
            f"Value {value} for '{name}' exceeds NUMERIC({precision}, {scale})",
        )
    return float(rounded)


class ReadingRepository:
    """Append-only access to stored weather readings."""

    def __init__(self, db: Session):
        self.db = db

    def _to_columns(self, reading: WeatherReadingDTO) -> Dict[str, Any]:
        data = reading.model_dump(exclude={"id"})
        return {name: quantize(name, value) for name, value in data.items()}

    def _run(self, operation: str, query: Callable[[], T]) -> T:
        try:
            return query()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Storage {operation} failed: {e}")
            raise StorageFailure(operation, str(e)) from e

    def append(self, reading: WeatherReadingDTO) -> int:
        """Store a new reading in its own transaction and return the assigned id."""
        row = WeatherReading(**self._to_columns(reading))

        def insert() -> int:
            self.db.add(row)
            self.db.commit()
            return row.id

        reading_id = self._run("append", insert)
        logger.info(f"Stored weather reading {reading_id} for {row.timestamp}")
        return reading_id

    def latest(self) -> Optional[WeatherReadingDTO]:
        """Most recent reading by timestamp; the highest id wins a tie."""
        row = self._run(
            "latest",
            lambda: self.db.query(WeatherReading)
            .order_by(WeatherReading.timestamp.desc(), WeatherReading.id.desc())
            .first(),
        )
        if row is None:
            return None
        return WeatherReadingDTO.model_validate(row)

    def count(self) -> int:
        return self._run(
            "count",
            lambda: self.db.query(func.count(WeatherReading.id)).scalar() or 0,
        )
