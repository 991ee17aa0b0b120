"""Read endpoints for the latest reading and service status."""
from fastapi import APIRouter, Depends

from weather_api.deps import get_status_service
from weather_api.problems import problem_response
from weather_api.schemas.reading import StatusResponse, WeatherReadingDTO
from weather_api.services.status import StatusService
from weather_api.app_logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/status", response_model=StatusResponse)
def get_status(service: StatusService = Depends(get_status_service)):
    """Reading count, newest reading time and process uptime."""
    report = service.status()
    if not report.is_healthy:
        return problem_response(500, report.error)

    return StatusResponse(
        status=report.health,
        total_readings=report.total_readings,
        last_reading=report.last_reading,
        uptime=report.uptime,
    )


@router.get("/latest", response_model=WeatherReadingDTO)
def get_latest_reading(service: StatusService = Depends(get_status_service)):
    """Most recent reading. NotFound and StorageFailure are mapped by the app handlers."""
    return service.latest_reading()
