"""Station webhook ingestion route."""
from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from weather_api.deps import get_request_id, get_repository
from weather_api.exceptions import WeatherApiException
from weather_api.normalizer import normalize
from weather_api.parsing import first_values
from weather_api.problems import problem_response
from weather_api.schemas.reading import WebhookAck
from weather_api.storage.repositories.reading_repo import ReadingRepository
from weather_api.app_logging import get_logger

logger = get_logger(__name__)
router = APIRouter()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@router.post("/webhook", response_model=WebhookAck)
async def receive_webhook(
    request: Request,
    request_id: str = Depends(get_request_id),
    repository: ReadingRepository = Depends(get_repository),
):
    """Receive one station telemetry batch, convert it to metric and store it."""
    log_extra = {"request_id": request_id}
    try:
        content_type = request.headers.get("content-type", "")
        if not content_type.startswith(FORM_CONTENT_TYPES):
            raise ValueError(f"Expected a form-encoded body, got '{content_type or 'none'}'")

        form = await request.form()
        payload = first_values(form)
        logger.info(f"Received webhook data with {len(payload)} fields", extra=log_extra)

        reading = normalize(payload)
        await run_in_threadpool(repository.append, reading)

        logger.info(f"Saved weather reading for {reading.timestamp}", extra=log_extra)
        return WebhookAck(timestamp=reading.timestamp)
    except Exception as e:
        logger.exception("Error processing webhook data", extra=log_extra)
        if isinstance(e, WeatherApiException):
            return problem_response(500, e.message, e.details)
        return problem_response(500, str(e))
