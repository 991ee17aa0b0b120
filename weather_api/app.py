"""Main FastAPI application."""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, ORJSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from weather_api import __version__
from weather_api.config import settings
from weather_api.exceptions import NotFound, StorageFailure
from weather_api.problems import problem_response
from weather_api.routes import health, readings, webhook
from weather_api.storage.db import init_db
from weather_api.app_logging import setup_logging, get_logger

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Weather API starting - Environment: {settings.ENVIRONMENT}")
    try:
        init_db()
    except Exception as e:
        logger.error(f"Error initializing database: {e}", exc_info=True)
    yield
    logger.info("Shutting down Weather API")


app = FastAPI(
    title="Weather Station API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    logger.info(f"{request.url.path}: {exc.message}")
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": exc.message})


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure):
    logger.error(f"{request.url.path}: storage {exc.operation} failed: {exc.message}")
    return problem_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message, exc.details)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"message": exc.detail, "type": "http_error"}},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "message": "Validation error",
                "type": "validation_error",
                "details": jsonable_encoder(exc.errors()),
            }
        },
    )


app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(webhook.router, prefix="/api", tags=["webhook"])
app.include_router(readings.router, prefix="/api", tags=["readings"])
logger.info("Routers registered")


@app.get("/")
async def root():
    return {"message": "Weather Station API", "documentation": "/docs"}
