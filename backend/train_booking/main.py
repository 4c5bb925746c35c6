"""
Train Seat Reservation API - Main Application Entry Point

A single-car seat booking service:
- 80 seats in rows of 7, the last row holding 3
- Manual seat selection or automatic allocation of adjacent seats in one row
- Owner-only cancellation
- Seat state persisted as a snapshot (database, Redis or memory)
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from train_booking.core.config import get_settings
from train_booking.core.errors import SeatReservationError
from train_booking.core.logging import setup_logging, get_logger
from train_booking.core.metrics import metrics_endpoint
from train_booking.api.router import api_router
from train_booking.api.middleware import RequestLoggingMiddleware
from train_booking.infrastructure.redis_client import get_redis, close_redis, get_redis_status

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        snapshot_backend=settings.SNAPSHOT_BACKEND,
    )

    if settings.SNAPSHOT_BACKEND == "redis":
        if await get_redis():
            logger.info("redis_ready")
        else:
            logger.warning("redis_unavailable", message="Seat snapshots kept in memory")

    yield

    await close_redis()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Seat reservation for a single train car with contiguous seat allocation",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)


@app.exception_handler(SeatReservationError)
async def seat_reservation_error_handler(request: Request, exc: SeatReservationError):
    logger.info("request_rejected", reason=exc.reason.value, status_code=exc.status_code)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "snapshot_backend": settings.SNAPSHOT_BACKEND,
        "redis": await get_redis_status(),
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
