"""
Transport Booking API - Main Application Entry Point

Clients create transport bookings; an administrator confirms (assigning a
driver) or cancels them; bookings can be listed, fetched and deleted.
- Validation before persistence, with field-level error lists
- Database engine owned by the application lifespan
- Best-effort SMS notification after admin actions
- Structured logging with request correlation and Prometheus metrics
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from booking_api.core.config import get_settings
from booking_api.core.exceptions import BookingServiceError, PersistenceError
from booking_api.core.logging import setup_logging, get_logger
from booking_api.core.metrics import metrics_endpoint
from booking_api.api.router import api_router
from booking_api.api.middleware import RequestLoggingMiddleware
from booking_api.db.session import Database
from booking_api.services.notification_service import build_notification_sender

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: acquire the database and notifier, release on shutdown."""
    setup_logging()

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    database = Database.from_settings(settings)
    database.connect()
    if settings.DB_CREATE_TABLES:
        await database.create_tables()
        logger.info("database_tables_created")

    app.state.db = database
    app.state.notification_sender = build_notification_sender(settings)

    yield

    await database.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Transport booking API with admin confirmation and driver assignment",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)


@app.exception_handler(BookingServiceError)
async def booking_error_handler(request: Request, exc: BookingServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors (400), like every other validation failure."""
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part != "body"),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request body", "errors": errors},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("unhandled_database_error", error=str(exc))
    error = PersistenceError("Database operation failed", error=str(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint for Docker and load balancers."""
    database = getattr(request.app.state, "db", None)
    database_ok = await database.ping() if database else False
    return {
        "status": "healthy" if database_ok else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "database": "connected" if database_ok else "unavailable",
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
