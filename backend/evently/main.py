"""
Evently API - Main Application Entry Point

Event listing and booking service:
- Explicit validate-then-normalize pipeline before every event write
- Database-enforced uniqueness for slugs and (event, email) bookings
- Lazily connected, single-flight database handle
- Structured logging with request correlation
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from evently.core.config import get_settings
from evently.core.errors import StoreUnavailableError
from evently.core.logging import setup_logging, get_logger
from evently.core.metrics import metrics_endpoint
from evently.api.errors import register_exception_handlers
from evently.api.router import api_router
from evently.api.middleware import RequestLoggingMiddleware
from evently.db.session import database

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    # Warm the connection; requests retry on their own if this fails
    try:
        if settings.DB_CREATE_ALL:
            await database.create_all()
        else:
            await database.connect()
        logger.info("database_ready")
    except StoreUnavailableError:
        logger.warning("database_unavailable", message="Requests will retry the connection")

    yield

    await database.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Event listing and booking API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    db_ok = await database.ping()
    return JSONResponse(
        status_code=status.HTTP_200_OK if db_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if db_ok else "degraded",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "database": "connected" if db_ok else "unavailable",
        },
    )


@app.get("/metrics", include_in_schema=False)
def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
