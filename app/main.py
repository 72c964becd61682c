"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Registers API routes and exception handlers
- No business logic should be written here
- Manages application lifecycle (startup/shutdown)
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from contextlib import asynccontextmanager
import time

from app.core.config import settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger, LogContext
from app.db.mongo import connect_to_mongo, close_mongo_connection, check_database_health
from app.db.indexes import create_indexes
from app.api import accounts
from utils.constants import CONNECTED_MESSAGE

# Initialize logging first
setup_logging()
logger = get_logger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Starting account service ({settings.ENVIRONMENT})")

    try:
        validate_settings()
        await connect_to_mongo()
        await create_indexes()
        logger.info(f"Account service ready on port {settings.PORT}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    try:
        await close_mongo_connection()
        logger.info("Account service stopped")

    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


app = FastAPI(
    title="Account Service",
    description="User registration, login and session management",
    version=APP_VERSION,
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,  # Disable docs in production
    redoc_url="/redoc" if settings.is_development else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


SLOW_REQUEST_SECONDS = 2.0


@app.middleware("http")
async def request_context(request: Request, call_next):
    """
    Tags every log line emitted while serving a request with its
    method and path, and reports the elapsed time in X-Process-Time.
    """
    with LogContext(method=request.method, path=request.url.path):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        if elapsed > SLOW_REQUEST_SECONDS:
            logger.warning("Slow request", extra={"process_time": elapsed})

    return response


add_exception_handlers(app)

app.include_router(accounts.router, tags=["Accounts"])


@app.get("/test", response_class=PlainTextResponse, tags=["Health"])
async def connection_test():
    """Liveness check."""
    return CONNECTED_MESSAGE


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Checks database connectivity.
    """
    db_healthy = await check_database_health()
    return JSONResponse(
        status_code=200 if db_healthy else 503,
        content={
            "status": "healthy" if db_healthy else "degraded",
            "version": APP_VERSION,
            "checks": {"database": "healthy" if db_healthy else "unhealthy"},
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
