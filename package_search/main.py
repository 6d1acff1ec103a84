"""Main FastAPI application for the package search service."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import structlog

from .api import (
    packages_router,
    health_router,
    metrics_router,
)
from .config import Settings, current_settings, get_settings
from .core.store import DatabaseLoadError, RecordStore
from .engine_instance import search_engine
from .models.response import ErrorResponse

settings = get_settings()

logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    active_settings = current_settings(app)

    # Startup
    logger.info("Starting package search service", version=active_settings.app_version)
    logger.info("Initializing package database", db_file=str(active_settings.db_file))

    # The service must not start without a complete index
    try:
        store = RecordStore.from_file(active_settings.db_file)
    except DatabaseLoadError as e:
        logger.error("Failed to load package database", path=str(e.path), error=e.reason)
        raise

    index = search_engine.load_records(store)
    logger.info("Init complete", total_packages=len(store), **index.get_stats())

    yield

    # Shutdown
    logger.info("Shutting down package search service")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Read-only metadata search for a package repository snapshot",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Replaced in place by run() before the middleware stack is built
cors_origins: List[str] = list(settings.cors_origins)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log all HTTP requests."""
    start_time = time.time()

    logger.info(
        "Request started",
        method=request.method,
        url=str(request.url),
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent")
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2)
    )

    return response


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle global exceptions."""
    logger.error(
        "Unhandled exception",
        method=request.method,
        url=str(request.url),
        error=str(exc),
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if current_settings(request.app).debug else None
        ).model_dump(mode="json")
    )


# Include API routers
app.include_router(packages_router)
app.include_router(health_router)
app.include_router(metrics_router)


# Root endpoint
@app.get("/", summary="Root endpoint", description="Get basic information about the API")
async def root(request: Request) -> dict:
    """Root endpoint with basic API information."""
    active_settings = current_settings(request.app)
    return {
        "name": active_settings.app_name,
        "version": active_settings.app_version,
        "description": "Read-only metadata search for a package repository snapshot",
        "total_packages": len(search_engine.index),
        "docs_url": "/docs",
        "packages_url": "/packages?names=NAME[,NAME...][&by=prov|desc]",
        "health_url": "/api/v1/health",
        "status": "running"
    }


def run() -> None:
    """Parse command-line flags, then serve the app until interrupted."""
    import uvicorn

    cli_settings = Settings(_cli_parse_args=True)
    app.state.settings = cli_settings
    cors_origins[:] = cli_settings.cors_origins
    logging.getLogger().setLevel(cli_settings.log_level.upper())

    ssl_options = {}
    if cli_settings.tls_enabled:
        ssl_options = {
            "ssl_certfile": str(cli_settings.cert_file),
            "ssl_keyfile": str(cli_settings.key_file),
        }

    logger.info(
        "Listening",
        host=cli_settings.bind_host,
        port=cli_settings.port,
        tls=cli_settings.tls_enabled
    )

    uvicorn.run(
        app,
        host=cli_settings.bind_host,
        port=cli_settings.port,
        log_level=cli_settings.log_level.lower(),
        **ssl_options
    )


if __name__ == "__main__":
    run()
