"""Patient Service - Patient Record Management

Main FastAPI application entry point.
"""

import time
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import Counter, Histogram, make_asgi_app
from sqlalchemy import text

from patient_service.api.errors import register_exception_handlers, safe_request_path
from patient_service.api.router import api_router
from patient_service.core.config import settings
from patient_service.core.logging import get_logger, setup_logging

# Initialize logging
setup_logging(
    log_level="DEBUG" if settings.debug else "INFO",
    json_logs=settings.environment == "production",
    log_file=settings.log_file,
)

logger = get_logger(__name__)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "patient_service_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "patient_service_request_latency_seconds",
    "HTTP request latency",
    ["method", "endpoint"],
)


def _record_request(
    request: Request, request_id: str, status_code: int, process_time: float
) -> None:
    """Update request metrics and write the access log line."""
    # The route is only resolved once the request went through the router
    safe_path = safe_request_path(request)

    REQUEST_COUNT.labels(
        method=request.method,
        endpoint=safe_path,
        status=status_code,
    ).inc()
    REQUEST_LATENCY.labels(
        method=request.method,
        endpoint=safe_path,
    ).observe(process_time)

    logger.info(
        "request_completed",
        request_id=request_id,
        method=request.method,
        path=safe_path,
        status_code=status_code,
        process_time=f"{process_time:.4f}s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info(
        "Starting Patient Service",
        version=settings.app_version,
        environment=settings.environment,
    )

    from patient_service.models.base import async_session_maker, create_tables, engine

    app.state.db_engine = engine
    app.state.db_session_maker = async_session_maker
    await create_tables()
    logger.info("Database initialized")

    # Optional demo data seeding (development only)
    if settings.enable_demo_data:
        try:
            from patient_service.services.demo_data import seed_demo_patients

            async with async_session_maker() as session:
                inserted = await seed_demo_patients(session, count=settings.demo_patient_count)
                logger.warning("Demo data enabled", patients_seeded=inserted)
        except Exception as e:
            logger.warning(f"Could not seed demo data: {e}")

    logger.info("Patient Service started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Patient Service")

    if hasattr(app.state, "db_engine"):
        await app.state.db_engine.dispose()
        logger.info("Database connections closed")

    logger.info("Patient Service shutdown complete")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="""
        Patient Service manages patient records.

        ## Features

        - **CRUD**: create, read, update and delete patients
        - **Search**: by social security number, name, birth date range or blood group
        - **Validation**: field-level errors reported per field

        ## API Documentation

        - **Interactive docs**: `/docs` (Swagger UI)
        - **ReDoc**: `/redoc`
        - **OpenAPI spec**: `/openapi.json`
        """,
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Process-Time"],
    )

    # Add GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Add request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming requests with timing."""
        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception:
            # Unhandled errors are turned into a 500 by the outermost middleware
            _record_request(request, request_id, 500, time.time() - start_time)
            raise

        process_time = time.time() - start_time
        _record_request(request, request_id, response.status_code, process_time)

        # Add custom headers
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        return response

    # Mount Prometheus metrics endpoint
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    # Include API router
    app.include_router(api_router)

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
        }

    # Readiness check endpoint
    @app.get("/ready", tags=["Health"])
    async def readiness_check(request: Request):
        """Readiness check for Kubernetes deployments."""
        checks = {"database": False}

        if hasattr(request.app.state, "db_session_maker"):
            try:
                async with request.app.state.db_session_maker() as session:
                    await session.execute(text("SELECT 1"))
                    checks["database"] = True
            except Exception as e:
                logger.warning("readiness_database_unavailable", error=str(e))

        all_ready = all(checks.values())
        return JSONResponse(
            status_code=200 if all_ready else 503,
            content={
                "ready": all_ready,
                "checks": checks,
            },
        )

    register_exception_handlers(app)

    return app


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "patient_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level="debug" if settings.debug else "info",
    )
