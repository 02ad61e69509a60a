"""DenimFlow Backend - Main FastAPI Application

Denim inventory allocation service.

This module creates and configures the FastAPI application, including:
- API routers (SKU, commitments, assignments, bins)
- Middleware (request ID correlation, CORS)
- Exception handlers
- Health and metrics endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from config import Settings, get_settings
from dependencies import build_services
from domain.assignments import AllocationConflictError
from domain.bins import NoBinAvailableError
from domain.sku import SkuError
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router
from api.v1.sku.router import router as sku_router
from api.v1.commitments.router import router as commitments_router
from api.v1.assignments.router import router as assignments_router
from api.v1.bins.router import router as bins_router


logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Operation failed, please retry"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to get_settings())

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()

    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build services on startup, release the engine on shutdown."""
        logger.info("DenimFlow API starting up...")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Debug mode: {settings.DEBUG}")

        app.state.services = build_services(settings)

        yield

        logger.info("DenimFlow API shutting down...")
        app.state.services.close()
        app.state.services = None

    is_production = settings.ENVIRONMENT == "production"
    app = FastAPI(
        title="DenimFlow API",
        description="Universal SKU matching and FIFO inventory allocation",
        version="0.1.0",
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
        lifespan=lifespan,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    # Request ID Middleware (must be first for proper correlation)
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(SkuError)
    async def sku_exception_handler(request: Request, exc: SkuError) -> JSONResponse:
        """Map domain errors to 400 without exposing details."""
        logger.warning(
            f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
            extra={"error_code": exc.code}
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": exc.code, "message": GENERIC_FAILURE_MESSAGE},
        )

    @app.exception_handler(AllocationConflictError)
    async def allocation_conflict_handler(
        request: Request,
        exc: AllocationConflictError
    ) -> JSONResponse:
        """Commitment changed mid-allocation; nothing was written, client may retry."""
        logger.warning(
            f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
            extra={"error_code": exc.code, "inventory_item_id": exc.inventory_item_id}
        )
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"error": exc.code, "message": GENERIC_FAILURE_MESSAGE},
        )

    @app.exception_handler(NoBinAvailableError)
    async def no_bin_available_handler(request: Request, exc: NoBinAvailableError) -> JSONResponse:
        logger.warning(
            f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
            extra={"error_code": exc.code}
        )
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"error": exc.code, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors with field-level details."""
        logger.warning(f"Validation error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=422,
            content={
                "error": "validation_error",
                "message": "Request validation failed",
                "details": jsonable_errors(exc),
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(
        request: Request,
        exc: SQLAlchemyError
    ) -> JSONResponse:
        """Log the database error, return a generic message."""
        logger.error(
            f"Database error on {request.method} {request.url.path}",
            exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "database_error", "message": GENERIC_FAILURE_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """Catch-all: full details are logged but not exposed to the client."""
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}",
            exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "internal_error", "message": GENERIC_FAILURE_MESSAGE},
        )

    # =========================================================================
    # ROUTERS
    # =========================================================================

    app.include_router(observability_router)
    app.include_router(sku_router, prefix="/api/v1")
    app.include_router(commitments_router, prefix="/api/v1")
    app.include_router(assignments_router, prefix="/api/v1")
    app.include_router(bins_router, prefix="/api/v1")

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without the raw input objects (not always JSON-safe)."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().DEBUG,
    )
