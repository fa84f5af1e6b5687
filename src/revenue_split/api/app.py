"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from revenue_split import __version__
from revenue_split.api.routes import (
    employees_router,
    expenses_router,
    health_router,
    periods_router,
    reports_router,
    revenue_router,
)
from revenue_split.config import get_settings
from revenue_split.database import create_schema, dispose_db, init_db
from revenue_split.services.expense_service import InvalidExpenseError
from revenue_split.splitting.calendar import InvalidPeriodKeyError, PeriodOutOfRangeError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    engine, _ = init_db()
    if get_settings().auto_create_schema:
        logger.info("Creating database schema")
        await create_schema(engine)
    yield
    # Shutdown
    await dispose_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title="Revenue Split API",
        description="Commission splitting and bi-week payout reporting",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(InvalidPeriodKeyError)
    async def invalid_period_handler(
        request: Request, exc: InvalidPeriodKeyError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc), "code": "INVALID_PERIOD_KEY"},
        )

    @app.exception_handler(PeriodOutOfRangeError)
    async def period_out_of_range_handler(
        request: Request, exc: PeriodOutOfRangeError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc), "code": "PERIOD_OUT_OF_RANGE"},
        )

    @app.exception_handler(InvalidExpenseError)
    async def invalid_expense_handler(
        request: Request, exc: InvalidExpenseError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc), "code": "INVALID_EXPENSE"},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(employees_router, prefix="/api/v1")
    app.include_router(expenses_router, prefix="/api/v1")
    app.include_router(periods_router, prefix="/api/v1")
    app.include_router(revenue_router, prefix="/api/v1")
    app.include_router(reports_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
