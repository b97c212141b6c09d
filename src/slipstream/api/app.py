"""FastAPI application with lifespan, error mapping and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from slipstream import __version__
from slipstream.api.routes import employees, health, payslips
from slipstream.context import AppContext
from slipstream.core.exceptions import (
    NotFoundError,
    SchemaError,
    SlipstreamError,
    ValidationError,
)
from slipstream.core.logging import configure_logging


def _error(status: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status, content={"success": False, "message": message, **extra})


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(SchemaError)
    async def _schema(request: Request, exc: SchemaError) -> JSONResponse:
        return _error(500, str(exc), column=exc.column)

    @app.exception_handler(SlipstreamError)
    async def _internal(request: Request, exc: SlipstreamError) -> JSONResponse:
        return _error(500, str(exc))


def create_app(context: AppContext | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    A prebuilt ``context`` (tests, embedding) is used as is; otherwise one is
    built from the environment at startup and closed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        ctx = context or AppContext()
        configure_logging(ctx.settings.log_level)
        app.state.context = ctx
        yield
        if context is None:
            ctx.close()

    app = FastAPI(
        title="Slipstream Payslip Service",
        version=__version__,
        lifespan=lifespan,
    )
    if context is not None:
        app.state.context = context
    install_error_handlers(app)
    app.include_router(health.router)
    app.include_router(payslips.router, prefix="/payslips")
    app.include_router(employees.router)
    return app
