from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse

from birthday_greeter.api import get_api_router
from birthday_greeter.api.deps import Clock
from birthday_greeter.core.config import Settings, get_settings
from birthday_greeter.core.errors import GreeterError
from birthday_greeter.core.logging import configure_logging, get_logger, level_from_name
from birthday_greeter.services.user_store import UserStore

access_logger = get_logger(component="http")


async def _render_greeter_error(request: Request, exc: GreeterError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def _log_request(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    started = time.perf_counter()
    response = await call_next(request)
    access_logger.info(
        "http_request",
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return response


def create_app(settings: Optional[Settings] = None, clock: Optional[Clock] = None) -> FastAPI:
    """Build the ASGI app. The user store is opened during startup and closed on shutdown.

    Startup fails (and the server exits) when the database cannot be reached or
    the users table cannot be created.
    """
    settings = settings or get_settings()
    clock = clock or datetime.now
    configure_logging(level=level_from_name(settings.log_level))
    logger = get_logger(component="bootstrap", environment=settings.environment_lower)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            store = await UserStore.open(settings.async_database_url)
        except GreeterError:
            logger.critical("failed to connect DB")
            raise
        app.state.clock = clock
        app.state.user_store = store
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        lifespan=lifespan,
        openapi_url="/openapi.json",
        docs_url="/docs",
    )
    app.add_exception_handler(GreeterError, _render_greeter_error)
    app.middleware("http")(_log_request)
    app.include_router(get_api_router())
    return app


__all__ = ["create_app"]
