# pyright: reportAny=false
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from speckeep.exceptions import (
    InvalidQueryError,
    SpecKeepError,
    SpecNotFoundError,
    StoreUnavailableError,
)
from speckeep.server._api import api_router
from speckeep.server._dependencies import get_services
from speckeep.server._schemas import ErrorResponse
from speckeep.services import SpecServices
from speckeep.utils import get_version


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(by_alias=True),
    )


async def _handle_not_found(request: Request, exc: Exception) -> JSONResponse:
    _ = request
    return _error(404, str(exc))


async def _handle_invalid_query(request: Request, exc: Exception) -> JSONResponse:
    _ = request
    return _error(422, str(exc))


async def _handle_store_unavailable(request: Request, exc: Exception) -> JSONResponse:
    get_services(request).logger.error(
        "store_unavailable", path=request.url.path, error=str(exc)
    )
    return _error(500, str(exc))


async def _handle_engine_error(request: Request, exc: Exception) -> JSONResponse:
    get_services(request).logger.exception(
        "request_failed", path=request.url.path, error=str(exc)
    )
    return _error(500, str(exc))


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    get_services(request).logger.exception(
        "request_failed", path=request.url.path, error=str(exc)
    )
    return _error(500, "Internal server error")


def create_app(services: SpecServices) -> FastAPI:
    """Create the HTTP application over a set of engine services.

    The lifespan runs one synchronization pass before serving, then keeps the
    index in step with the store in background threads until shutdown.

    Args:
        services: Engine services, usually from ``build_services``.

    Returns:
        The FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        _ = app
        try:
            _ = services.synchronizer.sync_once()
        except StoreUnavailableError as e:
            # Serve anyway; the poller retries and context requests report 500
            services.logger.warning("initial_sync_failed", error=str(e))
        except Exception:  # noqa: BLE001
            services.logger.exception("initial_sync_failed")
        services.synchronizer.start(services.watch_triggers())
        try:
            yield
        finally:
            services.synchronizer.stop()

    app = FastAPI(
        title="speckeep",
        version=get_version(),
        docs_url=None,
        redoc_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.services = services
    app.include_router(router=api_router)

    app.add_exception_handler(SpecNotFoundError, _handle_not_found)
    app.add_exception_handler(InvalidQueryError, _handle_invalid_query)
    app.add_exception_handler(StoreUnavailableError, _handle_store_unavailable)
    app.add_exception_handler(SpecKeepError, _handle_engine_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)
    return app
