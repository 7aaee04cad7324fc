"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sportsdeck.api.models import ErrorResponse
from sportsdeck.api.routes import cache, events, players, session, teams
from sportsdeck.core import ApiError, FavoriteConflict, NetworkError
from sportsdeck.services import CatalogService, create_catalog_service

logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, message: str, retryable: bool) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, retryable=retryable)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app(service: CatalogService | None = None) -> FastAPI:
    """Build the app around a CatalogService (a default one if omitted)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.service.close()

    app = FastAPI(title="sportsdeck", lifespan=lifespan)
    app.state.service = service or create_catalog_service()

    @app.exception_handler(NetworkError)
    async def network_error(request: Request, exc: NetworkError) -> JSONResponse:
        logger.warning("[API] %s %s failed: %s", request.method, request.url.path, exc)
        return _error(503, "network_error", str(exc), retryable=True)

    @app.exception_handler(ApiError)
    async def api_error(request: Request, exc: ApiError) -> JSONResponse:
        logger.warning("[API] %s %s upstream HTTP %d", request.method, request.url.path, exc.status)
        return _error(502, "api_error", exc.message, retryable=exc.retryable)

    @app.exception_handler(FavoriteConflict)
    async def favorite_conflict(request: Request, exc: FavoriteConflict) -> JSONResponse:
        return _error(401, "login_required", exc.message, retryable=False)

    @app.exception_handler(LookupError)
    async def not_found(request: Request, exc: LookupError) -> JSONResponse:
        return _error(404, "not_found", str(exc), retryable=False)

    for module in (players, teams, events, cache, session):
        app.include_router(module.router)

    return app
