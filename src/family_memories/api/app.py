"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from family_memories.api.auth import router as auth_router
from family_memories.api.memories import router as memories_router
from family_memories.api.travel import router as travel_router
from family_memories.api.uploads import router as uploads_router
from family_memories.app_logging import configure_logging
from family_memories.config import parse_origins
from family_memories.containers import AppContainer
from family_memories.services.errors import MemoriesError, describe


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    expose_details = container.settings.environment == "local"

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_origins(
            container.settings.cors_origins, container.settings.client_url
        ),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    app.include_router(auth_router)
    app.include_router(memories_router)
    app.include_router(uploads_router)
    app.include_router(travel_router)

    @app.exception_handler(MemoriesError)
    async def memories_error_handler(
        request: Request, exc: MemoriesError
    ) -> JSONResponse:
        if exc.status_code >= 500:  # noqa: PLR2004
            logger.error(
                "%s %s failed: %s (%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.detail,
            )
        body: dict[str, object] = {"success": False, "error": exc.message}
        if expose_details and exc.detail:
            body["details"] = exc.detail
        return JSONResponse(body, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body: dict[str, object] = {"success": False, "error": "Invalid request"}
        if expose_details:
            body["details"] = str(exc.errors())
        return JSONResponse(body, status_code=400)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body: dict[str, object] = {"success": False, "error": "Internal server error"}
        if expose_details:
            body["details"] = describe(exc)
        return JSONResponse(body, status_code=500)

    @app.get("/health")
    @app.get("/api/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {
            "status": "ok",
            "environment": container.settings.environment,
            "timestamp": datetime.now(tz=UTC).isoformat(),
        }

    return app
