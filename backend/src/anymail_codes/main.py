"""Anymail Codes - Lookup API application.

Creates and configures the FastAPI application serving stored
verification codes, including:
- The single catch-all lookup route
- Request ID middleware
- Exception handlers with the {"error": ...} payload shape
- Code store lifecycle
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .domain.ports.code_store_port import CodeStorePort
from .infrastructure.kv.store_factory import build_code_store
from .lookup.responses import UTF8JSONResponse, error_response
from .lookup.router import router as lookup_router
from .observability.logging_config import configure_logging
from .observability.metrics import start_metrics_server
from .observability.middleware import RequestIDMiddleware

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    code_store: Optional[CodeStorePort] = None,
) -> FastAPI:
    """Application factory.

    Args:
        settings: Settings to use (default: from environment)
        code_store: Store to use; when omitted one is built from settings
            at startup and closed at shutdown

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = app.state.code_store is None
        if owns_store:
            app.state.code_store = build_code_store(settings)
        logger.info("Anymail Codes lookup API starting up...")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        if not settings.ACCESS_KEY:
            logger.warning("ACCESS_KEY is not set; every lookup will be rejected")

        yield

        logger.info("Anymail Codes lookup API shutting down...")
        if owns_store:
            await app.state.code_store.close()
            app.state.code_store = None

    # Docs would claim paths of the lookup route
    app = FastAPI(
        title="Anymail Codes",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.code_store = code_store

    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException
    ) -> UTF8JSONResponse:
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return error_response("method not allowed", exc.status_code)
        return error_response(str(exc.detail).lower(), exc.status_code)

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception
    ) -> UTF8JSONResponse:
        """Handle uncaught exceptions.

        Full details are logged but not exposed to the client.
        """
        logger.error(f"Unhandled exception on {request.method} request", exc_info=exc)
        return error_response("internal error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    app.include_router(lookup_router)
    return app


def build_app() -> FastAPI:
    """ASGI factory for uvicorn (``--factory``): configures logging first."""
    settings = get_settings()
    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
    start_metrics_server(settings.METRICS_PORT)
    return create_app(settings)


def run() -> None:
    """Run the lookup API with uvicorn."""
    import os

    import uvicorn

    uvicorn.run(
        "anymail_codes.main:build_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=get_settings().LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
