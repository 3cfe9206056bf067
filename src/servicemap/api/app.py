"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from servicemap.api.exceptions import ServiceMapError, register_exception_handlers
from servicemap.api.middleware import RequestIDMiddleware, RequestLoggingMiddleware
from servicemap.api.routes import graph, namespace_deps, tags
from servicemap.config import settings
from servicemap.observability import configure_logging
from servicemap.topology.graph import ServiceGraphBuilder
from servicemap.topology.store import TopologyStore

logger = structlog.get_logger()


def wire_store(app: FastAPI, store: TopologyStore | None) -> None:
    """Point every route module at ``store`` (``None`` unwires them)."""
    app.state.store = store
    graph.set_builder(ServiceGraphBuilder.from_settings(store, settings) if store else None)
    tags.set_store(store)
    namespace_deps.set_store(store)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup and shutdown lifecycle."""
    configure_logging(settings.log_level, settings.log_format)
    logger.info("servicemap_starting", app=settings.app_name, environment=settings.environment)

    # ── Database layer ──────────────────────────────────────────
    engine = None
    store: TopologyStore | None = None
    try:
        from servicemap.db.repository import TopologyRepository
        from servicemap.db.session import get_session_factory, init_engine

        engine = init_engine(settings)
        store = TopologyRepository(get_session_factory())
        await store.ping()
        logger.info("database_initialized")
    except Exception as e:
        # Keep serving so /health can report the outage; graph routes
        # answer 503 until the store is reachable.
        logger.warning("database_init_failed", error=str(e))

    app.state.engine = engine
    wire_store(app, store)

    yield

    logger.info("servicemap_shutting_down")
    wire_store(app, None)
    if engine:
        from servicemap.db.session import dispose_engine

        await dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Service topology and alert severity graph",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    # Starlette applies add_middleware in LIFO order: request id is bound
    # before the logging middleware runs.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(graph.router, prefix=settings.api_prefix, tags=["Graph"])
    app.include_router(tags.router, prefix=settings.api_prefix, tags=["Tags"])
    app.include_router(
        namespace_deps.router, prefix=settings.api_prefix, tags=["Namespace Dependencies"]
    )

    @app.get("/health", response_model=None)
    async def health_check() -> dict[str, Any] | JSONResponse:
        """Report whether the topology store is reachable."""
        store: TopologyStore | None = getattr(app.state, "store", None)
        if store is not None:
            try:
                await store.ping()
                return {"status": "healthy", "database": "connected"}
            except ServiceMapError as e:
                logger.warning("health_check_failed", error=e.detail)
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "disconnected"},
        )

    return app


app = create_app()
