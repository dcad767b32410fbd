"""Counter service — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.adapters.persistence.database import build_engine, build_session_factory
from app.adapters.persistence.repositories import SqlCounterRepository
from app.config import Settings, settings as default_settings
from app.infrastructure.api.routes_counter import router as counter_router
from app.infrastructure.api.routes_health import router as health_router

logger = logging.getLogger(__name__)

ENDPOINTS = (
    "GET  /health - Health check",
    "GET  /api/count - Get current count",
    "GET  /api/counter - Get counter record",
    "POST /api/increment - Increment count",
    "POST /api/increment/{amount} - Increment count by amount",
    "POST /api/reset - Reset count to 0",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the pool and initialize the counter; dispose the pool on shutdown.

    Initialization failures propagate so the server refuses to start.
    """
    settings: Settings = app.state.settings
    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    try:
        async with app.state.session_factory() as session:
            await SqlCounterRepository(session).ensure_initialized()
    except Exception:
        logger.exception("Error initializing database")
        await engine.dispose()
        raise

    logger.info("Database initialized successfully")
    logger.info("Available endpoints:\n  %s", "\n  ".join(ENDPOINTS))
    try:
        yield
    finally:
        logger.info("Shutting down, closing connection pool")
        await engine.dispose()


def _requested_path(request: Request) -> str:
    """Path as the client sent it, query string included."""
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{error, ...}`` bodies; unmatched routes echo the path."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        content = {"error": "Endpoint not found", "path": _requested_path(request)}
    elif isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(
        title="Counter Backend",
        description="Persistent counter backed by PostgreSQL",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or default_settings

    # CORS for the browser client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app.state.settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register routers
    app.include_router(health_router)
    app.include_router(counter_router, prefix="/api")

    return app


app = create_app()
