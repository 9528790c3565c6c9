"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Generator

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from spinwheel.db.repo import DbSession
from spinwheel.db.session import dispose_engines, get_session, init_db

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, POST, DELETE, OPTIONS",
}


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session(request.app.state.db_path)
    try:
        yield session
    finally:
        session.close()


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        db_path: Optional path to database file. Falls back to
            SPINWHEEL_DB_PATH, then data/spinwheel.db.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(app.state.db_path)
        yield
        dispose_engines()

    app = FastAPI(
        title="Spinwheel API",
        description="Decision wheel spin history and metrics",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.db_path = db_path

    @app.middleware("http")
    async def cors_headers(request: Request, call_next):
        """Answer preflight requests and stamp CORS headers on every response."""
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS, media_type="application/json")
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        """Uncaught errors become a JSON 500 that still carries CORS headers."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
            headers=CORS_HEADERS,
        )

    # Include routes
    from spinwheel.api.routes import metrics, spins

    app.include_router(spins.router)
    app.include_router(metrics.router)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
