"""FastAPI application factory.

Per the api layer boundary:
- Validates inputs, reads/writes DB
- Returns payloads for the form and dashboard
- Forbidden: aggregation logic beyond calling the aggregator
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Generator

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from qame.db.repo import DbSession
from qame.db.session import get_session, init_db
from qame.eval.access import verify_access_code

CORS_ORIGINS_ENV = "QAME_CORS_ORIGINS"
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",  # Vite/Next dev server
    "http://127.0.0.1:3000",
]


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


def require_access_code(
    x_access_code: str | None = Header(default=None),
    session: DbSession = Depends(get_db_session),
) -> None:
    """Dependency that rejects requests without a valid access code.

    Raises:
        HTTPException: 401 if the code is missing or invalid.
    """
    if not verify_access_code(session, x_access_code):
        raise HTTPException(status_code=401, detail="Invalid access code")


def _cors_origins() -> list[str]:
    raw = os.environ.get(CORS_ORIGINS_ENV)
    if not raw:
        return DEFAULT_CORS_ORIGINS
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        db_path: Optional path to database file.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(app.state.db_path)
        yield

    app = FastAPI(
        title="QAME Evaluation API",
        description="Event feedback intake and results dashboard",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.db_path = db_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    from qame.api.routes import catalog, export, results, submissions

    app.include_router(catalog.router, prefix="/api")
    app.include_router(submissions.router, prefix="/api")
    app.include_router(results.router, prefix="/api")
    app.include_router(export.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
