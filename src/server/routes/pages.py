"""HTML pages and health check."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse

from ..schemas import HealthResponse

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


def register_page_routes(app: FastAPI) -> None:
    """Register the journal page, the login page and /health."""

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Simple health check endpoint."""
        return HealthResponse(status="ok")

    @app.get("/", include_in_schema=False)
    async def journal_page() -> FileResponse:
        """Serve the journal page (session gated by middleware)."""
        return FileResponse(STATIC_DIR / "index.html")

    @app.get("/auth", include_in_schema=False)
    async def auth_page() -> FileResponse:
        """Serve the login/sign-up page."""
        return FileResponse(STATIC_DIR / "auth.html")
