"""FastAPI application bootstrap."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.auth import SessionGateMiddleware
from src.daybook.logger import setup_logger

from .dependencies import get_auth_client, get_config
from .errors import register_error_handlers
from .routes import (
    register_auth_routes,
    register_entry_routes,
    register_page_routes,
    register_summary_routes,
    register_todo_routes,
)

__all__ = ["create_app", "app"]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_config()
    setup_logger(log_level=config.log_level, log_file=config.log_file)

    app = FastAPI(title="Daybook API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SessionGateMiddleware,
        client_factory=get_auth_client,
        cookie_name=config.auth.cookie_name,
        protected_paths=("/",),
        login_path="/auth",
    )

    register_error_handlers(app)
    register_page_routes(app)
    register_auth_routes(app)
    register_entry_routes(app)
    register_todo_routes(app)
    register_summary_routes(app)

    return app


app = create_app()
