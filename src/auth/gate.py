"""Session gate for the journal page."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable, Optional

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from src.daybook.exceptions import DaybookError

from .client import AuthClient

logger = logging.getLogger(__name__)


class SessionGateMiddleware(BaseHTTPMiddleware):
    """
    Redirects to the login page when a protected path is requested without a
    valid session cookie.

    Only the paths in ``protected_paths`` are gated; the JSON API and the
    login page pass through. When ``client_factory`` returns None, auth is
    disabled and every request passes.
    """

    def __init__(
        self,
        app,
        client_factory: Callable[[], Optional[AuthClient]],
        cookie_name: str,
        protected_paths: Iterable[str] = ("/",),
        login_path: str = "/auth",
    ):
        super().__init__(app)
        self.client_factory = client_factory
        self.cookie_name = cookie_name
        self.protected_paths = tuple(protected_paths)
        self.login_path = login_path

    async def dispatch(self, request: Request, call_next):
        if request.url.path not in self.protected_paths:
            return await call_next(request)

        client = self.client_factory()
        if client is None:
            return await call_next(request)

        token = request.cookies.get(self.cookie_name)
        if not token:
            return RedirectResponse(self.login_path, status_code=303)

        try:
            await asyncio.to_thread(client.get_user, token)
        except DaybookError as exc:
            logger.info("Rejected session for %s: %s", request.url.path, exc)
            return RedirectResponse(self.login_path, status_code=303)

        return await call_next(request)
