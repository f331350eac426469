"""Sign-in, sign-up and sign-out endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.auth import AuthClient, AuthSession
from src.daybook.exceptions import AuthError, DaybookError

from ..dependencies import get_auth_client, get_config
from ..schemas import AuthResponse, CredentialsRequest

logger = logging.getLogger(__name__)


def _require_client() -> AuthClient:
    client = get_auth_client()
    if client is None:
        raise AuthError("Authentication is not configured")
    return client


def _session_response(session: AuthSession) -> JSONResponse:
    response = JSONResponse(AuthResponse(user=session.user).model_dump())
    response.set_cookie(
        get_config().auth.cookie_name,
        session.access_token,
        max_age=session.expires_in,
        httponly=True,
        samesite="lax",
    )
    return response


def register_auth_routes(app: FastAPI) -> None:
    """Register session endpoints backed by the identity provider."""

    @app.post("/auth/login", response_model=AuthResponse)
    async def login(request: CredentialsRequest) -> JSONResponse:
        """Sign in with email and password and set the session cookie."""
        client = _require_client()
        session = await asyncio.to_thread(
            client.sign_in_with_password, request.email, request.password
        )
        logger.info("Signed in %s", request.email)
        return _session_response(session)

    @app.post("/auth/signup", response_model=AuthResponse)
    async def signup(request: CredentialsRequest) -> JSONResponse:
        """Create an account and set the session cookie."""
        client = _require_client()
        session = await asyncio.to_thread(client.sign_up, request.email, request.password)
        logger.info("Signed up %s", request.email)
        return _session_response(session)

    @app.post("/auth/logout")
    async def logout(request: Request) -> JSONResponse:
        """Revoke the session at the provider and clear the cookie."""
        cookie_name = get_config().auth.cookie_name
        token = request.cookies.get(cookie_name)
        client = get_auth_client()
        if token and client is not None:
            try:
                await asyncio.to_thread(client.sign_out, token)
            except DaybookError as exc:
                # Cookie is cleared either way; an expired token cannot be revoked.
                logger.info("Provider sign-out failed: %s", exc)
        body: Dict[str, bool] = {"success": True}
        response = JSONResponse(body)
        response.delete_cookie(cookie_name)
        return response
