"""HTTP client for a GoTrue-compatible identity provider (e.g. Supabase Auth)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from src.daybook.exceptions import AuthError, UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class AuthSession:
    """Session issued by the provider after sign-in."""

    access_token: str
    expires_in: int = 3600
    refresh_token: Optional[str] = None
    user: Dict[str, Any] = field(default_factory=dict)


class AuthClient:
    """
    GoTrue APIクライアント

    サインイン・サインアップ・セッション検証のみを扱う
    """

    def __init__(self, base_url: str, anon_key: str, timeout: float = 10):
        """
        Args:
            base_url: プロジェクトURL（例: https://xyz.supabase.co）
            anon_key: 公開APIキー
            timeout: リクエストのタイムアウト秒
        """
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.timeout = timeout

    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        headers = {"apikey": self.anon_key, "Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        return (
            payload.get("error_description")
            or payload.get("msg")
            or payload.get("message")
            or payload.get("error")
            or f"HTTP {response.status_code}"
        )

    def _request(
        self,
        method: str,
        path: str,
        *,
        access_token: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        try:
            response = requests.request(
                method,
                f"{self.base_url}/auth/v1{path}",
                headers=self._headers(access_token),
                json=json,
                params=params,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Auth provider request failed: {e}")
            raise UpstreamError(f"Auth provider unreachable: {e}") from e

        if 400 <= response.status_code < 500:
            raise AuthError(self._error_message(response))
        if response.status_code >= 500:
            raise UpstreamError(self._error_message(response))
        return response

    @staticmethod
    def _to_session(payload: Dict[str, Any]) -> AuthSession:
        token = payload.get("access_token")
        if not token:
            # サインアップ直後でメール確認待ちの場合はトークンが無い
            raise AuthError("Check your email to confirm your account")
        return AuthSession(
            access_token=token,
            expires_in=int(payload.get("expires_in", 3600)),
            refresh_token=payload.get("refresh_token"),
            user=payload.get("user") or {},
        )

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        response = self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return self._to_session(response.json())

    def sign_up(self, email: str, password: str) -> AuthSession:
        response = self._request("POST", "/signup", json={"email": email, "password": password})
        return self._to_session(response.json())

    def get_user(self, access_token: str) -> Dict[str, Any]:
        """アクセストークンを検証してユーザー情報を返す（無効ならAuthError）"""
        response = self._request("GET", "/user", access_token=access_token)
        return response.json()

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "/logout", access_token=access_token)
