"""Session handling delegated to an external identity provider."""

from .client import AuthClient, AuthSession
from .gate import SessionGateMiddleware

__all__ = ["AuthClient", "AuthSession", "SessionGateMiddleware"]
