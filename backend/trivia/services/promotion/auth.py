"""Authentication collaborator consulted before production writes."""

import secrets
from typing import Protocol

from trivia.core.config import settings


class AuthProvider(Protocol):
    """Answers one question: is there an authenticated caller right now."""

    def is_authenticated(self) -> bool: ...


class StaticAuth:
    """Fixed answer; used by jobs and tests."""

    def __init__(self, authenticated: bool):
        self.authenticated = authenticated

    def is_authenticated(self) -> bool:
        return self.authenticated


class BearerTokenAuth:
    """Authenticated when the presented bearer token matches ``ADMIN_API_TOKEN``."""

    def __init__(self, token: str | None, expected: str | None = None):
        self.token = token
        self.expected = expected if expected is not None else settings.ADMIN_API_TOKEN

    @classmethod
    def from_header(cls, authorization: str | None) -> "BearerTokenAuth":
        if not authorization:
            return cls(None)
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return cls(None)
        return cls(token.strip())

    def is_authenticated(self) -> bool:
        if not self.token or not self.expected:
            return False
        return secrets.compare_digest(self.token, self.expected)
