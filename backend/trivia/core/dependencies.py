"""FastAPI dependencies for store access and authentication."""

from typing import Annotated

from fastapi import Depends, Header, status
from sqlalchemy.orm import Session

from trivia.core.app_exceptions import AppError
from trivia.core.environment import EnvironmentManager, environment_manager
from trivia.db.session import get_db
from trivia.services.content_store import SqlContentStore
from trivia.services.promotion.auth import BearerTokenAuth


def get_store(db: Session = Depends(get_db)) -> SqlContentStore:
    """Dependency to get a content store bound to the request session."""
    return SqlContentStore(db)


def get_environment() -> EnvironmentManager:
    """Dependency to get the process-wide environment manager."""
    return environment_manager


def get_auth(
    authorization: Annotated[str | None, Header()] = None,
) -> BearerTokenAuth:
    """Authentication collaborator for the current request.

    Never rejects by itself; promotion endpoints hand it to the pipeline, which
    reports an unauthenticated caller as a structured result.
    """
    return BearerTokenAuth.from_header(authorization)


def require_auth(auth: BearerTokenAuth = Depends(get_auth)) -> BearerTokenAuth:
    """Dependency that rejects unauthenticated callers with 401."""
    if not auth.is_authenticated():
        raise AppError(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="UNAUTHENTICATED",
            message="Valid bearer token required",
        )
    return auth
