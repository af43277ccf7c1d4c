"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time, so configure the environment first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"
os.environ["ADMIN_API_TOKEN"] = "test-admin-token"
os.environ["CONTENT_ENV"] = "production"

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from trivia.core.dependencies import get_environment  # noqa: E402
from trivia.core.environment import (  # noqa: E402
    Environment,
    EnvironmentManager,
    TableNames,
    resolve_tables,
)
from trivia.db.base import Base  # noqa: E402
from trivia.db.engine import create_db_engine  # noqa: E402
from trivia.db.session import get_db  # noqa: E402
from trivia.main import create_app  # noqa: E402
from trivia.services.content_store import SqlContentStore  # noqa: E402
from trivia.services.promotion.auth import StaticAuth  # noqa: E402

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database with every content table."""
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def db(engine: Engine) -> Generator[Session, None, None]:
    session = Session(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db: Session) -> SqlContentStore:
    return SqlContentStore(db)


@pytest.fixture
def staging() -> TableNames:
    return resolve_tables(Environment.DEVELOPMENT)


@pytest.fixture
def production() -> TableNames:
    return resolve_tables(Environment.PRODUCTION)


@pytest.fixture
def auth() -> StaticAuth:
    return StaticAuth(True)


@pytest.fixture
def anonymous() -> StaticAuth:
    return StaticAuth(False)


@pytest.fixture
def environment_manager() -> EnvironmentManager:
    return EnvironmentManager(Environment.PRODUCTION)


@pytest.fixture
def client(db: Session, environment_manager: EnvironmentManager) -> Generator[TestClient, None, None]:
    """Test client bound to the per-test database and environment manager."""
    app = create_app()

    def _get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_environment] = lambda: environment_manager
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
