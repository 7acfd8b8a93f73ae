"""Shared fixtures: a throw-away SQLite database configured before import."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "bookyoon_notifications_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["API_PREFIX"] = "/api"
os.environ["APPLICATION_NAME"] = "bookyoonnotificationservice"

from bookyoon_notifications.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from bookyoon_notifications.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from bookyoon_notifications.infrastructure.security import create_access_token  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure every test starts from empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    """Return a session bound to the test database."""

    with SessionLocal() as db:
        yield db


@pytest.fixture()
def auth_headers():
    """Build ``Authorization`` headers for the given login."""

    def _headers(login: str) -> dict[str, str]:
        token = create_access_token({"sub": login})
        return {"Authorization": f"Bearer {token}"}

    return _headers
