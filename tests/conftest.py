import os

import pytest

# Keep the module-level app (research_portfolio.api.server:app) off the disk.
os.environ.setdefault("RESEARCH_DB_PATH", ":memory:")

from fastapi.testclient import TestClient

from research_portfolio.api.server import create_app
from research_portfolio.auth.security import create_access_token
from research_portfolio.config import Config
from research_portfolio.db import Database, init_db
from research_portfolio.repositories import build_repositories

TEST_SECRET = "test-secret"


@pytest.fixture
def cfg():
    return Config(
        APP_ENV="development",
        DB_DSN=":memory:",
        SEED_ON_STARTUP=False,
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD="admin123",
        ADMIN_PASSWORD_HASH=None,
        AUTH_JWT_SECRET=TEST_SECRET,
    )


@pytest.fixture
def db():
    d = Database(":memory:")
    init_db(d)
    yield d
    d.close()


@pytest.fixture
def repos(db):
    return build_repositories(db)


@pytest.fixture
def app(cfg):
    return create_app(cfg)


@pytest.fixture
def client(app):
    # Context manager so the lifespan (schema + seed) runs.
    with TestClient(app) as c:
        yield c


@pytest.fixture
def token():
    return create_access_token(secret=TEST_SECRET, username="admin", role="admin")


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
