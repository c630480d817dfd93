"""Test fixtures for the employee directory."""
import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from employee_directory.config import Settings  # noqa: E402
from employee_directory.database import Database  # noqa: E402
from employee_directory.main import create_app  # noqa: E402
from employee_directory.resolvers import Resolvers  # noqa: E402

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def settings() -> Settings:
    return Settings(SECRET_KEY="test-secret-key", DATABASE_URL=MEMORY_URL)


@pytest_asyncio.fixture
async def database() -> Database:
    """A fresh in-memory database per test."""

    db = Database(MEMORY_URL)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def resolvers(database: Database, settings: Settings) -> Resolvers:
    return Resolvers(database, settings)


@pytest.fixture
def employee_payload() -> dict:
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "gender": "Female",
        "designation": "Engineer",
        "salary": 5000.0,
        "date_of_joining": "2024-01-15",
        "department": "R&D",
        "employee_photo": "https://example.com/ada.png",
    }


def build_client(database: Database, settings: Settings) -> AsyncClient:
    """HTTP client for an app wired to `database`, bypassing the lifespan."""

    app = create_app(settings)
    app.state.database = database
    app.state.resolvers = Resolvers(database, settings)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest_asyncio.fixture
async def client(database: Database, settings: Settings) -> AsyncClient:
    """Provide an HTTP client for integration tests."""

    async with build_client(database, settings) as client:
        yield client


@pytest.fixture
def make_client(database: Database):
    """Build a client for `database` with custom settings."""

    def make(custom: Settings) -> AsyncClient:
        return build_client(database, custom)

    return make
