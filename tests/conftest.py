"""Shared fixtures: a fresh SQLite-backed app per test and signed-up users."""

from collections.abc import AsyncGenerator, Iterator
from dataclasses import dataclass
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from worldbuilder.api.main import create_app
from worldbuilder.core.config import Settings
from worldbuilder.models import Base

PASSWORD = "Str0ng!pass"


@dataclass
class Owner:
    """A signed-up user with one series and one book."""

    user_id: int
    headers: dict[str, str]
    series_id: int
    book_id: int


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=sqlite_url(tmp_path / "api.db"),
        database_auto_create=True,
        environment="test",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as client:
        yield client


def signup(client: TestClient, username: str, email: str | None = None) -> tuple[int, dict[str, str]]:
    """Sign up a user and return its id and bearer headers.

    The auth cookie is dropped from the client so that several users can
    share one client through their headers.
    """
    response = client.post(
        "/api/auth/signup",
        json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": PASSWORD,
        },
    )
    assert response.status_code == 201, response.text
    token = response.cookies["access_token"]
    client.cookies.clear()
    return response.json()["userId"], {"Authorization": f"Bearer {token}"}


def make_owner(client: TestClient, username: str) -> Owner:
    user_id, headers = signup(client, username)

    series = client.post("/api/series", json={"name": f"{username} saga"}, headers=headers)
    assert series.status_code == 201, series.text
    series_id = series.json()["data"]["id"]

    book = client.post(
        "/api/books",
        params={"seriesId": series_id},
        json={"name": f"{username} book one"},
        headers=headers,
    )
    assert book.status_code == 201, book.text

    return Owner(user_id, headers, series_id, book.json()["data"]["id"])


@pytest.fixture
def owner(client: TestClient) -> Owner:
    return make_owner(client, "alice")


@pytest.fixture
def intruder(client: TestClient, owner: Owner) -> Owner:
    return make_owner(client, "mallory")


@pytest_asyncio.fixture
async def session(tmp_path: Path) -> AsyncGenerator[AsyncSession, None]:
    """AsyncSession on an empty schema, for service-level tests."""
    engine = create_async_engine(sqlite_url(tmp_path / "unit.db"))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        yield session

    await engine.dispose()
