############################################################
#
# blogcms - Blog and Content Management Service
#
# conftest.py: Pytest configuration and shared test fixtures
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Pytest configuration and shared fixtures for blogcms tests."""

import os

# Must be set before any blogcms module builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "console")

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from blogcms.app.db import crud
from blogcms.app.db.session import (
    build_engine,
    build_sessionmaker,
    create_all_tables,
    get_async_db,
)
from blogcms.app.security import hash_password
from blogcms.app.settings import get_settings

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-password"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = build_engine("sqlite+aiosqlite://")
    await create_all_tables(bind=engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    """Session factory bound to the test database."""
    return build_sessionmaker(engine)


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session for calling core functions directly.

    Do not combine with ``client`` in one test: the in-memory database
    has a single connection.
    """
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def admin_user(session_factory):
    """Committed admin account."""
    async with session_factory() as session:
        user = await crud.create_user(
            session,
            username=ADMIN_USERNAME,
            email="admin@example.com",
            password_hash=hash_password(ADMIN_PASSWORD),
            is_admin=True,
        )
        await session.commit()
    return user


@pytest_asyncio.fixture
async def regular_user(session_factory):
    """Committed non-admin account."""
    async with session_factory() as session:
        user = await crud.create_user(
            session,
            username="reader",
            email="reader@example.com",
            password_hash=hash_password("reader-password"),
        )
        await session.commit()
    return user


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app with the DB dependency pointed at the test database."""
    from blogcms.app.main import app

    async def override_get_async_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_db] = override_get_async_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_headers(client, admin_user):
    """Bearer header for the admin account."""
    response = await client.post(
        "/api/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def settings():
    """The live settings object; use monkeypatch to change fields."""
    return get_settings()
