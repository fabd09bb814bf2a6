from __future__ import annotations

import uuid
from typing import AsyncGenerator
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tesvik_portal.core.database.entities.users import AppRole, UserRole

ADMIN_ID = str(uuid.UUID("11111111-1111-1111-1111-111111111111"))
USER_ID = str(uuid.UUID("22222222-2222-2222-2222-222222222222"))


@pytest.fixture
def admin_headers() -> dict:
    return {"X-User-Id": ADMIN_ID}


@pytest.fixture
def user_headers() -> dict:
    return {"X-User-Id": USER_ID}


@pytest_asyncio.fixture
async def admin_user(session: AsyncSession) -> str:
    """Store the admin role for ``ADMIN_ID``."""
    session.add(UserRole(user_id=ADMIN_ID, role=AppRole.ADMIN))
    await session.commit()
    return ADMIN_ID


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from tesvik_portal.core.database import get_session
    from tesvik_portal.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("tesvik_portal.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()
