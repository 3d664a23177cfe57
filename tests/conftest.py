"""Pytest configuration and fixtures.

Every test gets its own in-memory SQLite database. The app's get_db
dependency is overridden to use it, and the same session factory is
exposed for tests that call the workflows directly.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from main import app
from shared.db import Base, get_db

ADMIN_PASSWORD = "rahasia123"
VALID_NIP = "198501012010011001"


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def signup_and_login(client):
    """Register an identity through the API and return its login response."""

    async def _signup_and_login(email: str, password: str = ADMIN_PASSWORD) -> dict:
        response = await client.post("/auth/signup", json={"email": email, "password": password})
        assert response.status_code == 201, response.text
        return await login(client, email, password)

    return _signup_and_login


async def login(client: AsyncClient, email: str, password: str) -> dict:
    response = await client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def setup_school(client):
    async def _setup_school(token: str, name: str = "SMP Negeri 1 Jakarta") -> dict:
        response = await client.post(
            "/schools/setup",
            json={
                "name": name,
                "npsn": "20100001",
                "principal_name": "Budi Santoso",
                "principal_nip": VALID_NIP,
            },
            headers=auth_headers(token),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _setup_school


@pytest.fixture
def create_teacher(client):
    async def _create_teacher(token: str, name: str = "Siti Aminah", nip: str = VALID_NIP) -> dict:
        response = await client.post(
            "/teachers",
            json={
                "name": name,
                "nip": nip,
                "gender": "Perempuan",
                "rank": "III.A",
                "employment_type": "PNS",
            },
            headers=auth_headers(token),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create_teacher


@pytest.fixture
async def admin(signup_and_login, setup_school):
    """An administrator who owns a school: {"token", "user_id", "school"}."""
    session = await signup_and_login("admin@sekolah.test")
    school = await setup_school(session["access_token"])
    return {"token": session["access_token"], "user_id": session["user_id"], "school": school}


@pytest.fixture
def provision(client):
    async def _provision(token: str, email: str, teacher_id: str = None, password: str = None):
        body = {"email": email}
        if teacher_id:
            body["teacherId"] = teacher_id
        if password:
            body["password"] = password
        return await client.post(
            "/functions/create-teacher-account",
            json=body,
            headers=auth_headers(token),
        )

    return _provision
