import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["OPENAI_API_KEY"] = ""
os.environ["PUBLIC_BASE_URL"] = "https://academicflow.test"

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from academicflow.api.deps import get_llm_client
from academicflow.db.base import Base
from academicflow.db.session import get_db
from academicflow.main import app
from helpers import auth_headers, make_llm_client


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_llm():
    def install(handler):
        llm = make_llm_client(handler)
        app.dependency_overrides[get_llm_client] = lambda: llm
        return llm

    return install


@pytest_asyncio.fixture
async def student(client):
    headers = auth_headers("student-1", email="student@example.edu", given_name="Sam")
    response = await client.post("/api/auth/select-role", json={"role": "student"}, headers=headers)
    assert response.status_code == 200
    return headers


@pytest_asyncio.fixture
async def faculty(client):
    headers = auth_headers("faculty-1", email="faculty@example.edu", given_name="Fran")
    response = await client.post("/api/auth/select-role", json={"role": "faculty"}, headers=headers)
    assert response.status_code == 200
    return headers
