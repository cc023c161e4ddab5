import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_unit_of_work
from src.domain.entities import Teacher

from tests.integration.settings import ADMIN_KEY, API_PREFIX


@pytest.fixture(autouse=True)
def app_config(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "JWT_SECRET", "integration-test-secret")
    monkeypatch.setattr(ApplicationConfig, "ADMIN_API_KEY", ADMIN_KEY)
    monkeypatch.setattr(ApplicationConfig, "API_PREFIX", API_PREFIX)
    monkeypatch.setattr(ApplicationConfig, "SESSION_TTL_SECONDS", 300)
    monkeypatch.setattr(ApplicationConfig, "REAPER_ENABLED", False)
    return ApplicationConfig


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test_qr_login.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def app(db_session, app_config):
    from src.api.app import create_app

    app = create_app(app_config)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def teacher(db_session):
    teacher = Teacher(external_id="TCH001", name="Jane Doe", email="jane@school.edu")
    db_session.add(teacher)
    await db_session.commit()
    # Detached so later request rollbacks do not expire it
    db_session.expunge(teacher)
    return teacher


@pytest_asyncio.fixture
async def other_teacher(db_session):
    teacher = Teacher(external_id="TCH002", name="Sam Roe", email="sam@school.edu")
    db_session.add(teacher)
    await db_session.commit()
    # Detached so later request rollbacks do not expire it
    db_session.expunge(teacher)
    return teacher
