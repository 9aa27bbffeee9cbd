"""
Test fixtures - in-memory SQLite database + HTTP client bound to the app
"""
from datetime import timedelta

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from open_maintenance.database import Base, get_db
from open_maintenance.main import app
from open_maintenance.models.task import MaintenanceTask
from open_maintenance.utils.helpers import site_today


@pytest_asyncio.fixture()
async def db_session():
    """Create a fresh in-memory SQLite database for each test"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture()
async def seed_data(db_session):
    """Two tasks for today, one for yesterday"""
    today = site_today()
    pumps = MaintenanceTask(
        id="1",
        date=today,
        area="Sótano",
        system="Bombas",
        activity="Revisar ruido/presión",
        frequency="daily",
        status="pending",
        user="Técnico",
    )
    solar = MaintenanceTask(
        id=f"solar-{today.isoformat()}",
        date=today,
        area="Azotea",
        system="Paneles Solares",
        activity="Revisar generación solar y balance con CFE (Shelly)",
        frequency="daily",
        status="pending",
        user="Técnico",
    )
    old = MaintenanceTask(
        id="old-1",
        date=today - timedelta(days=1),
        area="Estacionamiento",
        system="Rampa Hidráulica",
        activity="Inspección visual, aceite y consumo en amperes",
        frequency="weekly",
        status="pending",
        user="Técnico",
    )

    db_session.add_all([pumps, solar, old])
    await db_session.commit()

    return {"today": today, "pumps": pumps, "solar": solar, "old": old}


@pytest_asyncio.fixture()
async def client(db_session, seed_data):
    """httpx AsyncClient bound to the FastAPI app, storage pointed at the test database"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def empty_client(db_session):
    """Client over an empty database"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()
