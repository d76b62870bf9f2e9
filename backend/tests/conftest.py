import uuid
from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings
from app.db.base import Base
from app.db.engine import install_query_timing
from app.db.session import get_db
from app.main import create_app
from app.models.asset import Asset
from app.models.category import Category
from app.models.location import Location
from app.models.manufacturer import Manufacturer


def _register_sqlite_compilers():
    """Register SQLite-compatible compilers for PG types."""
    from sqlalchemy.ext.compiler import compiles

    @compiles(PG_UUID, "sqlite")
    def compile_uuid(type_, compiler, **kw):
        return "VARCHAR(36)"


_register_sqlite_compilers()


@pytest_asyncio.fixture
async def db_session(tmp_path) -> AsyncIterator[AsyncSession]:
    # Import all models
    import app.models  # noqa: F401

    # Use SQLite for testing (no PostgreSQL needed)
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    install_query_timing(engine, settings.SLOW_QUERY_THRESHOLD)

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    app = create_app()

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {settings.API_TOKEN}"}


@pytest_asyncio.fixture
async def category(db_session: AsyncSession) -> Category:
    record = Category(name="Laptops")
    db_session.add(record)
    await db_session.commit()
    return record


@pytest_asyncio.fixture
async def location(db_session: AsyncSession) -> Location:
    record = Location(name="Library", building="Main")
    db_session.add(record)
    await db_session.commit()
    return record


@pytest_asyncio.fixture
async def manufacturer(db_session: AsyncSession) -> Manufacturer:
    record = Manufacturer(name="Lenovo")
    db_session.add(record)
    await db_session.commit()
    return record


@pytest_asyncio.fixture
async def make_asset(db_session: AsyncSession) -> Callable[..., Awaitable[Asset]]:
    async def _make(**fields) -> Asset:
        fields.setdefault("item_number", f"A-{uuid.uuid4().hex[:6]}")
        asset = Asset(**fields)
        db_session.add(asset)
        await db_session.commit()
        return asset

    return _make
