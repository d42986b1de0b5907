import os
import tempfile

os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENV"] = "test"
os.environ["ENABLE_FILE_LOGGING"] = "false"
os.environ["ENABLE_REQUEST_LOGGING"] = "false"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(tempfile.gettempdir(), 'rescuelink_test.db')}"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.database import Base, build_engine, get_db, get_session_factory
from core.security import create_access_token
from models import EmergencyRequest, User, Volunteer
from services.zone_resolver import HeuristicZoneResolver, get_zone_resolver


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'rescuelink.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_zone_resolver] = HeuristicZoneResolver

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_volunteer(session_factory):
    """Insert a volunteer in its own committed transaction."""
    counter = {"n": 0}

    async def _make(**overrides) -> Volunteer:
        counter["n"] += 1
        n = counter["n"]
        fields = dict(
            name=f"Volunteer {n}",
            email=f"volunteer{n}@rescuelink.org",
            phone=f"55500000{n:02d}",
            password_hash="not-a-real-hash",
            zone="Wichita Falls",
            available=True,
            account_status="active",
            email_verified=True,
        )
        fields.update(overrides)
        async with session_factory() as session:
            volunteer = Volunteer(**fields)
            session.add(volunteer)
            await session.commit()
            return volunteer

    return _make


@pytest.fixture
def make_request(session_factory):
    """Insert a pending emergency request (and its guest) directly."""

    async def _make(**overrides) -> EmergencyRequest:
        async with session_factory() as session:
            guest = User(name="Guest User", phone="5551234567", role="guest")
            session.add(guest)
            await session.flush()
            fields = dict(
                guest_id=guest.id,
                emergency_type="flood",
                description="Water rising in the basement",
                people_count=4,
                contact_number="5551234567",
                can_call=True,
                address="4700 Taft Blvd, Wichita Falls, TX 76308",
                address_zone="Wichita Falls",
                severity="medium",
                status="pending",
            )
            fields.update(overrides)
            request = EmergencyRequest(**fields)
            session.add(request)
            await session.commit()
            return request

    return _make


@pytest.fixture
def auth_header():
    def _header(volunteer: Volunteer) -> dict:
        token = create_access_token(volunteer.id, volunteer.email, volunteer.name)
        return {"Authorization": f"Bearer {token}"}

    return _header
