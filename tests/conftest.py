import os
import tempfile
import uuid

# Settings are read at import time; configure before anything from wolfpack is imported.
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "true")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret-that-is-at-least-32-characters")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="wolfpack-uploads-"))
os.environ.setdefault("VENUE_LATITUDE", "40.7128")
os.environ.setdefault("VENUE_LONGITUDE", "-74.0060")
os.environ.setdefault("VENUE_RADIUS_METERS", "100")
os.environ.pop("FCM_SERVER_KEY", None)

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from wolfpack.core.security import create_access_token
from wolfpack.db.base import Base
from wolfpack.db.session import get_db
from wolfpack.main import create_app
from wolfpack.models.location import Location
from wolfpack.models.user import User
from wolfpack.models.video import WolfpackVideo


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def app(session_maker):
    app = create_app()

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
async def client(app):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as c:
        yield c


@pytest.fixture
def make_user(session_maker):
    async def _make(**fields) -> User:
        suffix = uuid.uuid4().hex[:8]
        fields.setdefault("auth_id", uuid.uuid4())
        fields.setdefault("email", f"wolf_{suffix}@example.com")
        fields.setdefault("username", f"wolf_{suffix}")
        async with session_maker() as session:
            user = User(**fields)
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make


@pytest.fixture
def make_video(session_maker):
    async def _make(owner: User, **fields) -> WolfpackVideo:
        fields.setdefault("video_url", f"https://cdn.example.com/{uuid.uuid4().hex}.mp4")
        fields.setdefault("caption", "Friday night")
        async with session_maker() as session:
            video = WolfpackVideo(user_id=owner.id, **fields)
            session.add(video)
            await session.commit()
            await session.refresh(video)
            return video

    return _make


@pytest.fixture
def make_location(session_maker):
    async def _make(**fields) -> Location:
        fields.setdefault("name", "Side Hustle Bar")
        fields.setdefault("latitude", 40.7128)
        fields.setdefault("longitude", -74.0060)
        fields.setdefault("radius_miles", 0.25)
        async with session_maker() as session:
            location = Location(**fields)
            session.add(location)
            await session.commit()
            await session.refresh(location)
            return location

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.auth_id)}"}

    return _headers
