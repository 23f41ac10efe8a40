import itertools
import os
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

# Settings are read at import time, so the environment must be ready first.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-long-enough-for-hs256-signing")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from coursefinder.common.config import settings
from coursefinder.common.database.database import get_db_session
from coursefinder.common.exceptions import ConflictError, NotFoundError
from coursefinder.main import app
from coursefinder.models.models import Base
from coursefinder.modules.courses.catalog_source import load_snapshot
from coursefinder.modules.saved_courses.schemas import SavedCourseRecord
from coursefinder.seed.seed import SAMPLE_CATALOG, seed_courses

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)

class InMemorySavedCourseStore:
    """Dict-backed SavedCourseStore with the same uniqueness rules as the table."""

    def __init__(self, start_id: int = 101):
        self.rows: Dict[int, SavedCourseRecord] = {}
        self._ids = itertools.count(start_id)
        self._clock = itertools.count()
        self.insert_calls = 0

    async def find_by_key(self, user_id: int, course_id: int) -> Optional[SavedCourseRecord]:
        for row in self.rows.values():
            if row.user_id == user_id and row.course_id == course_id:
                return row
        return None

    async def find_by_id(self, bookmark_id: int) -> Optional[SavedCourseRecord]:
        return self.rows.get(bookmark_id)

    def _put(self, user_id: int, course_id: int, notes: Optional[str] = None) -> SavedCourseRecord:
        row = SavedCourseRecord(
            id=next(self._ids),
            user_id=user_id,
            course_id=course_id,
            notes=notes,
            created_at=BASE_TIME + timedelta(seconds=next(self._clock)),
        )
        self.rows[row.id] = row
        return row

    async def insert(self, user_id: int, course_id: int, notes: Optional[str] = None) -> SavedCourseRecord:
        self.insert_calls += 1
        if await self.find_by_key(user_id, course_id) is not None:
            raise ConflictError("duplicate", user_id=user_id, course_id=course_id)
        return self._put(user_id, course_id, notes)

    async def update_notes(self, bookmark_id: int, notes: Optional[str]) -> SavedCourseRecord:
        if bookmark_id not in self.rows:
            raise NotFoundError("missing", bookmark_id=bookmark_id)
        self.rows[bookmark_id] = self.rows[bookmark_id].model_copy(update={"notes": notes})
        return self.rows[bookmark_id]

    async def delete_by_key(self, user_id: int, course_id: int) -> bool:
        row = await self.find_by_key(user_id, course_id)
        if row is None:
            return False
        del self.rows[row.id]
        return True

    async def delete_by_id(self, bookmark_id: int) -> bool:
        return self.rows.pop(bookmark_id, None) is not None

    async def list_by_user(self, user_id: int) -> List[SavedCourseRecord]:
        rows = [row for row in self.rows.values() if row.user_id == user_id]
        return sorted(rows, key=lambda row: (row.created_at, row.id))

    def count_key(self, user_id: int, course_id: int) -> int:
        return sum(1 for row in self.rows.values() if row.user_id == user_id and row.course_id == course_id)

class RacingSavedCourseStore(InMemorySavedCourseStore):
    """Another request saves the same course just before our first insert lands."""

    def __init__(self, start_id: int = 101):
        super().__init__(start_id)
        self.raced = False

    async def insert(self, user_id: int, course_id: int, notes: Optional[str] = None) -> SavedCourseRecord:
        if not self.raced:
            self.raced = True
            self._put(user_id, course_id)
        return await super().insert(user_id, course_id, notes)

class VanishingConflictStore(InMemorySavedCourseStore):
    """Every insert conflicts, but the conflicting row is gone by the time it is re-read."""

    async def insert(self, user_id: int, course_id: int, notes: Optional[str] = None) -> SavedCourseRecord:
        self.insert_calls += 1
        raise ConflictError("duplicate", user_id=user_id, course_id=course_id)

@pytest.fixture
def anyio_backend():
    return "asyncio"

@pytest.fixture
def memory_store():
    return InMemorySavedCourseStore()

@pytest.fixture
def racing_store():
    return RacingSavedCourseStore()

@pytest.fixture
def vanishing_store():
    return VanishingConflictStore()

@pytest.fixture
def sample_records():
    return load_snapshot(str(SAMPLE_CATALOG))

@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()

@pytest.fixture
async def session_factory(engine, sample_records):
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        async with session.begin():
            await seed_courses(session, sample_records)
    return factory

@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session

@pytest.fixture
async def client(session_factory):
    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

def make_token(user_id: int) -> str:
    return jwt.encode({"sub": str(user_id)}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

@pytest.fixture
def auth_headers():
    def build(user_id: int) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id)}"}
    return build
