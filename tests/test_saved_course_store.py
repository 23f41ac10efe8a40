"""
Tests for the SQLAlchemy saved course store on an in-memory SQLite database.
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from coursefinder.common.exceptions import AdapterUnavailableError, ConflictError, NotFoundError
from coursefinder.modules.saved_courses.saved_course_manager import SavedCourseManager
from coursefinder.modules.saved_courses.saved_course_store import SqlSavedCourseStore

pytestmark = pytest.mark.anyio

@pytest.fixture
def store(db_session):
    return SqlSavedCourseStore(db_session)

async def test_insert_and_find(store):
    saved = await store.insert(7, 1, "apply before June")

    assert saved.id is not None
    assert saved.created_at is not None
    assert (await store.find_by_key(7, 1)).id == saved.id
    assert (await store.find_by_id(saved.id)).notes == "apply before June"
    assert await store.find_by_key(7, 2) is None

async def test_duplicate_key_raises_conflict(store):
    await store.insert(7, 1)

    with pytest.raises(ConflictError):
        await store.insert(7, 1)

    # The session is usable again after the rollback
    assert (await store.find_by_key(7, 1)) is not None

async def test_update_notes(store):
    saved = await store.insert(7, 1)

    updated = await store.update_notes(saved.id, "check deadline")

    assert updated.id == saved.id
    assert updated.notes == "check deadline"

async def test_update_notes_missing_id(store):
    with pytest.raises(NotFoundError):
        await store.update_notes(999, "nothing here")

async def test_delete_by_key_and_id(store):
    first = await store.insert(7, 1)
    second = await store.insert(7, 2)

    assert await store.delete_by_key(7, 1) is True
    assert await store.delete_by_key(7, 1) is False
    assert await store.delete_by_id(second.id) is True
    assert await store.delete_by_id(second.id) is False
    assert await store.find_by_id(first.id) is None

async def test_list_by_user_is_oldest_first(store):
    a = await store.insert(7, 3)
    b = await store.insert(7, 1)
    await store.insert(8, 2)
    c = await store.insert(7, 4)

    listed = await store.list_by_user(7)

    assert [saved.id for saved in listed] == [a.id, b.id, c.id]

async def test_manager_keeps_one_row_per_key(store):
    manager = SavedCourseManager(store)

    results = [await manager.toggle(7, 1) for _ in range(3)]

    assert [result.bookmarked for result in results] == [True, False, True]
    assert results[2].id != results[0].id
    assert len(await store.list_by_user(7)) == 1

async def test_deleted_id_is_not_reused(store):
    first = await store.insert(7, 1)
    await store.delete_by_id(first.id)

    second = await store.insert(7, 1)

    assert second.id > first.id
    with pytest.raises(NotFoundError):
        await store.update_notes(first.id, "stale id")

async def test_update_notes_on_concurrently_deleted_row(store, db_session, session_factory):
    saved = await store.insert(7, 1)
    await db_session.commit()

    async with session_factory() as other:
        await SqlSavedCourseStore(other).delete_by_id(saved.id)

    with pytest.raises(NotFoundError):
        await store.update_notes(saved.id, "late")

def _fail_first_commit(monkeypatch, session):
    """Make the next commit fail like a unique key violation whose row is already gone."""
    real_commit = session.commit
    failures = []

    async def commit():
        if not failures:
            failures.append(True)
            raise IntegrityError("INSERT INTO saved_courses", {}, Exception("UNIQUE constraint failed"))
        await real_commit()

    monkeypatch.setattr(session, "commit", commit)
    return failures

async def test_vanished_conflict_is_retried(store, db_session, monkeypatch):
    failures = _fail_first_commit(monkeypatch, db_session)

    result = await SavedCourseManager(store).toggle(7, 1)

    assert failures == [True]
    assert result.bookmarked is True
    assert (await store.find_by_key(7, 1)).id == result.id

async def test_insert_for_unknown_course_is_not_found(store, db_session, monkeypatch):
    _fail_first_commit(monkeypatch, db_session)

    with pytest.raises(NotFoundError):
        await store.insert(7, 999)

class _UnreachableSession:
    """Stands in for a session whose database connection is gone."""

    def __init__(self):
        self.rolled_back = False

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    async def rollback(self):
        self.rolled_back = True

async def test_connection_errors_become_adapter_unavailable():
    session = _UnreachableSession()
    store = SqlSavedCourseStore(session)

    with pytest.raises(AdapterUnavailableError):
        await store.find_by_key(7, 1)
    assert session.rolled_back is True
