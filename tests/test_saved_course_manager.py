"""
Unit tests for the bookmark lifecycle manager against in-memory stores.
"""

import pytest

from coursefinder.common.exceptions import NotFoundError
from coursefinder.modules.courses.course_normalizer import normalize_catalog
from coursefinder.modules.saved_courses.saved_course_manager import SavedCourseManager

pytestmark = pytest.mark.anyio

@pytest.fixture
def manager(memory_store):
    return SavedCourseManager(memory_store)

@pytest.fixture
def catalog(sample_records):
    return normalize_catalog(sample_records)

async def test_bookmark_scenario(manager):
    toggled = await manager.toggle(7, 1)
    assert toggled.bookmarked is True
    assert toggled.id == 101

    status = await manager.check_status(7, 1)
    assert status.is_bookmarked is True
    assert status.id == 101

    updated = await manager.update_notes(101, "check deadline")
    assert updated.notes == "check deadline"

    toggled = await manager.toggle(7, 1)
    assert toggled.bookmarked is False
    assert toggled.id is None

    status = await manager.check_status(7, 1)
    assert status.is_bookmarked is False
    assert status.id is None

async def test_third_toggle_creates_a_new_bookmark(manager, memory_store):
    first = await manager.toggle(7, 1)
    second = await manager.toggle(7, 1)
    third = await manager.toggle(7, 1)

    assert (first.bookmarked, second.bookmarked, third.bookmarked) == (True, False, True)
    assert third.id != first.id
    assert await memory_store.find_by_id(first.id) is None

async def test_toggle_sequence_never_duplicates_a_key(manager, memory_store):
    for _ in range(5):
        await manager.toggle(7, 1)
        assert memory_store.count_key(7, 1) <= 1
    assert memory_store.count_key(7, 1) == 1

async def test_keys_are_independent(manager):
    await manager.toggle(7, 1)
    await manager.toggle(8, 1)
    await manager.toggle(7, 2)

    assert (await manager.check_status(7, 1)).is_bookmarked
    assert (await manager.check_status(8, 1)).is_bookmarked
    assert (await manager.check_status(7, 2)).is_bookmarked
    assert not (await manager.check_status(8, 2)).is_bookmarked

async def test_concurrent_save_is_treated_as_no_op(racing_store):
    manager = SavedCourseManager(racing_store)

    result = await manager.toggle(7, 1)

    # The competing request's bookmark survives and is reported back
    assert result.bookmarked is True
    assert result.id == (await racing_store.find_by_key(7, 1)).id
    assert racing_store.count_key(7, 1) == 1

async def test_conflict_is_retried_once_then_given_up(vanishing_store):
    manager = SavedCourseManager(vanishing_store, conflict_retries=1)

    result = await manager.toggle(7, 1)

    assert result.bookmarked is False
    assert vanishing_store.insert_calls == 2

async def test_check_status_has_no_side_effects(manager, memory_store):
    await manager.check_status(7, 1)
    await manager.check_status(7, 1)
    assert memory_store.rows == {}

async def test_update_notes_on_removed_bookmark_fails(manager):
    toggled = await manager.toggle(7, 1)
    await manager.remove(toggled.id)

    with pytest.raises(NotFoundError):
        await manager.update_notes(toggled.id, "too late")

async def test_update_notes_keeps_bookmark_state(manager):
    toggled = await manager.toggle(7, 1)
    await manager.update_notes(toggled.id, "first")
    await manager.update_notes(toggled.id, None)

    status = await manager.check_status(7, 1)
    assert status.is_bookmarked is True
    assert status.id == toggled.id

async def test_remove_twice_reports_not_found(manager):
    toggled = await manager.toggle(7, 1)
    await manager.remove(toggled.id)

    with pytest.raises(NotFoundError):
        await manager.remove(toggled.id)

    # The natural key is free again immediately
    again = await manager.toggle(7, 1)
    assert again.bookmarked is True

async def test_other_users_bookmark_looks_missing(manager):
    toggled = await manager.toggle(7, 1)

    with pytest.raises(NotFoundError):
        await manager.update_notes(toggled.id, "mine now", user_id=8)
    with pytest.raises(NotFoundError):
        await manager.remove(toggled.id, user_id=8)

    assert (await manager.check_status(7, 1)).is_bookmarked

async def test_list_for_user_joins_courses_in_creation_order(manager, catalog):
    by_id = {course.id: course for course in catalog}
    await manager.toggle(7, 3)
    await manager.toggle(7, 1)
    await manager.toggle(8, 2)

    async def load_courses(course_ids):
        return {course_id: by_id[course_id] for course_id in course_ids if course_id in by_id}

    views = await manager.list_for_user(7, load_courses)

    assert [view.course_id for view in views] == [3, 1]
    assert views[0].course.name == "Engineering - Electrical"

async def test_list_for_user_tolerates_courses_missing_from_catalog(manager):
    await manager.toggle(7, 42)

    async def load_courses(course_ids):
        return {}

    views = await manager.list_for_user(7, load_courses)
    assert views[0].course is None

async def test_annotate_marks_saved_courses(manager, catalog):
    saved = await manager.toggle(7, 2)

    annotated = await manager.annotate(7, catalog)

    assert [course.id for course in annotated] == [1, 2, 3, 4]
    assert [course.is_bookmarked for course in annotated] == [False, True, False, False]
    assert annotated[1].bookmark_id == saved.id
