# coursefinder/modules/saved_courses/saved_course_manager.py

"""
Bookmark lifecycle on top of a `SavedCourseStore`.

Each (user_id, course_id) key is either ABSENT or BOOKMARKED. `toggle` flips
the state, `update_notes` is a self-transition on BOOKMARKED and `remove`
deletes by bookmark id. The store's uniqueness constraint is the only
concurrency control; no locks are taken here because several server
processes may serve the same user.
"""

import logging
from typing import Awaitable, Callable, Iterable, List, Mapping, Optional, Set

from coursefinder.common.exceptions import ConflictError, NotFoundError
from coursefinder.modules.courses.schemas import CanonicalCourse
from coursefinder.modules.saved_courses.saved_course_store import SavedCourseStore
from coursefinder.modules.saved_courses.schemas import (
    AnnotatedCourse,
    BookmarkStatus,
    SavedCourseRecord,
    SavedCourseView,
    ToggleResult,
)

logger = logging.getLogger(__name__)

CourseLoader = Callable[[Set[int]], Awaitable[Mapping[int, CanonicalCourse]]]

class SavedCourseManager:
    def __init__(self, store: SavedCourseStore, conflict_retries: int = 1):
        self.store = store
        self.conflict_retries = conflict_retries

    async def toggle(self, user_id: int, course_id: int) -> ToggleResult:
        existing = await self.store.find_by_key(user_id, course_id)
        if existing is not None:
            # A concurrent toggle may already have deleted it; ABSENT either way.
            await self.store.delete_by_key(user_id, course_id)
            logger.info("User %s unsaved course %s", user_id, course_id)
            return ToggleResult(bookmarked=False)
        return await self._create(user_id, course_id)

    async def _create(self, user_id: int, course_id: int) -> ToggleResult:
        for attempt in range(self.conflict_retries + 1):
            try:
                saved = await self.store.insert(user_id, course_id)
            except ConflictError:
                current = await self.store.find_by_key(user_id, course_id)
                if current is not None:
                    # Someone else just bookmarked it: the desired state already holds.
                    logger.info(
                        "Concurrent save of course %s by user %s; keeping bookmark %s",
                        course_id, user_id, current.id,
                    )
                    return ToggleResult(bookmarked=True, id=current.id)
                logger.debug("Conflicting bookmark vanished before re-read (attempt %d)", attempt + 1)
                continue
            logger.info("User %s saved course %s as bookmark %s", user_id, course_id, saved.id)
            return ToggleResult(bookmarked=True, id=saved.id)

        logger.warning(
            "Giving up saving course %s for user %s after %d conflicts",
            course_id, user_id, self.conflict_retries + 1,
        )
        return ToggleResult(bookmarked=False)

    async def check_status(self, user_id: int, course_id: int) -> BookmarkStatus:
        existing = await self.store.find_by_key(user_id, course_id)
        if existing is None:
            return BookmarkStatus(is_bookmarked=False)
        return BookmarkStatus(is_bookmarked=True, id=existing.id)

    async def _confirm_owner(self, bookmark_id: int, user_id: Optional[int]) -> None:
        if user_id is None:
            return
        saved = await self.store.find_by_id(bookmark_id)
        # Someone else's bookmark is reported exactly like a missing one.
        if saved is None or saved.user_id != user_id:
            raise NotFoundError(f"saved course {bookmark_id} not found", bookmark_id=bookmark_id)

    async def update_notes(
        self, bookmark_id: int, notes: Optional[str], user_id: Optional[int] = None
    ) -> SavedCourseRecord:
        await self._confirm_owner(bookmark_id, user_id)
        return await self.store.update_notes(bookmark_id, notes)

    async def remove(self, bookmark_id: int, user_id: Optional[int] = None) -> None:
        """
        Delete a bookmark by id. Unlike `toggle` this is not silently idempotent:
        removing an id that is already gone raises NotFoundError.
        """
        await self._confirm_owner(bookmark_id, user_id)
        if not await self.store.delete_by_id(bookmark_id):
            raise NotFoundError(f"saved course {bookmark_id} not found", bookmark_id=bookmark_id)
        logger.info("Removed bookmark %s", bookmark_id)

    async def list_for_user(self, user_id: int, load_courses: CourseLoader) -> List[SavedCourseView]:
        """
        Bookmarks of a user, oldest first, joined with canonical course data.
        `load_courses` receives the bookmarked course ids and returns courses by id.
        """
        saved = await self.store.list_by_user(user_id)
        catalog = await load_courses({record.course_id for record in saved})
        return [
            SavedCourseView(**record.model_dump(), course=catalog.get(record.course_id))
            for record in saved
        ]

    async def annotate(self, user_id: int, courses: Iterable[CanonicalCourse]) -> List[AnnotatedCourse]:
        """Attach bookmark status for `user_id` to each course, keeping order."""
        saved = {record.course_id: record.id for record in await self.store.list_by_user(user_id)}
        return [
            AnnotatedCourse(
                **course.model_dump(),
                is_bookmarked=course.id in saved,
                bookmark_id=saved.get(course.id),
            )
            for course in courses
        ]
