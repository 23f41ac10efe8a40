# coursefinder/modules/saved_courses/saved_course_store.py

import functools
import logging
from typing import List, Optional, Protocol

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from coursefinder.common.exceptions import AdapterUnavailableError, ConflictError, NotFoundError
from coursefinder.common.utils.global_messages import GlobalMessages
from coursefinder.models.models import Course, SavedCourse
from coursefinder.modules.saved_courses.schemas import SavedCourseRecord

logger = logging.getLogger(__name__)

class SavedCourseStore(Protocol):
    """
    Persistence boundary for bookmarks, addressed by id or by the
    (user_id, course_id) natural key. Implementations enforce uniqueness
    of the natural key.
    """

    async def find_by_key(self, user_id: int, course_id: int) -> Optional[SavedCourseRecord]:
        ...

    async def find_by_id(self, bookmark_id: int) -> Optional[SavedCourseRecord]:
        ...

    async def insert(self, user_id: int, course_id: int, notes: Optional[str] = None) -> SavedCourseRecord:
        """Raises ConflictError when the natural key already exists."""
        ...

    async def update_notes(self, bookmark_id: int, notes: Optional[str]) -> SavedCourseRecord:
        """Raises NotFoundError when no bookmark has this id."""
        ...

    async def delete_by_key(self, user_id: int, course_id: int) -> bool:
        ...

    async def delete_by_id(self, bookmark_id: int) -> bool:
        ...

    async def list_by_user(self, user_id: int) -> List[SavedCourseRecord]:
        """Bookmarks of a user, oldest first."""
        ...

def translate_storage_errors(method):
    """Turn connection-level failures into AdapterUnavailableError after a rollback."""
    @functools.wraps(method)
    async def wrapper(self: "SqlSavedCourseStore", *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except (OperationalError, InterfaceError) as e:
            logger.error("Saved course storage unavailable in %s: %s", method.__name__, e)
            await self.db.rollback()
            raise AdapterUnavailableError("saved course storage unavailable") from e
    return wrapper

class SqlSavedCourseStore:
    """`SavedCourseStore` backed by the saved_courses table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, bookmark_id: int, refresh: bool = False) -> Optional[SavedCourse]:
        stmt = select(SavedCourse).where(SavedCourse.id == bookmark_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def _get_by_key(self, user_id: int, course_id: int) -> Optional[SavedCourse]:
        result = await self.db.execute(
            select(SavedCourse).where(
                SavedCourse.user_id == user_id,
                SavedCourse.course_id == course_id
            )
        )
        return result.scalars().first()

    @translate_storage_errors
    async def find_by_key(self, user_id: int, course_id: int) -> Optional[SavedCourseRecord]:
        saved = await self._get_by_key(user_id, course_id)
        return SavedCourseRecord.model_validate(saved) if saved else None

    @translate_storage_errors
    async def find_by_id(self, bookmark_id: int) -> Optional[SavedCourseRecord]:
        saved = await self._get(bookmark_id)
        return SavedCourseRecord.model_validate(saved) if saved else None

    @translate_storage_errors
    async def insert(self, user_id: int, course_id: int, notes: Optional[str] = None) -> SavedCourseRecord:
        new_saved = SavedCourse(user_id=user_id, course_id=course_id, notes=notes)
        self.db.add(new_saved)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            # Only a missing course is reported as such; a conflicting row that
            # has already been deleted again is still a conflict.
            if await self._get_by_key(user_id, course_id) is None and await self.db.get(Course, course_id) is None:
                raise NotFoundError(
                    f"course {course_id} not found",
                    public_message=GlobalMessages.COURSE_NOT_FOUND,
                    course_id=course_id,
                )
            logger.debug("IntegrityError - saved course (%s, %s) already exists", user_id, course_id)
            raise ConflictError(
                f"saved course ({user_id}, {course_id}) already exists",
                user_id=user_id,
                course_id=course_id,
            )
        await self.db.refresh(new_saved)
        return SavedCourseRecord.model_validate(new_saved)

    @translate_storage_errors
    async def update_notes(self, bookmark_id: int, notes: Optional[str]) -> SavedCourseRecord:
        result = await self.db.execute(
            update(SavedCourse)
            .where(SavedCourse.id == bookmark_id)
            .values(notes=notes)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        saved = await self._get(bookmark_id, refresh=True) if result.rowcount else None
        if saved is None:
            raise NotFoundError(f"saved course {bookmark_id} not found", bookmark_id=bookmark_id)
        return SavedCourseRecord.model_validate(saved)

    @translate_storage_errors
    async def delete_by_key(self, user_id: int, course_id: int) -> bool:
        result = await self.db.execute(
            delete(SavedCourse).where(
                SavedCourse.user_id == user_id,
                SavedCourse.course_id == course_id
            )
        )
        await self.db.commit()
        return result.rowcount > 0

    @translate_storage_errors
    async def delete_by_id(self, bookmark_id: int) -> bool:
        result = await self.db.execute(delete(SavedCourse).where(SavedCourse.id == bookmark_id))
        await self.db.commit()
        return result.rowcount > 0

    @translate_storage_errors
    async def list_by_user(self, user_id: int) -> List[SavedCourseRecord]:
        result = await self.db.execute(
            select(SavedCourse)
            .where(SavedCourse.user_id == user_id)
            .order_by(SavedCourse.created_at.asc(), SavedCourse.id.asc())
        )
        return [SavedCourseRecord.model_validate(saved) for saved in result.scalars().all()]
