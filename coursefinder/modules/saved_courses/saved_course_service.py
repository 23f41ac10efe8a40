# coursefinder/modules/saved_courses/saved_course_service.py

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coursefinder.common.app_state import AppState, get_app_state
from coursefinder.common.database.database import get_db_session
from coursefinder.modules.courses import course_service
from coursefinder.modules.courses.catalog_source import CatalogSource
from coursefinder.modules.saved_courses.saved_course_manager import SavedCourseManager
from coursefinder.modules.saved_courses.saved_course_store import SqlSavedCourseStore
from coursefinder.modules.saved_courses.schemas import SavedCourseListResponse

def get_saved_course_manager(
    state: AppState = Depends(get_app_state),
    db: AsyncSession = Depends(get_db_session),
) -> SavedCourseManager:
    return SavedCourseManager(SqlSavedCourseStore(db), conflict_retries=state.bookmark_conflict_retries)

async def list_saved_courses(
    user_id: int,
    manager: SavedCourseManager,
    source: CatalogSource,
    state: AppState,
) -> SavedCourseListResponse:
    """
    Saved courses of a user, oldest first, each joined with its canonical course.
    """
    async def load_courses(course_ids):
        return await course_service.get_catalog_index(source, state, course_ids)

    views = await manager.list_for_user(user_id, load_courses)
    return SavedCourseListResponse(saved_courses=views, count=len(views))
