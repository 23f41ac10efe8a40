# coursefinder/modules/saved_courses/saved_course_controller.py

from fastapi import APIRouter, Depends

from coursefinder.auth.dependencies import get_current_user_id
from coursefinder.common.app_state import AppState, get_app_state
from coursefinder.common.schemas import ApiResponse
from coursefinder.common.utils.global_functions import resPayloadData
from coursefinder.common.utils.global_messages import GlobalMessages
from coursefinder.modules.courses import course_service
from coursefinder.modules.courses.catalog_source import CatalogSource
from coursefinder.modules.saved_courses import saved_course_service, schemas
from coursefinder.modules.saved_courses.saved_course_manager import SavedCourseManager

router = APIRouter(prefix="/saved-courses", tags=["saved courses"])

# GET /saved-courses - Saved courses of the current user, oldest first
@router.get("", response_model=ApiResponse[schemas.SavedCourseListResponse], response_model_exclude_none=True)
async def get_saved_courses(
    user_id: int = Depends(get_current_user_id),
    manager: SavedCourseManager = Depends(saved_course_service.get_saved_course_manager),
    source: CatalogSource = Depends(course_service.get_catalog_source),
    state: AppState = Depends(get_app_state),
):
    saved = await saved_course_service.list_saved_courses(user_id, manager, source, state)
    return resPayloadData(True, message=GlobalMessages.SAVED_COURSES_RETRIEVED, data=saved)

# POST /saved-courses/toggle - Save the course if absent, unsave it if present
@router.post("/toggle", response_model=ApiResponse[schemas.ToggleResult], response_model_exclude_none=True)
async def toggle_bookmark(
    toggle_request: schemas.ToggleRequest,
    user_id: int = Depends(get_current_user_id),
    manager: SavedCourseManager = Depends(saved_course_service.get_saved_course_manager),
):
    """
    Toggle the bookmark for the given course.

    Repeating the call alternates between saved and unsaved. A save that races
    with another save of the same course reports the surviving bookmark.
    """
    result = await manager.toggle(user_id, toggle_request.course_id)
    message = GlobalMessages.BOOKMARK_ADDED if result.bookmarked else GlobalMessages.BOOKMARK_REMOVED
    return resPayloadData(True, message=message, data=result)

# GET /saved-courses/check/{course_id} - Is this course saved by the current user
@router.get("/check/{course_id}", response_model=ApiResponse[schemas.BookmarkStatus], response_model_exclude_none=True)
async def check_bookmark(
    course_id: int,
    user_id: int = Depends(get_current_user_id),
    manager: SavedCourseManager = Depends(saved_course_service.get_saved_course_manager),
):
    status = await manager.check_status(user_id, course_id)
    return resPayloadData(True, message=GlobalMessages.BOOKMARK_STATUS_RETRIEVED, data=status)

# PUT /saved-courses/{bookmark_id}/notes - Replace the notes of a saved course
@router.put("/{bookmark_id}/notes", response_model=ApiResponse[schemas.SavedCourseRecord], response_model_exclude_none=True)
async def update_bookmark_notes(
    bookmark_id: int,
    notes_request: schemas.NotesUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    manager: SavedCourseManager = Depends(saved_course_service.get_saved_course_manager),
):
    saved = await manager.update_notes(bookmark_id, notes_request.notes, user_id=user_id)
    return resPayloadData(True, message=GlobalMessages.NOTES_UPDATED, data=saved)

# DELETE /saved-courses/{bookmark_id} - Remove a saved course by id
@router.delete("/{bookmark_id}", response_model=ApiResponse[None], response_model_exclude_none=True)
async def remove_bookmark(
    bookmark_id: int,
    user_id: int = Depends(get_current_user_id),
    manager: SavedCourseManager = Depends(saved_course_service.get_saved_course_manager),
):
    await manager.remove(bookmark_id, user_id=user_id)
    return resPayloadData(True, message=GlobalMessages.BOOKMARK_REMOVED)
