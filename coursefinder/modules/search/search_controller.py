# coursefinder/modules/search/search_controller.py

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from coursefinder.auth.dependencies import get_optional_user_id
from coursefinder.common.app_state import AppState, get_app_state
from coursefinder.common.schemas import ApiResponse
from coursefinder.common.utils.global_functions import resPayloadData
from coursefinder.common.utils.global_messages import GlobalMessages
from coursefinder.modules.courses import course_service
from coursefinder.modules.courses.catalog_source import CatalogSource
from coursefinder.modules.saved_courses.saved_course_manager import SavedCourseManager
from coursefinder.modules.saved_courses.saved_course_service import get_saved_course_manager
from coursefinder.modules.search import search_service, schemas

router = APIRouter(prefix="/search", tags=["search"])

@router.get("/courses", response_model=ApiResponse[schemas.SearchResponse], response_model_exclude_none=True)
async def search_courses(
    q: Optional[str] = Query(None, max_length=200, description="Search query"),
    user_id: Optional[int] = Depends(get_optional_user_id),
    source: CatalogSource = Depends(course_service.get_catalog_source),
    manager: SavedCourseManager = Depends(get_saved_course_manager),
    state: AppState = Depends(get_app_state),
):
    """
    Course search endpoint.

    Performs a case-insensitive substring search over course name, description,
    university, faculty and specialisations. An empty query returns the whole
    catalog. With a bearer token each result also carries its bookmark status.
    """
    results = await search_service.search_courses(q, source, state, manager, user_id)
    return resPayloadData(True, message=GlobalMessages.SEARCH_COMPLETED, data=results)

@router.post("/courses", response_model=ApiResponse[schemas.SearchResponse], response_model_exclude_none=True)
async def search_courses_with_qualifications(
    search_request: schemas.SearchRequest,
    user_id: Optional[int] = Depends(get_optional_user_id),
    source: CatalogSource = Depends(course_service.get_catalog_source),
    manager: SavedCourseManager = Depends(get_saved_course_manager),
    state: AppState = Depends(get_app_state),
):
    results = await search_service.search_courses(search_request.query, source, state, manager, user_id)
    return resPayloadData(True, message=GlobalMessages.SEARCH_COMPLETED, data=results)

@router.get("/test", response_model=ApiResponse[schemas.SearchStatus])
async def search_test():
    return resPayloadData(
        True,
        message=GlobalMessages.SEARCH_API_WORKING,
        data=schemas.SearchStatus(timestamp=datetime.now(timezone.utc)),
    )
