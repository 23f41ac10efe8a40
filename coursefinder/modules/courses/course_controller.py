# coursefinder/modules/courses/course_controller.py

from fastapi import APIRouter, Depends

from coursefinder.common.app_state import AppState, get_app_state
from coursefinder.common.schemas import ApiResponse
from coursefinder.common.utils.global_functions import resPayloadData
from coursefinder.common.utils.global_messages import GlobalMessages
from coursefinder.modules.courses import course_service, schemas
from coursefinder.modules.courses.catalog_source import CatalogSource

router = APIRouter(prefix="/courses", tags=["courses"])

# GET /courses - Retrieve the full normalized catalog
@router.get("", response_model=ApiResponse[schemas.CourseListResponse], response_model_exclude_none=True)
async def get_courses(
    source: CatalogSource = Depends(course_service.get_catalog_source),
    state: AppState = Depends(get_app_state),
):
    courses = await course_service.get_catalog(source, state)
    return resPayloadData(
        True,
        message=GlobalMessages.COURSES_RETRIEVED,
        data=schemas.CourseListResponse(courses=courses, total=len(courses)),
    )

# GET /courses/{course_id} - Retrieve course details by ID
@router.get("/{course_id}", response_model=ApiResponse[schemas.CanonicalCourse], response_model_exclude_none=True)
async def get_course(
    course_id: int,
    source: CatalogSource = Depends(course_service.get_catalog_source),
    state: AppState = Depends(get_app_state),
):
    course = await course_service.get_course_by_id(course_id, source, state)
    return resPayloadData(True, message=GlobalMessages.COURSE_DETAILS_RETRIEVED, data=course)
