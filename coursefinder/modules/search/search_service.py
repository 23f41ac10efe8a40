# coursefinder/modules/search/search_service.py

import logging
from typing import Optional

from coursefinder.common.app_state import AppState
from coursefinder.modules.courses import course_service
from coursefinder.modules.courses.catalog_source import CatalogSource
from coursefinder.modules.saved_courses.saved_course_manager import SavedCourseManager
from coursefinder.modules.saved_courses.schemas import AnnotatedCourse
from coursefinder.modules.search.schemas import SearchResponse
from coursefinder.modules.search.search_matcher import search

logger = logging.getLogger(__name__)

async def search_courses(
    query: Optional[str],
    source: CatalogSource,
    state: AppState,
    manager: Optional[SavedCourseManager] = None,
    user_id: Optional[int] = None,
) -> SearchResponse:
    """
    Search the normalized catalog.

    The catalog is re-read from `source` on every call. When a user is known the
    matches are annotated with that user's bookmark status.
    """
    catalog = await course_service.get_catalog(source, state)
    matches = search(catalog, query or "")

    if user_id is not None and manager is not None:
        courses = await manager.annotate(user_id, matches)
    else:
        courses = [AnnotatedCourse(**course.model_dump()) for course in matches]

    logger.info("Returning %d of %d courses for query %r", len(courses), len(catalog), query)
    return SearchResponse(courses=courses, total=len(courses), query=query)
