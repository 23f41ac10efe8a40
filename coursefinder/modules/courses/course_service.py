# coursefinder/modules/courses/course_service.py

from typing import Dict, List

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coursefinder.common.app_state import AppState, get_app_state
from coursefinder.common.database.database import get_db_session
from coursefinder.common.exceptions import NotFoundError
from coursefinder.common.utils.global_messages import GlobalMessages
from coursefinder.modules.courses.catalog_source import (
    CatalogSource,
    DatabaseCatalogSource,
    SnapshotCatalogSource,
)
from coursefinder.modules.courses.course_normalizer import normalize_catalog
from coursefinder.modules.courses.schemas import CanonicalCourse

def get_catalog_source(
    state: AppState = Depends(get_app_state),
    db: AsyncSession = Depends(get_db_session),
) -> CatalogSource:
    """
    Dependency resolving the catalog source for a request.
    A configured snapshot wins; otherwise the database is re-read per call.
    """
    if state.catalog_snapshot is not None:
        return SnapshotCatalogSource(state.catalog_snapshot)
    return DatabaseCatalogSource(db)

async def get_catalog(source: CatalogSource, state: AppState) -> List[CanonicalCourse]:
    """Fetch and normalize the full catalog, preserving source order."""
    records = await source.fetch()
    return normalize_catalog(records, state.normalization_options, strict=state.catalog_strict)

async def get_catalog_index(source: CatalogSource, state: AppState, course_ids) -> Dict[int, CanonicalCourse]:
    """Normalized courses for the given ids, keyed by id."""
    records = await source.fetch(course_ids)
    courses = normalize_catalog(records, state.normalization_options, strict=state.catalog_strict)
    return {course.id: course for course in courses}

async def get_course_by_id(course_id: int, source: CatalogSource, state: AppState) -> CanonicalCourse:
    index = await get_catalog_index(source, state, [course_id])
    course = index.get(course_id)
    if course is None:
        raise NotFoundError(
            f"course {course_id} not found",
            public_message=GlobalMessages.COURSE_NOT_FOUND,
            course_id=course_id,
        )
    return course
