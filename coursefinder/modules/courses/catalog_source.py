# coursefinder/modules/courses/catalog_source.py

import json
import logging
from pathlib import Path
from typing import Any, Collection, Dict, List, Optional, Protocol, Sequence

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from coursefinder.common.exceptions import AdapterUnavailableError
from coursefinder.models.models import Course
from coursefinder.modules.courses.course_normalizer import RawCourseRecord

logger = logging.getLogger(__name__)

class CatalogSource(Protocol):
    """Pull-based supplier of raw course records."""

    async def fetch(self, course_ids: Optional[Collection[int]] = None) -> List[RawCourseRecord]:
        ...

def course_to_record(course: Course) -> Dict[str, Any]:
    """Render an ORM course in the API record shape."""
    return {
        "id": course.id,
        "name": course.name,
        "description": course.description,
        "specialisation": list(course.specialisations or []),
        "courseCode": course.course_code,
        "courseUrl": course.course_url,
        "durationMonths": course.duration_months,
        "studyMode": course.study_mode,
        "courseType": course.course_type,
        "feeType": course.fee_type,
        "feeAmount": course.fee_amount,
        "university": {
            "id": course.university.id,
            "name": course.university.name,
            "type": course.university.type.value,
        },
        "faculty": (
            {"id": course.faculty.id, "name": course.faculty.name}
            if course.faculty is not None else None
        ),
    }

class DatabaseCatalogSource:
    """Reads the catalog from the database on every call."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def fetch(self, course_ids: Optional[Collection[int]] = None) -> List[RawCourseRecord]:
        stmt = (
            select(Course)
            .options(selectinload(Course.university), selectinload(Course.faculty))
            .order_by(Course.id)
        )
        if course_ids is not None:
            if not course_ids:
                return []
            stmt = stmt.where(Course.id.in_(list(course_ids)))
        try:
            result = await self.db.execute(stmt)
        except (OperationalError, InterfaceError) as e:
            logger.error("Catalog query failed: %s", e)
            raise AdapterUnavailableError("catalog storage unavailable") from e
        return [course_to_record(course) for course in result.scalars().all()]

class SnapshotCatalogSource:
    """Serves a caller-provided snapshot instead of re-fetching."""

    def __init__(self, records: Sequence[RawCourseRecord]):
        self.records = list(records)

    async def fetch(self, course_ids: Optional[Collection[int]] = None) -> List[RawCourseRecord]:
        if course_ids is None:
            return list(self.records)
        wanted = set(course_ids)
        return [record for record in self.records if _record_id(record) in wanted]

def _record_id(record: RawCourseRecord) -> Any:
    if isinstance(record, dict):
        return record.get("id")
    return getattr(record, "id", None)

def load_snapshot(path: str) -> List[Dict[str, Any]]:
    """Load a JSON array of raw course records from disk."""
    with Path(path).open(encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError(f"Catalog snapshot {path} must contain a JSON array")
    logger.info("Loaded %d course records from snapshot %s", len(records), path)
    return records
