import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from coursefinder.common.database.database import async_session
from coursefinder.models.models import Course, Faculty, University
from coursefinder.modules.courses.catalog_source import load_snapshot
from coursefinder.modules.courses.course_normalizer import RawCourseRecord, UNKNOWN_ID, normalize
from coursefinder.modules.courses.schemas import NormalizationOptions

logger = logging.getLogger(__name__)

SAMPLE_CATALOG = Path(__file__).with_name("sample_catalog.json")

def _university_details(raw: RawCourseRecord) -> Mapping[str, Any]:
    # Contact fields are not part of the canonical course, so they are read from the raw record
    university = raw.get("university") if isinstance(raw, Mapping) else None
    return university if isinstance(university, Mapping) else {}

async def seed_courses(
    session: AsyncSession,
    records: Iterable[RawCourseRecord],
    options: Optional[NormalizationOptions] = None,
) -> int:
    """
    Insert catalog records (any accepted shape) together with their universities
    and faculties. Records are normalized first, so ids from the records are kept.
    Returns the number of courses added.
    """
    options = options or NormalizationOptions()
    universities: Dict[int, University] = {}
    faculties: Dict[Tuple[int, str], Faculty] = {}
    added = 0

    for raw in records:
        course = normalize(raw, options)
        if course.university.id == UNKNOWN_ID:
            logger.warning("Skipping course %s: university %r has no id", course.id, course.university.name)
            continue
        if await session.get(Course, course.id) is not None:
            logger.debug("Course %s already seeded", course.id)
            continue

        university = universities.get(course.university.id) or await session.get(University, course.university.id)
        if university is None:
            details = _university_details(raw)
            university = University(
                id=course.university.id,
                name=course.university.name,
                type=course.university.type,
                website=details.get("website"),
                address=details.get("address"),
            )
            session.add(university)
        universities[university.id] = university

        faculty = None
        if course.faculty is not None:
            key = (university.id, course.faculty.name)
            faculty = faculties.get(key)
            if faculty is None and course.faculty.id != UNKNOWN_ID:
                faculty = await session.get(Faculty, course.faculty.id)
            if faculty is None:
                faculty = Faculty(name=course.faculty.name, university_id=university.id)
                if course.faculty.id != UNKNOWN_ID:
                    faculty.id = course.faculty.id
                session.add(faculty)
                # Placeholder faculties get their id from the database
                await session.flush()
            faculties[key] = faculty

        session.add(Course(
            id=course.id,
            name=course.name,
            description=course.description,
            university_id=university.id,
            faculty_id=faculty.id if faculty is not None else None,
            specialisations=list(course.specialisations),
            course_code=course.course_code,
            course_url=course.course_url,
            duration_months=course.duration_months,
            study_mode=course.study_mode,
            course_type=course.course_type,
            fee_type=course.fee_type,
            fee_amount=course.fee_amount,
        ))
        added += 1

    await session.flush()
    return added

async def seed_all():
    """
    Run all seed functions. You can add additional seed functions here.
    """
    async with async_session() as session:
        # Using a transaction block to ensure all seeding operations succeed.
        async with session.begin():
            added = await seed_courses(session, load_snapshot(str(SAMPLE_CATALOG)))
    logger.info("Seeded %d courses", added)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed_all())
