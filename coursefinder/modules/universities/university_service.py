# coursefinder/modules/universities/university_service.py

import logging
from typing import List, Optional

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from coursefinder.common.exceptions import AdapterUnavailableError, NotFoundError
from coursefinder.common.utils.global_messages import GlobalMessages
from coursefinder.models.models import University, UniversityType

logger = logging.getLogger(__name__)

async def _run(db: AsyncSession, stmt):
    try:
        return await db.execute(stmt)
    except (OperationalError, InterfaceError) as e:
        logger.error("University query failed: %s", e)
        raise AdapterUnavailableError("university storage unavailable") from e

# Retrieve all universities
async def get_all_universities(db: AsyncSession, university_type: Optional[UniversityType] = None) -> List[University]:
    """
    Retrieve universities ordered by id.

    Args:
        db (AsyncSession): The database session.
        university_type (Optional[UniversityType]): Only return universities of this type.

    Returns:
        List[University]: The matching universities.
    """
    stmt = select(University).order_by(University.id)
    if university_type is not None:
        stmt = stmt.where(University.type == university_type)
    result = await _run(db, stmt)
    return list(result.scalars().all())

# Retrieve a single university by ID
async def get_university_by_id(university_id: int, db: AsyncSession) -> University:
    result = await _run(db, select(University).where(University.id == university_id))
    university = result.scalars().first()
    if university is None:
        raise NotFoundError(
            f"university {university_id} not found",
            public_message=GlobalMessages.UNIVERSITY_NOT_FOUND,
            university_id=university_id,
        )
    return university
