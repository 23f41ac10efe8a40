# coursefinder/modules/universities/university_controller.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from coursefinder.common.database.database import get_db_session
from coursefinder.common.schemas import ApiResponse
from coursefinder.common.utils.global_functions import resPayloadData
from coursefinder.common.utils.global_messages import GlobalMessages
from coursefinder.models.models import UniversityType
from coursefinder.modules.universities import schemas, university_service

router = APIRouter(prefix="/universities", tags=["universities"])

# GET /universities - Retrieve all universities
@router.get("", response_model=ApiResponse[schemas.UniversityListResponse], response_model_exclude_none=True)
async def get_universities(
    university_type: Optional[UniversityType] = Query(None, alias="type", description="Filter by university type"),
    db: AsyncSession = Depends(get_db_session),
):
    universities = await university_service.get_all_universities(db, university_type)
    data = schemas.UniversityListResponse(
        universities=[schemas.UniversityResponse.model_validate(university) for university in universities],
        total=len(universities),
    )
    return resPayloadData(True, message=GlobalMessages.UNIVERSITIES_RETRIEVED, data=data)

# GET /universities/{university_id} - Retrieve university details by ID
@router.get("/{university_id}", response_model=ApiResponse[schemas.UniversityResponse], response_model_exclude_none=True)
async def get_university(university_id: int, db: AsyncSession = Depends(get_db_session)):
    university = await university_service.get_university_by_id(university_id, db)
    return resPayloadData(
        True,
        message=GlobalMessages.UNIVERSITY_DETAILS_RETRIEVED,
        data=schemas.UniversityResponse.model_validate(university),
    )
