# coursefinder/modules/universities/schemas.py

from typing import List, Optional

from coursefinder.common.schemas import CamelModel
from coursefinder.models.models import UniversityType

class UniversityResponse(CamelModel):
    id: int
    name: str
    type: UniversityType
    website: Optional[str] = None
    address: Optional[str] = None

class UniversityListResponse(CamelModel):
    universities: List[UniversityResponse]
    total: int
