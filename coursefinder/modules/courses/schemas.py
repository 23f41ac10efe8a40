# coursefinder/modules/courses/schemas.py

from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict

from coursefinder.common.schemas import CamelModel
from coursefinder.models.models import UniversityType

class UniversityInfo(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    type: UniversityType

class FacultyInfo(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str

class CanonicalCourse(CamelModel):
    """
    The single reconciled course shape used after normalization.

    Produced only by the course normalizer; search, bookmarks and the API all
    consume this model and never the raw catalog records.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str
    university: UniversityInfo
    faculty: Optional[FacultyInfo] = None
    specialisations: Tuple[str, ...] = ()
    course_code: Optional[str] = None
    course_url: Optional[str] = None
    duration_months: Optional[int] = None
    study_mode: Optional[str] = None
    course_type: Optional[str] = None
    fee_type: Optional[str] = None
    fee_amount: Optional[float] = None

class NormalizationOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    default_university_type: UniversityType = UniversityType.GOVERNMENT
    # When False a bare-string university is rejected instead of guessed.
    allow_placeholder_university: bool = False

class CourseListResponse(CamelModel):
    courses: List[CanonicalCourse]
    total: int
