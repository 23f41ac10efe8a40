# coursefinder/modules/search/schemas.py

from datetime import datetime
from typing import List, Optional
from pydantic import Field

from coursefinder.common.schemas import CamelModel
from coursefinder.modules.saved_courses.schemas import AnnotatedCourse

class ALResult(CamelModel):
    subject: str
    grade: str

class UserQualifications(CamelModel):
    al_results: List[ALResult] = []
    other_qualifications: List[str] = []

class SearchRequest(CamelModel):
    query: Optional[str] = Field(None, max_length=200)
    # Accepted for forward compatibility; matching does not use it yet.
    user_qualifications: Optional[UserQualifications] = None

class SearchResponse(CamelModel):
    # Bookmark fields are only filled in for signed-in users.
    courses: List[AnnotatedCourse]
    total: int
    query: Optional[str] = None

class SearchStatus(CamelModel):
    timestamp: datetime
