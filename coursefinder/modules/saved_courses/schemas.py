# coursefinder/modules/saved_courses/schemas.py

from datetime import datetime
from typing import List, Optional
from pydantic import Field

from coursefinder.common.schemas import CamelModel
from coursefinder.modules.courses.schemas import CanonicalCourse

class SavedCourseRecord(CamelModel):
    id: int
    user_id: int
    course_id: int
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

class SavedCourseView(SavedCourseRecord):
    # None when the course has since left the catalog
    course: Optional[CanonicalCourse] = None

class SavedCourseListResponse(CamelModel):
    saved_courses: List[SavedCourseView]
    count: int

class ToggleRequest(CamelModel):
    course_id: int

class ToggleResult(CamelModel):
    bookmarked: bool
    id: Optional[int] = None

class BookmarkStatus(CamelModel):
    is_bookmarked: bool
    id: Optional[int] = None

class NotesUpdateRequest(CamelModel):
    notes: Optional[str] = Field(None, max_length=5000)

class AnnotatedCourse(CanonicalCourse):
    is_bookmarked: Optional[bool] = None
    bookmark_id: Optional[int] = None
