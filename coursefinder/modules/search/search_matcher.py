# coursefinder/modules/search/search_matcher.py

from typing import Iterator, List, Sequence

from coursefinder.modules.courses.schemas import CanonicalCourse

def searchable_fields(course: CanonicalCourse) -> Iterator[str]:
    """
    Yield every text field a query is matched against: name, description,
    university name, faculty name and each specialisation.

    Exposed so callers can build an inverted index in front of `search`.
    """
    yield course.name
    yield course.description
    yield course.university.name
    if course.faculty is not None:
        yield course.faculty.name
    yield from course.specialisations

def matches(course: CanonicalCourse, needle: str) -> bool:
    """`needle` must already be case-folded."""
    return any(needle in field.casefold() for field in searchable_fields(course))

def search(catalog: Sequence[CanonicalCourse], query: str) -> List[CanonicalCourse]:
    """
    Case-insensitive substring search over the catalog.

    A blank query returns every course. Results keep catalog order; a course
    matches when any searchable field contains the query. Always returns a new list.
    """
    if not query or not query.strip():
        return list(catalog)
    # Inner whitespace is significant: "data science" is matched as one phrase.
    needle = query.casefold()
    return [course for course in catalog if matches(course, needle)]
