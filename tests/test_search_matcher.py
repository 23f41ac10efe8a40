"""
Unit tests for the substring search matcher.

Contract:
- blank query -> whole catalog, same order, new list
- case-insensitive substring over name, description, university, faculty, specialisations
- results keep catalog order; inputs are never mutated
"""

import pytest

from coursefinder.modules.courses.course_normalizer import normalize_catalog
from coursefinder.modules.search.search_matcher import matches, search, searchable_fields

TWO_COURSES = [
    {
        "id": 1,
        "name": "Computer Science",
        "description": "Programming, algorithms and software development",
        "university": {"id": 1, "name": "University of Colombo", "type": "government"},
        "faculty": {"id": 1, "name": "Faculty of Science"},
        "specialisation": ["Software Development", "Data Science"],
    },
    {
        "id": 2,
        "name": "Business Administration",
        "description": "Modern business practices",
        "university": {"id": 2, "name": "University of Peradeniya", "type": "government"},
        "faculty": {"id": 2, "name": "Faculty of Management"},
        "specialisation": ["Management", "Marketing", "Finance"],
    },
]

@pytest.fixture
def catalog(sample_records):
    return normalize_catalog(sample_records)

@pytest.fixture
def two_courses():
    return normalize_catalog(TWO_COURSES)

def ids(courses):
    return [course.id for course in courses]

def test_business_matches_only_business_administration(two_courses):
    assert ids(search(two_courses, "business")) == [2]

def test_unmatched_query_returns_nothing(two_courses):
    assert search(two_courses, "engineering") == []

@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_blank_query_returns_whole_catalog_in_order(catalog, query):
    result = search(catalog, query)

    assert result == catalog
    assert result is not catalog

def test_match_is_case_insensitive(catalog):
    assert ids(search(catalog, "MEDICINE")) == [4]

@pytest.mark.parametrize("query, expected", [
    ("peradeniya", [2]),          # university name
    ("faculty of science", [1]),  # faculty name
    ("telecommunications", [3]),  # specialisation
    ("surgery", [4]),             # description
    ("university of colombo", [1, 4]),
])
def test_every_searchable_field_is_matched(catalog, query, expected):
    assert ids(search(catalog, query)) == expected

def test_results_keep_catalog_order(catalog):
    reversed_catalog = list(reversed(catalog))
    assert ids(search(reversed_catalog, "bachelor")) == [4, 3, 2]

@pytest.mark.parametrize("query", ["science", "an", "Faculty", "x", "engineering"])
def test_results_partition_the_catalog(catalog, query):
    result = search(catalog, query)
    needle = query.casefold()

    for course in result:
        assert any(needle in field.casefold() for field in searchable_fields(course))
    for course in catalog:
        if course not in result:
            assert not matches(course, needle)

def test_search_does_not_mutate_catalog(catalog):
    before = list(catalog)
    search(catalog, "science")
    assert catalog == before

def test_search_is_deterministic(catalog):
    assert search(catalog, "of") == search(catalog, "of")
