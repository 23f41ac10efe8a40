# coursefinder/modules/courses/course_normalizer.py

"""
Reconciles catalog records into `CanonicalCourse`.

Two record shapes reach the catalog:

- the API shape: ``university`` is ``{id, name, type}``, ``faculty`` is
  ``{id, name}``, duration is ``durationMonths`` and the URL is ``courseUrl``;
- the UI shape: ``university`` is a bare name or ``{id, name}``, ``faculty`` is
  a name, duration is a human string such as ``"4 years"`` and the URL may be
  ``url``.

Keys are accepted in camelCase or snake_case so a dumped canonical course
normalizes back to an equal course. Nothing past this module sees either raw
shape.
"""

import logging
import re
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Union
from urllib.parse import urlparse

from coursefinder.common.exceptions import NormalizationError
from coursefinder.models.models import UniversityType
from coursefinder.modules.courses.schemas import (
    CanonicalCourse,
    FacultyInfo,
    NormalizationOptions,
    UniversityInfo,
)

logger = logging.getLogger(__name__)

RawCourseRecord = Union[Mapping[str, Any], CanonicalCourse]

UNKNOWN_ID = -1
FREE_FEE_TYPES = frozenset({"free"})

MISSING_REQUIRED_FIELD = "missing-required-field"
INVALID_FIELD = "invalid-field"
AMBIGUOUS_UNIVERSITY = "ambiguous-university"

_YEARS_PATTERN = re.compile(r"^\s*(\d+)\s*years?\s*$", re.IGNORECASE)
_INTEGER_PATTERN = re.compile(r"^\s*-?\d+\s*$")

DEFAULT_OPTIONS = NormalizationOptions()

def _pick(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None

def _warn(sink: Optional[List[str]], record_id: Any, message: str) -> None:
    logger.warning("Course %s: %s", record_id, message)
    if sink is not None:
        sink.append(f"course {record_id}: {message}")

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())

def _coerce_int(value: Any, field: str, record_id: Any) -> int:
    if isinstance(value, bool):
        raise NormalizationError(INVALID_FIELD, field, record_id)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_PATTERN.match(value):
        return int(value.strip())
    raise NormalizationError(INVALID_FIELD, field, record_id)

def _require_text(value: Any, field: str, record_id: Any) -> str:
    if _is_blank(value):
        raise NormalizationError(MISSING_REQUIRED_FIELD, field, record_id)
    if not isinstance(value, str):
        raise NormalizationError(INVALID_FIELD, field, record_id)
    return value.strip()

def _optional_text(value: Any, lower: bool = False) -> Optional[str]:
    if _is_blank(value) or not isinstance(value, str):
        return None
    text = value.strip()
    return text.lower() if lower else text

def _university_type(value: Any, record_id: Any) -> UniversityType:
    if isinstance(value, UniversityType):
        return value
    if isinstance(value, str):
        try:
            return UniversityType(value.strip().lower().replace("-", "_"))
        except ValueError:
            pass
    raise NormalizationError(INVALID_FIELD, "university.type", record_id)

def _normalize_university(value: Any, options: NormalizationOptions, record_id: Any) -> UniversityInfo:
    if isinstance(value, UniversityInfo):
        return value
    if _is_blank(value):
        raise NormalizationError(MISSING_REQUIRED_FIELD, "university", record_id)

    if isinstance(value, str):
        if not options.allow_placeholder_university:
            raise NormalizationError(AMBIGUOUS_UNIVERSITY, "university", record_id)
        return UniversityInfo(
            id=UNKNOWN_ID,
            name=value.strip(),
            type=options.default_university_type,
        )

    if isinstance(value, Mapping):
        if value.get("id") is None:
            raise NormalizationError(MISSING_REQUIRED_FIELD, "university.id", record_id)
        university_id = _coerce_int(value.get("id"), "university.id", record_id)
        name = _require_text(value.get("name"), "university.name", record_id)
        raw_type = value.get("type")
        if _is_blank(raw_type):
            university_type = options.default_university_type
        else:
            university_type = _university_type(raw_type, record_id)
        return UniversityInfo(id=university_id, name=name, type=university_type)

    raise NormalizationError(INVALID_FIELD, "university", record_id)

def _normalize_faculty(value: Any, record_id: Any) -> Optional[FacultyInfo]:
    if isinstance(value, FacultyInfo):
        return value
    if _is_blank(value):
        return None
    if isinstance(value, str):
        return FacultyInfo(id=UNKNOWN_ID, name=value.strip())
    if isinstance(value, Mapping):
        name = _require_text(value.get("name"), "faculty.name", record_id)
        raw_id = value.get("id")
        faculty_id = UNKNOWN_ID if raw_id is None else _coerce_int(raw_id, "faculty.id", record_id)
        return FacultyInfo(id=faculty_id, name=name)
    raise NormalizationError(INVALID_FIELD, "faculty", record_id)

def parse_duration_months(duration: str) -> Optional[int]:
    """Parse "<N> year(s)" into N * 12 months; anything else is None."""
    match = _YEARS_PATTERN.match(duration)
    if not match:
        return None
    return int(match.group(1)) * 12

def _normalize_duration(raw: Mapping[str, Any], record_id: Any, sink: Optional[List[str]]) -> Optional[int]:
    months = _pick(raw, "durationMonths", "duration_months")
    if months is not None:
        if isinstance(months, int) and not isinstance(months, bool) and months >= 0:
            return months
        _warn(sink, record_id, f"ignoring invalid durationMonths {months!r}")

    duration = raw.get("duration")
    if _is_blank(duration):
        return None
    if isinstance(duration, str):
        parsed = parse_duration_months(duration)
        if parsed is not None:
            return parsed
    _warn(sink, record_id, f"unrecognised duration {duration!r}")
    return None

def _normalize_specialisations(raw: Mapping[str, Any], record_id: Any, sink: Optional[List[str]]) -> tuple:
    value = _pick(raw, "specialisations", "specialisation")
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        _warn(sink, record_id, f"ignoring specialisations of type {type(value).__name__}")
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())

def _normalize_url(raw: Mapping[str, Any], record_id: Any, sink: Optional[List[str]]) -> Optional[str]:
    value = _optional_text(_pick(raw, "courseUrl", "course_url", "url"))
    if value is None:
        return None
    parsed = urlparse(value)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return value
    _warn(sink, record_id, f"dropping non-absolute course URL {value!r}")
    return None

def _normalize_fee(
    raw: Mapping[str, Any], fee_type: Optional[str], record_id: Any, sink: Optional[List[str]]
) -> Optional[float]:
    if fee_type is None or fee_type in FREE_FEE_TYPES:
        return None
    amount = _pick(raw, "feeAmount", "fee_amount")
    if amount is None:
        return None
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        _warn(sink, record_id, f"ignoring non-numeric feeAmount {amount!r}")
        return None
    if amount < 0:
        _warn(sink, record_id, f"ignoring negative feeAmount {amount!r}")
        return None
    return float(amount)

def normalize(
    raw: RawCourseRecord,
    options: NormalizationOptions = DEFAULT_OPTIONS,
    warnings: Optional[List[str]] = None,
) -> CanonicalCourse:
    """
    Normalize one catalog record into a `CanonicalCourse`.

    Args:
        raw: A record in the API or UI shape, or an already canonical course
            (returned unchanged).
        options: Policy for records whose university carries no type or no identity.
        warnings: Optional list that receives soft warnings (unparsable duration,
            dropped optional fields). Soft warnings are also logged.

    Raises:
        NormalizationError: `missing-required-field` when id, name, description or
            university is absent or empty; `ambiguous-university` for a bare-string
            university without placeholder synthesis; `invalid-field` for values
            of the wrong type.
    """
    if isinstance(raw, CanonicalCourse):
        return raw
    if not isinstance(raw, Mapping):
        raise NormalizationError(INVALID_FIELD, "record")

    if _is_blank(raw.get("id")):
        raise NormalizationError(MISSING_REQUIRED_FIELD, "id")
    record_id = _coerce_int(raw.get("id"), "id", raw.get("id"))

    name = _require_text(raw.get("name"), "name", record_id)
    description = _require_text(raw.get("description"), "description", record_id)
    university = _normalize_university(raw.get("university"), options, record_id)
    faculty = _normalize_faculty(raw.get("faculty"), record_id)

    fee_type = _optional_text(_pick(raw, "feeType", "fee_type"), lower=True)

    return CanonicalCourse(
        id=record_id,
        name=name,
        description=description,
        university=university,
        faculty=faculty,
        specialisations=_normalize_specialisations(raw, record_id, warnings),
        course_code=_optional_text(_pick(raw, "courseCode", "course_code")),
        course_url=_normalize_url(raw, record_id, warnings),
        duration_months=_normalize_duration(raw, record_id, warnings),
        study_mode=_optional_text(_pick(raw, "studyMode", "study_mode"), lower=True),
        course_type=_optional_text(_pick(raw, "courseType", "course_type"), lower=True),
        fee_type=fee_type,
        fee_amount=_normalize_fee(raw, fee_type, record_id, warnings),
    )

def normalize_catalog(
    records: Iterable[RawCourseRecord],
    options: NormalizationOptions = DEFAULT_OPTIONS,
    strict: bool = True,
    warnings: Optional[List[str]] = None,
) -> List[CanonicalCourse]:
    """
    Normalize a whole catalog, preserving order.

    In strict mode the first `NormalizationError` propagates; otherwise the
    offending record is skipped and logged.
    """
    courses: List[CanonicalCourse] = []
    for raw in records:
        try:
            courses.append(normalize(raw, options, warnings))
        except NormalizationError as e:
            if strict:
                raise
            logger.warning("Skipping catalog record %s: %s", e.record_id, e.message)
    return courses
