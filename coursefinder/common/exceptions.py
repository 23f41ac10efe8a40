# coursefinder/common/exceptions.py

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from coursefinder.common.utils.global_functions import failure_body
from coursefinder.common.utils.global_messages import GlobalMessages

logger = logging.getLogger(__name__)

class CourseFinderError(Exception):
    """
    Root of the domain error taxonomy.

    Every error carries a `kind` (stable, machine readable), a human readable
    message and a `context` dict with the identifiers involved.
    """
    kind = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = GlobalMessages.SERVICE_UNAVAILABLE

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context

class NormalizationError(CourseFinderError):
    """A raw course record is malformed or incomplete. Not retryable."""
    kind = "normalization_error"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    public_message = GlobalMessages.INVALID_COURSE_RECORD

    def __init__(self, reason: str, field: Optional[str] = None, record_id: Any = None):
        detail = f"{reason}: {field}" if field else reason
        super().__init__(detail, reason=reason, field=field, record_id=record_id)
        self.reason = reason
        self.field = field
        self.record_id = record_id

class ConflictError(CourseFinderError):
    """The (user, course) natural key already holds a bookmark."""
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT
    public_message = GlobalMessages.BOOKMARK_CONFLICT

class NotFoundError(CourseFinderError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    public_message = GlobalMessages.BOOKMARK_NOT_FOUND

    def __init__(self, message: str, public_message: Optional[str] = None, **context: Any):
        super().__init__(message, **context)
        if public_message:
            self.public_message = public_message

class AdapterUnavailableError(CourseFinderError):
    """Storage could not be reached. Transient; callers retry with backoff."""
    kind = "service_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    public_message = GlobalMessages.SERVICE_UNAVAILABLE

async def course_finder_error_handler(request: Request, exc: CourseFinderError) -> JSONResponse:
    if isinstance(exc, AdapterUnavailableError):
        logger.error("Storage unavailable during %s %s: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s on %s %s: %s %s", exc.kind, request.method, request.url.path, exc.message, exc.context)
    body = failure_body(exc.kind, exc.public_message)
    if isinstance(exc, NormalizationError) and exc.field:
        body["message"] = f"{exc.public_message} Field: {exc.field}."
    return JSONResponse(status_code=exc.status_code, content=body)

async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=failure_body("validation_error", GlobalMessages.INVALID_REQUEST),
    )

async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=failure_body("http_error", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CourseFinderError, course_finder_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
