"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses; the body is always {"error", "message", "details"}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from campus_events.core.config import get_settings
from campus_events.domain.exceptions import CampusEventsError

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "INVALID_FILTER": 400,
    "AUTHENTICATION_ERROR": 401,
    "OWNER_CANNOT_REPORT": 403,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "DUPLICATE_REPORT": 409,
    "INVALID_TRANSITION": 409,
    "IMAGE_PATH_INVALID": 400,
    "IMAGE_UPLOAD_ERROR": 502,
    "IMAGE_DELETE_ERROR": 502,
    "STORE_UNAVAILABLE": 503,
}


def _campus_events_exception_handler(request: Request, exc: CampusEventsError) -> JSONResponse:
    """Return JSON from CampusEventsError.to_dict() with the mapped status code."""
    status = ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error("%s: %s", exc.error_code, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Validation errors without the raw ctx objects (not always JSON-serializable)."""
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail, "details": {}},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail, "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: CampusEventsError (and subclasses), RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(CampusEventsError, _campus_events_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
