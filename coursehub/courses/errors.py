"""
Course API error taxonomy and FastAPI exception handlers.

Every error renders as a JSON body with a `message` key:

    ValidationError  400  {"message": ..., "errors": [...]}
    ConflictError    400  {"message": ...}
    NotFoundError    404  {"message": ...}
    StoreError       500  {"message": "Server error", "error": ...}

Driver errors (PyMongoError, BSONError) and any other unhandled exception
render as StoreError.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from bson.errors import BSONError
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

MISSING_ERROR_TYPES = {"missing", "string_too_short"}


class CourseAPIError(Exception):
    """Base class for errors returned to API clients"""
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(CourseAPIError):
    """Required field missing or malformed"""
    status_code = 400
    default_message = "Missing required fields"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class ConflictError(CourseAPIError):
    """Uniqueness violation"""
    status_code = 400
    default_message = "Resource already exists"


class NotFoundError(CourseAPIError):
    """Operation targets a nonexistent id"""
    status_code = 404
    default_message = "Not found"


class StoreError(CourseAPIError):
    """Unexpected failure from the document store"""
    status_code = 500

    def __init__(self, error: str, message: Optional[str] = None):
        super().__init__(message)
        self.error = error

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, "error": self.error}


# ==================== CONVERSION ====================

def _field_name(loc) -> str:
    # loc looks like ("body", "title") or ("query", "course")
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


def from_request_validation(exc: RequestValidationError) -> ValidationError:
    """Build a ValidationError from FastAPI's request validation failure"""
    errors = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "invalid value")}
        for err in exc.errors()
    ]
    only_missing = all(err.get("type") in MISSING_ERROR_TYPES for err in exc.errors())
    message = "Missing required fields" if only_missing else "Invalid request body"
    return ValidationError(message, errors)


# ==================== HANDLERS ====================

async def course_api_error_handler(request: Request, exc: CourseAPIError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = from_request_validation(exc)
    logger.debug("%s %s rejected: %s", request.method, request.url.path, error.errors)
    return JSONResponse(status_code=error.status_code, content=error.to_body())


async def store_error_handler(request: Request, exc: Exception):
    logger.exception("Request failed on %s %s", request.method, request.url.path, exc_info=exc)
    error = StoreError(str(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_body())


def register_error_handlers(app: FastAPI):
    """Install the JSON error handlers on the application"""
    app.add_exception_handler(CourseAPIError, course_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PyMongoError, store_error_handler)
    app.add_exception_handler(BSONError, store_error_handler)
    app.add_exception_handler(Exception, store_error_handler)
