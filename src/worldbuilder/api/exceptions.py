"""Exception handlers for World Builder API.

Every error response is JSON with a ``message`` string, plus ``data`` for
validation failures.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from worldbuilder.models.contracts import UPDATED_DATA_REQUIRED
from worldbuilder.services.ownership import (
    MissingOwnerError,
    OwnerNotFoundError,
    OwnershipError,
    ResourceForbiddenError,
)

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed."
INTERNAL_ERROR = "Internal server error."


class APIError(Exception):
    """Base API error."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        data: Any | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.data = data
        super().__init__(message)


class BadRequestError(APIError):
    """Malformed or incomplete request."""

    def __init__(self, message: str, data: Any | None = None):
        super().__init__(message, status_code=400, data=data)


class UnauthorizedError(APIError):
    """Authentication failed."""

    def __init__(self, message: str = "Authentication required."):
        super().__init__(message, status_code=401)


class ForbiddenError(APIError):
    """Authenticated, but not allowed to touch this entity."""

    def __init__(self, message: str = "Forbidden account action."):
        super().__init__(message, status_code=403)


class NotFoundError(APIError):
    """Resource not found."""

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found.", status_code=404)


class ConflictError(APIError):
    """Resource conflict."""

    def __init__(self, message: str):
        super().__init__(message, status_code=409)


OWNERSHIP_STATUS: dict[type[OwnershipError], int] = {
    MissingOwnerError: 400,
    OwnerNotFoundError: 400,
    ResourceForbiddenError: 403,
}


def _error_body(message: str, data: Any | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"message": message}
    if data is not None:
        body["data"] = data
    return body


def format_validation_error(error: dict[str, Any]) -> dict[str, Any]:
    """Flatten one pydantic error into ``{type, msg, path, location}``.

    ``loc`` arrives as e.g. ``("body", "updatedData", "name")``; the first
    element is where the value came from, the rest is the field path.
    """
    loc = [str(part) for part in error.get("loc", ())]
    location = loc[0] if loc else "body"
    path = ".".join(loc[1:])
    error_type = error.get("type", "value_error")
    msg = error.get("msg", "Invalid value.")

    if path == "updatedData":
        # absent, not an object, or an object without any fields
        if error_type in ("missing", "model_type", "model_attributes_type") or (
            UPDATED_DATA_REQUIRED in msg
        ):
            msg = UPDATED_DATA_REQUIRED
    elif error_type == "missing":
        msg = f"{path or location} field is required."

    if error_type == "value_error" and msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]

    return {"type": error_type, "msg": msg, "path": path, "location": location}


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.data),
    )


async def ownership_error_handler(request: Request, exc: OwnershipError) -> JSONResponse:
    """Handle ownership resolution failures raised by the services."""
    return JSONResponse(
        status_code=OWNERSHIP_STATUS.get(type(exc), 403),
        content=_error_body(exc.message),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors."""
    errors = [format_validation_error(error) for error in exc.errors()]
    logger.debug("Validation failed on %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=400,
        content=_error_body(VALIDATION_FAILED, errors),
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTPException raised by dependencies and routing."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unexpected error", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=_error_body(INTERNAL_ERROR),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(OwnershipError, ownership_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)
