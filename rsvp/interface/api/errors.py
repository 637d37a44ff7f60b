"""HTTP error rendering.

Every error response has the shape ``{"message": "..."}``. Request schema
violations are client errors and are reported as 400 rather than FastAPI's
default 422.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import logfire

INTERNAL_ERROR = "internal error"
NOT_FOUND = "invite not found"


def validation_message(exc: RequestValidationError) -> str:
    """Condense pydantic errors into one line naming the first violation."""
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}"


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = validation_message(exc)
    logfire.warn("Request validation failed", path=request.url.path, reason=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the ``{"message": ...}`` error handlers on an app."""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
