"""Error Handlers — how CampusPool failures reach the browser.

Invariants:
    - CampusPoolError keeps its own status: 400 bad field, 401 missing/expired token,
      403 someone else's profile/post/conversation, 404 unknown user/post/conversation,
      409 duplicate email or a denied/finished conversation, 503 database
    - 401 responses carry WWW-Authenticate: Bearer so clients know to sign in again
    - RequestValidationError → 400 VALIDATION_ERROR; each detail names the camelCase
      wire field ("carCapacity"), not the ("body", ...) location tuple; cross-field
      failures such as missing car details have an empty field
    - Anything else → 500 carrying only the request id, never the exception text

Design Decisions:
    - 4xx domain errors log at WARNING: a wrong password or a stranger's post id
      is routine traffic, only 5xx pages someone
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from campuspool.core.errors import CampusPoolError, ErrorSeverity
from campuspool.infrastructure.observability import current_request_id

logger = logging.getLogger(__name__)

# Leading loc entries that say where the field came from, not which field it is
_LOCATION_PREFIXES = ("body", "query", "path", "header")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CampusPoolError, campuspool_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


async def campuspool_error_handler(request: Request, exc: CampusPoolError) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{type(exc).__name__}: {exc.message}",
        extra={"error_code": exc.code, "status_code": exc.http_status},
    )
    headers = None
    if exc.http_status == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = validation_details(exc.errors())
    logger.warning(
        f"Rejected payload: {[d['field'] or '<model>' for d in details]}",
        extra={"error_code": "VALIDATION_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": "validation",
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled {type(exc).__name__}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
                "request_id": current_request_id(),
            },
        },
    )


def validation_details(errors: list[dict]) -> list[dict]:
    """Flatten pydantic errors into {field, message, type} with wire field names."""
    details = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        details.append({
            "field": ".".join(str(part) for part in loc),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        })
    return details
