"""Error handling for API endpoints.

handle_api_errors gives every route the same failure contract: any
unexpected fault becomes a 500 with a fixed message. The cause is
logged and never sent to the client.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Sequence

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from movieapi.models.types import ValidationProblem

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"

_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def handle_api_errors(message: str):
    """Decorator turning unexpected exceptions into HTTP 500.

    HTTPException passes through untouched so routes can still raise
    404 and friends.

    Args:
        message: Fixed text returned as the 500 detail.

    Example:
        @router.delete("/{movie_id}")
        @handle_api_errors("Error deleting the movie")
        def delete_movie(...):
            ...
    """

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception:
                logger.error(message, exc_info=True)
                raise HTTPException(status_code=500, detail=message)

        return wrapper

    return decorator


def field_errors(errors: Sequence[dict[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error dicts by dotted field location.

    The leading request location ("body", "query", ...) is dropped when
    something follows it.
    """
    grouped: dict[str, list[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        key = ".".join(loc) or "$"
        grouped.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return grouped


def validation_problem(errors: dict[str, list[str]]) -> JSONResponse:
    """Build a 400 problem-details response."""
    problem = ValidationProblem(errors=errors)
    return JSONResponse(
        status_code=400,
        content=problem.model_dump(),
        media_type=PROBLEM_MEDIA_TYPE,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests as 400 validation problems."""
    errors = field_errors(exc.errors())
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, errors)
    return validation_problem(errors)
