"""Shared OpenAPI response definitions for RFC 7807 errors.

Reusable ``responses=`` mappings so every procedure documents the Problem
Details it can return.
"""

from __future__ import annotations

from typing import Any

from vidshare.api.schemas.responses import (
    ProblemDetail,
    ValidationProblemDetail,
)

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

# Type alias for FastAPI responses parameter
ResponsesType = dict[int | str, dict[str, Any]]


def _problem(description: str, model: type = ProblemDetail) -> dict[str, Any]:
    return {
        "model": model,
        "description": description,
        "content": {PROBLEM_JSON_MEDIA_TYPE: {}},
    }


NOT_FOUND_RESPONSE: ResponsesType = {404: _problem("Resource not found")}
VALIDATION_ERROR_RESPONSE: ResponsesType = {
    422: _problem("Validation error", ValidationProblemDetail)
}
UNAUTHORIZED_RESPONSE: ResponsesType = {401: _problem("Authentication required")}
FORBIDDEN_RESPONSE: ResponsesType = {
    403: _problem("Acting user differs from the session user")
}
CONFLICT_RESPONSE: ResponsesType = {409: _problem("Concurrent modification")}
INTERNAL_ERROR_RESPONSE: ResponsesType = {500: _problem("Internal server error")}

# Combined response sets for common procedure patterns

PUBLIC_QUERY_ERRORS: ResponsesType = {
    **VALIDATION_ERROR_RESPONSE,
    **INTERNAL_ERROR_RESPONSE,
}
"""Errors for public list queries (422, 500)."""

PUBLIC_ITEM_ERRORS: ResponsesType = {
    **NOT_FOUND_RESPONSE,
    **PUBLIC_QUERY_ERRORS,
}
"""Errors for public single-item queries (404, 422, 500)."""

PROTECTED_ERRORS: ResponsesType = {
    **NOT_FOUND_RESPONSE,
    **VALIDATION_ERROR_RESPONSE,
    **UNAUTHORIZED_RESPONSE,
    **FORBIDDEN_RESPONSE,
    **INTERNAL_ERROR_RESPONSE,
}
"""Errors for protected procedures (404, 422, 401, 403, 500)."""

TOGGLE_ERRORS: ResponsesType = {
    **PROTECTED_ERRORS,
    **CONFLICT_RESPONSE,
}
"""Errors for toggle procedures, which may also lose a race (409)."""

HEALTH_ERRORS: ResponsesType = {
    **INTERNAL_ERROR_RESPONSE,
}
"""Errors for health endpoint (500 only)."""
