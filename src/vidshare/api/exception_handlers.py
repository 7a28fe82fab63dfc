"""Translate vidshare errors into ``application/problem+json`` responses.

Every handler registered here produces the same body shape (type, title,
status, detail, instance, code, request_id); validation failures add an
``errors`` list with one entry per offending field.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from vidshare.api.middleware.request_id import get_request_id
from vidshare.api.schemas.responses import (
    ERROR_TITLES,
    ErrorCode,
    FieldError,
    ProblemDetail,
    ProblemJSONResponse,
    ValidationProblemDetail,
    get_error_type_uri,
)
from vidshare.exceptions import (
    APIError,
    APIValidationError,
    AuthenticationError,
    RepositoryError,
)

logger = logging.getLogger(__name__)

MAX_DETAIL_LENGTH = 4096
TRUNCATION_SUFFIX = "... (truncated)"

GENERIC_DATABASE_DETAIL = "A database error occurred"
GENERIC_INTERNAL_DETAIL = "An unexpected error occurred"


def _truncate_detail(detail: str) -> str:
    """Clip ``detail`` so the full string, suffix included, fits the limit."""
    if len(detail) > MAX_DETAIL_LENGTH:
        keep = MAX_DETAIL_LENGTH - len(TRUNCATION_SUFFIX)
        detail = f"{detail[:keep]}{TRUNCATION_SUFFIX}"
    return detail


def _current_request_id(request: Request) -> str:
    """
    Resolve the id to quote in an error body.

    The context variable is reset once the middleware unwinds, so the
    catch-all 500 handler falls back to the copy kept on ``request.state``.

    Parameters
    ----------
    request : Request
        The failing request.

    Returns
    -------
    str
        The request id, or ``"-"`` when none was bound.
    """
    return get_request_id() or str(getattr(request.state, "request_id", "") or "-")


def _field_errors(raw: Iterable[dict[str, Any]]) -> list[FieldError]:
    """Keep the str/int parts of each pydantic error location."""
    return [
        FieldError(
            loc=[part for part in item.get("loc", ()) if isinstance(part, (str, int))],
            msg=str(item.get("msg", "")),
            type=str(item.get("type", "")),
        )
        for item in raw
    ]


def _render(
    request: Request,
    code: ErrorCode,
    status: int,
    detail: str,
    *,
    errors: list[FieldError] | None = None,
    headers: dict[str, str] | None = None,
) -> ProblemJSONResponse:
    """
    Build a problem+json response.

    Parameters
    ----------
    request : Request
        The failing request; its path becomes ``instance``.
    code : ErrorCode
        Machine-readable failure kind, which also picks ``type`` and ``title``.
    status : int
        HTTP status of the response.
    detail : str
        Human-readable explanation, clipped to ``MAX_DETAIL_LENGTH``.
    errors : list[FieldError] | None, optional
        Field errors; when given the body is a ``ValidationProblemDetail``.
    headers : dict[str, str] | None, optional
        Extra response headers.

    Returns
    -------
    ProblemJSONResponse
        The rendered error.
    """
    fields: dict[str, Any] = {
        "type": get_error_type_uri(code),
        "title": ERROR_TITLES.get(code, "Error"),
        "status": status,
        "detail": _truncate_detail(detail),
        "instance": request.url.path,
        "code": code.value,
        "request_id": _current_request_id(request),
    }
    body = (
        ValidationProblemDetail(**fields, errors=errors)
        if errors is not None
        else ProblemDetail(**fields)
    )
    return ProblemJSONResponse(
        content=body.model_dump(), status_code=status, headers=headers
    )


async def api_error_handler(request: Request, exc: APIError) -> ProblemJSONResponse:
    """
    Render NOT_FOUND, NOT_AUTHORIZED, CONFLICT and custom 422 errors.

    An ``APIValidationError`` whose details name a ``field`` gets one
    ``errors`` entry located at ``["body", field]``.

    Parameters
    ----------
    request : Request
        The failing request.
    exc : APIError
        The raised error, carrying its own status and code.

    Returns
    -------
    ProblemJSONResponse
        The problem+json body for ``exc``.
    """
    if isinstance(exc, APIValidationError):
        field = (exc.details or {}).get("field")
        raw = [{"loc": ["body", field], "msg": exc.message, "type": "value_error"}]
        return _render(
            request,
            ErrorCode.VALIDATION_ERROR,
            422,
            exc.message,
            errors=_field_errors(raw if field else []),
        )
    return _render(request, exc.error_code, exc.status_code, exc.message)


async def validation_error_handler(
    request: Request, exc: RequestValidationError | ValidationError
) -> ProblemJSONResponse:
    """Input parsing failures and models rejected inside a procedure."""
    return _render(
        request,
        ErrorCode.VALIDATION_ERROR,
        422,
        "Request validation failed",
        errors=_field_errors(exc.errors()),
    )


async def auth_error_handler(
    request: Request, exc: AuthenticationError
) -> ProblemJSONResponse:
    """
    Answer a missing, unknown or expired session with 401.

    Parameters
    ----------
    request : Request
        The protected procedure call.
    exc : AuthenticationError
        The raised error; its ``www_authenticate`` becomes the challenge.

    Returns
    -------
    ProblemJSONResponse
        A 401 NOT_AUTHENTICATED body with a ``WWW-Authenticate`` header.
    """
    challenge = {"WWW-Authenticate": exc.www_authenticate} if exc.www_authenticate else None
    return _render(
        request, ErrorCode.NOT_AUTHENTICATED, 401, exc.message, headers=challenge
    )


async def repository_error_handler(
    request: Request, exc: RepositoryError | SQLAlchemyError
) -> ProblemJSONResponse:
    """
    Log the database failure in full and answer with a generic 500.

    Parameters
    ----------
    request : Request
        The failing request.
    exc : RepositoryError | SQLAlchemyError
        A wrapped repository failure or a raw driver error.

    Returns
    -------
    ProblemJSONResponse
        A 500 DATABASE_ERROR body that hides the driver message.
    """
    if isinstance(exc, RepositoryError):
        logger.error(
            "%s failed on %s: %s",
            exc.operation or "query",
            exc.entity_type or "unknown table",
            exc.message,
            exc_info=exc.original_error,
        )
    else:
        logger.error("Driver error during %s: %s", request.url.path, exc, exc_info=exc)
    return _render(request, ErrorCode.DATABASE_ERROR, 500, GENERIC_DATABASE_DETAIL)


async def generic_error_handler(
    request: Request, exc: Exception
) -> ProblemJSONResponse:
    """
    Last resort for anything no other handler claims.

    The traceback goes to the log; the client only sees a generic message
    and the request id to quote when reporting the failure.

    Parameters
    ----------
    request : Request
        The failing request.
    exc : Exception
        The unhandled error.

    Returns
    -------
    ProblemJSONResponse
        A 500 INTERNAL_ERROR body.
    """
    logger.exception("Unhandled %s on %s", type(exc).__name__, request.url.path)
    return _render(request, ErrorCode.INTERNAL_ERROR, 500, GENERIC_INTERNAL_DETAIL)


_HANDLERS: tuple[tuple[type[Exception], Any], ...] = (
    (APIError, api_error_handler),
    (RequestValidationError, validation_error_handler),
    (ValidationError, validation_error_handler),
    (AuthenticationError, auth_error_handler),
    (RepositoryError, repository_error_handler),
    (SQLAlchemyError, repository_error_handler),
    (Exception, generic_error_handler),
)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the problem+json handlers on ``app``.

    Examples
    --------
    >>> from fastapi import FastAPI
    >>> app = FastAPI()
    >>> register_exception_handlers(app)
    """
    for exc_class, handler in _HANDLERS:
        app.add_exception_handler(exc_class, handler)
