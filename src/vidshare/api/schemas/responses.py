"""Problem+json error bodies returned by every vidshare procedure."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from starlette.responses import JSONResponse


class ErrorCode(str, Enum):
    """Machine-readable failure kinds.

    NOT_FOUND covers both a missing row and a row the caller does not own.
    CONFLICT is only produced when two writers race on a unique index.
    """

    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


ERROR_TYPE_BASE = "https://api.vidshare.dev/errors"

ERROR_TITLES: dict[ErrorCode, str] = {
    ErrorCode.NOT_FOUND: "Resource Not Found",
    ErrorCode.VALIDATION_ERROR: "Validation Error",
    ErrorCode.NOT_AUTHENTICATED: "Authentication Required",
    ErrorCode.NOT_AUTHORIZED: "Access Denied",
    ErrorCode.CONFLICT: "Resource Conflict",
    ErrorCode.INTERNAL_ERROR: "Internal Server Error",
    ErrorCode.DATABASE_ERROR: "Database Error",
}


def get_error_type_uri(code: ErrorCode) -> str:
    """
    The ``type`` URI published for an error code.

    Parameters
    ----------
    code : ErrorCode
        The failure kind.

    Returns
    -------
    str
        ``ERROR_TYPE_BASE`` followed by the code.

    Examples
    --------
    >>> get_error_type_uri(ErrorCode.CONFLICT)
    'https://api.vidshare.dev/errors/CONFLICT'
    """
    return f"{ERROR_TYPE_BASE}/{code.value}"


class ProblemDetail(BaseModel):
    """
    Error body; keys stay snake_case, unlike the camelCase success payloads.

    Attributes
    ----------
    type : str
        URI naming the failure kind.
    title : str
        Short summary shared by every error of that kind.
    status : int
        HTTP status (4xx or 5xx).
    detail : str
        What went wrong with this particular call.
    instance : str
        Path of the procedure that failed.
    code : str
        ``ErrorCode`` value.
    request_id : str
        Correlation id, also sent as ``X-Request-ID``.
    """

    type: str = Field(..., examples=[get_error_type_uri(ErrorCode.NOT_FOUND)])
    title: str = Field(..., examples=[ERROR_TITLES[ErrorCode.NOT_FOUND]])
    status: int = Field(..., ge=400, le=599, examples=[404])
    detail: str = Field(
        ..., examples=["Video '0192f5c4-7d3e-7c1a-9a55-3f1e4b2d8c10' not found"]
    )
    instance: str = Field(
        ..., description="Path of the failing procedure", examples=["/api/v1/video/getVideoById"]
    )
    code: str = Field(..., examples=[ErrorCode.NOT_FOUND.value])
    request_id: str = Field(
        ..., description="Echo of the X-Request-ID header or a generated UUID"
    )


class FieldError(BaseModel):
    """One rejected input, located by its path (``["body", "followingId"]``)."""

    loc: list[str | int]
    msg: str
    type: str = Field(..., examples=["string_too_short", "value_error"])


class ValidationProblemDetail(ProblemDetail):
    """422 body with one ``FieldError`` per rejected input."""

    errors: list[FieldError]


class ProblemJSONResponse(JSONResponse):
    """JSONResponse served as ``application/problem+json``."""

    media_type = "application/problem+json"
