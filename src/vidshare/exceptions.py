"""
Error types raised by vidshare services, repositories and procedures.

``APIError`` subclasses map one-to-one onto an HTTP status and an
``ErrorCode``; ``vidshare.api.exception_handlers`` turns them into
problem+json bodies. ``AuthenticationError`` and ``RepositoryError`` are
handled separately because they add a challenge header or hide details.
"""

from __future__ import annotations

from typing import Any

from vidshare.api.schemas.responses import ErrorCode


class VidshareError(Exception):
    """Root of the vidshare error hierarchy; ``message`` is shown to callers."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthenticationError(VidshareError):
    """
    No usable session accompanied a protected procedure call.

    ``expired`` distinguishes a stale token from a missing or unknown one
    so the log can tell them apart; clients see the same 401 either way.

    Examples
    --------
    >>> raise AuthenticationError("Session expired", expired=True)
    """

    www_authenticate = "Bearer"

    def __init__(
        self, message: str = "Authentication required", expired: bool = False
    ) -> None:
        self.expired: bool = expired
        super().__init__(message)


class RepositoryError(VidshareError):
    """
    Wraps a driver failure with the operation and table it happened in.

    Attributes
    ----------
    operation : str | None
        What was being attempted, such as ``"insert"``.
    entity_type : str | None
        Model name the operation touched.
    original_error : Exception | None
        The underlying SQLAlchemy or driver exception.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        operation: str | None = None,
        entity_type: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.operation = operation
        self.entity_type = entity_type
        self.original_error = original_error
        super().__init__(message)


class APIError(VidshareError):
    """
    Error with a fixed HTTP status and machine-readable code.

    Subclasses override ``status_code`` and ``error_code``; ``details``
    carries structured context such as the offending field.
    """

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.details = details
        super().__init__(message)


class NotFoundError(APIError):
    """
    404 for a missing row, or a row owned by somebody else.

    Examples
    --------
    >>> NotFoundError("Video", "0192f5c4").message
    "Video '0192f5c4' not found"
    """

    status_code = 404
    error_code = ErrorCode.NOT_FOUND

    def __init__(
        self, resource_type: str, identifier: str, hint: str | None = None
    ) -> None:
        self.resource_type = resource_type
        self.identifier = identifier
        text = f"{resource_type} '{identifier}' not found"
        super().__init__(
            message=f"{text}. {hint}" if hint else text,
            details={"resource_type": resource_type, "identifier": identifier},
        )


class APIValidationError(APIError):
    """422 for input that parsed but breaks a business rule (self-follow)."""

    status_code = 422
    error_code = ErrorCode.VALIDATION_ERROR


class ConflictError(APIError):
    """409 when a concurrent write wins a uniqueness race."""

    status_code = 409
    error_code = ErrorCode.CONFLICT


class AuthorizationError(APIError):
    """403 when the acting ``userId`` is not the session user."""

    status_code = 403
    error_code = ErrorCode.NOT_AUTHORIZED


# Process exit statuses used by the CLI
EXIT_CODE_INVALID_ARGS = 2
EXIT_CODE_DATABASE_ERROR = 3
