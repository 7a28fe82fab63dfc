"""Per-request correlation id.

The id comes from the client's ``X-Request-ID`` header when that header is
printable ASCII, otherwise a UUIDv7 is minted. It is published through a
context variable so that log lines and problem+json bodies can quote it.
"""

from __future__ import annotations

import contextvars
import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from uuid_utils import uuid7

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default=""
)


def get_request_id() -> str:
    """
    The id of the request being served.

    Returns
    -------
    str
        The bound id, or ``""`` outside a request.

    Examples
    --------
    >>> get_request_id()
    ''
    """
    return request_id_var.get()


def _is_printable_ascii(value: str) -> bool:
    """True when every character is in the visible ASCII range ``!``..``~``."""
    return all("!" <= ch <= "~" for ch in value)


def _sanitize_request_id(header_value: str | None) -> str:
    """Accept, shorten or replace a client supplied id.

    Parameters
    ----------
    header_value : str | None
        Raw ``X-Request-ID`` value, if the client sent one.

    Returns
    -------
    str
        The value cut to ``MAX_REQUEST_ID_LENGTH`` when printable, else a
        fresh UUIDv7.

    Examples
    --------
    >>> _sanitize_request_id("trace-42")
    'trace-42'
    """
    if header_value and _is_printable_ascii(header_value):
        if len(header_value) > MAX_REQUEST_ID_LENGTH:
            logger.debug("Shortening %d-char %s", len(header_value), REQUEST_ID_HEADER)
        return header_value[:MAX_REQUEST_ID_LENGTH]
    if header_value:
        logger.warning("Ignoring %s with unprintable characters", REQUEST_ID_HEADER)
    return str(uuid7())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Binds the id for the duration of the request and echoes it back.

    Added last in ``create_app`` so it wraps the request logger and every
    route. The id is also copied to ``request.state`` because the context
    variable is already reset by the time Starlette's outer 500 handler runs.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """
        Bind the id, run the rest of the stack and echo the id back.

        Parameters
        ----------
        request : Request
            The incoming request.
        call_next : RequestResponseEndpoint
            The downstream application.

        Returns
        -------
        Response
            The downstream response with ``X-Request-ID`` set.
        """
        rid = _sanitize_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = rid
        return response


class RequestIdFilter(logging.Filter):
    """
    Stamps ``record.request_id`` (``"-"`` outside a request).

    Examples
    --------
    >>> handler = logging.StreamHandler()
    >>> handler.addFilter(RequestIdFilter())
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True
