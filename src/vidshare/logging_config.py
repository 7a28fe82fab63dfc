"""
Logging setup for vidshare.

Installs one stream handler on the ``vidshare`` logger whose format carries
the request id of the HTTP request being served.
"""

from __future__ import annotations

import logging

from vidshare.api.middleware.request_id import RequestIdFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "vidshare-console"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Configure the ``vidshare`` logger.

    Calling it again replaces the handler it installed earlier and updates
    the level.

    Parameters
    ----------
    level : str | int
        Level name (``"DEBUG"``) or number.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    root_logger = logging.getLogger("vidshare")

    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.addFilter(RequestIdFilter())
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)
    return root_logger
