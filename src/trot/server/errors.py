"""Error funnel for the dispatch pipeline.

Handler failures of every kind end up in ``handle_error``: raised
exceptions, failed awaitables and errors passed to ``next(error)``. It
calls the app's configured error handler.
"""

import logging
from typing import Any

from trot._internal.invoke import invoke
from trot.errors import HTTPError
from trot.http.request import Request
from trot.http.response import Response

logger = logging.getLogger("trot.server")


def default_error_handler(error: Any, request: Request, response: Response) -> None:
    """Write the error message as the complete response body.

    ``HTTPError`` keeps its status and uses its detail as the body;
    anything else becomes a 500 with ``str(error)``.
    """
    if isinstance(error, HTTPError):
        logger.debug("%d %s %s — %s", error.status, request.method, request.path, error.detail)
        status, body = error.status, error.detail or str(error.status)
    else:
        logger.error(
            "500 %s %s",
            request.method,
            request.path,
            exc_info=error if isinstance(error, BaseException) else None,
        )
        status, body = 500, str(error)

    if response.finished:
        logger.warning(
            "Response for %s %s already finished; dropping error %r",
            request.method,
            request.path,
            error,
        )
        return

    response.set_status(status)
    response.end(body)


async def handle_error(
    error: Any,
    request: Request,
    response: Response,
    error_handler: Any,
) -> None:
    """Hand *error* to *error_handler*; fall back to a bare 500 if it fails."""
    try:
        await invoke(error_handler, error, request, response)
    except Exception:
        logger.exception("Error handler failed for %s %s", request.method, request.path)
        if not response.finished:
            response.set_status(500)
            response.end("Internal Server Error")
