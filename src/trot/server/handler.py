"""Request dispatch and the ASGI adapter around it.

``dispatch`` is the transport-independent core: parse the URL, match a
route, run the chain, funnel failures. ``handle_request`` is the only
component that touches raw ASGI; it builds the Request/Response pair,
calls ``dispatch`` and sends the buffered response.
"""

import logging
from typing import Any

from trot._internal.asgi import Receive, Scope, Send
from trot.config import AppConfig
from trot.errors import AmbiguousRoute
from trot.http.query import QueryParams
from trot.http.request import Request
from trot.http.response import Response
from trot.http.url import parse_url
from trot.middleware.registry import MiddlewareRegistry
from trot.routing.router import Router
from trot.server.errors import handle_error
from trot.server.pipeline import Abort, run_chain, run_single
from trot.server.sender import send_response

logger = logging.getLogger("trot.server")


def write_not_found(response: Response, body: str) -> None:
    """Answer an unmatched request. Never goes through the error handler."""
    if response.finished:
        return
    response.set_status(404)
    response.end(body)


async def dispatch(
    method: str,
    url: str,
    request: Request,
    response: Response,
    *,
    router: Router,
    middleware: MiddlewareRegistry,
    error_handler: Any,
    config: AppConfig,
) -> None:
    """Route one request and run its handler chain.

    Raises ``AmbiguousRoute`` when the route table has overlapping
    entries for this path; every other failure goes to *error_handler*.
    """
    parsed = parse_url(url)
    request.path = parsed.pathname
    request.query = parsed.query
    request.search = parsed.search
    request.query_params = QueryParams(parsed.query)

    match = router.match(method, parsed.pathname)
    if match is None:
        write_not_found(response, config.not_found_body)
        return

    request.params = match.params

    chain = middleware.chain_for(parsed.pathname, scoped=config.scoped_middleware)
    if not chain and len(match.handlers) == 1:
        outcome = await run_single(match.handlers[0], request, response)
    else:
        outcome = await run_chain([*chain, *match.handlers], request, response)

    if isinstance(outcome, Abort):
        await handle_error(outcome.error, request, response, error_handler)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: MiddlewareRegistry,
    error_handler: Any,
    config: AppConfig,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)
    response = Response()

    try:
        await dispatch(
            request.method,
            request.url,
            request,
            response,
            router=router,
            middleware=middleware,
            error_handler=error_handler,
            config=config,
        )
    except AmbiguousRoute as exc:
        logger.critical("Ambiguous route table: %s (%s %s)", exc, request.method, request.url)
        raise

    if not response.finished:
        response.end()

    await send_response(response, send)
