"""Handler protocol and Next type alias.

Middleware and route handlers share one shape::

    def my_mw(request: Request, response: Response, next: Next | None) -> None: ...

No base class required. The pipeline checks the shape, not the lineage.

``next`` is ``None`` for the last handler of the chain. Otherwise call
``next()`` to continue with the following handler, or ``next(error)`` to
stop the chain and hand *error* to the app's error handler. Returning
without calling it finishes the chain.

Handlers may be ``async def``; the pipeline awaits them before deciding
what runs next.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeAlias

from trot.http.request import Request
from trot.http.response import Response

# The continuation passed to every handler except the last
Next: TypeAlias = Callable[..., None]


class Handler(Protocol):
    """Protocol for trot middleware and route handlers.

    Accepts both functions and callable objects::

        # Function middleware
        def timing(request: Request, response: Response, next: Next | None) -> None:
            request.state["started"] = time.monotonic()
            next()

        # Class middleware
        class RequireToken:
            def __call__(self, request, response, next):
                if "authorization" not in request.headers:
                    next(HTTPError(401, "missing token"))
                    return
                next()
    """

    def __call__(
        self,
        request: Request,
        response: Response,
        next: Next | None,
    ) -> Awaitable[Any] | Any: ...


# Receives (error, request, response)
ErrorHandler: TypeAlias = Callable[[BaseException, Request, Response], Awaitable[Any] | Any]
