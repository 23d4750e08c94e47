"""Middleware — plain callables, no inheritance required.

A middleware (or route handler) is any callable matching::

    def handler(request: Request, response: Response, next: Next | None) -> None

``app.use(handler)`` runs it before every route; ``app.use("/admin",
handler)`` runs it only for paths under ``/admin``.
"""

from trot.middleware.protocol import Handler, Next
from trot.middleware.registry import MiddlewareRegistry, ScopedMiddleware

__all__ = [
    "Handler",
    "MiddlewareRegistry",
    "Next",
    "ScopedMiddleware",
]
