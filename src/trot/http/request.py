"""HTTP request handed to every handler in the dispatch chain.

Unlike the response, most fields are fixed by the transport. The
dispatch pipeline fills in ``path``, ``query``, ``search`` and
``params`` before the first handler runs, and middleware may stash
per-request data in ``state``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from trot.http.headers import Headers
from trot.http.query import QueryParams


@dataclass(slots=True)
class Request:
    """An incoming request.

    ``url`` is the raw request target. The URL-derived fields start
    empty and are populated by dispatch from ``url``.
    """

    method: str
    url: str
    headers: Headers = field(default_factory=Headers)
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # Attached by dispatch
    path: str = ""
    query: str | None = None
    search: str | None = None
    query_params: QueryParams = field(default_factory=QueryParams)
    params: dict[str, str] = field(default_factory=dict)

    # Free-form per-request storage for middleware
    state: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        query_string: bytes = scope.get("query_string", b"")
        url = scope.get("raw_path", b"").decode("latin-1") or scope["path"]
        if query_string:
            url = f"{url}?{query_string.decode('latin-1')}"
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            url=url,
            headers=Headers(scope.get("headers", ())),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
        )
