"""Per-method route table.

Routes are kept in insertion order per method; order is match priority.
The ``*`` method is a fallback bucket consulted for every verb, after
the verb's own routes.
"""

from collections.abc import Callable, Sequence
from typing import Any

from trot.routing.compiler import compile_pattern
from trot.routing.route import Route

ANY_METHOD = "*"


class RouteTable:
    """Mapping of HTTP method to an ordered list of routes.

    No conflict detection happens here: two identical routes are both
    stored, and the matcher reports the ambiguity when a request hits them.
    """

    __slots__ = ("_frozen", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, list[Route]] = {}
        self._frozen = False

    def register(
        self,
        method: str,
        pattern: str,
        handlers: Sequence[Callable[..., Any]],
    ) -> Route:
        """Compile *pattern* and append a route under *method*."""
        if self._frozen:
            msg = "Cannot register routes after the route table is frozen."
            raise RuntimeError(msg)
        if not handlers:
            msg = f"Route {method} {pattern!r} needs at least one handler."
            raise ValueError(msg)

        method = method.upper()
        route = Route(
            method=method,
            pattern=pattern,
            segments=compile_pattern(pattern),
            handlers=tuple(handlers),
        )
        self._routes.setdefault(method, []).append(route)
        return route

    def lookup(self, method: str) -> list[Route]:
        """Routes for *method* followed by the wildcard-method routes."""
        return [
            *self._routes.get(method.upper(), ()),
            *self._routes.get(ANY_METHOD, ()),
        ]

    def freeze(self) -> None:
        """Refuse further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> list[Route]:
        """Every registered route, grouped by method in registration order."""
        return [route for routes in self._routes.values() for route in routes]

    def __len__(self) -> int:
        return sum(len(routes) for routes in self._routes.values())
