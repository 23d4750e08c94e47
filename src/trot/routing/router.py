"""Route matcher.

The router owns a ``RouteTable`` and resolves a method + path to at most
one route. Every candidate is tested, so overlapping registrations are
reported as ``AmbiguousRoute`` instead of being silently shadowed.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from trot.errors import AmbiguousRoute
from trot.routing.compiler import SEPARATOR, clean, split
from trot.routing.route import Route, RouteMatch, Segment, SegmentType
from trot.routing.table import RouteTable

logger = logging.getLogger("trot.routing")


def is_placeholder(piece: str) -> bool:
    """True for an empty positional slot (root or adjacent separators)."""
    return piece == SEPARATOR or piece == ""


def is_compatible(pieces: Sequence[str], segments: Sequence[Segment]) -> bool:
    """Length test between path pieces and pattern segments.

    Equal lengths always pass. A trailing wildcard may absorb extra
    pieces; a trailing optional segment may be missing.
    """
    if len(pieces) == len(segments):
        return True
    last = segments[-1].type
    if len(segments) < len(pieces):
        return last is SegmentType.ANY
    return last is SegmentType.OPTIONAL


def is_piece_match(piece: str, segment: Segment) -> bool:
    """Test a single path piece against a single segment."""
    if segment.type is SegmentType.STATIC:
        return piece == segment.value
    if is_placeholder(piece):
        return segment.type in (SegmentType.OPTIONAL, SegmentType.ANY)
    return True


def is_full_match(pieces: Sequence[str], segments: Sequence[Segment]) -> bool:
    """Compatibility test plus a per-position test over the shorter list."""
    if not is_compatible(pieces, segments):
        return False
    return all(is_piece_match(piece, segment) for piece, segment in zip(pieces, segments))


def extract_params(path: str, segments: Sequence[Segment]) -> dict[str, str]:
    """Build a fresh parameter map for a path that matched *segments*.

    Static segments and empty slots contribute nothing. A wildcard
    captures every remaining piece, rejoined with ``/``.
    """
    pieces = split(path)
    params: dict[str, str] = {}
    for index, (piece, segment) in enumerate(zip(pieces, segments)):
        if is_placeholder(piece) or not segment.is_capture:
            continue
        if segment.type is SegmentType.ANY:
            params[segment.value] = SEPARATOR.join(pieces[index:])
        else:
            params[segment.value] = piece
    return params


class Router:
    """Route table plus matcher.

    Usage::

        router = Router()
        router.add("GET", "/users/:id", [show_user])
        router.freeze()
        match = router.match("GET", "/users/42")
        match.params  # {"id": "42"}
    """

    __slots__ = ("_table",)

    def __init__(self, table: RouteTable | None = None) -> None:
        self._table = table if table is not None else RouteTable()

    def add(
        self,
        method: str,
        pattern: str,
        handlers: Sequence[Callable[..., Any]],
    ) -> Route:
        """Register a route. Must be called before ``freeze()``."""
        return self._table.register(method, pattern, handlers)

    def freeze(self) -> None:
        """Freeze the route table. No more routes can be added."""
        self._table.freeze()

    @property
    def table(self) -> RouteTable:
        return self._table

    @property
    def routes(self) -> list[Route]:
        return self._table.routes

    def candidates(self, method: str, path: str) -> list[Route]:
        """Every route that fully matches, in priority order."""
        pieces = split(path)
        return [
            route
            for route in self._table.lookup(method)
            if is_full_match(pieces, route.segments)
        ]

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Resolve *method* + *path* to a single route.

        Returns ``None`` when nothing matches.
        Raises ``AmbiguousRoute`` when more than one route matches.
        """
        path = clean(path)
        matches = self.candidates(method, path)

        if not matches:
            logger.debug("no route for %s %s", method, path)
            return None

        if len(matches) > 1:
            raise AmbiguousRoute(path, tuple(route.pattern for route in matches))

        route = matches[0]
        return RouteMatch(route=route, params=extract_params(path, route.segments))
