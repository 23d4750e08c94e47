"""Segment, Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class SegmentType(StrEnum):
    """Kind of a compiled pattern segment."""

    STATIC = "static"
    PARAMETER = "parameter"
    OPTIONAL = "optional"
    ANY = "any"


@dataclass(frozen=True, slots=True)
class Segment:
    """A compiled unit of a route pattern.

    Static:    ``users``  (value is the literal text)
    Parameter: ``:id``    (value="id")
    Optional:  ``:id?``   (value="id")
    Any:       ``*``      (value is the wildcard text, e.g. ``"*"``)
    """

    original: str
    type: SegmentType
    value: str

    @property
    def is_capture(self) -> bool:
        """True for segments that record a parameter when matched."""
        return self.type is not SegmentType.STATIC


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route. Owned by the route table, never mutated."""

    method: str
    pattern: str
    segments: tuple[Segment, ...]
    handlers: tuple[Callable[..., Any], ...]

    @property
    def last(self) -> Segment:
        return self.segments[-1]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str]

    @property
    def handlers(self) -> tuple[Callable[..., Any], ...]:
        return self.route.handlers
