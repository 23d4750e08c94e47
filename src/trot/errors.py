"""Trot exception hierarchy.

Shared across Router, App, dispatch pipeline, and middleware so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class TrotError(Exception):
    """Base for all trot-specific errors."""


class ConfigurationError(TrotError):
    """Raised when app configuration is invalid.

    Typically raised during registration, before the app freezes.
    """


class AmbiguousRoute(ConfigurationError):  # noqa: N818
    """More than one registered route matches the same request.

    This is a defect in the route table, not a per-request condition.
    The dispatch pipeline never hands it to the error handler; it is
    logged and re-raised out of the ASGI callable.
    """

    def __init__(self, path: str, patterns: tuple[str, ...]) -> None:
        self.path = path
        self.patterns = patterns
        listed = ", ".join(repr(p) for p in patterns)
        super().__init__(f"Multiple handler matches for {path!r}: {listed}")


@dataclass(frozen=True, slots=True)
class HTTPError(TrotError):
    """An error that maps directly to an HTTP status code.

    Raised by handlers or middleware. The default error handler uses
    ``status`` for the response and ``detail`` as the body.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — raised by handlers that decide a resource does not exist."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
