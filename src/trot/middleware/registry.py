"""Global and path-scoped middleware registry."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from trot.routing.compiler import SEPARATOR, append_separator, split


@dataclass(frozen=True, slots=True)
class ScopedMiddleware:
    """A middleware bound to a path prefix.

    The prefix is compared piece by piece, so ``/api`` covers ``/api``
    and ``/api/users`` but not ``/apiary``.
    """

    prefix: str
    handler: Callable[..., Any]
    pieces: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pieces", tuple(split(self.prefix)))

    def applies_to(self, path: str) -> bool:
        path_pieces = split(path)
        return tuple(path_pieces[: len(self.pieces)]) == self.pieces


class MiddlewareRegistry:
    """Ordered middleware lists, filled during setup.

    Global middleware runs before every route. Path-scoped middleware is
    kept in registration order and selected per request by ``chain_for``.
    """

    __slots__ = ("_frozen", "_global", "_scoped")

    def __init__(self) -> None:
        self._global: list[Callable[..., Any]] = []
        self._scoped: list[ScopedMiddleware] = []
        self._frozen = False

    def use(self, path_or_handler: str | Callable[..., Any], *handlers: Callable[..., Any]) -> None:
        """Register middleware.

        ``use(handler, ...)`` and ``use("/", handler, ...)`` append to the
        global list. ``use("/prefix", handler, ...)`` records path-scoped
        middleware; a prefix without a leading ``/`` gets one.
        """
        if self._frozen:
            msg = "Cannot add middleware after the app has frozen."
            raise RuntimeError(msg)

        if callable(path_or_handler):
            self._global.extend((path_or_handler, *handlers))
            return

        if not isinstance(path_or_handler, str):
            msg = f"use() expects a path string or a callable, got {type(path_or_handler).__name__}"
            raise TypeError(msg)

        if path_or_handler == SEPARATOR:
            self._global.extend(handlers)
            return

        prefix = append_separator(path_or_handler)
        self._scoped.extend(ScopedMiddleware(prefix, handler) for handler in handlers)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def global_handlers(self) -> tuple[Callable[..., Any], ...]:
        return tuple(self._global)

    @property
    def scoped(self) -> dict[str, list[Callable[..., Any]]]:
        """Path-scoped middleware grouped by prefix."""
        grouped: dict[str, list[Callable[..., Any]]] = {}
        for entry in self._scoped:
            grouped.setdefault(entry.prefix, []).append(entry.handler)
        return grouped

    def chain_for(self, path: str, *, scoped: bool = True) -> list[Callable[..., Any]]:
        """Middleware to run for *path*: global first, then matching scoped."""
        chain = list(self._global)
        if scoped:
            chain.extend(entry.handler for entry in self._scoped if entry.applies_to(path))
        return chain
