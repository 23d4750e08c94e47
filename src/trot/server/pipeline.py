"""Handler chain execution.

The chain is run by a loop, one handler at a time. Each non-final
handler receives an ``Advance`` continuation that records what the
handler asked for; the loop reads that signal once the handler (and any
awaitable it returned) has finished:

- ``Continue``      — ``next()`` was called, run the following handler
- ``Abort(error)``  — ``next(error)`` was called or the handler raised
- ``Complete``      — the handler returned without calling ``next``

``run_chain`` returns the terminal signal instead of calling into the
error handler itself, so the caller decides how failures are reported.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from trot._internal.invoke import invoke
from trot.http.request import Request
from trot.http.response import Response

logger = logging.getLogger("trot.server")


@dataclass(frozen=True, slots=True)
class Continue:
    """Run the next handler."""


@dataclass(frozen=True, slots=True)
class Complete:
    """The chain is done."""


@dataclass(frozen=True, slots=True)
class Abort:
    """Stop the chain and report *error*."""

    error: Any


CONTINUE = Continue()
COMPLETE = Complete()

Signal: TypeAlias = Continue | Abort | Complete


class Advance:
    """Continuation passed as ``next`` to every handler but the last.

    Only the first call counts; later calls are logged and ignored.
    """

    __slots__ = ("signal",)

    def __init__(self) -> None:
        self.signal: Signal = COMPLETE

    def __call__(self, error: Any = None) -> None:
        if self.signal is not COMPLETE:
            logger.warning("next() called more than once by the same handler; ignoring")
            return
        self.signal = CONTINUE if error is None else Abort(error)

    def __repr__(self) -> str:
        return f"Advance({self.signal!r})"


async def _call(
    handler: Callable[..., Any],
    request: Request,
    response: Response,
    advance: Advance | None,
) -> Abort | None:
    """Run one handler; a raised or rejected error becomes ``Abort``."""
    try:
        await invoke(handler, request, response, advance)
    except Exception as exc:
        return Abort(exc)
    return None


async def run_single(
    handler: Callable[..., Any],
    request: Request,
    response: Response,
) -> Abort | Complete:
    """Run a lone handler without building a continuation."""
    failed = await _call(handler, request, response, None)
    return failed or COMPLETE


async def run_chain(
    handlers: Sequence[Callable[..., Any]],
    request: Request,
    response: Response,
) -> Abort | Complete:
    """Run *handlers* in order until one stops the chain or all have run."""
    last = len(handlers) - 1

    for index, handler in enumerate(handlers):
        advance = Advance() if index < last else None

        failed = await _call(handler, request, response, advance)
        if failed is not None:
            return failed

        if advance is None:
            break

        signal = advance.signal
        if isinstance(signal, Continue):
            continue
        return signal

    return COMPLETE
