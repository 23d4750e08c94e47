"""Invoke helpers — call sync or async callables uniformly.

Handlers and error handlers can be ``def`` or ``async def``. This module
keeps the sync/async check in exactly one place.

Usage::

    from trot._internal.invoke import invoke

    result = await invoke(handler, request, response, next)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it is awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
