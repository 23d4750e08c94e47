"""Serving an app over TCP.

The wire protocol is uvicorn's business. This module binds the socket
itself so that a bind failure surfaces as an ``OSError`` from
``listen()``, then hands the socket to a uvicorn ``Server`` running on
the current event loop.
"""

from __future__ import annotations

import asyncio
import logging
import socket
from typing import Any

import anyio
import uvicorn

logger = logging.getLogger("trot.server")

_STARTUP_POLL_INTERVAL = 0.01
_BACKLOG = 2048


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind and listen on *host*:*port*; raises ``OSError`` on failure."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(_BACKLOG)
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


class Listener:
    """A running server returned by ``App.listen()``.

    Usage::

        listener = await app.listen(8000)
        ...
        await listener.close()
    """

    __slots__ = ("_server", "_socket", "_task")

    def __init__(self, server: uvicorn.Server, sock: socket.socket, task: asyncio.Future[Any]) -> None:
        self._server = server
        self._socket = sock
        self._task = task

    @property
    def host(self) -> str:
        return self._socket.getsockname()[0]

    @property
    def port(self) -> int:
        """The bound port (useful after listening on port 0)."""
        return self._socket.getsockname()[1]

    @property
    def running(self) -> bool:
        return not self._task.done()

    async def wait(self) -> None:
        """Wait until the server stops."""
        await self._task

    async def close(self) -> None:
        """Ask the server to shut down and wait for it."""
        self._server.should_exit = True
        try:
            await self._task
        finally:
            self._socket.close()


async def listen(app: Any, host: str, port: int, *, log_level: str = "info") -> Listener:
    """Bind *host*:*port* and serve *app* until the listener is closed.

    Returns once the server has started accepting connections.
    """
    sock = bind_socket(host, port)
    config = uvicorn.Config(app, log_level=log_level, lifespan="on")
    server = uvicorn.Server(config)
    task = asyncio.ensure_future(server.serve(sockets=[sock]))

    while not server.started:
        if task.done():
            sock.close()
            task.result()
            msg = f"Server on {host}:{port} stopped before it finished starting."
            raise RuntimeError(msg)
        await anyio.sleep(_STARTUP_POLL_INTERVAL)

    logger.info("Listening on %s:%d", host, sock.getsockname()[1])
    return Listener(server, sock, task)


def run(app: Any, host: str, port: int, *, log_level: str = "info") -> None:
    """Serve *app* in the foreground until interrupted."""
    uvicorn.run(app, host=host, port=port, log_level=log_level)
