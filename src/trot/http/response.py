"""Buffered HTTP response writer.

Handlers receive a ``Response`` and write to it; the transport sends the
buffered result once the dispatch chain has finished.
"""

from __future__ import annotations


class Response:
    """A mutable response that handlers write into.

    ``set_status`` and ``set_header`` return the response so calls
    chain. ``end()`` marks the response complete; nothing can be
    written after that::

        response.set_status(201).set_header("Location", "/users/7")
        response.end("created")
    """

    __slots__ = ("_chunks", "_finished", "_headers", "status")

    def __init__(self, status: int = 200, content_type: str = "text/plain; charset=utf-8") -> None:
        self.status = status
        self._headers: list[tuple[str, str]] = [("content-type", content_type)]
        self._chunks: list[bytes] = []
        self._finished = False

    def set_status(self, status: int) -> Response:
        self._check_writable()
        self.status = status
        return self

    def set_header(self, name: str, value: str) -> Response:
        """Set a header, replacing any previous value with the same name."""
        self._check_writable()
        lowered = name.lower()
        self._headers = [(n, v) for n, v in self._headers if n != lowered]
        self._headers.append((lowered, value))
        return self

    def write(self, chunk: str | bytes) -> None:
        """Append *chunk* to the body."""
        self._check_writable()
        self._chunks.append(chunk.encode("utf-8") if isinstance(chunk, str) else chunk)

    def end(self, body: str | bytes | None = None) -> None:
        """Write an optional final chunk and finish the response."""
        if body is not None:
            self.write(body)
        self._check_writable()
        self._finished = True

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._headers)

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def _check_writable(self) -> None:
        if self._finished:
            msg = "Response already finished; nothing can be written after end()."
            raise RuntimeError(msg)
