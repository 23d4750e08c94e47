"""Trot application class.

Mutable during setup (route registration, middleware, error handler).
Frozen at runtime when the first request arrives, on ASGI lifespan
startup, or when ``listen()``/``run()`` is called.
"""

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, overload

from trot._internal.asgi import Receive, Scope, Send
from trot.config import AppConfig
from trot.middleware.protocol import ErrorHandler, Handler
from trot.middleware.registry import MiddlewareRegistry
from trot.routing.route import RouteMatch
from trot.routing.router import Router
from trot.routing.table import ANY_METHOD
from trot.server.errors import default_error_handler
from trot.server.handler import handle_request

if TYPE_CHECKING:
    from trot.server.transport import Listener


def _verb(method: str) -> Callable[..., Any]:
    """Build a ``route()`` shortcut bound to one HTTP method."""

    def register(self: "App", pattern: str, *handlers: Handler) -> Any:
        return self.route(method, pattern, *handlers)

    register.__name__ = "all" if method == ANY_METHOD else method.lower()
    register.__doc__ = (
        "Register a route for every HTTP method."
        if method == ANY_METHOD
        else f"Register a ``{method}`` route."
    )
    return register


class App:
    """The trot application.

    Usage::

        app = App()

        def log(request, response, next):
            print(request.method, request.path)
            next()

        app.use(log)

        @app.get("/users/:id")
        def show(request, response, next):
            response.end(f"user {request.params['id']}")

    Thread safety:
        Registration is single-threaded setup work. The freeze transition
        uses a Lock + double-check so exactly one thread freezes the app,
        and any registration afterwards raises ``RuntimeError``.
    """

    __slots__ = (
        "_error_handler",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_router",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._router = Router()
        self._middleware = MiddlewareRegistry()
        self._error_handler: ErrorHandler = error_handler or default_error_handler
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Route registration --

    @overload
    def route(self, method: str, pattern: str) -> Callable[[Handler], Handler]: ...

    @overload
    def route(self, method: str, pattern: str, *handlers: Handler) -> "App": ...

    def route(self, method: str, pattern: str, *handlers: Handler) -> Any:
        """Register *handlers* for *method* + *pattern*.

        With no handlers, returns a decorator that registers the
        decorated function as the route's only handler::

            app.route("GET", "/", index)          # direct, returns the app
            @app.route("POST", "/users")          # decorator
            def create(request, response, next): ...

        ``"*"`` as the method matches every HTTP verb.
        """
        if not handlers:

            def decorator(func: Handler) -> Handler:
                self.route(method, pattern, func)
                return func

            return decorator

        self._check_not_frozen()
        self._router.add(method, pattern, handlers)
        return self

    get = _verb("GET")
    head = _verb("HEAD")
    post = _verb("POST")
    put = _verb("PUT")
    patch = _verb("PATCH")
    delete = _verb("DELETE")
    options = _verb("OPTIONS")
    connect = _verb("CONNECT")
    trace = _verb("TRACE")
    all = _verb(ANY_METHOD)

    # -- Middleware --

    def use(self, path_or_handler: str | Handler, *handlers: Handler) -> "App":
        """Add middleware, globally or under a path prefix.

        ``use(handler)`` and ``use("/", handler)`` run *handler* before
        every route. ``use("/admin", handler)`` runs it only for paths
        under ``/admin`` (unless ``AppConfig.scoped_middleware`` is off).
        """
        self._check_not_frozen()
        self._middleware.use(path_or_handler, *handlers)
        return self

    # -- Error handler --

    def error(self, func: ErrorHandler) -> ErrorHandler:
        """Replace the error handler via decorator.

        The handler is called as ``func(error, request, response)`` for
        every handler failure and may be sync or async.
        """
        self._check_not_frozen()
        self._error_handler = func
        return func

    # -- Introspection --

    @property
    def router(self) -> Router:
        return self._router

    @property
    def middleware(self) -> MiddlewareRegistry:
        return self._middleware

    @property
    def error_handler(self) -> ErrorHandler:
        return self._error_handler

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Resolve *method* + *path* without dispatching."""
        return self._router.match(method, path)

    # -- Server --

    async def listen(self, port: int | None = None, host: str | None = None) -> "Listener":
        """Start serving on *host*:*port* and return once bound.

        Raises ``OSError`` if the address cannot be bound.
        """
        from trot.server.transport import listen

        self._ensure_frozen()
        return await listen(
            self,
            host or self.config.host,
            self.config.port if port is None else port,
            log_level=self.config.log_level,
        )

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve in the foreground until interrupted."""
        from trot.server.transport import run

        self._ensure_frozen()
        run(
            self,
            host or self.config.host,
            self.config.port if port is None else port,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            error_handler=self._error_handler,
            config=self.config,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze on startup and acknowledge both lifespan events."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._router.freeze()
            self._middleware.freeze()
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and the error handler before serving."
            )
            raise RuntimeError(msg)
