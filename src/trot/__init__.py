"""Trot — a small route compiler, matcher and dispatch pipeline for ASGI.

Patterns use ``:name`` for parameters, ``:name?`` for an optional final
parameter and ``*`` for a trailing wildcard. Every handler, middleware
included, shares one shape: ``(request, response, next)``.

Basic usage::

    from trot import App

    app = App()

    @app.get("/users/:id")
    def show(request, response, next):
        response.end(f"user {request.params['id']}")

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "AmbiguousRoute",
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "Handler",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "Router",
    "TrotError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import trot`` fast while providing a clean top-level API.
    """
    if name == "App":
        from trot.app import App

        return App

    if name == "AppConfig":
        from trot.config import AppConfig

        return AppConfig

    if name == "Request":
        from trot.http.request import Request

        return Request

    if name == "Response":
        from trot.http.response import Response

        return Response

    if name == "Router":
        from trot.routing.router import Router

        return Router

    if name in ("Handler", "Next"):
        from trot.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("AmbiguousRoute", "ConfigurationError", "HTTPError", "NotFound", "TrotError"):
        from trot import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
