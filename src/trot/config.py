"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, log_level="debug")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Body written when no route matches (bypasses the error handler)
    not_found_body: str = "404"

    # Apply path-scoped middleware registered via ``app.use("/prefix", ...)``.
    # False records them without ever running them.
    scoped_middleware: bool = True
