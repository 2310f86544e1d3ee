"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, no
string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, max_content_length=64 * 1024)
    """

    # Render tracebacks into 500 response bodies
    debug: bool = False

    # Content type for text returned straight from a handler
    content_type: str = "text/plain; charset=utf-8"

    # ASGI transport
    max_content_length: int = 1024 * 1024  # 1 MiB
    dispatch_in_thread: bool = True  # run sync dispatch off the event loop
