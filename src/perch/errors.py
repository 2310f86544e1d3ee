"""Perch exception hierarchy.

Shared across the router, App, handlers, and the fault translator so
every module raises and catches the same types.
"""

from collections.abc import Mapping
from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when the registration or handler contract is misused.

    Unknown matcher names, non-callable handlers, and handler return
    values that cannot become a ``Response`` all end up here. During
    dispatch the fault translator turns it into a 500.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raise it from any handler to short-circuit dispatch::

        @app.get
        def admin(request):
            raise HTTPError(403, "nope")

    ``App.dispatch`` catches it and answers with exactly this status,
    using *detail* as the body when it is non-empty.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        # Accept a mapping as well as pairs; stored as a tuple of pairs
        if isinstance(self.headers, Mapping):
            object.__setattr__(self, "headers", tuple(self.headers.items()))
        else:
            object.__setattr__(self, "headers", tuple(self.headers))

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — a segment matched neither a literal path nor a predicate."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — the path resolved but not for this HTTP method.

    Carries an ``Allow`` header listing the methods registered on the
    terminal node.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail,
            headers=(("Allow", allow_value),),
        )


class NoResponse(HTTPError):  # noqa: N818
    """501 — a method handler ran but returned nothing.

    This is a server-side omission, not a client error.
    """

    def __init__(self, detail: str = "") -> None:
        super().__init__(status=501, detail=detail)
