"""Immutable HTTP request.

Frozen metadata plus an already-read body. The dispatcher consumes a
request and never mutates it; nested dispatch derives new requests
with ``with_path()``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from perch._internal.asgi import Scope


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Only ``method`` and ``path`` matter for routing. ``data`` is a free
    mapping for whatever the transport or a parent handler wants to
    attach (a session, a parsed body, the outer request, ...).
    """

    method: str
    path: str = "/"
    query_string: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    data: Mapping[str, Any] = field(default_factory=dict)

    # -- Computed properties --

    @property
    def url(self) -> str:
        """Full request URL (path + query string)."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower(), default)

    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    # -- Derivation --

    def with_path(self, path: str, *, method: str | None = None) -> Request:
        """Return a sub-request for *path*, keeping headers, body and data."""
        return replace(self, path=path, method=method or self.method, query_string="")

    def with_data(self, **data: Any) -> Request:
        """Return a copy with extra attached data."""
        return replace(self, data={**self.data, **data})

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, body: bytes = b"") -> Request:
        """Create a Request from an ASGI HTTP scope and its read body."""
        headers: dict[str, str] = {}
        for name, value in scope.get("headers", ()):
            key = name.decode("latin-1").lower()
            # Repeated headers fold into one comma-separated value
            if key in headers:
                headers[key] = f"{headers[key]}, {value.decode('latin-1')}"
            else:
                headers[key] = value.decode("latin-1")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            query_string=scope.get("query_string", b"").decode("latin-1"),
            headers=headers,
            body=body,
        )
