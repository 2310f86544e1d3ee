"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Header names are unique:
setting a header that already exists replaces it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace


@dataclass(frozen=True, slots=True)
class Response:
    """The single response type every dispatch produces.

    ``body`` is ``None`` for empty responses (404/405/500 defaults, bare
    status codes returned by handlers). ``exception`` keeps the fault a
    response was translated from so the transport can log it; it takes
    no part in equality.
    """

    body: str | None = None
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()
    content_type: str = "text/plain; charset=utf-8"
    exception: BaseException | None = field(default=None, compare=False, repr=False)

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_body(self, body: str | None) -> Response:
        """Return a new Response with a different body."""
        return replace(self, body=body)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with *name* set to *value*.

        An existing header with the same name (case-insensitive) is
        replaced, keeping its position.
        """
        lowered = name.lower()
        headers: list[tuple[str, str]] = []
        replaced = False
        for existing, old in self.headers:
            if existing.lower() == lowered:
                if not replaced:
                    headers.append((name, value))
                    replaced = True
                continue
            headers.append((existing, old))
        if not replaced:
            headers.append((name, value))
        return replace(self, headers=tuple(headers))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with every header in *headers* set."""
        response = self
        for name, value in headers.items():
            response = response.with_header(name, value)
        return response

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    def with_exception(self, exception: BaseException | None) -> Response:
        """Return a new Response carrying *exception* for diagnostics."""
        return replace(self, exception=exception)

    # -- Accessors --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for existing, value in self.headers:
            if existing.lower() == lowered:
                return value
        return default

    @property
    def header_map(self) -> dict[str, str]:
        """Headers as a plain dict."""
        return dict(self.headers)

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes (empty when there is no body)."""
        if self.body is None:
            return b""
        return self.body.encode("utf-8")

    @property
    def text(self) -> str:
        """Body as string (empty when there is no body)."""
        return self.body or ""

    @property
    def ok(self) -> bool:
        """True for 1xx-3xx statuses."""
        return self.status < 400
