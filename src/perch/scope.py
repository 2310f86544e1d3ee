"""Registration API bound to one route node.

A ``Scope`` is what handlers receive as ``app``: the App plus the node
their registrations land in. The App itself is the scope of the root
node, so top-level setup and nested setup read the same::

    app = App()

    @app.path("users")
    def users(app):
        @app.get
        def index():
            return "all users"

        @app.param("int")
        def user(app, user_id: int):
            @app.get
            def show():
                return f"user {user_id}"

Registration overwrites by key. Predicates are scanned in the order
they were registered.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from perch._internal.types import Handler, Predicate
from perch.errors import ConfigurationError
from perch.routing.params import resolve_predicate
from perch.routing.router import RouteNode

if TYPE_CHECKING:
    from perch.app import App
    from perch.http.request import Request
    from perch.http.response import Response


def _check_handler(handler: Any) -> None:
    if not callable(handler):
        msg = f"Route handler must be callable, got {type(handler).__name__}"
        raise ConfigurationError(msg)


class Scope:
    """Registration and dispatch against a single ``RouteNode``."""

    __slots__ = ("_app", "_node")

    def __init__(self, app: App, node: RouteNode) -> None:
        self._app = app
        self._node = node

    @property
    def app(self) -> App:
        """The application this scope belongs to."""
        return self._app

    @property
    def node(self) -> RouteNode:
        """The node registrations land in."""
        return self._node

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._node!r})"

    # -- Registration --

    def path(self, segment: str, handler: Handler | None = None) -> Any:
        """Register *handler* for the literal segment *segment*.

        Without *handler*, returns a decorator.
        """
        if "/" in segment:
            msg = f"Path segment {segment!r} must not contain '/'; nest path() calls instead."
            raise ConfigurationError(msg)
        return self._register(self._node.add_path, segment, handler)

    def resource(self, segment: str, handler: Handler | None = None) -> Any:
        """Alias of ``path()`` for REST-style resources."""
        return self.path(segment, handler)

    def param(self, predicate: Predicate | str, handler: Handler | None = None) -> Any:
        """Register *handler* for segments accepted by *predicate*.

        *predicate* is a ``(str) -> bool`` callable or a matcher name
        from ``perch.routing.params.MATCHERS`` (``"int"``, ``"slug"``, ...).
        Predicates registered earlier take priority; literal paths
        always beat predicates.
        """
        return self._register(self._node.add_param, resolve_predicate(predicate), handler)

    def format(self, name: str, handler: Handler | None = None) -> Any:
        """Register *handler* for the output format *name*.

        Returns the scope itself when *handler* is given, so calls chain::

            app.format("json", as_json).format("html", as_html)
        """
        if handler is None:
            return self._register(self._node.add_format, name, None)
        self._register(self._node.add_format, name, handler)
        return self

    def method(self, name: str, handler: Handler | None = None) -> Any:
        """Register *handler* for HTTP method *name* on this node."""
        return self._register(self._node.add_method, name.upper(), handler)

    def get(self, handler: Handler) -> Handler:
        return self.method("GET", handler)

    def head(self, handler: Handler) -> Handler:
        return self.method("HEAD", handler)

    def post(self, handler: Handler) -> Handler:
        return self.method("POST", handler)

    def put(self, handler: Handler) -> Handler:
        return self.method("PUT", handler)

    def delete(self, handler: Handler) -> Handler:
        return self.method("DELETE", handler)

    def patch(self, handler: Handler) -> Handler:
        return self.method("PATCH", handler)

    def options(self, handler: Handler) -> Handler:
        return self.method("OPTIONS", handler)

    # -- Dispatch --

    def dispatch(self, request: Request) -> Response:
        """Dispatch *request* from the root. Never raises."""
        return self._app.dispatch(request)

    def dispatch_raw(self, request: Request) -> Response:
        """Dispatch *request* from the root, letting faults propagate."""
        return self._app.dispatch_raw(request)

    # -- Internals --

    @staticmethod
    def _register(add: Callable[[Any, Handler], None], key: Any, handler: Handler | None) -> Any:
        if handler is None:

            def decorator(func: Handler) -> Handler:
                _check_handler(func)
                add(key, func)
                return func

            return decorator

        _check_handler(handler)
        add(key, handler)
        return handler
