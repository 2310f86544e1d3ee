"""Route tree and the segment-by-segment dispatcher walk.

The root node lives as long as the App. Every other node is created
fresh when a path or predicate handler is selected during a dispatch,
and the handler fills it with its own sub-routes::

    @app.path("users")
    def users(app):
        @app.param("int")
        def user(app, user_id: int):
            @app.get
            def show():
                return f"user {user_id}"

Traversal state lives in a ``DispatchCursor`` owned by one ``walk()``
call, so handlers may dispatch again mid-walk without disturbing it.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from perch._internal.types import Handler, Predicate
from perch.errors import MethodNotAllowed, NoResponse, NotFound
from perch.http.request import Request
from perch.http.response import Response

logger = logging.getLogger("perch.routing")

# (handler, node the handler registers into, request, *segment) -> Response | None
StepInvoker = Callable[..., Response | None]


def split_path(path: str) -> tuple[str, ...]:
    """Split a request path into its non-empty segments.

    Examples::

        "/"              -> ()
        "/users/42"      -> ("users", "42")
        "//users///42/"  -> ("users", "42")
    """
    return tuple(part for part in path.split("/") if part)


def split_format(segment: str) -> tuple[str, str] | None:
    """Split ``"report.json"`` into ``("report", "json")`` on the first dot.

    Returns ``None`` when the segment has no extension.
    """
    base, dot, extension = segment.partition(".")
    if not dot:
        return None
    return base, extension


@dataclass(frozen=True, slots=True)
class ParamEntry:
    """A (predicate, handler) pair; earlier entries win."""

    predicate: Predicate
    handler: Handler


class RouteNode:
    """One level of the route tree.

    Registration overwrites by key; predicate entries keep insertion
    order, which is their priority order.
    """

    __slots__ = ("formats", "methods", "params", "paths")

    def __init__(self) -> None:
        # Literal segment -> handler
        self.paths: dict[str, Handler] = {}
        # Predicate entries, scanned in order
        self.params: list[ParamEntry] = []
        # HTTP method -> handler
        self.methods: dict[str, Handler] = {}
        # Format name -> handler (stored, not yet selected by the walk)
        self.formats: dict[str, Handler] = {}

    def __repr__(self) -> str:
        return (
            f"RouteNode(paths={list(self.paths)!r}, params={len(self.params)}, "
            f"methods={list(self.methods)!r}, formats={list(self.formats)!r})"
        )

    # -- Registration --

    def add_path(self, segment: str, handler: Handler) -> None:
        self.paths[segment] = handler

    def add_param(self, predicate: Predicate, handler: Handler) -> None:
        self.params.append(ParamEntry(predicate, handler))

    def add_method(self, method: str, handler: Handler) -> None:
        self.methods[method.upper()] = handler

    def add_format(self, name: str, handler: Handler) -> None:
        self.formats[name] = handler

    # -- Lookup --

    def match_param(self, segment: str) -> Handler | None:
        """Return the handler of the first predicate accepting *segment*."""
        for entry in self.params:
            if entry.predicate(segment):
                return entry.handler
        return None

    @property
    def is_empty(self) -> bool:
        return not (self.paths or self.params or self.methods or self.formats)


@dataclass(slots=True)
class DispatchCursor:
    """Where one walk currently stands: node plus position in the segments."""

    node: RouteNode
    segments: tuple[str, ...]
    index: int = 0

    @property
    def done(self) -> bool:
        return self.index >= len(self.segments)

    @property
    def segment(self) -> str:
        return self.segments[self.index]

    @property
    def is_last(self) -> bool:
        return self.index == len(self.segments) - 1

    def advance(self, node: RouteNode) -> None:
        self.node = node
        self.index += 1


class Router:
    """Owns the root node and walks requests through the tree.

    Usage::

        router = Router()
        router.root.add_method("GET", index)
        response = router.walk(Request("GET", "/"), invoke_step)

    ``walk()`` returns a ``Response`` or raises an ``HTTPError``; turning
    faults into responses is the App's job.
    """

    __slots__ = ("root",)

    def __init__(self) -> None:
        self.root = RouteNode()

    def walk(self, request: Request, call: StepInvoker) -> Response:
        """Dispatch *request*, calling handlers through *call*.

        Raises ``NotFound`` when a non-final segment has no match (or the
        final one has no match and no extension), ``MethodNotAllowed``
        when the terminal node lacks the request method, and
        ``NoResponse`` when the method handler returns nothing.
        """
        cursor = DispatchCursor(self.root, split_path(request.path))

        while not cursor.done:
            segment = cursor.segment
            node = cursor.node

            if segment in node.paths:
                handler, args = node.paths[segment], ()
            else:
                handler, args = node.match_param(segment), (segment,)

            if handler is not None:
                child = RouteNode()
                response = call(handler, child, request, *args)
                if response is not None:
                    return response
                cursor.advance(child)
                continue

            if not cursor.is_last:
                logger.debug("404 %s %s — no match for %r", request.method, request.path, segment)
                raise NotFound()

            fmt = split_format(segment)
            if fmt is None:
                logger.debug("404 %s %s — no match for %r", request.method, request.path, segment)
                raise NotFound()
            logger.debug("Format %r detected on %r; resolving method on current node", fmt[1], fmt[0])
            cursor.advance(node)

        node = cursor.node
        method = request.method.upper()
        handler = node.methods.get(method)
        if handler is None:
            logger.debug("405 %s %s — allowed: %s", method, request.path, list(node.methods))
            raise MethodNotAllowed(frozenset(node.methods))

        response = call(handler, node, request)
        if response is None:
            raise NoResponse()
        return response
