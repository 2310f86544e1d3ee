"""Perch application class.

The App is the root scope: registrations made on it land in the root
node, which lives as long as the App. Nested nodes are built by
handlers during each dispatch.
"""

from collections.abc import Callable
from typing import Any

from perch._internal.asgi import Receive, Scope as ASGIScope, Send
from perch._internal.invoke import call_handler
from perch._internal.types import ErrorHandler, Handler
from perch.config import AppConfig
from perch.errors import ConfigurationError
from perch.http.request import Request
from perch.http.response import Response
from perch.routing.router import RouteNode, Router
from perch.scope import Scope
from perch.server.errors import respond_to_error
from perch.server.negotiation import negotiate


class App(Scope):
    """The perch application.

    ``dispatch()`` always returns a ``Response``. ``dispatch_raw()`` is
    the same walk without the fault translator, for handlers that want
    a nested request's faults to short-circuit their own request.

    Thread safety:
        Each dispatch owns its traversal cursor, so concurrent dispatches
        never share position. Registrations on the root node from
        inside handlers are plain dict/list writes; apps that do this
        while serving concurrently should expect last-writer-wins.
    """

    __slots__ = ("_error_handlers", "_providers", "_router", "config")

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._router = Router()
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._providers: dict[type, Callable[..., Any]] = {}
        super().__init__(self, self._router.root)

    @property
    def router(self) -> Router:
        return self._router

    # -- Error handlers --

    def error(self, code_or_exception: int | type[Exception]) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler for a status code or exception type.

        The handler may accept ``()``, ``(request)`` or ``(request, exc)``::

            @app.error(404)
            def not_found(request):
                return "Nothing here"
        """
        if not isinstance(code_or_exception, int) and not (
            isinstance(code_or_exception, type) and issubclass(code_or_exception, Exception)
        ):
            msg = f"error() expects a status code or an exception type, got {code_or_exception!r}"
            raise ConfigurationError(msg)

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Service injection --

    def provide(self, annotation: type, factory: Callable[..., Any]) -> None:
        """Register a provider factory for dependency injection.

        When a handler parameter's type annotation matches *annotation*,
        perch calls *factory* (with no arguments) and injects the result::

            app.provide(UserStore, get_store)

            @app.get
            def index(store: UserStore): ...
        """
        self._providers[annotation] = factory

    # -- Dispatch --

    def dispatch(self, request: Request) -> Response:
        """Run *request* through the route tree. Always returns a Response.

        Any exception from the walk or a handler is translated: an
        ``HTTPError`` keeps its status, anything else becomes a 500.
        """
        try:
            return self.dispatch_raw(request)
        except Exception as exc:
            return self.translate_error(exc, request)

    def translate_error(self, exc: Exception, request: Request) -> Response:
        """Turn *exc* into a Response using this app's error handlers."""
        return respond_to_error(
            exc,
            request,
            self._error_handlers,
            debug=self.config.debug,
            content_type=self.config.content_type,
        )

    def dispatch_raw(self, request: Request) -> Response:
        """Run *request* through the route tree, letting faults propagate.

        Returns a Response or raises; ``HTTPError`` subclasses signal
        404/405/501 and handler-raised statuses.
        """
        return self._router.walk(request, self._invoke)

    def _invoke(self, handler: Handler, node: RouteNode, request: Request, *segment: str) -> Response | None:
        """Call one handler against *node* and normalize what it returns."""
        result = call_handler(
            handler,
            Scope(self, node),
            request,
            *segment,
            providers=self._providers,
        )
        return negotiate(result, content_type=self.config.content_type)

    # -- ASGI entry --

    async def __call__(self, scope: ASGIScope, receive: Receive, send: Send) -> None:
        """ASGI 3 entry point."""
        from perch.server.handler import handle_asgi

        await handle_asgi(self, scope, receive, send)
