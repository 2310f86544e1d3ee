"""Perch — a tree router where handlers build their own sub-routes.

Each matched path or parameter handler receives a fresh scope and
registers what lies below it; method handlers answer at the end of
the path.

Basic usage::

    from perch import App, Request

    app = App()

    @app.path("users")
    def users(app):
        @app.param("int")
        def user(app, user_id: int):
            @app.get
            def show():
                return f"user {user_id}"

    app.dispatch(Request("GET", "/users/42")).body  # "user 42"

``App`` is also an ASGI application.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "NoResponse",
    "NotFound",
    "PerchError",
    "Request",
    "Response",
    "Scope",
    "param_boolean",
    "param_email",
    "param_float",
    "param_int",
    "param_slug",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "App":
        from perch.app import App

        return App

    if name == "AppConfig":
        from perch.config import AppConfig

        return AppConfig

    if name == "Scope":
        from perch.scope import Scope

        return Scope

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name in ("param_boolean", "param_email", "param_float", "param_int", "param_slug"):
        from perch.routing import params as _params

        return getattr(_params, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NoResponse",
        "NotFound",
        "PerchError",
    ):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
