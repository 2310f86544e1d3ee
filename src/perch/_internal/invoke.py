"""Invoke helpers — call a route handler with arguments bound by name.

Handlers declare what they need and get nothing else::

    def show(request): ...                  # the request
    def users(app): ...                     # the Scope to register sub-routes on
    def user(app, request, user_id: int):   # + the matched segment, converted
    def report(store: ReportStore): ...     # a provided service

Binding order per parameter:
1. ``request`` (by name or ``Request`` annotation)
2. ``app`` / ``scope`` (by name or ``Scope`` annotation)
3. Service providers (by type annotation via ``app.provide()``)
4. The matched segment, for predicate handlers only (first parameter left)
"""

import inspect
from collections.abc import Callable
from typing import Any

from perch.http.request import Request
from perch.routing.params import parse_boolean
from perch.scope import Scope

_MISSING: Any = object()

_CONTEXT_NAMES = frozenset({"app", "scope"})


def convert_segment(value: str, annotation: Any) -> Any:
    """Convert a matched segment to the handler's annotated type.

    ``bool`` goes through the boolean matcher table; other plain types
    are called with the string. Failed conversion keeps the string.
    """
    if annotation is inspect.Parameter.empty or annotation is str:
        return value
    if annotation is bool:
        parsed = parse_boolean(value)
        return value if parsed is None else parsed
    if isinstance(annotation, type):
        try:
            return annotation(value)
        except (ValueError, TypeError):
            return value
    return value


def _is_scope_annotation(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, Scope)


def build_arguments(
    handler: Callable[..., Any],
    scope: Scope,
    request: Request,
    segment: str = _MISSING,
    providers: dict[type, Callable[..., Any]] | None = None,
) -> tuple[list[Any], dict[str, Any]]:
    """Inspect *handler*'s signature and build ``(args, kwargs)`` for it.

    Positional-only parameters go into ``args``; everything else is
    passed by keyword. Parameters nothing binds to are left out so their
    defaults apply (or the call fails loudly if they have none).
    """
    sig = inspect.signature(handler, eval_str=True)
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    pending_segment = segment is not _MISSING

    for name, param in sig.parameters.items():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        annotation = param.annotation
        if name == "request" or annotation is Request:
            value = request
        elif name in _CONTEXT_NAMES or _is_scope_annotation(annotation):
            value = scope
        elif (
            providers
            and annotation is not inspect.Parameter.empty
            and annotation in providers
        ):
            value = providers[annotation]()
        elif pending_segment:
            value = convert_segment(segment, annotation)
            pending_segment = False
        else:
            continue

        if param.kind is inspect.Parameter.POSITIONAL_ONLY:
            args.append(value)
        else:
            kwargs[name] = value

    return args, kwargs


def call_handler(
    handler: Callable[..., Any],
    scope: Scope,
    request: Request,
    *segment: str,
    providers: dict[type, Callable[..., Any]] | None = None,
) -> Any:
    """Call *handler* with bound arguments and return its raw result."""
    args, kwargs = build_arguments(
        handler,
        scope,
        request,
        segment[0] if segment else _MISSING,
        providers,
    )
    return handler(*args, **kwargs)
