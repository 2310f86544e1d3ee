"""Fault translation — every exception raised during dispatch becomes a Response.

``HTTPError`` keeps its status, detail and headers. Anything else is a
500. Either way the original exception rides along on
``Response.exception``. Nothing in here raises.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any

from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.server.negotiation import DEFAULT_CONTENT_TYPE, negotiate

logger = logging.getLogger("perch.server")


def http_error_response(exc: HTTPError) -> Response:
    """Default translation of an ``HTTPError``."""
    response = Response(body=exc.detail or None, status=exc.status, exception=exc)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def internal_error_response(exc: BaseException, *, debug: bool = False) -> Response:
    """Default translation of an unexpected exception: 500, no body.

    With *debug* the formatted traceback becomes the body.
    """
    body = "".join(traceback.format_exception(exc)) if debug else None
    return Response(body=body, status=500, exception=exc)


def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    *,
    content_type: str = DEFAULT_CONTENT_TYPE,
) -> Response | None:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    return negotiate(result, content_type=content_type)


def _default_response(exc: Exception, *, debug: bool) -> Response:
    if isinstance(exc, HTTPError):
        try:
            return http_error_response(exc)
        except Exception:
            logger.exception("Could not build a response for %r", exc)
    return internal_error_response(exc, debug=debug)


def respond_to_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]] | None = None,
    *,
    debug: bool = False,
    content_type: str = DEFAULT_CONTENT_TYPE,
) -> Response:
    """Map any exception to a Response. Total: never raises.

    A registered handler is looked up by exact exception type, then by
    status (500 for non-HTTP errors). Its result keeps the fault's status
    unless it chose its own; if it raises or returns nothing, the
    default translation is used. Text returned by a handler gets
    *content_type*.
    """
    if isinstance(exc, HTTPError):
        logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    else:
        logger.exception("500 %s %s", request.method, request.path, exc_info=exc)
    default = _default_response(exc, debug=debug)
    status = default.status

    handlers = error_handlers or {}
    handler = handlers.get(type(exc)) or handlers.get(status)
    if handler is None:
        return default

    try:
        response = call_error_handler(handler, request, exc, content_type=content_type)
    except Exception:
        logger.exception("Error handler %r failed for %d %s", handler, status, request.path)
        return default

    if response is None:
        return default
    if response.status == 200:
        response = response.with_status(status)
    if response.exception is None:
        response = response.with_exception(exc)
    return response
