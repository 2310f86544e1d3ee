"""Return-value normalization — maps handler results to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

import inspect
from collections.abc import Mapping
from typing import Any

from perch.errors import ConfigurationError
from perch.http.response import Response

DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


def negotiate(value: Any, *, content_type: str = DEFAULT_CONTENT_TYPE) -> Response | None:
    """Convert a handler's return value to a Response.

    Dispatch order:

    1. ``None``                -> ``None`` (keep walking)
    2. ``Response``            -> pass through
    3. ``str``                 -> 200 with the text as body
    4. ``int``                 -> empty body, the int as status
    5. ``(body, int)``         -> negotiate body, override status
    6. ``(body, int, dict)``   -> negotiate body, override status + headers

    Anything else raises ``ConfigurationError``.
    """
    match value:
        case None:
            return None
        case Response():
            return value
        case bool():
            # bool is an int subclass; True is not a status code
            msg = f"Handler returned a bool ({value!r}); return a status code or a Response."
            raise ConfigurationError(msg)
        case str():
            return Response(body=value, content_type=content_type)
        case int():
            return Response(status=value, content_type=content_type)
        case (body, int() as status):
            return _from_tuple(body, status, None, content_type)
        case (body, int() as status, Mapping() as headers):
            return _from_tuple(body, status, headers, content_type)
        case _:
            hint = ""
            if inspect.iscoroutine(value):
                value.close()
                hint = " (async handlers are not supported)"
            msg = f"Handler returned unsupported type {type(value).__name__}{hint}."
            raise ConfigurationError(msg)


def _from_tuple(
    body: Any,
    status: int,
    headers: Mapping[str, str] | None,
    content_type: str,
) -> Response:
    response = negotiate(body, content_type=content_type) or Response(content_type=content_type)
    response = response.with_status(status)
    if headers:
        response = response.with_headers(headers)
    return response
