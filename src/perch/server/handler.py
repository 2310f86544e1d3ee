"""ASGI handler — translates ASGI scope/messages to perch types.

The only component that touches raw ASGI. Reads the body, builds a
Request, runs the synchronous dispatch (in a worker thread by default),
and sends the Response back through ``send()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import anyio.to_thread

from perch._internal.asgi import Receive, Scope, Send
from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response

if TYPE_CHECKING:
    from perch.app import App

logger = logging.getLogger("perch.server")


class ClientDisconnected(Exception):
    """The client went away before the request body was read."""


async def handle_asgi(app: App, scope: Scope, receive: Receive, send: Send) -> None:
    """Process one ASGI connection scope."""
    if scope["type"] == "lifespan":
        await _handle_lifespan(receive, send)
        return
    if scope["type"] != "http":
        return

    try:
        body = await read_body(receive, app.config.max_content_length)
    except ClientDisconnected:
        logger.debug("Client disconnected before %s %s was read", scope["method"], scope["path"])
        return
    except HTTPError as exc:
        await send_response(app.translate_error(exc, Request.from_asgi(scope)), send)
        return

    request = Request.from_asgi(scope, body)
    if app.config.dispatch_in_thread:
        response = await anyio.to_thread.run_sync(app.dispatch, request)
    else:
        response = app.dispatch(request)
    await send_response(response, send)


async def read_body(receive: Receive, limit: int) -> bytes:
    """Read the full request body, refusing more than *limit* bytes.

    Raises ``HTTPError(413)`` past the limit and ``ClientDisconnected``
    if the client hangs up first.
    """
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            raise ClientDisconnected()
        chunk = message.get("body", b"")
        size += len(chunk)
        if size > limit:
            raise HTTPError(413, "Payload Too Large")
        if chunk:
            chunks.append(chunk)
        if not message.get("more_body", False):
            return b"".join(chunks)


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a perch Response into ASGI send() calls."""
    body = response.body_bytes if _body_allowed(response.status) else b""

    raw_headers: list[tuple[bytes, bytes]] = []
    if body:
        raw_headers.append((b"content-type", response.content_type.encode("latin-1")))
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    """Acknowledge startup and shutdown; perch has no lifecycle hooks."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
