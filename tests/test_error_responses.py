"""Tests for perch.server.errors — fault translation is total."""

import logging

import pytest

from perch.errors import HTTPError, MethodNotAllowed, NotFound
from perch.http.request import Request
from perch.http.response import Response
from perch.server.errors import (
    call_error_handler,
    http_error_response,
    internal_error_response,
    respond_to_error,
)

REQUEST = Request("GET", "/things")


class TestDefaults:
    def test_http_error_with_detail(self) -> None:
        exc = HTTPError(403, "nope")
        response = http_error_response(exc)
        assert response.status == 403
        assert response.body == "nope"
        assert response.exception is exc

    def test_http_error_without_detail_has_no_body(self) -> None:
        assert http_error_response(NotFound()).body is None

    def test_http_error_headers_copied(self) -> None:
        response = http_error_response(MethodNotAllowed(frozenset({"PUT", "GET"})))
        assert response.header("Allow") == "GET, PUT"

    def test_internal_error(self) -> None:
        exc = RuntimeError("boom")
        response = internal_error_response(exc)
        assert response.status == 500
        assert response.body is None
        assert response.exception is exc

    def test_internal_error_debug(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            response = internal_error_response(exc, debug=True)
        assert "Traceback" in response.text
        assert "RuntimeError: boom" in response.text


class TestRespondToError:
    def test_http_error(self) -> None:
        response = respond_to_error(HTTPError(403, "nope"), REQUEST)
        assert (response.status, response.body) == (403, "nope")

    def test_unexpected_error(self) -> None:
        response = respond_to_error(ValueError("bad"), REQUEST)
        assert (response.status, response.body) == (500, None)

    def test_logs_unexpected_with_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="perch.server"):
            respond_to_error(ValueError("bad"), REQUEST)
        assert "500 GET /things" in caplog.text
        assert caplog.records[0].exc_info is not None

    def test_http_error_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="perch.server"):
            respond_to_error(HTTPError(403, "nope"), REQUEST)
        assert caplog.records[0].levelno == logging.DEBUG

    def test_type_handler_wins_over_status(self) -> None:
        handlers = {NotFound: lambda: "by type", 404: lambda: "by status"}
        assert respond_to_error(NotFound(), REQUEST, handlers).body == "by type"

    def test_handler_keeps_own_status(self) -> None:
        handlers = {404: lambda: Response("moved", 301)}
        assert respond_to_error(NotFound(), REQUEST, handlers).status == 301

    def test_handler_failure_falls_back(self) -> None:
        def broken(request, exc):
            raise RuntimeError("handler bug")

        response = respond_to_error(HTTPError(403, "nope"), REQUEST, {403: broken})
        assert (response.status, response.body) == (403, "nope")

    def test_handler_bad_return_falls_back(self) -> None:
        response = respond_to_error(ValueError("bad"), REQUEST, {500: lambda: object()})
        assert (response.status, response.body) == (500, None)

    def test_unbuildable_http_error_falls_back_to_500(self) -> None:
        exc = HTTPError(400, headers=(("X-Broken",),))
        response = respond_to_error(exc, REQUEST)
        assert (response.status, response.body) == (500, None)
        assert response.exception is exc

    def test_handler_text_uses_content_type(self) -> None:
        handlers = {404: lambda: "<p>gone</p>"}
        response = respond_to_error(
            NotFound(), REQUEST, handlers, content_type="text/html; charset=utf-8"
        )
        assert response.content_type == "text/html; charset=utf-8"


class TestCallErrorHandler:
    def test_zero_args(self) -> None:
        assert call_error_handler(lambda: "x", REQUEST, ValueError()) == Response("x")

    def test_request_only(self) -> None:
        assert call_error_handler(lambda r: r.path, REQUEST, ValueError()) == Response("/things")

    def test_request_and_exception(self) -> None:
        response = call_error_handler(lambda r, e: str(e), REQUEST, ValueError("why"))
        assert response == Response("why")
