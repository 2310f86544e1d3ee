"""``perch call`` — dispatch a single request and print the response."""

import argparse
import sys

from perch.cli._resolve import resolve_app
from perch.http.request import Request


def parse_header(raw: str) -> tuple[str, str]:
    """Parse ``"Name: value"`` into a lower-cased name and a value."""
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        msg = f"Malformed header {raw!r}; expected 'Name: value'"
        raise ValueError(msg)
    return name.strip().lower(), value.strip()


def run_call(args: argparse.Namespace) -> None:
    """Dispatch ``METHOD PATH`` against the app and print the response.

    Exits 0 for statuses below 400, 1 otherwise.
    """
    try:
        app = resolve_app(args.app)
        headers = dict(parse_header(raw) for raw in args.header)
    except (ModuleNotFoundError, AttributeError, TypeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    path, _, query = args.path.partition("?")
    request = Request(
        method=args.method.upper(),
        path=path,
        query_string=query,
        headers=headers,
        body=(args.data or "").encode("utf-8"),
    )
    response = app.dispatch(request)

    print(f"{response.status}")
    for name, value in response.headers:
        print(f"{name}: {value}")
    if response.body is not None:
        print()
        print(response.body)
    if response.exception is not None and response.status >= 500:
        print(f"({type(response.exception).__name__}: {response.exception})", file=sys.stderr)

    if not response.ok:
        raise SystemExit(1)
