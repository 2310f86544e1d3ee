"""Perch CLI — inspect and exercise an app without a server.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — a tree router where handlers build their own sub-routes.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging level for perch.* loggers",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List root-level registrations")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    # -- perch call -------------------------------------------------------
    call_parser = subparsers.add_parser("call", help="Dispatch one request in-process")
    call_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    call_parser.add_argument("method", help="HTTP method (e.g. GET)")
    call_parser.add_argument("path", help="Request path (e.g. /users/42)")
    call_parser.add_argument(
        "--data",
        default=None,
        help="Request body (sent as UTF-8)",
    )
    call_parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        help="Request header as 'Name: value' (repeatable)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "call":
        from perch.cli._call import run_call

        run_call(args)
