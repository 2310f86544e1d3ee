"""``perch routes`` — list what is registered on the root node.

Nested nodes only exist while a request walks through them, so the
listing stops at the first level.
"""

import argparse
import sys

from perch.cli._resolve import resolve_app
from perch.routing.router import RouteNode


def _name(obj: object) -> str:
    return getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or repr(obj)


def describe_node(node: RouteNode) -> list[tuple[str, str, str]]:
    """Return ``(kind, key, handler)`` rows for one node, in priority order."""
    rows: list[tuple[str, str, str]] = []
    for segment, handler in node.paths.items():
        rows.append(("path", f"/{segment}", _name(handler)))
    for position, entry in enumerate(node.params, start=1):
        rows.append(("param", f"#{position} {_name(entry.predicate)}", _name(entry.handler)))
    for method, handler in node.methods.items():
        rows.append(("method", method, _name(handler)))
    for fmt, handler in node.formats.items():
        rows.append(("format", fmt, _name(handler)))
    return rows


def run_routes(args: argparse.Namespace) -> None:
    """Print a KIND / KEY / HANDLER table for the root node."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = describe_node(app.router.root)
    if not rows:
        print("No routes registered.")
        return

    max_kind = max(max(len(r[0]) for r in rows), 4)  # "KIND" header
    max_key = max(max(len(r[1]) for r in rows), 3)  # "KEY" header

    fmt = f"{{:<{max_kind}}}  {{:<{max_key}}}  {{}}"
    print(fmt.format("KIND", "KEY", "HANDLER"))
    sep_len = max_kind + max_key + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for kind, key, handler in rows:
        print(fmt.format(kind, key, handler))
