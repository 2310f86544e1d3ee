"""Shared type aliases used across perch modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: user-defined function, arguments bound by signature
Handler: TypeAlias = Callable[..., Any]

# Parameter predicate: accepts or rejects one path segment
Predicate: TypeAlias = Callable[[str], bool]

# Error handler: receives (request, error?) and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]
