"""Parameter predicates for path segments.

Each matcher is exposed as a factory returning a ``(str) -> bool``
predicate, so it can be handed straight to ``param()``::

    @app.param(param_int())
    def user(app, request, user_id: int): ...

Matchers are also registered by name in ``MATCHERS`` so ``param("int")``
works as a shorthand.
"""

import re
from collections.abc import Callable

from perch._internal.types import Predicate
from perch.errors import ConfigurationError

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# Contains-check: one allowed character anywhere is enough
_SLUG_RE = re.compile(r"[a-zA-Z0-9_-]")

# Structure only, not deliverability
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9-]+(?:\.[a-zA-Z0-9-]+)*\.[a-zA-Z]{2,}")

_TRUE = frozenset({"1", "true", "on", "yes"})
_FALSE = frozenset({"0", "false", "off", "no"})


def parse_boolean(value: str) -> bool | None:
    """Map a segment to ``True``/``False``, or ``None`` if it is neither.

    True = "1", "true", "on", "yes"
    False = "0", "false", "off", "no"
    """
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return None


def param_int() -> Predicate:
    """Base-10 integer, optionally signed."""

    def check(value: str) -> bool:
        return _INT_RE.fullmatch(value) is not None

    return check


def param_float() -> Predicate:
    """Floating-point literal (``1``, ``-2.5``, ``.5``, ``1e3``)."""

    def check(value: str) -> bool:
        return _FLOAT_RE.fullmatch(value) is not None

    return check


def param_boolean() -> Predicate:
    """Any spelling from the true set, case-insensitive.

    The false set (``0 false off no``) does not match; ``parse_boolean``
    still converts it for handlers that read the segment themselves.
    """

    def check(value: str) -> bool:
        return parse_boolean(value) is True

    return check


def param_slug() -> Predicate:
    """At least one character from ``[A-Za-z0-9_-]``.

    This is a contains check, not a full match: ``"a b!"`` is accepted.
    """

    def check(value: str) -> bool:
        return _SLUG_RE.search(value) is not None

    return check


def param_email() -> Predicate:
    """Syntactically valid email address."""

    def check(value: str) -> bool:
        return _EMAIL_RE.fullmatch(value) is not None

    return check


MATCHERS: dict[str, Callable[[], Predicate]] = {
    "int": param_int,
    "float": param_float,
    "boolean": param_boolean,
    "slug": param_slug,
    "email": param_email,
}


def resolve_predicate(predicate: Predicate | str) -> Predicate:
    """Return *predicate*, looking it up in ``MATCHERS`` when given a name.

    Raises ``ConfigurationError`` for unknown names and non-callables.
    """
    if isinstance(predicate, str):
        try:
            return MATCHERS[predicate]()
        except KeyError:
            known = ", ".join(sorted(MATCHERS))
            msg = f"Unknown parameter matcher {predicate!r}. Known matchers: {known}"
            raise ConfigurationError(msg) from None
    if not callable(predicate):
        msg = f"Parameter predicate must be callable, got {type(predicate).__name__}"
        raise ConfigurationError(msg)
    return predicate
