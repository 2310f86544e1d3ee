"""Tests for perch.routing.params — segment predicates."""

import pytest

from perch.errors import ConfigurationError
from perch.routing.params import (
    MATCHERS,
    param_boolean,
    param_email,
    param_float,
    param_int,
    param_slug,
    parse_boolean,
    resolve_predicate,
)


class TestParamInt:
    @pytest.mark.parametrize("value", ["42", "0", "-7", "+3", "007"])
    def test_accepts(self, value: str) -> None:
        assert param_int()(value) is True

    @pytest.mark.parametrize("value", ["", "4.2", "abc", "1_000", " 1", "42\n", "1e3"])
    def test_rejects(self, value: str) -> None:
        assert param_int()(value) is False


class TestParamFloat:
    @pytest.mark.parametrize("value", ["1.5", "-2", "3.", ".5", "1e3", "-2.5E-4"])
    def test_accepts(self, value: str) -> None:
        assert param_float()(value) is True

    @pytest.mark.parametrize("value", ["", "abc", "1.2.3", "inf", "nan", "."])
    def test_rejects(self, value: str) -> None:
        assert param_float()(value) is False


class TestParamBoolean:
    @pytest.mark.parametrize("value", ["true", "On", "YES", "1"])
    def test_true_set(self, value: str) -> None:
        assert param_boolean()(value) is True
        assert parse_boolean(value) is True

    @pytest.mark.parametrize("value", ["false", "Off", "no", "0"])
    def test_false_set_does_not_match(self, value: str) -> None:
        assert param_boolean()(value) is False
        assert parse_boolean(value) is False

    @pytest.mark.parametrize("value", ["maybe", "", "2", "yess"])
    def test_neither(self, value: str) -> None:
        assert param_boolean()(value) is False
        assert parse_boolean(value) is None


class TestParamSlug:
    def test_plain_slug(self) -> None:
        assert param_slug()("hello-world_2") is True

    def test_contains_check_not_full_match(self) -> None:
        # One allowed character anywhere is enough
        assert param_slug()("a b!") is True

    @pytest.mark.parametrize("value", ["", "!!!", "..."])
    def test_rejects_without_any_slug_character(self, value: str) -> None:
        assert param_slug()(value) is False


class TestParamEmail:
    @pytest.mark.parametrize(
        "value", ["a@b.co", "first.last+tag@example.org", "ops@mail.example-corp.co.uk"]
    )
    def test_accepts(self, value: str) -> None:
        assert param_email()(value) is True

    @pytest.mark.parametrize(
        "value",
        ["nope", "a@b", "@example.com", "a@@b.com", "a b@c.com", "a@x..com", "a@.x.com"],
    )
    def test_rejects(self, value: str) -> None:
        assert param_email()(value) is False


class TestResolvePredicate:
    def test_all_matchers_registered(self) -> None:
        assert set(MATCHERS) == {"int", "float", "boolean", "slug", "email"}

    def test_by_name(self) -> None:
        predicate = resolve_predicate("int")
        assert predicate("12") is True
        assert predicate("x") is False

    def test_callable_passthrough(self) -> None:
        def predicate(value: str) -> bool:
            return value == "x"

        assert resolve_predicate(predicate) is predicate

    def test_unknown_name(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown parameter matcher 'uuid'"):
            resolve_predicate("uuid")

    def test_non_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="must be callable"):
            resolve_predicate(42)  # type: ignore[arg-type]
