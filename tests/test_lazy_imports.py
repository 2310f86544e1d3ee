"""Tests for perch.__init__ — lazy imports cover all public names."""

import pytest

import perch


@pytest.mark.parametrize("name", perch.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(perch, name)
    assert obj is not None, f"perch.{name} resolved to None"


def test_resolved_names_are_the_real_objects() -> None:
    from perch.app import App
    from perch.routing.params import param_int

    assert perch.App is App
    assert perch.param_int is param_int


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        perch.__getattr__("ThisDoesNotExist")
