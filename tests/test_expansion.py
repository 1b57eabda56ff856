"""Tests for expansion state transitions and view options."""

import dataclasses

import pytest

from image_layer_view.exceptions import InvalidInputError
from image_layer_view.models import LARGE_FILE_THRESHOLD, ViewOptions
from image_layer_view.tree.expansion import collapse, expand, set_expand_all, toggle


def test_toggle_adds_missing_key():
    """Test toggling a collapsed node expands it."""
    options = ViewOptions()

    toggled = toggle(options, "usr")

    assert toggled.expanded_keys == {"usr"}
    assert options.expanded_keys == frozenset()


def test_toggle_removes_present_key():
    """Test toggling an expanded node collapses it."""
    options = ViewOptions(expanded_keys={"usr", "etc"})

    assert toggle(options, "usr").expanded_keys == {"etc"}


def test_toggle_twice_is_identity():
    """Test toggle is its own inverse."""
    options = ViewOptions(expanded_keys={"etc"}, keyword="x", size_threshold=10)

    for key in ["etc", "usr", "usr/bin"]:
        assert toggle(toggle(options, key), key) == options


def test_toggle_keeps_other_fields():
    """Test toggle changes nothing but expanded_keys."""
    options = ViewOptions(
        expand_all=True,
        size_threshold=1024,
        only_changed_or_removed=True,
        keyword="lib",
    )

    toggled = toggle(options, "usr")

    assert dataclasses.replace(toggled, expanded_keys=frozenset()) == options


def test_view_options_are_immutable():
    """Test ViewOptions cannot be changed in place."""
    options = ViewOptions()

    with pytest.raises(dataclasses.FrozenInstanceError):
        options.keyword = "x"


def test_expanded_keys_stored_as_frozenset():
    """Test any iterable of keys is accepted."""
    options = ViewOptions(expanded_keys=["a", "b", "a"])

    assert isinstance(options.expanded_keys, frozenset)
    assert options.expanded_keys == {"a", "b"}


def test_expanded_keys_rejects_single_string():
    """Test a bare key is not split into characters."""
    with pytest.raises(InvalidInputError):
        ViewOptions(expanded_keys="usr")


def test_negative_size_threshold():
    """Test a negative threshold is rejected."""
    with pytest.raises(InvalidInputError):
        ViewOptions(size_threshold=-1)


def test_expand_and_collapse():
    """Test explicit expand and collapse."""
    options = expand(ViewOptions(), "usr", "usr/bin")

    assert options.expanded_keys == {"usr", "usr/bin"}
    assert expand(options, "usr") == options
    assert collapse(options, "usr").expanded_keys == {"usr/bin"}
    assert collapse(options, "missing") == options


def test_set_expand_all():
    """Test switching expand_all."""
    options = ViewOptions(expanded_keys={"usr"})

    expanded = set_expand_all(options, True)

    assert expanded.expand_all is True
    assert expanded.expanded_keys == {"usr"}
    assert set_expand_all(expanded, False) == options


def test_for_mode():
    """Test the numbered view modes."""
    assert ViewOptions.for_mode(0) == ViewOptions()
    assert ViewOptions.for_mode(1).only_changed_or_removed is True
    assert ViewOptions.for_mode(2).size_threshold == LARGE_FILE_THRESHOLD


def test_for_mode_unknown():
    """Test unknown modes are rejected."""
    with pytest.raises(InvalidInputError):
        ViewOptions.for_mode(3)
