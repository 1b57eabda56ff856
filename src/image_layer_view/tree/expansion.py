"""Expand/collapse state transitions for ViewOptions.

Every function returns a new ViewOptions; the input is never mutated.
"""

from dataclasses import replace

from ..models import ViewOptions


def toggle(options: ViewOptions, key: str) -> ViewOptions:
    """Expand a collapsed node or collapse an expanded one.

    Args:
        options: Current view options
        key: Key of the node to toggle

    Returns:
        New options with key added to or removed from expanded_keys
    """
    return replace(options, expanded_keys=options.expanded_keys ^ {key})


def expand(options: ViewOptions, *keys: str) -> ViewOptions:
    """Mark nodes as expanded."""
    return replace(options, expanded_keys=options.expanded_keys | frozenset(keys))


def collapse(options: ViewOptions, *keys: str) -> ViewOptions:
    """Mark nodes as collapsed."""
    return replace(options, expanded_keys=options.expanded_keys - frozenset(keys))


def set_expand_all(options: ViewOptions, value: bool) -> ViewOptions:
    return replace(options, expand_all=value)
