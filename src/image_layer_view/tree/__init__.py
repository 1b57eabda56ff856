"""Layer file tree keying, expansion state and rendering."""

from .expansion import collapse, expand, set_expand_all, toggle
from .filter import render
from .keys import MAX_TREE_DEPTH, assign_keys, find_entry, iter_entries

__all__ = [
    "MAX_TREE_DEPTH",
    "assign_keys",
    "collapse",
    "expand",
    "find_entry",
    "iter_entries",
    "render",
    "set_expand_all",
    "toggle",
]
