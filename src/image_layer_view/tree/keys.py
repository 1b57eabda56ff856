"""Stable, path-derived keys for layer file trees."""

from collections.abc import Iterator
from dataclasses import replace

from ..exceptions import MalformedTreeError
from ..models import FileEntry

# Deepest nesting accepted before a tree is considered malformed
MAX_TREE_DEPTH = 256


def make_key(parent_key: str, name: str) -> str:
    """Build the key of a node from its parent's key and its own name."""
    if parent_key:
        return f"{parent_key}/{name}"
    return name


def check_depth(depth: int) -> None:
    """Raise if a traversal went deeper than MAX_TREE_DEPTH."""
    if depth > MAX_TREE_DEPTH:
        raise MalformedTreeError(
            f"File tree is nested deeper than {MAX_TREE_DEPTH} levels"
        )


def _assign(
    entries: list[FileEntry], parent_key: str, depth: int, ancestors: set[int]
) -> list[FileEntry]:
    check_depth(depth)
    keyed = []
    for entry in entries:
        if id(entry) in ancestors:
            raise MalformedTreeError(f"File tree entry {entry.name!r} contains itself")
        key = make_key(parent_key, entry.name)
        ancestors.add(id(entry))
        children = _assign(entry.children, key, depth + 1, ancestors)
        ancestors.discard(id(entry))
        keyed.append(replace(entry, key=key, children=children))
    return keyed


def assign_keys(forest: list[FileEntry]) -> list[FileEntry]:
    """Return a copy of a layer forest with every node keyed by its path.

    Keys are ``parent_key + "/" + name`` (or ``name`` at the root), so they
    are unique within the forest as long as sibling names are unique, and
    identical for structurally identical input.

    Args:
        forest: Root entries of one layer

    Returns:
        New list of keyed root entries; the input is left untouched

    Raises:
        MalformedTreeError: If an entry is its own ancestor or the tree
            is nested deeper than MAX_TREE_DEPTH
    """
    return _assign(forest, "", 0, set())


def iter_entries(
    forest: list[FileEntry], depth: int = 0
) -> Iterator[tuple[int, FileEntry]]:
    """Yield ``(depth, entry)`` for every node, depth-first in sibling order."""
    check_depth(depth)
    for entry in forest:
        yield depth, entry
        yield from iter_entries(entry.children, depth + 1)


def find_entry(forest: list[FileEntry], path: str) -> FileEntry | None:
    """Find an entry by its slash separated path.

    Args:
        forest: Root entries of one layer
        path: Path such as "usr/bin/env"; a leading "/" is ignored

    Returns:
        The matching entry, or None if no entry has that path
    """
    names = [name for name in path.strip("/").split("/") if name]
    if not names:
        return None

    entries = forest
    found = None
    for name in names:
        found = next((entry for entry in entries if entry.name == name), None)
        if found is None:
            return None
        entries = found.children
    return found
