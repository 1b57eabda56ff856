"""Filtered, prunable and expand/collapse aware rendering of a layer tree."""

import logging

from ..exceptions import MalformedTreeError
from ..models import (
    FileEntry,
    Operation,
    OperationClass,
    RenderResult,
    RenderRow,
    ViewOptions,
)
from .keys import check_depth

logger = logging.getLogger(__name__)

CHANGED_OPERATIONS = frozenset({Operation.MODIFIED, Operation.REMOVED})


class SubtreeIndex:
    """Memoized full-subtree predicates for one render pass.

    Each node is evaluated once; results are keyed by node identity so the
    index is only valid for the forest it was built from.
    """

    def __init__(self, keyword: str) -> None:
        self.keyword = keyword
        self._changed: dict[int, bool] = {}
        self._matched: dict[int, bool] = {}

    def build(self, forest: list[FileEntry]) -> "SubtreeIndex":
        self._visit(forest, 0, set())
        return self

    def _visit(self, entries: list[FileEntry], depth: int, ancestors: set[int]) -> None:
        check_depth(depth)
        for entry in entries:
            node_id = id(entry)
            if node_id in ancestors:
                raise MalformedTreeError(
                    f"File tree entry {entry.name!r} contains itself"
                )
            if node_id in self._changed:
                continue

            ancestors.add(node_id)
            self._visit(entry.children, depth + 1, ancestors)
            ancestors.discard(node_id)

            self._changed[node_id] = entry.operation in CHANGED_OPERATIONS or any(
                self._changed[id(child)] for child in entry.children
            )
            self._matched[node_id] = (
                not self.keyword
                or self.keyword in entry.name
                or any(self._matched[id(child)] for child in entry.children)
            )

    def has_change(self, entry: FileEntry) -> bool:
        """True if the entry or any descendant is modified or removed."""
        return self._changed[id(entry)]

    def matches_keyword(self, entry: FileEntry) -> bool:
        """True if the entry's or any descendant's name contains the keyword."""
        return self._matched[id(entry)]


def should_expand(entry: FileEntry, options: ViewOptions) -> bool:
    """Check whether a directory's children are walked.

    A non-empty keyword forces every directory open so matches are shown
    regardless of the manual expansion state.
    """
    return (
        options.expand_all
        or options.keyword != ""
        or entry.key in options.expanded_keys
    )


def is_size_excluded(entry: FileEntry, options: ViewOptions) -> bool:
    # Directories are filtered on their own size like files
    return options.size_threshold > 0 and entry.size < options.size_threshold


def is_visible(
    entry: FileEntry, options: ViewOptions, index: SubtreeIndex | None
) -> bool:
    """Check the entry against every active filter."""
    if is_size_excluded(entry, options):
        return False
    if index is None:
        return True
    if options.only_changed_or_removed and not index.has_change(entry):
        return False
    if options.keyword and not index.matches_keyword(entry):
        return False
    return True


def _make_row(entry: FileEntry, depth: int, expanded: bool) -> RenderRow:
    return RenderRow(
        key=entry.key,
        depth=depth,
        mode=entry.mode,
        uid=entry.uid,
        gid=entry.gid,
        size=entry.size,
        display_name=entry.display_name,
        operation_class=OperationClass.from_operation(entry.operation),
        is_expandable=entry.is_dir,
        is_expanded=expanded,
    )


def _walk(
    entries: list[FileEntry],
    options: ViewOptions,
    index: SubtreeIndex | None,
    depth: int,
    ancestors: set[int],
) -> list[RenderRow]:
    check_depth(depth)
    rows: list[RenderRow] = []
    last_sibling: RenderRow | None = None
    for entry in entries:
        if id(entry) in ancestors:
            raise MalformedTreeError(f"File tree entry {entry.name!r} contains itself")
        if not is_visible(entry, options, index):
            continue

        expanded = entry.is_dir and should_expand(entry, options)
        row = _make_row(entry, depth, expanded)
        if not expanded:
            rows.append(row)
            last_sibling = row
            continue

        ancestors.add(id(entry))
        child_rows = _walk(entry.children, options, index, depth + 1, ancestors)
        ancestors.discard(id(entry))

        # Empty directories are retracted unless a keyword search is active
        if not child_rows and not options.keyword:
            continue
        rows.append(row)
        rows.extend(child_rows)
        last_sibling = row

    if last_sibling is not None:
        last_sibling.is_last = True
    return rows


def render(forest: list[FileEntry], options: ViewOptions) -> RenderResult:
    """Render the visible rows of a layer forest.

    Rows are emitted depth-first in the backend's sibling order. A node is
    visible when it passes every active filter (size threshold, changed or
    removed only, keyword), where the change and keyword filters look at
    the node's whole subtree. Collapsed directories are emitted without
    their children. An expanded directory that ends up without visible
    children is dropped unless a keyword search is active.

    Args:
        forest: Keyed root entries of one layer
        options: View options to render with

    Returns:
        RenderResult with the visible rows and their count

    Raises:
        MalformedTreeError: If an entry is its own ancestor or the tree
            is nested deeper than MAX_TREE_DEPTH
    """
    index = None
    if options.only_changed_or_removed or options.keyword:
        index = SubtreeIndex(options.keyword).build(forest)

    rows = _walk(forest, options, index, 0, set())
    logger.debug("Rendered %d rows from %d root entries", len(rows), len(forest))
    return RenderResult(rows=rows, count=len(rows))
