"""Data models for image analysis results and layer views."""

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum

from .exceptions import InvalidInputError

# Threshold used by the "large files" view mode (1 MiB)
LARGE_FILE_THRESHOLD = 1024 * 1024


class Operation(IntEnum):
    """Change of a file entry relative to the previous layer.

    The integer values are the backend's wire encoding.
    """

    UNCHANGED = 0
    REMOVED = 1
    MODIFIED = 2
    ADDED = 3


class OperationClass(str, Enum):
    """Presentation class of a rendered row."""

    PLAIN = "plain"
    MODIFIED = "modified"
    REMOVED = "removed"

    @classmethod
    def from_operation(cls, operation: Operation) -> "OperationClass":
        if operation == Operation.REMOVED:
            return cls.REMOVED
        if operation == Operation.MODIFIED:
            return cls.MODIFIED
        return cls.PLAIN


@dataclass
class FileEntry:
    """A node of a layer's filesystem tree."""

    name: str
    link: str = ""
    size: int = 0
    mode: str = ""
    uid: int = 0
    gid: int = 0
    operation: Operation = Operation.UNCHANGED
    children: list["FileEntry"] = field(default_factory=list)
    key: str = ""  # Derived from the path, see tree.keys

    @property
    def is_dir(self) -> bool:
        return bool(self.children)

    @property
    def display_name(self) -> str:
        if self.link:
            return f"{self.name} → {self.link}"
        return self.name


@dataclass
class Layer:
    """Layer metadata."""

    digest: str
    created_at: str = ""
    command: str = ""
    size: int = 0  # Compressed size
    unpacked_size: int = 0
    is_empty: bool = False
    media_type: str = ""


@dataclass
class FileRecord:
    """File information attached to a cross-layer occurrence."""

    path: str
    link: str = ""
    size: int = 0
    mode: str = ""
    uid: int = 0
    gid: int = 0
    is_whiteout: bool = False


@dataclass
class FileOccurrence:
    """A file written again (or removed) in a later layer."""

    layer_index: int
    operation: Operation
    record: FileRecord


@dataclass
class AnalysisResult:
    """Image analysis result as produced by the backend."""

    image_name: str
    layers: list[Layer]
    forests: list[list[FileEntry]]
    occurrences: list[FileOccurrence] = field(default_factory=list)
    os: str = ""
    arch: str = ""
    size: int = 0
    total_size: int = 0

    @property
    def display_name(self) -> str:
        if self.arch:
            return f"{self.image_name}({self.os}/{self.arch})"
        return self.image_name

    def with_keys(self) -> "AnalysisResult":
        """Return a copy whose forests carry path-derived keys."""
        from .tree.keys import assign_keys

        return replace(self, forests=[assign_keys(forest) for forest in self.forests])


@dataclass
class WastedEntry:
    """Aggregated occurrences of one path."""

    path: str
    total_size: int
    count: int


@dataclass
class WastedReport:
    """Wasted space report for an image."""

    entries: list[WastedEntry]
    wasted_size: int
    total_size: int
    efficiency_score: float

    @property
    def score_text(self) -> str:
        return f"{self.efficiency_score:.2f}%"


@dataclass(frozen=True)
class ViewOptions:
    """User controlled options for rendering a layer tree."""

    expand_all: bool = False
    expanded_keys: frozenset[str] = frozenset()
    size_threshold: int = 0  # 0 means no limit
    only_changed_or_removed: bool = False
    keyword: str = ""

    def __post_init__(self) -> None:
        if self.size_threshold < 0:
            raise InvalidInputError(
                f"Size threshold must not be negative: {self.size_threshold}"
            )
        if isinstance(self.expanded_keys, str):
            raise InvalidInputError(
                f"expanded_keys must be a set of keys: {self.expanded_keys!r}"
            )
        # Accept any iterable of keys but always store a frozenset
        object.__setattr__(self, "expanded_keys", frozenset(self.expanded_keys))

    @classmethod
    def for_mode(cls, mode: int) -> "ViewOptions":
        """Build options for one of the numbered view modes.

        Args:
            mode: 0 shows all files, 1 only modified/removed files,
                2 only files of at least 1 MiB

        Returns:
            ViewOptions for the mode

        Raises:
            InvalidInputError: If mode is unknown
        """
        if mode == 0:
            return cls()
        if mode == 1:
            return cls(only_changed_or_removed=True)
        if mode == 2:
            return cls(size_threshold=LARGE_FILE_THRESHOLD)
        raise InvalidInputError(f"Unknown view mode: {mode}")


@dataclass
class RenderRow:
    """One visible row of a rendered layer tree."""

    key: str
    depth: int
    mode: str
    uid: int
    gid: int
    size: int
    display_name: str
    operation_class: OperationClass
    is_expandable: bool
    is_expanded: bool
    is_last: bool = False  # Last visible row among its siblings


@dataclass
class RenderResult:
    """Rows produced by a render pass."""

    rows: list[RenderRow]
    count: int


@dataclass
class ImageReference:
    """Image name with optional architecture, as listed by the backend."""

    name: str
    arch: str = ""
