"""Decoding of backend JSON payloads into models."""

from typing import Any
from urllib.parse import parse_qs

from ..exceptions import InvalidInputError
from ..models import (
    AnalysisResult,
    FileEntry,
    FileOccurrence,
    FileRecord,
    ImageReference,
    Layer,
    Operation,
)
from ..tree.keys import check_depth
from .validator import validate_analysis_payload, validate_analysis_result


def parse_operation(value: Any) -> Operation:
    """Parse an operation from its wire code or name.

    Args:
        value: Integer code (0-3), its name ("Modified", "removed"), or None

    Returns:
        Operation, UNCHANGED for None

    Raises:
        InvalidInputError: If value is not a known operation
    """
    if value is None:
        return Operation.UNCHANGED
    if isinstance(value, bool):
        raise InvalidInputError(f"Invalid file operation: {value!r}")
    if isinstance(value, int):
        try:
            return Operation(value)
        except ValueError as e:
            raise InvalidInputError(f"Invalid file operation: {value!r}") from e
    if isinstance(value, str):
        name = value.strip().upper()
        if name in ("NONE", ""):
            return Operation.UNCHANGED
        if name == "REMOVE":
            return Operation.REMOVED
        try:
            return Operation[name]
        except KeyError as e:
            raise InvalidInputError(f"Invalid file operation: {value!r}") from e
    raise InvalidInputError(f"Invalid file operation: {value!r}")


def _as_mode(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def parse_file_entry(data: dict[str, Any], depth: int = 0) -> FileEntry:
    """Parse a file tree node and its children."""
    check_depth(depth)
    if "name" not in data:
        raise InvalidInputError("File tree node is missing its name")

    children = data.get("children") or []
    if not isinstance(children, list):
        raise InvalidInputError(f"Children of {data['name']!r} must be a list")

    return FileEntry(
        name=data["name"],
        link=data.get("link") or "",
        size=int(data.get("size", 0)),
        mode=_as_mode(data.get("mode")),
        uid=int(data.get("uid", 0)),
        gid=int(data.get("gid", 0)),
        operation=parse_operation(data.get("op")),
        children=[parse_file_entry(child, depth + 1) for child in children],
    )


def parse_layer(data: dict[str, Any]) -> Layer:
    """Parse layer metadata."""
    return Layer(
        digest=data.get("digest") or "",
        created_at=data.get("created") or "",
        command=data.get("cmd") or "",
        size=int(data.get("size", 0)),
        unpacked_size=int(data.get("unpackSize", 0)),
        is_empty=bool(data.get("empty", False)),
        media_type=data.get("mediaType") or "",
    )


def parse_file_occurrence(data: dict[str, Any]) -> FileOccurrence:
    """Parse one entry of fileSummaryList."""
    info = data.get("info")
    if not isinstance(info, dict) or "path" not in info:
        raise InvalidInputError("File summary entry is missing its file info")

    return FileOccurrence(
        layer_index=int(data.get("layerIndex", 0)),
        operation=parse_operation(data.get("op")),
        record=FileRecord(
            path=info["path"],
            link=info.get("link") or "",
            size=int(info.get("size", 0)),
            mode=_as_mode(info.get("mode")),
            uid=int(info.get("uid", 0)),
            gid=int(info.get("gid", 0)),
            is_whiteout=bool(info.get("isWhiteout")),
        ),
    )


def parse_analysis_result(data: Any) -> AnalysisResult:
    """Decode the /api/analyze JSON body into an AnalysisResult.

    Forests are returned without keys; call ``AnalysisResult.with_keys``
    before rendering.

    Args:
        data: Decoded JSON body

    Returns:
        AnalysisResult

    Raises:
        InvalidInputError: If the payload does not have the expected shape
        MalformedTreeError: If a file tree is nested too deep
    """
    payload = validate_analysis_payload(data)

    try:
        layers = [parse_layer(layer) for layer in payload["layers"]]
        forests = [
            [parse_file_entry(node) for node in forest]
            for forest in payload["fileTreeList"]
        ]
        occurrences = [
            parse_file_occurrence(item) for item in payload.get("fileSummaryList", [])
        ]
        total_size = payload.get("totalSize")
        if total_size is None:
            total_size = sum(layer.unpacked_size for layer in layers)

        result = AnalysisResult(
            image_name=payload["name"],
            layers=layers,
            forests=forests,
            occurrences=occurrences,
            os=payload.get("os") or "",
            arch=payload.get("arch") or "",
            size=int(payload.get("size", 0)),
            total_size=int(total_size),
        )
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Invalid analysis result: {e}") from e

    return validate_analysis_result(result)


def parse_image_reference(value: str) -> ImageReference:
    """Parse an entry of /api/latest-images.

    Args:
        value: "<image>" or "<image>?arch=<arch>"

    Returns:
        ImageReference with the architecture, "" when none is given
    """
    name, _, query = value.partition("?")
    arch = parse_qs(query).get("arch", [""])[0]
    return ImageReference(name=name, arch=arch)
