"""Shape validation for analysis results received from the backend."""

from typing import Any

from ..exceptions import InvalidInputError
from ..models import AnalysisResult


def is_list_of_dicts(value: Any) -> bool:
    """Check if value is a list whose items are all dicts."""
    return isinstance(value, list) and all(isinstance(item, dict) for item in value)


def has_required_fields(data: dict[str, Any], required_fields: list[str]) -> bool:
    """Check if data has all required fields."""
    return all(field in data for field in required_fields)


def are_forests_valid(forests: Any) -> bool:
    """Check if forests is a list of lists of tree node dicts."""
    return isinstance(forests, list) and all(
        is_list_of_dicts(forest) for forest in forests
    )


def are_forests_aligned(layers: list[Any], forests: list[Any]) -> bool:
    """Check that there is exactly one forest per layer."""
    return len(layers) == len(forests)


def validate_analysis_payload(data: Any) -> dict[str, Any]:
    """Validate the raw JSON shape of an analysis result.

    Args:
        data: Decoded JSON body of /api/analyze

    Returns:
        The same payload, typed as a dict

    Raises:
        InvalidInputError: If a required field is missing or malformed, or
            the number of file trees does not match the number of layers
    """
    if not isinstance(data, dict):
        raise InvalidInputError("Analysis result must be a JSON object")

    required_fields = ["name", "layers", "fileTreeList"]
    if not has_required_fields(data, required_fields):
        missing = [field for field in required_fields if field not in data]
        raise InvalidInputError(f"Analysis result is missing fields: {missing}")

    layers = data["layers"]
    if not is_list_of_dicts(layers):
        raise InvalidInputError("Analysis result layers must be a list of objects")

    forests = data["fileTreeList"]
    if not are_forests_valid(forests):
        raise InvalidInputError("Analysis result fileTreeList must be a list of lists")

    if not are_forests_aligned(layers, forests):
        raise InvalidInputError(
            f"Expected {len(layers)} file trees, got {len(forests)}"
        )

    if not is_list_of_dicts(data.get("fileSummaryList", [])):
        raise InvalidInputError("Analysis result fileSummaryList must be a list")

    return data


def validate_analysis_result(result: AnalysisResult) -> AnalysisResult:
    """Check the invariants of a decoded analysis result.

    Raises:
        InvalidInputError: If forests and layers are not index aligned or an
            occurrence points at a layer that does not exist
    """
    if not are_forests_aligned(result.layers, result.forests):
        raise InvalidInputError(
            f"Expected {len(result.layers)} file trees, got {len(result.forests)}"
        )

    for occurrence in result.occurrences:
        if not 0 <= occurrence.layer_index < len(result.layers):
            raise InvalidInputError(
                f"File {occurrence.record.path!r} references unknown layer "
                f"{occurrence.layer_index}"
            )
    return result
