"""Synchronous entry points of the layer content view engine."""

from dataclasses import dataclass

from .exceptions import InvalidInputError
from .models import AnalysisResult, RenderResult, ViewOptions, WastedReport
from .summary.wasted import other_layers_size, summarize
from .tree.filter import render
from .utils.download import download_url_for_row


@dataclass
class ImageOverview:
    """Image level figures shown next to the layer list."""

    display_name: str
    total_size: int
    size: int
    other_layers_size: int
    report: WastedReport


def summarize_image(result: AnalysisResult) -> ImageOverview:
    """Build the wasted space report and size figures of an image.

    Raises:
        InvalidInputError: If the image's total size is not positive
    """
    return ImageOverview(
        display_name=result.display_name,
        total_size=result.total_size,
        size=result.size,
        other_layers_size=other_layers_size(result.layers, result.total_size),
        report=summarize(result.occurrences, result.total_size),
    )


def _check_layer_index(result: AnalysisResult, layer_index: int) -> None:
    if not 0 <= layer_index < len(result.forests):
        raise InvalidInputError(
            f"Layer index {layer_index} out of range (0-{len(result.forests) - 1})"
        )


def render_layer(
    result: AnalysisResult, layer_index: int, options: ViewOptions
) -> RenderResult:
    """Render the file tree of one layer.

    Args:
        result: Keyed analysis result
        layer_index: Index of the selected layer, 0 is the base layer
        options: View options to render with

    Returns:
        RenderResult of the layer

    Raises:
        InvalidInputError: If layer_index does not exist
        MalformedTreeError: If the layer's tree is malformed
    """
    _check_layer_index(result, layer_index)
    return render(result.forests[layer_index], options)


def download_links(
    result: AnalysisResult, layer_index: int, rendered: RenderResult
) -> dict[str, str]:
    """Map row keys to download URLs for the downloadable rows of a layer."""
    _check_layer_index(result, layer_index)
    layer = result.layers[layer_index]
    links = {}
    for row in rendered.rows:
        url = download_url_for_row(layer, row)
        if url is not None:
            links[row.key] = url
    return links
