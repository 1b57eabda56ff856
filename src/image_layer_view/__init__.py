"""Image Layer View - Layer content view engine for container image analyses."""

__version__ = "0.1.0"

from .analyze import analyze_image, list_latest_images
from .core.client import AnalysisClient
from .core.sequence import RequestSequence
from .core.types import ClientConfig
from .exceptions import (
    ClientClosedError,
    InvalidInputError,
    LayerViewError,
    MalformedTreeError,
    UpstreamError,
)
from .models import (
    AnalysisResult,
    FileEntry,
    FileOccurrence,
    FileRecord,
    ImageReference,
    Layer,
    Operation,
    OperationClass,
    RenderResult,
    RenderRow,
    ViewOptions,
    WastedEntry,
    WastedReport,
)
from .summary.wasted import efficiency_score, other_layers_size, summarize
from .tree.expansion import collapse, expand, set_expand_all, toggle
from .tree.filter import render
from .tree.keys import assign_keys, find_entry, iter_entries
from .utils.decode import parse_analysis_result, parse_image_reference
from .utils.download import download_url_for_row, file_download_url
from .utils.loader import load_analysis_file
from .view import ImageOverview, download_links, render_layer, summarize_image

__all__ = [
    # Async API
    "analyze_image",
    "list_latest_images",
    "AnalysisClient",
    "ClientConfig",
    "RequestSequence",
    "load_analysis_file",
    # Engine
    "assign_keys",
    "find_entry",
    "iter_entries",
    "summarize",
    "efficiency_score",
    "other_layers_size",
    "toggle",
    "expand",
    "collapse",
    "set_expand_all",
    "render",
    "render_layer",
    "summarize_image",
    "download_links",
    "ImageOverview",
    # Decoding and links
    "parse_analysis_result",
    "parse_image_reference",
    "file_download_url",
    "download_url_for_row",
    # Models
    "AnalysisResult",
    "FileEntry",
    "FileOccurrence",
    "FileRecord",
    "ImageReference",
    "Layer",
    "Operation",
    "OperationClass",
    "RenderResult",
    "RenderRow",
    "ViewOptions",
    "WastedEntry",
    "WastedReport",
    # Exceptions
    "LayerViewError",
    "InvalidInputError",
    "MalformedTreeError",
    "UpstreamError",
    "ClientClosedError",
]
