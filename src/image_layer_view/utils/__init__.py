"""Utility functions for decoding, loading and linking analysis results."""

from .decode import parse_analysis_result, parse_image_reference
from .download import file_download_url

__all__ = ["file_download_url", "parse_analysis_result", "parse_image_reference"]
