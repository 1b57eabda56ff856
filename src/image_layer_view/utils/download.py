"""Download links for files inside a layer."""

import re
from urllib.parse import urlencode

from ..exceptions import InvalidInputError
from ..models import Layer, RenderRow

# Digest format (algorithm:hex)
DIGEST_PATTERN = re.compile(r"^[a-z0-9]+:[a-f0-9]+$")

FILE_DOWNLOAD_PATH = "/api/file"


def is_valid_digest(digest: str) -> bool:
    """Check if digest looks like "sha256:<hex>"."""
    return isinstance(digest, str) and bool(DIGEST_PATTERN.match(digest))


def file_download_url(digest: str, media_type: str, path: str) -> str:
    """Build the download URL of a file in a layer.

    Args:
        digest: Layer digest (e.g., "sha256:abc123...")
        media_type: Layer media type
        path: Path of the file within the layer

    Returns:
        URL of the form /api/file?digest=...&mediaType=...&file=...

    Raises:
        InvalidInputError: If digest is malformed
    """
    if not is_valid_digest(digest):
        raise InvalidInputError(f"Invalid digest format: {digest!r}")

    query = urlencode({"digest": digest, "mediaType": media_type, "file": path})
    return f"{FILE_DOWNLOAD_PATH}?{query}"


def download_url_for_row(layer: Layer, row: RenderRow) -> str | None:
    """Download URL for a rendered row, or None if it has nothing to download.

    Only non-empty regular files of layers with a real digest qualify.
    """
    if row.is_expandable or row.size <= 0 or not is_valid_digest(layer.digest):
        return None
    return file_download_url(layer.digest, layer.media_type, row.key)
