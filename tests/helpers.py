"""Test helpers for building file trees."""

from aiohttp import web

from image_layer_view.models import FileEntry, Operation

# Keys of the local backend app, see the backend_server fixture
REQUESTS = web.AppKey("requests", list)
RESPONSES = web.AppKey("responses", dict)


def file(name, size=10, operation=Operation.UNCHANGED, **kwargs):
    """Create a leaf entry."""
    return FileEntry(name=name, size=size, operation=operation, **kwargs)


def directory(name, children, size=4096, operation=Operation.UNCHANGED):
    """Create a directory entry."""
    return FileEntry(name=name, size=size, operation=operation, children=children)


def row_keys(rendered):
    """Keys of rendered rows, in order."""
    return [row.key for row in rendered.rows]
