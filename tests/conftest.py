"""Test configuration and fixtures."""

import copy
import os

import pytest
import pytest_asyncio
from aiohttp import test_utils, web

from image_layer_view.models import Layer, Operation
from tests.helpers import REQUESTS, RESPONSES, directory, file

SAMPLE_PAYLOAD = {
    "name": "redis:alpine",
    "os": "linux",
    "arch": "amd64",
    "size": 12000,
    "totalSize": 1000,
    "layers": [
        {
            "created": "2024-01-01T00:00:00Z",
            "digest": "sha256:aa11",
            "cmd": "ADD file:123 in /",
            "size": 600,
            "mediaType": "application/vnd.oci.image.layer.v1.tar+gzip",
            "unpackSize": 700,
            "empty": False,
        },
        {
            "created": "2024-01-02T00:00:00Z",
            "digest": "sha256:bb22",
            "cmd": "RUN apk add redis",
            "size": 200,
            "mediaType": "application/vnd.oci.image.layer.v1.tar+gzip",
            "unpackSize": 300,
            "empty": False,
        },
    ],
    "fileTreeList": [
        [
            {
                "name": "etc",
                "size": 4096,
                "mode": "drwxr-xr-x",
                "op": 0,
                "children": [
                    {"name": "hosts", "size": 120, "mode": "-rw-r--r--", "op": 0},
                    {
                        "name": "localtime",
                        "link": "/usr/share/zoneinfo/UTC",
                        "size": 0,
                        "mode": "Lrwxrwxrwx",
                        "op": 0,
                    },
                ],
            },
            {
                "name": "bin",
                "size": 4096,
                "mode": "drwxr-xr-x",
                "op": 0,
                "children": [],
            },
        ],
        [
            {
                "name": "etc",
                "size": 4096,
                "mode": "drwxr-xr-x",
                "op": 2,
                "children": [
                    {"name": "hosts", "size": 150, "mode": "-rw-r--r--", "op": 2},
                    {"name": "motd", "size": 0, "mode": "-rw-r--r--", "op": 1},
                ],
            }
        ],
    ],
    "fileSummaryList": [
        {
            "layerIndex": 1,
            "op": 2,
            "info": {
                "path": "etc/hosts",
                "link": "",
                "size": 150,
                "mode": "-rw-r--r--",
                "uid": 0,
                "gid": 0,
            },
        },
        {
            "layerIndex": 1,
            "op": 1,
            "info": {
                "path": "etc/motd",
                "size": 10,
                "mode": "-rw-r--r--",
                "uid": 0,
                "gid": 0,
                "isWhiteout": True,
            },
        },
    ],
}


@pytest.fixture
def sample_payload():
    """Wire JSON of a two layer analysis."""
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def sample_forest():
    """A small unkeyed layer forest.

    usr/
      bin/
        env (modified)
        python3 (2 MiB)
      lib/
        libc.so
    etc/
      passwd (removed)
    readme
    """
    return [
        directory(
            "usr",
            [
                directory(
                    "bin",
                    [
                        file("env", size=2048, operation=Operation.MODIFIED),
                        file("python3", size=2 * 1024 * 1024),
                    ],
                ),
                directory("lib", [file("libc.so", size=600 * 1024)]),
            ],
        ),
        directory("etc", [file("passwd", size=512, operation=Operation.REMOVED)]),
        file("readme", size=100),
    ]


@pytest.fixture
def sample_layers():
    """Layer list whose base layer is empty."""
    return [
        Layer(digest="", size=0, unpacked_size=0, is_empty=True),
        Layer(digest="sha256:aa11", size=500, unpacked_size=700),
        Layer(digest="sha256:bb22", size=100, unpacked_size=300),
    ]


@pytest_asyncio.fixture
async def backend_server():
    """Run a local analysis backend and yield its TestServer.

    The app records received query strings in ``REQUESTS`` and
    returns whatever is stored in ``RESPONSES`` for a path, or the
    sample payload for /api/analyze.
    """
    app = web.Application()
    app[REQUESTS] = []
    app[RESPONSES] = {}

    async def analyze(request: web.Request) -> web.Response:
        app[REQUESTS].append(dict(request.query))
        status, body = app[RESPONSES].get(
            "/api/analyze", (200, copy.deepcopy(SAMPLE_PAYLOAD))
        )
        if isinstance(body, str):
            return web.Response(status=status, text=body)
        return web.json_response(body, status=status)

    async def latest_images(request: web.Request) -> web.Response:
        status, body = app[RESPONSES].get(
            "/api/latest-images", (200, ["redis:alpine", "nginx?arch=arm64"])
        )
        return web.json_response(body, status=status)

    app.router.add_get("/api/analyze", analyze)
    app.router.add_get("/api/latest-images", latest_images)

    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        yield server
    finally:
        await server.close()


@pytest.fixture
def backend_url(backend_server):
    """Base URL of the local analysis backend."""
    return str(backend_server.make_url("/")).rstrip("/")


# Pytest configuration
def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless a backend is available."""
    skip_integration = pytest.mark.skip(reason="Analysis backend not available")

    for item in items:
        if (
            "integration" in item.keywords
            and os.getenv("LAYER_VIEW_BACKEND_AVAILABLE", "false").lower() != "true"
        ):
            item.add_marker(skip_integration)
