"""Shared fixtures: a populated web root and a background server factory."""

import threading

import pytest

from server_config import ServerConfig
from static_server import StaticFileServer


@pytest.fixture
def www(tmp_path):
    root = tmp_path / "www"
    root.mkdir()
    (root / "a.txt").write_bytes(b"hello")
    return root


@pytest.fixture
def start_server():
    """Start a StaticFileServer on an ephemeral localhost port."""
    running = []

    def _start(root, **kwargs):
        config = ServerConfig.build(root, port=0, host="127.0.0.1", **kwargs)
        server = StaticFileServer(config)
        server.start()
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        running.append((server, thread))
        return server

    yield _start

    for server, thread in running:
        server.close()
        thread.join(timeout=5)
