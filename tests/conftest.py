"""Shared fixtures for gateway tests."""

import random

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.auth import password_hash
from core.config import Config
from core.headers import HeaderBuilder
from services.assets import DirectoryAssetStore

SECRET = "correct horse battery staple"
USER_AGENTS = ("TestAgent/1.0", "TestAgent/2.0", "TestAgent/3.0")

INDEX_HTML = (
    "<html><script>window.__ENV__.PASSWORD = \"{{PASSWORD}}\";</script>"
    "<body>app</body></html>"
)


class RecordingLogger:
    """RequestLogger that keeps calls in memory."""

    def __init__(self):
        self.proxied = []
        self.static = []
        self.errors = []

    def log_proxy(self, method, target, status, user_agent):
        self.proxied.append((method, target, status, user_agent))

    def log_static(self, path, status):
        self.static.append((path, status))

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


@pytest.fixture
def config(tmp_path):
    return Config(secret=SECRET, user_agents=USER_AGENTS, cache_ttl_seconds=3600, static_dir=tmp_path)


@pytest.fixture
def auth_token():
    return password_hash(SECRET)


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def static_root(tmp_path):
    (tmp_path / "index.html").write_text(INDEX_HTML)
    (tmp_path / "css").mkdir()
    (tmp_path / "css" / "app.css").write_text("body { color: red; }")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "v1.2").mkdir()
    (tmp_path / "docs" / "v1.2" / "index.html").write_text("<p>docs</p>")
    return tmp_path


@pytest.fixture
def upstream_calls():
    """Requests seen by the stubbed origin."""
    return []


@pytest.fixture
def upstream_handler():
    """Default origin stub: 206 partial content of a fake video."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            206,
            content=b"FAKE VIDEO BYTES",
            headers={"Content-Type": "video/mp4", "Content-Range": "bytes 0-15/1000"},
        )

    return handler


@pytest.fixture
def client(config, logger, static_root, upstream_calls, upstream_handler):
    """TestClient whose outbound requests go to ``upstream_handler``."""

    def record(request: httpx.Request) -> httpx.Response:
        upstream_calls.append(request)
        return upstream_handler(request)

    app = create_app(
        config,
        logger,
        asset_store=DirectoryAssetStore(static_root),
        transport=httpx.MockTransport(record),
        header_builder=HeaderBuilder(random.Random(1234)),
    )
    with TestClient(app) as test_client:
        yield test_client
