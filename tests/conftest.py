"""Shared fixtures for proxy tests."""

from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config, LoggingSettings, ProxySettings


class RecordingLogger:
    """RequestLogger that keeps calls in memory."""

    def __init__(self):
        self.forwards: list[tuple[str, str, str, int]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_forward(self, route, method, path, status, *, elapsed_ms):
        self.forwards.append((route, method, path, status))

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


class StubBackend:
    """Backend stand-in: records requests and answers through a handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def config(tmp_path):
    return Config(logging=LoggingSettings(log_dir=tmp_path / "logs"))


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def make_client(config, logger):
    """Build a TestClient whose backend answers through ``handler``."""
    clients = []

    def _make(handler, *, forward_credentials: bool = True, debug: bool = False):
        backend = StubBackend(handler)
        app_config = config.model_copy(
            update={"proxy": ProxySettings(forward_credentials=forward_credentials, debug=debug)}
        )
        app = create_app(app_config, logger, transport=backend.transport)
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client, backend

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
