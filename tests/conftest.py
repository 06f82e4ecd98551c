"""Shared pytest fixtures for imagegate tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from helpers import FakeUpstream, make_config

from imagegate.api.main import app, get_config, get_gateway
from imagegate.core.config import GatewayConfig
from imagegate.core.pipeline import ImageGateway


@pytest.fixture
def test_config() -> GatewayConfig:
    """Config with a primary and a backup key pointing at fake URLs."""
    return make_config()


@pytest.fixture
def upstream() -> Generator[FakeUpstream, None, None]:
    fake = FakeUpstream()
    yield fake
    fake.close()


@pytest.fixture
def gateway(test_config: GatewayConfig, upstream: FakeUpstream) -> ImageGateway:
    return ImageGateway(test_config, upstream.client())


@pytest.fixture
def test_client(test_config: GatewayConfig, upstream: FakeUpstream) -> Generator[TestClient, None, None]:
    """TestClient whose gateway talks to ``upstream`` instead of the network.

    Tests can swap ``app.dependency_overrides[get_config]`` to change
    credentials; the gateway override reads from it on every request.
    """
    app.dependency_overrides[get_config] = lambda: test_config

    def _gateway() -> ImageGateway:
        cfg = app.dependency_overrides[get_config]()
        return ImageGateway(cfg, upstream.client())

    app.dependency_overrides[get_gateway] = _gateway
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def small_image_b64() -> str:
    """A short, valid base64 payload (not a real image; upstream is faked)."""
    return "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
