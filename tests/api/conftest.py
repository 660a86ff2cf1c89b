"""
API test fixtures: the application wired to fake upstream gateways.

Only the gateway providers are overridden, so the real service and
aggregator dependencies run on top of FakeContentGateway.
"""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from src.api.deps import get_hadith_gateway, get_quran_gateway
from src.clients.gateway import FakeContentGateway
from src.main import app


@pytest.fixture
def client(
    quran_gateway: FakeContentGateway, hadith_gateway: FakeContentGateway
) -> Iterator[TestClient]:
    """TestClient without lifespan; upstreams replaced by fakes."""
    app.dependency_overrides[get_quran_gateway] = lambda: quran_gateway
    app.dependency_overrides[get_hadith_gateway] = lambda: hadith_gateway
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
