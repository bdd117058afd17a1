from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from averager.infrastructure.upstream.client import UpstreamNumbersClient
from averager.services.aggregator import WindowAggregator
from tests.helpers.stubs import StubFetcher


@pytest.fixture
def stub_fetcher():
    return StubFetcher()


@pytest.fixture
def aggregator(stub_fetcher):
    return WindowAggregator(capacity=10, fetcher=stub_fetcher)


@pytest.fixture
def make_upstream_client():
    """Build an UpstreamNumbersClient whose HTTP layer is an httpx.MockTransport."""

    def _make(
        handler: Callable, timeout_seconds: float = 0.5, auth_token: str = "test-token"
    ) -> UpstreamNumbersClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return UpstreamNumbersClient(
            client=http_client, timeout_seconds=timeout_seconds, auth_token=auth_token
        )

    return _make


@pytest.fixture
def api_client(aggregator):
    """FastAPI test client with the aggregator dependency swapped for the stub."""
    from averager.api.dependencies import get_aggregator
    from averager.main import app

    app.dependency_overrides[get_aggregator] = lambda: aggregator
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
