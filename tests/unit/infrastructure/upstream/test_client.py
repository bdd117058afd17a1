import asyncio

import httpx
import pytest
from prometheus_client import REGISTRY

from averager.infrastructure.upstream.client import (
    MalformedResponseError,
    UpstreamNumbersClient,
    parse_numbers,
)


def _failures(category: str, reason: str) -> float:
    value = REGISTRY.get_sample_value(
        "averager_upstream_failures_total", {"category": category, "reason": reason}
    )
    return value or 0.0


class TestParseNumbers:
    def test_returns_numbers_array(self):
        assert parse_numbers({"numbers": [1, 2, 3]}) == [1, 2, 3]

    def test_missing_field_is_empty(self):
        assert parse_numbers({"other": 1}) == []

    @pytest.mark.parametrize(
        "body",
        [
            [1, 2, 3],
            "numbers",
            {"numbers": "1,2,3"},
            {"numbers": [1, "2"]},
            {"numbers": [1, True]},
            {"numbers": [float("nan")]},
            {"numbers": [float("inf")]},
            {"numbers": [1, -float("inf")]},
            {"numbers": [10**400]},
        ],
    )
    def test_rejects_malformed_bodies(self, body):
        with pytest.raises(MalformedResponseError):
            parse_numbers(body)

    def test_large_finite_values_are_kept(self):
        assert parse_numbers({"numbers": [1.5e308, 10**300]}) == [1.5e308, 10**300]


class TestUpstreamNumbersClient:
    @pytest.mark.asyncio
    async def test_fetch_success_sends_bearer_and_category_path(
        self, make_upstream_client
    ):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"numbers": [2, 3, 5]})

        client = make_upstream_client(handler)
        result = await client.fetch("primes")

        assert result.ok
        assert result.category == "primes"
        assert result.numbers == [2, 3, 5]
        assert seen == {"path": "/numbers/primes", "auth": "Bearer test-token"}

    @pytest.mark.asyncio
    async def test_missing_numbers_field_is_not_an_error(self, make_upstream_client):
        client = make_upstream_client(lambda request: httpx.Response(200, json={}))

        result = await client.fetch("fibo")

        assert result.ok
        assert result.numbers == []

    @pytest.mark.asyncio
    async def test_non_success_status_yields_empty(self, make_upstream_client):
        before = _failures("even", "http_status")
        client = make_upstream_client(
            lambda request: httpx.Response(503, json={"numbers": [2, 4]})
        )

        result = await client.fetch("even")

        assert result.numbers == []
        assert result.error == "http_status:503"
        assert _failures("even", "http_status") == before + 1

    @pytest.mark.asyncio
    async def test_non_json_body_yields_empty(self, make_upstream_client):
        client = make_upstream_client(
            lambda request: httpx.Response(200, content=b"<html>oops</html>")
        )

        result = await client.fetch("rand")

        assert result.numbers == []
        assert result.error == "malformed_body"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content",
        [
            b'{"numbers":[NaN]}',
            b'{"numbers":[1,Infinity]}',
            b'{"numbers":[-Infinity,2]}',
            b'{"numbers":[1' + b"0" * 400 + b"]}",
        ],
    )
    async def test_non_finite_numbers_yield_empty(self, make_upstream_client, content):
        before = _failures("rand", "malformed_body")
        client = make_upstream_client(
            lambda request: httpx.Response(200, content=content)
        )

        result = await client.fetch("rand")

        assert result.numbers == []
        assert result.error == "malformed_body"
        assert _failures("rand", "malformed_body") == before + 1

    @pytest.mark.asyncio
    async def test_transport_error_yields_empty(self, make_upstream_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_upstream_client(handler)
        result = await client.fetch("primes")

        assert result.numbers == []
        assert result.error == "transport:ConnectError"

    @pytest.mark.asyncio
    async def test_slow_upstream_is_cancelled_at_deadline(self, make_upstream_client):
        cancelled = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return httpx.Response(200, json={"numbers": [1]})

        before = _failures("fibo", "timeout")
        client = make_upstream_client(handler, timeout_seconds=0.05)

        result = await client.fetch("fibo")

        assert result.numbers == []
        assert result.error == "timeout"
        assert result.elapsed_seconds < 1.0
        assert cancelled.is_set()
        assert _failures("fibo", "timeout") == before + 1

    @pytest.mark.asyncio
    async def test_fetch_numbers_returns_plain_list(self, make_upstream_client):
        client = make_upstream_client(
            lambda request: httpx.Response(200, json={"numbers": [8, 13]})
        )

        assert await client.fetch_numbers("fibo") == [8, 13]

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_token(self, make_upstream_client):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"numbers": []})

        client = make_upstream_client(handler, auth_token="")
        await client.fetch("primes")

        assert seen["auth"] is None

    @pytest.mark.asyncio
    async def test_aclose_leaves_injected_client_open(self):
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )
        client = UpstreamNumbersClient(client=http_client, auth_token="t")

        await client.aclose()

        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_aclose_closes_owned_client(self):
        client = UpstreamNumbersClient(auth_token="t", timeout_seconds=0.1)

        await client.aclose()

        assert client._client.is_closed
