import asyncio
import math
import time
from typing import Any, List, Optional

import httpx

from averager.core.config import settings
from averager.core.logger import get_logger
from averager.domain.models import FetchResult, Number
from averager.metrics import UPSTREAM_FAILURES, UPSTREAM_LATENCY

logger = get_logger("upstream.client")


class MalformedResponseError(ValueError):
    """Upstream answered 2xx but the body is not a usable numbers payload."""


def parse_numbers(body: Any) -> List[Number]:
    """Extract the ``numbers`` array from a decoded upstream body.

    A missing ``numbers`` field means "nothing new" and yields an empty list.
    """
    if not isinstance(body, dict):
        raise MalformedResponseError(f"expected JSON object, got {type(body).__name__}")
    numbers = body.get("numbers")
    if numbers is None:
        return []
    if not isinstance(numbers, list):
        raise MalformedResponseError("'numbers' is not an array")
    for value in numbers:
        # bool is an int subclass; JSON true/false is not a number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedResponseError(f"non-numeric value in 'numbers': {value!r}")
        # NaN, Infinity and ints past float range cannot be averaged
        try:
            finite = math.isfinite(float(value))
        except OverflowError:
            finite = False
        if not finite:
            raise MalformedResponseError(f"non-finite value in 'numbers': {value!r}")
    return list(numbers)


class UpstreamNumbersClient:
    """Single-shot, deadline-bounded fetcher for the upstream numbers API.

    Every failure (timeout, transport error, non-2xx, bad body) is folded into
    an empty ``FetchResult`` carrying the reason; nothing is raised and
    nothing is retried.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: Optional[float] = None,
        auth_token: Optional[str] = None,
    ):
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else settings.upstream_timeout_seconds
        )
        token = auth_token if auth_token is not None else settings.upstream_auth_token
        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        else:
            logger.warning("upstream_credentials_missing")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds),
            follow_redirects=False,
        )

    async def fetch(self, category: str) -> FetchResult:
        start = time.perf_counter()
        numbers: List[Number] = []
        error: Optional[str] = None
        try:
            numbers = await asyncio.wait_for(
                self._get_numbers(category), timeout=self.timeout_seconds
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            error = "timeout"
        except httpx.HTTPStatusError as e:
            error = f"http_status:{e.response.status_code}"
        except httpx.HTTPError as e:
            error = f"transport:{type(e).__name__}"
        except MalformedResponseError as e:
            error = "malformed_body"
            logger.debug("upstream_malformed_body", extra={"detail": str(e)})
        except Exception as e:  # noqa: BLE001
            error = f"unexpected:{type(e).__name__}"
            logger.exception("upstream_unexpected_error", extra={"category": category})

        elapsed = time.perf_counter() - start
        UPSTREAM_LATENCY.labels(category=category).observe(elapsed)
        if error is not None:
            UPSTREAM_FAILURES.labels(
                category=category, reason=error.split(":", 1)[0]
            ).inc()
            logger.warning(
                "upstream_fetch_failed",
                extra={
                    "category": category,
                    "reason": error,
                    "elapsed_ms": round(elapsed * 1000, 1),
                },
            )
        else:
            logger.debug(
                "upstream_fetch_ok",
                extra={"category": category, "count": len(numbers)},
            )
        return FetchResult(
            category=category, numbers=numbers, error=error, elapsed_seconds=elapsed
        )

    async def fetch_numbers(self, category: str) -> List[Number]:
        result = await self.fetch(category)
        return result.numbers

    async def _get_numbers(self, category: str) -> List[Number]:
        response = await self._client.get(
            settings.upstream_url(category), headers=self._headers
        )
        response.raise_for_status()
        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedResponseError("response body is not JSON") from exc
        return parse_numbers(body)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
