from fastapi import FastAPI

from averager.core.config import settings
from averager.core.logger import configure_logging, get_logger
from averager.infrastructure.upstream.client import UpstreamNumbersClient
from averager.services.aggregator import WindowAggregator

logger = get_logger("startup")


def initialize_application(app: FastAPI) -> WindowAggregator:
    """Configure logging, then build the upstream client and the aggregator."""
    configure_logging()
    logger.info("initializing_application")
    upstream = UpstreamNumbersClient()
    aggregator = WindowAggregator(capacity=settings.window_size, fetcher=upstream)
    app.state.upstream = upstream
    app.state.aggregator = aggregator
    logger.info(
        "application_initialized",
        extra={
            "window_size": settings.window_size,
            "upstream_base_url": settings.upstream_base_url,
            "upstream_timeout_ms": settings.upstream_timeout_ms,
            "otel_service": settings.otel_service_name,
        },
    )
    return aggregator


async def shutdown_application(app: FastAPI) -> None:
    upstream = getattr(app.state, "upstream", None)
    if upstream is not None:
        await upstream.aclose()
    app.state.aggregator = None
    logger.info("application_stopped")
