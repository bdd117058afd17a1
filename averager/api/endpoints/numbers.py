import time

from fastapi import APIRouter, Depends

from averager.api.dependencies import get_aggregator, get_category
from averager.core.logger import get_logger
from averager.domain.models import WindowSnapshot
from averager.metrics import NUMBERS_LATENCY, NUMBERS_REQUEST_ERRORS, NUMBERS_REQUESTS
from averager.services.aggregator import WindowAggregator

router = APIRouter()


@router.get(
    "/numbers/{number_id}",
    response_model=WindowSnapshot,
    summary="Fetch numbers and report the window average",
    response_description="Window state before and after merging the fetched numbers",
)
async def get_numbers(
    category: str = Depends(get_category),
    aggregator: WindowAggregator = Depends(get_aggregator),
):
    logger = get_logger("api.numbers")
    start_time = time.time()

    NUMBERS_REQUESTS.labels(category=category).inc()
    try:
        snapshot = await aggregator.collect(category)
        logger.info(
            "numbers_request_served",
            extra={
                "category": category,
                "fetched": len(snapshot.numbers),
                "window_len": len(snapshot.window_curr_state),
                "avg": snapshot.avg,
                "processing_time": time.time() - start_time,
            },
        )
        return snapshot

    except Exception as e:
        NUMBERS_REQUEST_ERRORS.inc()
        logger.error(
            "numbers_request_failed",
            extra={
                "category": category,
                "error_type": type(e).__name__,
                "error": str(e),
            },
        )
        raise

    finally:
        NUMBERS_LATENCY.observe(time.time() - start_time)
