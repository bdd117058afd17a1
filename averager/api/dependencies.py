from fastapi import HTTPException, Request, status

from averager.services.aggregator import WindowAggregator
from shared.constants import Categories


def get_aggregator(request: Request) -> WindowAggregator:
    aggregator = getattr(request.app.state, "aggregator", None)
    if aggregator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Window aggregator not initialised",
        ) from None
    return aggregator


def get_category(number_id: str) -> str:
    """Resolve the path token to an upstream category or reject with 400."""
    try:
        return Categories.from_token(number_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Invalid number ID '{number_id}'. "
                f"Use one of: {', '.join(Categories.valid_tokens())}"
            ),
        ) from None
