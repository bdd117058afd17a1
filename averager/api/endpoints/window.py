from fastapi import APIRouter, Depends

from averager.api.dependencies import get_aggregator
from averager.domain.models import WindowState
from averager.services.aggregator import WindowAggregator

router = APIRouter()


@router.get("/window", response_model=WindowState)
async def current_window(aggregator: WindowAggregator = Depends(get_aggregator)):
    return await aggregator.state()
