from fastapi import APIRouter

from .endpoints import health, numbers, window

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(numbers.router)
api_router.include_router(window.router)
