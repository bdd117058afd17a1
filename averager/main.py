from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from averager.api.router import api_router
from averager.startup import initialize_application, shutdown_application


@asynccontextmanager
async def lifespan(app: FastAPI):
    initialize_application(app)
    try:
        yield
    finally:
        await shutdown_application(app)


app = FastAPI(title="Number Window Averager", version="0.1.0", lifespan=lifespan)

instrumentator = Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    excluded_handlers=["/docs", "/openapi.json", "/metrics"],
    inprogress_name="averager_inprogress",
    inprogress_labels=True,
)

# Serves the default prometheus_client registry, including averager_* metrics
instrumentator.instrument(app).expose(app, endpoint="/metrics")

app.include_router(api_router)
