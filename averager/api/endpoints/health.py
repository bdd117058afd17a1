from fastapi import APIRouter, Request, Response

router = APIRouter()


@router.get("/healthz")
async def healthz():
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request):
    if getattr(request.app.state, "aggregator", None) is not None:
        return {"status": "ready"}
    return Response(status_code=503, content="not ready")
