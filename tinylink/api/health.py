from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from tinylink.schemas.HealthResponse import HealthResponse, ReadinessResponse

router = APIRouter(tags=["health"])

# simple liveness
@router.get("/healthz", response_model=HealthResponse)
def health(request: Request):
    return HealthResponse(
        ok=True,
        version=request.app.state.settings.VERSION,
        message="TinyLink server is healthy and running.",
    )

# readiness: check DB connectivity
@router.get("/readyz", response_model=ReadinessResponse)
def readiness(request: Request):
    db_ok = request.app.state.database.verify_connection()
    body = ReadinessResponse(ready=db_ok, details={"db": "ok" if db_ok else "error"})
    if not db_ok:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
