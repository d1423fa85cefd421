import asyncio
import logging
from typing import Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from errors import AggregationFailed
from models.status import CanonicalStatus, ErrorResponse, HealthResponse
from services.aggregator import StatusCollector

log = logging.getLogger(__name__)

router = APIRouter(tags=["status"])


@router.get(
    "/metrics",
    response_model=Dict[str, CanonicalStatus],
    responses={500: {"model": ErrorResponse}},
)
async def get_metrics(request: Request):
    """
    Container name -> "exited" | "running" | "healthy" | "unhealthy".
    Containers whose inspect failed are simply missing; a failed list is a 500.
    """
    collector: StatusCollector = request.app.state.collector

    # run_in_executor futures cancel immediately, so a request timeout
    # abandons the pass instead of waiting on it
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, collector.collect_all)
    except AggregationFailed as e:
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.get("/health", response_model=HealthResponse)
def health_check():
    """
    Liveness probe. Never touches the container engine.
    """
    return {"status": "ok"}
