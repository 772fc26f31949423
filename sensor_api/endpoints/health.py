"""Health and metrics endpoints."""

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from ..dependencies import get_sampler, get_store
from ..schemas import HealthStatus, StoreStats
from ..store import HistorySampler, IngestionStore

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
def health(
    store: IngestionStore = Depends(get_store),
    sampler: HistorySampler = Depends(get_sampler),
):
    """Liveness probe con estado del store y del sampler."""
    return HealthStatus(
        status="ok",
        store=StoreStats(**store.get_stats()),
        sampler=sampler.get_stats(),
    )


@router.get("/metrics")
def metrics():
    """Prometheus text exposition."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
