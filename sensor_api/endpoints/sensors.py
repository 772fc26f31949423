"""Endpoints de lecturas y alertas del sensor."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_store
from ..schemas import (
    AcknowledgeIn,
    AcknowledgeResult,
    AlertOut,
    IngestResult,
    ReadingOut,
    SensorReadingIn,
)
from ..store import IngestionStore

router = APIRouter(prefix="/api/sensors", tags=["sensors"])
logger = logging.getLogger(__name__)


@router.post("", response_model=IngestResult)
def ingest_reading(
    payload: SensorReadingIn,
    store: IngestionStore = Depends(get_store),
):
    """Recibe una lectura del bridge serial.

    La validación numérica ocurre en el schema; el store nunca falla.
    """
    site = store.site_context(site_name=payload.site_name, barangay=payload.barangay)
    status = store.ingest(
        turbidity=payload.turbidity,
        temperature=payload.temperature,
        ph=payload.ph,
        site=site,
        lat=payload.lat,
        lng=payload.lng,
    )
    return IngestResult(success=True, status=status)


@router.get("/latest", response_model=Optional[ReadingOut])
def get_latest(store: IngestionStore = Depends(get_store)):
    reading = store.get_latest()
    if reading is None:
        return None
    return ReadingOut.from_reading(reading)


@router.get("/history", response_model=List[ReadingOut])
def get_history(store: IngestionStore = Depends(get_store)):
    """Últimas 24h en buckets de 5 minutos, más antiguo primero."""
    return [ReadingOut.from_reading(r) for r in store.get_history()]


@router.get("/alerts", response_model=List[AlertOut])
def get_alerts(store: IngestionStore = Depends(get_store)):
    """Alertas retenidas, más reciente primero."""
    return [AlertOut.from_alert(a) for a in store.get_alerts()]


@router.post("/alerts/{alert_id}/acknowledge", response_model=AcknowledgeResult)
def acknowledge_alert(
    alert_id: str,
    payload: Optional[AcknowledgeIn] = None,
    store: IngestionStore = Depends(get_store),
):
    acknowledged_by = payload.acknowledged_by if payload is not None else None
    alert = store.acknowledge_alert(alert_id, acknowledged_by=acknowledged_by)
    if alert is None:
        logger.info("[ALERT] Acknowledge for unknown id=%s", alert_id)
        raise HTTPException(status_code=404, detail="Alert not found")
    return AcknowledgeResult(success=True, alert=AlertOut.from_alert(alert))
