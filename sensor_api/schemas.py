from __future__ import annotations

import math
from dataclasses import asdict
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from .classification.models import AlertLevel, RiskStatus
from .store.models import Alert, Reading


class _CamelModel(BaseModel):
    # JSON en camelCase (contrato del dashboard), atributos en snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SensorReadingIn(_CamelModel):
    # Campos ausentes llegan como None y la clasificación degrada a "unknown".
    turbidity: Optional[float] = None
    temperature: Optional[float] = None
    ph: Optional[float] = None
    site_name: Optional[str] = None
    barangay: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @field_validator("turbidity", "temperature", "ph", "lat", "lng")
    @classmethod
    def _reject_non_finite(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not math.isfinite(v):
            raise ValueError("must be a finite number (NaN/Infinity not allowed)")
        return v


class IngestResult(BaseModel):
    success: bool = True
    status: RiskStatus


class ReadingOut(BaseModel):
    turbidity: Optional[float] = None
    temperature: Optional[float] = None
    ph: Optional[float] = None
    status: RiskStatus
    timestamp: datetime
    lat: Optional[float] = None
    lng: Optional[float] = None

    @classmethod
    def from_reading(cls, reading: Reading) -> "ReadingOut":
        return cls(**asdict(reading))


class AlertOut(_CamelModel):
    id: str
    level: AlertLevel
    message: str
    parameter: str
    value: str
    timestamp: datetime
    is_acknowledged: bool
    site_name: str
    barangay: str
    duration: str
    acknowledged_by: Optional[str] = None

    @classmethod
    def from_alert(cls, alert: Alert) -> "AlertOut":
        return cls(**asdict(alert))


class AcknowledgeIn(_CamelModel):
    acknowledged_by: Optional[str] = None


class AcknowledgeResult(BaseModel):
    success: bool = True
    alert: AlertOut


class StoreStats(BaseModel):
    has_latest: bool
    history_size: int
    history_capacity: int
    alerts_size: int
    alerts_capacity: int
    unacknowledged_alerts: int


class HealthStatus(BaseModel):
    status: str
    store: StoreStats
    sampler: dict
