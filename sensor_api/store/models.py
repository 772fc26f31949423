"""Modelos del store de ingesta.

Dataclasses en memoria; los schemas pydantic de la capa HTTP
se construyen a partir de ellas.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..classification.models import AlertLevel, RiskStatus


@dataclass(frozen=True)
class SiteContext:
    """Metadata del sitio que se estampa en cada alerta."""

    site_name: str = "Site 1"
    barangay: str = "Unknown"
    duration: str = "-"


@dataclass(frozen=True)
class Reading:
    """Lectura de sensor clasificada.

    `status` siempre se deriva de `temperature` al momento de la escritura.
    """

    turbidity: Optional[float]
    temperature: Optional[float]
    ph: Optional[float]
    status: RiskStatus
    timestamp: datetime
    lat: Optional[float] = None
    lng: Optional[float] = None


@dataclass
class Alert:
    """Alerta generada por una lectura fuera de rango seguro."""

    id: str
    level: AlertLevel
    message: str
    parameter: str
    value: str
    timestamp: datetime
    site_name: str
    barangay: str
    duration: str
    is_acknowledged: bool = False
    acknowledged_by: Optional[str] = None
