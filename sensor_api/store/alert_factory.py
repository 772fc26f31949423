"""Construcción de alertas.

Plantillas de mensaje, formato de valores e ids únicos por proceso.
"""

from __future__ import annotations

import time
import uuid
from datetime import datetime
from typing import Optional

from common.numbers import format_number

from ..classification.models import AlertLevel
from ..classification.parameter_rules import ParameterViolation
from .models import Alert, SiteContext

TEMPERATURE_MESSAGES = {
    AlertLevel.CRITICAL: "Temperature is in high schistosomiasis risk range",
    AlertLevel.WARNING: "Temperature is in possible schistosomiasis risk range",
}


def new_alert_id() -> str:
    """Genera id de alerta: timestamp en ns + sufijo aleatorio.

    FORMATO: "<epoch_ns>-<8 hex>"
    """
    return f"{time.time_ns()}-{uuid.uuid4().hex[:8]}"


def build_temperature_alert(
    level: AlertLevel,
    temperature: Optional[float],
    site: SiteContext,
    timestamp: datetime,
) -> Alert:
    """Crea la alerta de temperatura para un nivel WARNING o CRITICAL."""
    return Alert(
        id=new_alert_id(),
        level=level,
        message=TEMPERATURE_MESSAGES[level],
        parameter="Temperature",
        value=f"{format_number(temperature)}°C",
        timestamp=timestamp,
        site_name=site.site_name,
        barangay=site.barangay,
        duration=site.duration,
    )


def build_parameter_alert(
    violation: ParameterViolation,
    site: SiteContext,
    timestamp: datetime,
) -> Alert:
    """Crea una alerta de turbidez o pH a partir de una regla violada."""
    return Alert(
        id=new_alert_id(),
        level=violation.level,
        message=violation.message,
        parameter=violation.parameter,
        value=f"{format_number(violation.value)}{violation.unit}",
        timestamp=timestamp,
        site_name=site.site_name,
        barangay=site.barangay,
        duration=site.duration,
    )
