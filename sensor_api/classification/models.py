"""Modelos de datos para clasificación de riesgo.

Enums compartidos por el clasificador, el store y los schemas HTTP.
"""

from __future__ import annotations

from enum import Enum


class RiskStatus(str, Enum):
    """Riesgo de esquistosomiasis derivado de la temperatura del agua."""

    UNKNOWN = "unknown"  # Sin temperatura
    LOW_RISK = "low-risk"
    POSSIBLE_RISK = "possible-risk"
    HIGH_RISK = "high-risk"


class AlertLevel(str, Enum):
    """Severidad de notificación derivada de RiskStatus."""

    SAFE = "safe"  # No genera alerta
    WARNING = "warning"
    CRITICAL = "critical"
