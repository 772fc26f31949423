"""Clasificador de riesgo por temperatura.

Banda de temperatura favorable al caracol hospedero:
1. HIGH_RISK: [22, 28] °C
2. POSSIBLE_RISK: [20, 22) y (28, 32] °C
3. LOW_RISK: resto
4. UNKNOWN: sin lectura de temperatura

Funciones puras, sin validación: NaN/Infinity se rechazan en la capa HTTP.
"""

from __future__ import annotations

from typing import Optional

from .models import AlertLevel, RiskStatus

HIGH_RISK_MIN = 22.0
HIGH_RISK_MAX = 28.0
POSSIBLE_RISK_MIN = 20.0
POSSIBLE_RISK_MAX = 32.0


def classify_temperature(temperature: Optional[float]) -> RiskStatus:
    """Clasifica una temperatura en RiskStatus.

    Los límites 22 y 28 pertenecen a HIGH_RISK.
    """
    if temperature is None:
        return RiskStatus.UNKNOWN
    if HIGH_RISK_MIN <= temperature <= HIGH_RISK_MAX:
        return RiskStatus.HIGH_RISK
    if POSSIBLE_RISK_MIN <= temperature < HIGH_RISK_MIN:
        return RiskStatus.POSSIBLE_RISK
    if HIGH_RISK_MAX < temperature <= POSSIBLE_RISK_MAX:
        return RiskStatus.POSSIBLE_RISK
    return RiskStatus.LOW_RISK


def alert_level_for(status: RiskStatus) -> AlertLevel:
    """Mapea RiskStatus a AlertLevel."""
    if status == RiskStatus.HIGH_RISK:
        return AlertLevel.CRITICAL
    if status == RiskStatus.POSSIBLE_RISK:
        return AlertLevel.WARNING
    return AlertLevel.SAFE
