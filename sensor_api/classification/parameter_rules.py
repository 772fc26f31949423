"""Reglas de alerta por parámetro (turbidez y pH).

Complementan la alerta de temperatura. Solo se evalúan cuando
PARAMETER_ALERTS_ENABLED=1; por defecto el store solo alerta por temperatura.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .models import AlertLevel

TURBIDITY_MIN_NTU = 1.0
TURBIDITY_MAX_NTU = 5.0

PH_CRITICAL_MIN = 6.5
PH_CRITICAL_MAX = 8.5
PH_OPTIMAL_MIN = 7.0
PH_OPTIMAL_MAX = 8.0


@dataclass(frozen=True)
class ParameterViolation:
    """Resultado de una regla violada, listo para convertirse en alerta."""

    parameter: str
    level: AlertLevel
    message: str
    value: float
    unit: str = ""


class ParameterAlertRules:
    """Reglas de negocio para alertas de turbidez y pH."""

    @staticmethod
    def check_turbidity(turbidity: Optional[float]) -> Optional[ParameterViolation]:
        """Turbidez fuera de [1, 5] NTU.

        Regla: por encima del máximo es CRITICAL, por debajo del mínimo WARNING.
        """
        if turbidity is None:
            return None
        if turbidity > TURBIDITY_MAX_NTU:
            return ParameterViolation(
                parameter="Turbidity",
                level=AlertLevel.CRITICAL,
                message="Turbidity is too high",
                value=turbidity,
                unit=" NTU",
            )
        if turbidity < TURBIDITY_MIN_NTU:
            return ParameterViolation(
                parameter="Turbidity",
                level=AlertLevel.WARNING,
                message="Turbidity is too low",
                value=turbidity,
                unit=" NTU",
            )
        return None

    @staticmethod
    def check_ph(ph: Optional[float]) -> Optional[ParameterViolation]:
        """pH fuera de [6.5, 8.5] es CRITICAL; fuera de [7.0, 8.0] es WARNING."""
        if ph is None:
            return None
        if ph < PH_CRITICAL_MIN or ph > PH_CRITICAL_MAX:
            return ParameterViolation(
                parameter="pH",
                level=AlertLevel.CRITICAL,
                message="pH level is too low" if ph < PH_CRITICAL_MIN else "pH level is too high",
                value=ph,
            )
        if ph < PH_OPTIMAL_MIN or ph > PH_OPTIMAL_MAX:
            return ParameterViolation(
                parameter="pH",
                level=AlertLevel.WARNING,
                message="pH level is slightly low" if ph < PH_OPTIMAL_MIN else "pH level is slightly high",
                value=ph,
            )
        return None

    @classmethod
    def evaluate(
        cls,
        turbidity: Optional[float],
        ph: Optional[float],
    ) -> List[ParameterViolation]:
        """Evalúa todas las reglas. Orden: turbidez, luego pH."""
        violations = []
        for violation in (cls.check_turbidity(turbidity), cls.check_ph(ph)):
            if violation is not None:
                violations.append(violation)
        return violations
