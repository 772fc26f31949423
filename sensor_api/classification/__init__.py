"""Módulo de clasificación de lecturas.

Estructura modular:
- models.py: Enums RiskStatus y AlertLevel
- risk_classifier.py: Clasificación de riesgo por temperatura
- parameter_rules.py: Reglas opcionales de turbidez y pH
"""

from .models import AlertLevel, RiskStatus
from .parameter_rules import ParameterAlertRules, ParameterViolation
from .risk_classifier import alert_level_for, classify_temperature

__all__ = [
    "AlertLevel",
    "RiskStatus",
    "ParameterAlertRules",
    "ParameterViolation",
    "alert_level_for",
    "classify_temperature",
]
