"""Tests del clasificador de riesgo y reglas de parámetros.

Ejecutar:
    pytest tests/test_risk_classifier.py -v
"""

import pytest

from sensor_api.classification import (
    AlertLevel,
    ParameterAlertRules,
    RiskStatus,
    alert_level_for,
    classify_temperature,
)


# =============================================================================
# CLASIFICACIÓN POR TEMPERATURA
# =============================================================================

class TestClassifyTemperature:
    """Bandas de riesgo y límites."""

    def test_missing_temperature_is_unknown(self):
        assert classify_temperature(None) == RiskStatus.UNKNOWN

    @pytest.mark.parametrize(
        "temperature,expected",
        [
            (22, RiskStatus.HIGH_RISK),
            (25, RiskStatus.HIGH_RISK),
            (28, RiskStatus.HIGH_RISK),
            (20, RiskStatus.POSSIBLE_RISK),
            (21.9, RiskStatus.POSSIBLE_RISK),
            (28.1, RiskStatus.POSSIBLE_RISK),
            (32, RiskStatus.POSSIBLE_RISK),
            (32.1, RiskStatus.LOW_RISK),
            (19.9, RiskStatus.LOW_RISK),
            (0, RiskStatus.LOW_RISK),
            (-5, RiskStatus.LOW_RISK),
        ],
    )
    def test_bands(self, temperature, expected):
        assert classify_temperature(temperature) == expected

    def test_status_serializes_to_wire_value(self):
        assert RiskStatus.HIGH_RISK.value == "high-risk"
        assert RiskStatus.POSSIBLE_RISK.value == "possible-risk"
        assert RiskStatus.LOW_RISK.value == "low-risk"


class TestAlertLevel:

    def test_mapping(self):
        assert alert_level_for(RiskStatus.HIGH_RISK) == AlertLevel.CRITICAL
        assert alert_level_for(RiskStatus.POSSIBLE_RISK) == AlertLevel.WARNING
        assert alert_level_for(RiskStatus.LOW_RISK) == AlertLevel.SAFE
        assert alert_level_for(RiskStatus.UNKNOWN) == AlertLevel.SAFE


# =============================================================================
# REGLAS DE TURBIDEZ Y PH
# =============================================================================

class TestParameterAlertRules:

    def test_turbidity_in_range_has_no_violation(self):
        assert ParameterAlertRules.check_turbidity(3) is None
        assert ParameterAlertRules.check_turbidity(None) is None

    def test_high_turbidity_is_critical(self):
        violation = ParameterAlertRules.check_turbidity(6)
        assert violation.level == AlertLevel.CRITICAL
        assert violation.message == "Turbidity is too high"
        assert violation.unit == " NTU"

    def test_low_turbidity_is_warning(self):
        violation = ParameterAlertRules.check_turbidity(0.5)
        assert violation.level == AlertLevel.WARNING
        assert violation.message == "Turbidity is too low"

    @pytest.mark.parametrize(
        "ph,level,message",
        [
            (6.0, AlertLevel.CRITICAL, "pH level is too low"),
            (9.0, AlertLevel.CRITICAL, "pH level is too high"),
            (6.8, AlertLevel.WARNING, "pH level is slightly low"),
            (8.2, AlertLevel.WARNING, "pH level is slightly high"),
        ],
    )
    def test_ph_rules(self, ph, level, message):
        violation = ParameterAlertRules.check_ph(ph)
        assert violation.parameter == "pH"
        assert violation.level == level
        assert violation.message == message

    def test_optimal_ph_has_no_violation(self):
        assert ParameterAlertRules.check_ph(7.0) is None
        assert ParameterAlertRules.check_ph(7.5) is None
        assert ParameterAlertRules.check_ph(8.0) is None

    def test_evaluate_orders_turbidity_before_ph(self):
        violations = ParameterAlertRules.evaluate(turbidity=10, ph=9.5)
        assert [v.parameter for v in violations] == ["Turbidity", "pH"]

    def test_evaluate_empty_when_all_in_range(self):
        assert ParameterAlertRules.evaluate(turbidity=3, ph=7.5) == []
