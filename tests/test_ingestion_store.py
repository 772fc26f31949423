"""Tests del store de ingesta.

Tests:
1. Overwrite de la última lectura
2. Generación de alertas por temperatura
3. Tope de 50 alertas, más reciente primero
4. Reconocimiento de alertas
5. Alertas opcionales de turbidez y pH

Ejecutar:
    pytest tests/test_ingestion_store.py -v
"""

from datetime import timezone

import pytest

from sensor_api.classification import AlertLevel, RiskStatus
from sensor_api.store import IngestionStore, SiteContext


@pytest.fixture
def store(clock) -> IngestionStore:
    return IngestionStore(clock=clock)


# =============================================================================
# TEST 1: ÚLTIMA LECTURA
# =============================================================================

class TestLatestReading:

    def test_empty_store_has_no_latest(self, store):
        assert store.get_latest() is None
        assert store.get_history() == []
        assert store.get_alerts() == []

    def test_ingest_returns_status_and_sets_latest(self, store, clock):
        status = store.ingest(turbidity=3, temperature=25, ph=7)

        assert status == RiskStatus.HIGH_RISK
        latest = store.get_latest()
        assert latest.turbidity == 3
        assert latest.temperature == 25
        assert latest.ph == 7
        assert latest.status == RiskStatus.HIGH_RISK
        assert latest.timestamp == clock.now

    def test_latest_is_overwritten_not_merged(self, store):
        store.ingest(turbidity=3, temperature=25, ph=7, lat=10.3, lng=123.9)
        store.ingest(turbidity=None, temperature=19, ph=None)

        latest = store.get_latest()
        assert latest.turbidity is None
        assert latest.ph is None
        assert latest.temperature == 19
        assert latest.lat is None
        assert latest.lng is None
        assert latest.status == RiskStatus.LOW_RISK

    def test_missing_temperature_is_unknown(self, store):
        assert store.ingest(turbidity=3, temperature=None, ph=7) == RiskStatus.UNKNOWN
        assert store.get_alerts() == []

    def test_timestamps_are_utc(self, store):
        store.ingest(turbidity=3, temperature=25, ph=7)
        assert store.get_latest().timestamp.tzinfo == timezone.utc


# =============================================================================
# TEST 2: ALERTAS DE TEMPERATURA
# =============================================================================

class TestTemperatureAlerts:

    def test_high_risk_creates_critical_alert(self, store, clock):
        store.ingest(turbidity=3, temperature=25, ph=7)

        alerts = store.get_alerts()
        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.level == AlertLevel.CRITICAL
        assert alert.message == "Temperature is in high schistosomiasis risk range"
        assert alert.parameter == "Temperature"
        assert alert.value == "25°C"
        assert alert.timestamp == clock.now
        assert alert.is_acknowledged is False
        assert alert.site_name == "Site 1"
        assert alert.barangay == "Unknown"
        assert alert.duration == "-"

    def test_possible_risk_creates_warning_alert(self, store):
        store.ingest(turbidity=3, temperature=30.5, ph=7)

        alert = store.get_alerts()[0]
        assert alert.level == AlertLevel.WARNING
        assert alert.message == "Temperature is in possible schistosomiasis risk range"
        assert alert.value == "30.5°C"

    def test_low_risk_creates_no_alert(self, store):
        store.ingest(turbidity=3, temperature=19, ph=7)
        assert store.get_alerts() == []

    def test_alert_ids_are_unique(self, store):
        for _ in range(10):
            store.ingest(turbidity=3, temperature=25, ph=7)
        ids = [a.id for a in store.get_alerts()]
        assert len(set(ids)) == 10

    def test_site_context_is_stamped(self, store):
        site = store.site_context(site_name="Lake Mainit", barangay="Poblacion")
        store.ingest(turbidity=3, temperature=25, ph=7, site=site)

        alert = store.get_alerts()[0]
        assert alert.site_name == "Lake Mainit"
        assert alert.barangay == "Poblacion"
        assert alert.duration == "-"

    def test_site_context_falls_back_to_default(self):
        store = IngestionStore(default_site=SiteContext(site_name="Site 7", barangay="San Roque"))
        site = store.site_context(site_name=None, barangay="")
        assert site == SiteContext(site_name="Site 7", barangay="San Roque")


# =============================================================================
# TEST 3: CAPACIDAD DEL LOG DE ALERTAS
# =============================================================================

class TestAlertCapacity:

    def test_alerts_are_newest_first(self, store):
        store.ingest(turbidity=3, temperature=25, ph=7)
        store.ingest(turbidity=3, temperature=21, ph=7)

        levels = [a.level for a in store.get_alerts()]
        assert levels == [AlertLevel.WARNING, AlertLevel.CRITICAL]

    def test_52_high_risk_readings_keep_50_alerts(self, store):
        store.ingest(turbidity=3, temperature=25, ph=7)
        first_id = store.get_alerts()[0].id

        for _ in range(51):
            store.ingest(turbidity=3, temperature=25, ph=7)

        alerts = store.get_alerts()
        assert len(alerts) == 50
        assert first_id not in {a.id for a in alerts}

    def test_51st_alert_evicts_only_the_oldest(self, store):
        temperatures = [22.0 + (i % 7) for i in range(51)]
        for t in temperatures:
            store.ingest(turbidity=3, temperature=t, ph=7)

        values = [a.value for a in store.get_alerts()]
        expected = [f"{int(t)}°C" for t in reversed(temperatures[1:])]
        assert values == expected

    def test_custom_capacity(self, clock):
        store = IngestionStore(alerts_capacity=3, clock=clock)
        for _ in range(5):
            store.ingest(turbidity=3, temperature=25, ph=7)
        assert len(store.get_alerts()) == 3

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"history_capacity": 0},
            {"alerts_capacity": 0},
            {"bucket_minutes": 7},
            {"bucket_minutes": 0},
        ],
    )
    def test_invalid_configuration_rejected(self, kwargs):
        with pytest.raises(ValueError):
            IngestionStore(**kwargs)


# =============================================================================
# TEST 4: RECONOCIMIENTO
# =============================================================================

class TestAcknowledge:

    def test_acknowledge_marks_alert(self, store):
        store.ingest(turbidity=3, temperature=25, ph=7)
        alert_id = store.get_alerts()[0].id

        result = store.acknowledge_alert(alert_id, acknowledged_by="BHW Maria")

        assert result.is_acknowledged is True
        assert result.acknowledged_by == "BHW Maria"
        stored = store.get_alerts()[0]
        assert stored.is_acknowledged is True
        assert stored.acknowledged_by == "BHW Maria"

    def test_unknown_id_returns_none(self, store):
        store.ingest(turbidity=3, temperature=25, ph=7)
        assert store.acknowledge_alert("does-not-exist") is None
        assert store.get_alerts()[0].is_acknowledged is False

    def test_returned_alerts_are_copies(self, store):
        store.ingest(turbidity=3, temperature=25, ph=7)
        copy = store.get_alerts()[0]
        copy.is_acknowledged = True

        assert store.get_alerts()[0].is_acknowledged is False

    def test_stats_count_unacknowledged(self, store):
        store.ingest(turbidity=3, temperature=25, ph=7)
        store.ingest(turbidity=3, temperature=26, ph=7)
        store.acknowledge_alert(store.get_alerts()[0].id)

        stats = store.get_stats()
        assert stats["has_latest"] is True
        assert stats["alerts_size"] == 2
        assert stats["alerts_capacity"] == 50
        assert stats["history_capacity"] == 288
        assert stats["unacknowledged_alerts"] == 1


# =============================================================================
# TEST 5: ALERTAS DE TURBIDEZ Y PH
# =============================================================================

class TestParameterAlerts:

    def test_disabled_by_default(self, store):
        store.ingest(turbidity=12, temperature=19, ph=5.5)
        assert store.get_alerts() == []

    def test_enabled_adds_parameter_alerts(self, clock):
        store = IngestionStore(parameter_alerts_enabled=True, clock=clock)
        store.ingest(turbidity=12, temperature=25, ph=5.5)

        alerts = store.get_alerts()
        # Prepend en orden temperatura, turbidez, pH: el último queda primero
        assert [a.parameter for a in alerts] == ["pH", "Turbidity", "Temperature"]
        assert alerts[0].value == "5.5"
        assert alerts[1].value == "12 NTU"
        assert alerts[1].level == AlertLevel.CRITICAL

    def test_enabled_does_not_change_status(self, clock):
        store = IngestionStore(parameter_alerts_enabled=True, clock=clock)
        assert store.ingest(turbidity=12, temperature=19, ph=5.5) == RiskStatus.LOW_RISK

    def test_parameter_alert_value_uses_dashboard_number_format(self, clock):
        store = IngestionStore(parameter_alerts_enabled=True, clock=clock)
        store.ingest(turbidity=1e-7, temperature=19, ph=7.5)

        alert = store.get_alerts()[0]
        assert alert.parameter == "Turbidity"
        assert alert.value == "1e-7 NTU"
