"""Store de ingesta en memoria.

FUENTE ÚNICA DE VERDAD para el estado del sensor en el proceso:
- Última lectura (slot único, se sobreescribe en cada ingesta)
- Historial muestreado por buckets de 5 minutos (máx 288 = 24h)
- Log de alertas, más reciente primero (máx 50)

Todo el estado es volátil: se pierde al reiniciar el proceso.

Thread-safe: los endpoints síncronos corren en el threadpool de FastAPI y el
sampler en su propio thread, así que cada mutación y cada lectura toma el
mismo lock.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Deque, List, Optional

from .. import metrics
from ..classification import (
    AlertLevel,
    ParameterAlertRules,
    RiskStatus,
    alert_level_for,
    classify_temperature,
)
from .alert_factory import build_parameter_alert, build_temperature_alert
from .models import Alert, Reading, SiteContext
from .time_buckets import floor_to_bucket

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class IngestionStore:
    """Store de lecturas, historial y alertas.

    Reglas:
    - `ingest` nunca falla; una lectura sin temperatura queda como UNKNOWN
    - Solo se genera alerta si el nivel derivado no es SAFE
    - El historial tiene a lo sumo una entrada por bucket
    """

    DEFAULT_HISTORY_CAPACITY = 288
    DEFAULT_ALERTS_CAPACITY = 50
    DEFAULT_BUCKET_MINUTES = 5

    def __init__(
        self,
        history_capacity: int = DEFAULT_HISTORY_CAPACITY,
        alerts_capacity: int = DEFAULT_ALERTS_CAPACITY,
        bucket_minutes: int = DEFAULT_BUCKET_MINUTES,
        default_site: Optional[SiteContext] = None,
        parameter_alerts_enabled: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Inicializa el store.

        Args:
            history_capacity: Máximo de entradas de historial
            alerts_capacity: Máximo de alertas retenidas
            bucket_minutes: Ancho del bucket de historial (debe dividir 60)
            default_site: Metadata de sitio usada cuando el request no la trae
            parameter_alerts_enabled: Si True, también alerta por turbidez y pH
            clock: Fuente de "ahora" (inyectable para tests)
        """
        if history_capacity < 1 or alerts_capacity < 1:
            raise ValueError("capacities must be >= 1")
        if bucket_minutes < 1 or 60 % bucket_minutes != 0:
            raise ValueError(f"bucket_minutes must divide 60, got {bucket_minutes}")

        self._history_capacity = history_capacity
        self._alerts_capacity = alerts_capacity
        self._bucket_minutes = bucket_minutes
        self._default_site = default_site or SiteContext()
        self._parameter_alerts_enabled = parameter_alerts_enabled
        self._clock = clock or _utc_now

        self._lock = threading.Lock()
        self._latest: Optional[Reading] = None
        # deque con maxlen descarta por el extremo opuesto al de inserción
        self._history: Deque[Reading] = deque(maxlen=history_capacity)
        self._alerts: Deque[Alert] = deque(maxlen=alerts_capacity)

    @property
    def default_site(self) -> SiteContext:
        return self._default_site

    def site_context(
        self,
        site_name: Optional[str] = None,
        barangay: Optional[str] = None,
    ) -> SiteContext:
        """Combina overrides del request con el sitio por defecto."""
        site = self._default_site
        if site_name:
            site = replace(site, site_name=site_name)
        if barangay:
            site = replace(site, barangay=barangay)
        return site

    # ------------------------------------------------------------------
    # Escritura
    # ------------------------------------------------------------------

    def ingest(
        self,
        turbidity: Optional[float],
        temperature: Optional[float],
        ph: Optional[float],
        *,
        site: Optional[SiteContext] = None,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
    ) -> RiskStatus:
        """Clasifica la lectura, la guarda como última y genera alertas.

        Returns:
            RiskStatus calculado a partir de la temperatura
        """
        status = classify_temperature(temperature)
        level = alert_level_for(status)
        site = site or self._default_site

        with self._lock:
            now = self._clock()
            self._latest = Reading(
                turbidity=turbidity,
                temperature=temperature,
                ph=ph,
                status=status,
                timestamp=now,
                lat=lat,
                lng=lng,
            )

            new_alerts: List[Alert] = []
            if level != AlertLevel.SAFE:
                new_alerts.append(build_temperature_alert(level, temperature, site, now))
            if self._parameter_alerts_enabled:
                for violation in ParameterAlertRules.evaluate(turbidity, ph):
                    new_alerts.append(build_parameter_alert(violation, site, now))

            for alert in new_alerts:
                self._alerts.appendleft(alert)

        metrics.READINGS_INGESTED.labels(status=status.value).inc()
        for alert in new_alerts:
            metrics.ALERTS_RAISED.labels(level=alert.level.value, parameter=alert.parameter).inc()
            logger.warning(
                "[ALERT] level=%s parameter=%s value=%s site=%s",
                alert.level.value,
                alert.parameter,
                alert.value,
                alert.site_name,
            )

        logger.info(
            "[INGEST] turbidity=%s temperature=%s ph=%s status=%s",
            turbidity,
            temperature,
            ph,
            status.value,
        )
        return status

    def sample_history(self, now: Optional[datetime] = None) -> Optional[Reading]:
        """Copia la última lectura al historial si el bucket actual no tiene entrada.

        Args:
            now: Momento del muestreo (default: clock del store)

        Returns:
            La entrada agregada, o None si no hubo cambio
        """
        with self._lock:
            if self._latest is None:
                return None

            sample_ts = now or self._clock()
            if sample_ts.tzinfo is None:
                sample_ts = sample_ts.replace(tzinfo=timezone.utc)
            bucket = floor_to_bucket(sample_ts, self._bucket_minutes)

            if self._history:
                last_bucket = floor_to_bucket(self._history[-1].timestamp, self._bucket_minutes)
                if bucket == last_bucket:
                    return None
                if bucket < last_bucket:
                    logger.warning(
                        "[SAMPLER] Clock went backwards: bucket=%s last=%s, skipping",
                        bucket.isoformat(),
                        last_bucket.isoformat(),
                    )
                    return None

            entry = replace(self._latest, timestamp=bucket)
            self._history.append(entry)
            size = len(self._history)

        metrics.HISTORY_SAMPLES.inc()
        logger.debug("[SAMPLER] History entry bucket=%s size=%d", bucket.isoformat(), size)
        return entry

    def acknowledge_alert(
        self,
        alert_id: str,
        acknowledged_by: Optional[str] = None,
    ) -> Optional[Alert]:
        """Marca una alerta como reconocida.

        Returns:
            Copia de la alerta actualizada, o None si el id no existe
        """
        with self._lock:
            for alert in self._alerts:
                if alert.id == alert_id:
                    alert.is_acknowledged = True
                    if acknowledged_by:
                        alert.acknowledged_by = acknowledged_by
                    acknowledged = replace(alert)
                    break
            else:
                return None

        metrics.ALERTS_ACKNOWLEDGED.inc()
        logger.info("[ALERT] Acknowledged id=%s by=%s", alert_id, acknowledged_by)
        return acknowledged

    # ------------------------------------------------------------------
    # Lectura
    # ------------------------------------------------------------------

    def get_latest(self) -> Optional[Reading]:
        with self._lock:
            return self._latest

    def get_history(self) -> List[Reading]:
        """Historial, más antiguo primero."""
        with self._lock:
            return list(self._history)

    def get_alerts(self) -> List[Alert]:
        """Alertas, más reciente primero. Devuelve copias."""
        with self._lock:
            return [replace(a) for a in self._alerts]

    def get_stats(self) -> dict:
        with self._lock:
            return {
                "has_latest": self._latest is not None,
                "history_size": len(self._history),
                "history_capacity": self._history_capacity,
                "alerts_size": len(self._alerts),
                "alerts_capacity": self._alerts_capacity,
                "unacknowledged_alerts": sum(1 for a in self._alerts if not a.is_acknowledged),
            }
