"""Cliente HTTP hacia el backend de SchistoGuard.

Usado por el bridge serial para publicar lecturas y consultar alertas.
Los errores HTTP se loguean y no interrumpen al bridge.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from .line_parser import SerialReading

logger = logging.getLogger(__name__)


class BackendClient:
    """Cliente de /api/sensors."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def sensors_url(self) -> str:
        return f"{self._base_url}/api/sensors"

    def post_reading(self, reading: SerialReading) -> Optional[str]:
        """Publica una lectura.

        Returns:
            El status de riesgo devuelto por el backend, o None si falló
        """
        try:
            response = self._session.post(
                self.sensors_url,
                json=reading.to_payload(),
                timeout=self._timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("[BRIDGE] Failed to post reading: %s", e)
            return None

        if not isinstance(body, dict):
            logger.error("[BRIDGE] Unexpected response body from backend: %r", body)
            return None
        status = body.get("status")

        logger.info(
            "[BRIDGE] Posted temperature=%s turbidity=%s ph=%s status=%s",
            reading.temperature,
            reading.turbidity,
            reading.ph,
            status,
        )
        return status

    def fetch_alerts(self) -> List[Dict[str, Any]]:
        """Obtiene las alertas actuales (más reciente primero).

        Returns:
            Lista de alertas; vacía si el backend no respondió
        """
        try:
            response = self._session.get(f"{self.sensors_url}/alerts", timeout=self._timeout)
            response.raise_for_status()
            alerts = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("[BRIDGE] Failed to fetch alerts: %s", e)
            return []

        if not isinstance(alerts, list):
            logger.error("[BRIDGE] Unexpected alerts body from backend: %r", alerts)
            return []
        return [a for a in alerts if isinstance(a, dict)]

    def close(self) -> None:
        self._session.close()
