"""Sampler periódico del historial.

Cada `interval_seconds` (default 300s) copia la última lectura del store
al historial, a lo sumo una vez por bucket de 5 minutos.

Características:
- Thread daemon con stop() para shutdown ordenado y aislamiento en tests
- tick() público: los tests simulan disparos sin esperar al reloj real
- Un error en un tick se loguea y el loop continúa
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Optional

from .ingestion_store import IngestionStore
from .models import Reading

logger = logging.getLogger(__name__)


class HistorySampler:
    """Dispara IngestionStore.sample_history en intervalos fijos."""

    DEFAULT_INTERVAL_SECONDS = 300.0

    def __init__(
        self,
        store: IngestionStore,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")

        self._store = store
        self._interval_seconds = float(interval_seconds)
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        # Métricas
        self._ticks = 0
        self._samples = 0
        self._errors = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Inicia el thread del sampler."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            name="history-sampler",
            daemon=True,
        )
        self._thread.start()
        logger.info("[SAMPLER] Started interval=%.1fs", self._interval_seconds)

    def stop(self, timeout: float = 5.0) -> None:
        """Detiene el sampler y espera al thread."""
        self._stop_event.set()

        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

        logger.info(
            "[SAMPLER] Stopped. Stats: ticks=%d, samples=%d, errors=%d",
            self._ticks,
            self._samples,
            self._errors,
        )

    def tick(self, now: Optional[datetime] = None) -> Optional[Reading]:
        """Un disparo del timer.

        Returns:
            La entrada agregada al historial, o None
        """
        self._ticks += 1
        entry = self._store.sample_history(now)
        if entry is not None:
            self._samples += 1
        return entry

    def _run_loop(self) -> None:
        # wait() devuelve True cuando se pide stop
        while not self._stop_event.wait(self._interval_seconds):
            try:
                self.tick()
            except Exception:
                self._errors += 1
                logger.exception("[SAMPLER] Tick failed")

    def get_stats(self) -> dict:
        return {
            "running": self.is_running,
            "interval_seconds": self._interval_seconds,
            "ticks": self._ticks,
            "samples": self._samples,
            "errors": self._errors,
        }
