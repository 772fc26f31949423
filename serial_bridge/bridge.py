"""Bridge serial → HTTP.

Lee líneas del microcontrolador, publica cada lectura válida en el backend
y periódicamente devuelve al puerto serial las alertas no reconocidas para
que el módem las envíe por SMS.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Protocol

from serial import SerialException

from common.numbers import format_number, leading_number

from .backend_client import BackendClient
from .line_parser import LineKind, ParsedLine, parse_serial_line

logger = logging.getLogger(__name__)

ALERT_LINE_PARAMETERS = ("Turbidity", "pH", "Temperature")


class SerialPortLike(Protocol):
    """Subset de serial.Serial que usa el bridge."""

    def readline(self) -> bytes:
        ...

    def write(self, data: bytes) -> Optional[int]:
        ...

    def close(self) -> None:
        ...


def render_alert_line(alert: Dict[str, Any]) -> str:
    """Renderiza una alerta como línea para el firmware ("Temperature: 25")."""
    parameter = str(alert.get("parameter", ""))
    value = str(alert.get("value", ""))
    if parameter in ALERT_LINE_PARAMETERS:
        number = leading_number(value)
        if number is not None:
            return f"{parameter}: {format_number(number)}"
    return f"{parameter}: {value}"


def render_alert_batch(alerts: Iterable[Dict[str, Any]]) -> Optional[str]:
    """Une las alertas no reconocidas en un batch separado por saltos de línea.

    Returns:
        El batch, o None si no hay alertas pendientes
    """
    lines = [render_alert_line(a) for a in alerts if not a.get("isAcknowledged")]
    if not lines:
        return None
    return "\n".join(lines)


class SerialBridge:
    """Bridge entre el puerto serial y el backend.

    Uso:
        bridge = SerialBridge(serial.Serial("COM6", 9600, timeout=1), client)
        bridge.run()  # bloqueante hasta stop() o error del puerto
    """

    DEFAULT_ALERT_PUSH_INTERVAL = 10.0

    def __init__(
        self,
        port: SerialPortLike,
        client: BackendClient,
        alert_push_interval: float = DEFAULT_ALERT_PUSH_INTERVAL,
    ) -> None:
        self._port = port
        self._client = client
        self._alert_push_interval = float(alert_push_interval)
        self._stop_event = threading.Event()
        self._alert_thread: Optional[threading.Thread] = None
        self._write_lock = threading.Lock()

        self._lines_received = 0
        self._readings_forwarded = 0
        self._lines_rejected = 0
        self._alert_batches_sent = 0
        self._line_errors = 0

    def handle_line(self, line: str) -> ParsedLine:
        """Procesa una línea recibida del puerto."""
        self._lines_received += 1
        logger.debug("[SERIAL] %s", line.rstrip())

        parsed = parse_serial_line(line)
        if parsed.kind == LineKind.SMS_SENT:
            logger.info("[BRIDGE] SMS sent: %s", parsed.sms_info)
        elif not parsed.valid:
            self._lines_rejected += 1
            logger.warning("[BRIDGE] %s: %r", parsed.error, line.strip())
        elif parsed.reading is not None:
            if self._client.post_reading(parsed.reading) is not None:
                self._readings_forwarded += 1
        return parsed

    def push_alerts(self) -> List[str]:
        """Envía al puerto las alertas no reconocidas.

        Returns:
            Las líneas enviadas (vacía si no había nada pendiente)
        """
        batch = render_alert_batch(self._client.fetch_alerts())
        if batch is None:
            return []

        with self._write_lock:
            self._port.write((batch + "\n").encode("utf-8"))
        self._alert_batches_sent += 1
        logger.info("[BRIDGE] Sent alerts to serial (for SMS): %s", batch.replace("\n", " | "))
        return batch.split("\n")

    def _alert_loop(self) -> None:
        while not self._stop_event.wait(self._alert_push_interval):
            try:
                self.push_alerts()
            except SerialException as e:
                logger.error("[BRIDGE] Serial write failed: %s", e)
                self._stop_event.set()
            except Exception:
                logger.exception("[BRIDGE] Alert push failed")

    def start_alert_pusher(self) -> None:
        if self._alert_thread is not None and self._alert_thread.is_alive():
            return
        self._alert_thread = threading.Thread(
            target=self._alert_loop,
            name="alert-pusher",
            daemon=True,
        )
        self._alert_thread.start()

    def run(self) -> None:
        """Loop principal: lee líneas hasta stop() o error del puerto."""
        self._stop_event.clear()
        self.start_alert_pusher()
        logger.info("[BRIDGE] Running, alert push every %.1fs", self._alert_push_interval)

        try:
            while not self._stop_event.is_set():
                raw = self._port.readline()
                if not raw:
                    # Timeout de lectura sin datos
                    continue
                try:
                    self.handle_line(raw.decode("utf-8", errors="replace"))
                except SerialException:
                    raise
                except Exception:
                    # Una línea problemática no detiene la lectura del puerto
                    self._line_errors += 1
                    logger.exception("[BRIDGE] Failed to handle line: %r", raw)
        except SerialException as e:
            logger.error("[BRIDGE] Serial port error: %s", e)
        finally:
            self.stop()

    def stop(self) -> None:
        self._stop_event.set()
        if self._alert_thread is not None and self._alert_thread is not threading.current_thread():
            self._alert_thread.join(timeout=5.0)
            self._alert_thread = None

    @property
    def stats(self) -> dict:
        return {
            "lines_received": self._lines_received,
            "readings_forwarded": self._readings_forwarded,
            "lines_rejected": self._lines_rejected,
            "alert_batches_sent": self._alert_batches_sent,
            "line_errors": self._line_errors,
        }
