"""Bridge serial → HTTP para el microcontrolador de campo.

- line_parser.py: Parseo de líneas del firmware
- backend_client.py: Cliente HTTP del backend
- bridge.py: Loop de lectura y push de alertas
- cli.py: Entry point
"""

from .backend_client import BackendClient
from .bridge import SerialBridge, render_alert_batch, render_alert_line
from .line_parser import LineKind, ParsedLine, SerialReading, parse_serial_line

__all__ = [
    "BackendClient",
    "SerialBridge",
    "render_alert_batch",
    "render_alert_line",
    "LineKind",
    "ParsedLine",
    "SerialReading",
    "parse_serial_line",
]
