"""Parser de líneas seriales del firmware.

Formatos aceptados (una línea por lectura, separador coma):
- "temperature,turbidity,ph"
- "temperature,turbidity,ph,lat,lng"  (con GPS)
- "SMS_SENT:<info>"                  (confirmación del módem)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

SMS_SENT_PREFIX = "SMS_SENT:"


class LineKind(Enum):
    READING = "reading"
    SMS_SENT = "sms_sent"
    INVALID = "invalid"


@dataclass(frozen=True)
class SerialReading:
    """Lectura parseada desde el puerto serial."""

    temperature: float
    turbidity: float
    ph: float
    lat: Optional[float] = None
    lng: Optional[float] = None

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lng is not None

    def to_payload(self) -> Dict[str, Any]:
        """Convierte al body JSON de POST /api/sensors."""
        payload: Dict[str, Any] = {
            "temperature": self.temperature,
            "turbidity": self.turbidity,
            "ph": self.ph,
        }
        if self.has_location:
            payload["lat"] = self.lat
            payload["lng"] = self.lng
        return payload


@dataclass
class ParsedLine:
    """Resultado del parseo de una línea."""

    kind: LineKind
    raw: str
    reading: Optional[SerialReading] = None
    sms_info: Optional[str] = None
    error: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.kind != LineKind.INVALID


def _parse_numbers(parts: List[str]) -> Optional[List[float]]:
    values = []
    for part in parts:
        try:
            value = float(part.strip())
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        values.append(value)
    return values


def parse_serial_line(line: str) -> ParsedLine:
    """Parsea una línea recibida del puerto serial.

    Returns:
        ParsedLine con la lectura, la confirmación SMS o el error
    """
    trimmed = line.strip()

    if trimmed.startswith(SMS_SENT_PREFIX):
        return ParsedLine(
            kind=LineKind.SMS_SENT,
            raw=line,
            sms_info=trimmed[len(SMS_SENT_PREFIX):].strip(),
        )

    parts = trimmed.split(",")
    if len(parts) not in (3, 5):
        return ParsedLine(
            kind=LineKind.INVALID,
            raw=line,
            error=f"Unexpected serial data format ({len(parts)} fields)",
        )

    values = _parse_numbers(parts)
    if values is None:
        return ParsedLine(kind=LineKind.INVALID, raw=line, error="Invalid numeric data")

    if len(values) == 5:
        reading = SerialReading(
            temperature=values[0],
            turbidity=values[1],
            ph=values[2],
            lat=values[3],
            lng=values[4],
        )
    else:
        reading = SerialReading(temperature=values[0], turbidity=values[1], ph=values[2])

    return ParsedLine(kind=LineKind.READING, raw=line, reading=reading)
