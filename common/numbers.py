from __future__ import annotations

import math
import re
from typing import Optional, Tuple

_LEADING_NUMBER = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def _shortest_digits(value: float) -> Tuple[str, int]:
    """Dígitos significativos mínimos y exponente n tal que value = 0.d1d2... x 10^n."""
    mantissa, _, exp = repr(value).partition("e")
    int_part, _, frac_part = mantissa.partition(".")
    digits = int_part + frac_part
    n = len(int_part) + (int(exp) if exp else 0)

    stripped = digits.lstrip("0")
    n -= len(digits) - len(stripped)
    return stripped.rstrip("0"), n


def format_number(value: Optional[float]) -> str:
    """Formatea un número igual que Number.prototype.toString del dashboard.

    25.0 -> "25", 25.5 -> "25.5", 1e-07 -> "1e-7", 0.00001 -> "0.00001",
    1e21 -> "1e+21".
    """
    if value is None:
        return "null"
    if not isinstance(value, float):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    digits, n = _shortest_digits(abs(value))
    k = len(digits)

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * (-n) + digits

    e = n - 1
    exponent = f"e{'+' if e >= 0 else '-'}{abs(e)}"
    if k == 1:
        return sign + digits + exponent
    return sign + digits[0] + "." + digits[1:] + exponent


def leading_number(text: str) -> Optional[float]:
    """Extrae el número al inicio de un texto ("25.5°C" -> 25.5, "6 NTU" -> 6.0)."""
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    return float(match.group(0))
