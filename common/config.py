from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv


def _default_env_file() -> str:
    # .env en la raíz del repo, compartido por la API y el bridge serial.
    repo_root = Path(__file__).resolve().parents[1]
    return str(repo_root / ".env")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    api_host: str
    api_port: int
    cors_origins: Tuple[str, ...]
    log_level: str

    history_capacity: int
    alerts_capacity: int
    history_sample_interval_seconds: float
    history_bucket_minutes: int

    site_name: str
    site_barangay: str
    alert_duration: str
    parameter_alerts_enabled: bool

    bridge_serial_port: str
    bridge_baud_rate: int
    bridge_backend_url: str
    bridge_alert_push_interval_seconds: float
    bridge_http_timeout_seconds: float


def get_settings() -> Settings:
    # Load env file (if present) but still allow overriding via real environment variables.
    env_file = os.getenv("SCHISTOGUARD_ENV_FILE", _default_env_file())
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    origins = tuple(
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    )

    return Settings(
        api_host=os.getenv("API_HOST", "0.0.0.0"),
        api_port=int(os.getenv("API_PORT", "3001")),
        cors_origins=origins or ("*",),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        # 24h x 12 muestras/hora
        history_capacity=int(os.getenv("HISTORY_CAPACITY", "288")),
        alerts_capacity=int(os.getenv("ALERTS_CAPACITY", "50")),
        history_sample_interval_seconds=float(
            os.getenv("HISTORY_SAMPLE_INTERVAL_SECONDS", "300")
        ),
        history_bucket_minutes=int(os.getenv("HISTORY_BUCKET_MINUTES", "5")),
        site_name=os.getenv("SITE_NAME", "Site 1"),
        site_barangay=os.getenv("SITE_BARANGAY", "Unknown"),
        alert_duration=os.getenv("ALERT_DURATION", "-"),
        parameter_alerts_enabled=_env_bool("PARAMETER_ALERTS_ENABLED", "0"),
        bridge_serial_port=os.getenv("BRIDGE_SERIAL_PORT", "COM6"),
        bridge_baud_rate=int(os.getenv("BRIDGE_BAUD_RATE", "9600")),
        bridge_backend_url=os.getenv("BRIDGE_BACKEND_URL", "http://localhost:3001"),
        bridge_alert_push_interval_seconds=float(
            os.getenv("BRIDGE_ALERT_PUSH_INTERVAL_SECONDS", "10")
        ),
        bridge_http_timeout_seconds=float(os.getenv("BRIDGE_HTTP_TIMEOUT_SECONDS", "5")),
    )
