"""Fixtures compartidos por los tests."""

from datetime import datetime, timedelta, timezone
from typing import Callable, List

import pytest

from common.config import Settings


class FakeClock:
    """Reloj manual: los tests avanzan el tiempo explícitamente."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 14, 14, 7, 31, tzinfo=timezone.utc))


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Settings completos sin depender de variables de entorno."""

    def _make(**overrides) -> Settings:
        values = dict(
            api_host="127.0.0.1",
            api_port=3001,
            cors_origins=("*",),
            log_level="INFO",
            history_capacity=288,
            alerts_capacity=50,
            history_sample_interval_seconds=300.0,
            history_bucket_minutes=5,
            site_name="Site 1",
            site_barangay="Unknown",
            alert_duration="-",
            parameter_alerts_enabled=False,
            bridge_serial_port="COM6",
            bridge_baud_rate=9600,
            bridge_backend_url="http://localhost:3001",
            bridge_alert_push_interval_seconds=10.0,
            bridge_http_timeout_seconds=5.0,
        )
        values.update(overrides)
        return Settings(**values)

    return _make
