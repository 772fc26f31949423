"""Store de ingesta en memoria y sampler de historial.

- models.py: Reading, Alert, SiteContext
- alert_factory.py: Construcción de alertas
- time_buckets.py: Truncado a buckets de 5 minutos
- ingestion_store.py: Store thread-safe (última lectura, historial, alertas)
- history_sampler.py: Timer que alimenta el historial
"""

from .history_sampler import HistorySampler
from .ingestion_store import IngestionStore
from .models import Alert, Reading, SiteContext
from .time_buckets import floor_to_bucket

__all__ = [
    "HistorySampler",
    "IngestionStore",
    "Alert",
    "Reading",
    "SiteContext",
    "floor_to_bucket",
]
