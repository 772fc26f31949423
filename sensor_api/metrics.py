"""Métricas Prometheus del servicio de ingesta.

Se registran en el registry global de prometheus_client y se exponen en GET /metrics.
"""

from prometheus_client import Counter

READINGS_INGESTED = Counter(
    "schistoguard_readings_ingested_total",
    "Total readings accepted by the ingestion store",
    ["status"],  # unknown, low-risk, possible-risk, high-risk
)

ALERTS_RAISED = Counter(
    "schistoguard_alerts_raised_total",
    "Total alerts prepended to the alert log",
    ["level", "parameter"],
)

HISTORY_SAMPLES = Counter(
    "schistoguard_history_samples_total",
    "Total history entries appended by the sampler",
)

ALERTS_ACKNOWLEDGED = Counter(
    "schistoguard_alerts_acknowledged_total",
    "Total alerts acknowledged through the API",
)
