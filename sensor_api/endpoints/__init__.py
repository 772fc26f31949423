"""Módulo de endpoints HTTP.

Contiene los endpoints de la API organizados por función.
"""

from .health import router as health_router
from .sensors import router as sensors_router

__all__ = [
    "health_router",
    "sensors_router",
]
