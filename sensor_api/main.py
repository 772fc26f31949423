from __future__ import annotations

import logging
import math
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from common.config import Settings, get_settings

from .endpoints import health_router, sensors_router
from .store import HistorySampler, IngestionStore, SiteContext

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Reemplaza NaN/Infinity por su texto para que el body sea JSON válido."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, Exception):
        return str(value)
    return value


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # El handler por defecto serializa el input tal cual; un NaN rompe la respuesta 422
    errors = _json_safe(list(exc.errors()))
    logger.info("[INGEST] Rejected %s %s: %d validation errors", request.method, request.url.path, len(errors))
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


def build_store(settings: Settings) -> IngestionStore:
    """Crea el store con capacidades y sitio por defecto desde configuración."""
    return IngestionStore(
        history_capacity=settings.history_capacity,
        alerts_capacity=settings.alerts_capacity,
        bucket_minutes=settings.history_bucket_minutes,
        default_site=SiteContext(
            site_name=settings.site_name,
            barangay=settings.site_barangay,
            duration=settings.alert_duration,
        ),
        parameter_alerts_enabled=settings.parameter_alerts_enabled,
    )


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[IngestionStore] = None,
    start_sampler: bool = True,
) -> FastAPI:
    """Crea la app FastAPI.

    Cada app tiene su propio store; los tests crean una app nueva por caso.

    Args:
        settings: Configuración (default: get_settings())
        store: Store a usar (default: uno nuevo según settings)
        start_sampler: Si False, el sampler no arranca y los tests llaman tick()
    """
    settings = settings or get_settings()
    store = store or build_store(settings)
    sampler = HistorySampler(store, interval_seconds=settings.history_sample_interval_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if start_sampler:
            sampler.start()
        logger.info(
            "SchistoGuard API ready history_capacity=%d alerts_capacity=%d site=%s",
            settings.history_capacity,
            settings.alerts_capacity,
            store.default_site.site_name,
        )
        try:
            yield
        finally:
            sampler.stop()

    app = FastAPI(title="SchistoGuard Sensor API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.sampler = sampler

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(sensors_router)
    return app


def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - API - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    import uvicorn

    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
