"""Dependencias FastAPI para acceder al store y al sampler de la app."""

from __future__ import annotations

from fastapi import Request

from .store import HistorySampler, IngestionStore


def get_store(request: Request) -> IngestionStore:
    return request.app.state.store


def get_sampler(request: Request) -> HistorySampler:
    return request.app.state.sampler
