# flagquiz/api/deps.py
from datetime import datetime, timezone

from fastapi import Request

from flagquiz.core.config import Settings
from flagquiz.infra.cache.country_cache import CountryCache


def get_country_cache(request: Request) -> CountryCache:
    """Dependencia FastAPI: la cache vive en app.state (se inyecta en create_app)."""
    return request.app.state.country_cache


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def utc_isoformat(dt: datetime | None) -> str | None:
    """ISO 8601 en UTC con sufijo Z (mismo formato en todas las respuestas)."""
    if dt is None:
        return None
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
