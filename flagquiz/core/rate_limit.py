# flagquiz/core/rate_limit.py
from fastapi import Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from flagquiz.core.config import Settings, settings as default_settings

# Un único limiter en memoria compartido por la app y los endpoints
limiter = Limiter(key_func=get_remote_address)

# Límites vigentes; create_app los reemplaza con la configuración de la app.
# slowapi evalúa los límites callables en cada petición.
_limits = {
    "questionset": default_settings.RATE_LIMIT,
    "reload": default_settings.RELOAD_RATE_LIMIT,
}


def configure_limits(config: Settings) -> None:
    _limits["questionset"] = config.RATE_LIMIT
    _limits["reload"] = config.RELOAD_RATE_LIMIT


def questionset_limit() -> str:
    return _limits["questionset"]


def reload_limit() -> str:
    return _limits["reload"]


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Rate limit exceeded", "error": str(exc)},
    )
