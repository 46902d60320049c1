# flagquiz/main.py
import asyncio
import logging

from fastapi import FastAPI

from slowapi.errors import RateLimitExceeded

from flagquiz.api.v1.router import api_router_v1
from flagquiz.core.config import Settings, settings as default_settings
from flagquiz.core.errors import QuizError, quiz_error_handler, unhandled_error_handler
from flagquiz.core.logging import setup_logging
from flagquiz.core.rate_limit import configure_limits, limiter, rate_limit_exceeded_handler
from flagquiz.infra.cache.country_cache import CountryCache
from flagquiz.infra.countries.restcountries import RestCountriesSource

logger = logging.getLogger(__name__)


def create_app(config: Settings | None = None, cache: CountryCache | None = None) -> FastAPI:
    config = config or default_settings
    setup_logging(config.LOG_LEVEL)

    app = FastAPI(
        title=config.PROJECT_NAME,
        version=config.PROJECT_VERSION,
    )

    app.state.settings = config
    # Una cache vacía es falsy (__len__): comparar contra None
    if cache is None:
        cache = CountryCache(RestCountriesSource(config), load_on_demand=config.LOAD_ON_DEMAND)
    app.state.country_cache = cache

    # Rate limiting
    app.state.limiter = limiter
    configure_limits(config)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Errores del dominio -> {"error": mensaje}
    app.add_exception_handler(QuizError, quiz_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Routers
    app.include_router(api_router_v1)

    @app.on_event("startup")
    async def on_startup() -> None:
        logger.info(f"🚀 {config.PROJECT_NAME} iniciada")
        if not config.PRELOAD_COUNTRIES:
            return
        try:
            await asyncio.to_thread(app.state.country_cache.reload)
        except QuizError as e:
            # Se continúa sin datos: la próxima petición reintenta la carga
            logger.error(f"❌ No se pudieron precargar los países: {e.message}")

    @app.get("/")
    async def root():
        return {
            "service": config.PROJECT_NAME,
            "version": config.PROJECT_VERSION,
            "status": "ok",
            "endpoints": {
                "questionset": "GET /api/questionset?mode=quickfire|hardmode&category=flags",
                "status": "GET /api/status",
                "reload": "POST /api/countries/reload",
                "docs": "GET /docs",
            },
        }

    return app


app = create_app()
