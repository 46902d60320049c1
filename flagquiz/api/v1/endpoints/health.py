# flagquiz/api/v1/endpoints/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from flagquiz.api.deps import get_country_cache, get_settings, utc_isoformat
from flagquiz.core.config import Settings
from flagquiz.infra.cache.country_cache import CountryCache
from flagquiz.schemas.health_schemas import HealthResponse, PageInfo, StatusObject, ComponentStatus

router = APIRouter(tags=["health"])


@router.get("/status", response_model=HealthResponse)
async def status_check(
    cache: CountryCache = Depends(get_country_cache),
    config: Settings = Depends(get_settings),
):
    """Estado del servicio. No dispara descargas: solo informa la cache."""
    t = utc_isoformat(datetime.now(timezone.utc))

    countries_status = ComponentStatus(
        status="operational" if cache.ready() else "degraded_performance",
        detail="REST Countries cache",
        last_update=utc_isoformat(cache.loaded_at),
        count=len(cache),
        last_error=cache.last_error,
    )

    if countries_status.status != "operational":
        indicator = "degraded_performance"
        desc = "Country data not loaded."
        if cache.load_on_demand:
            desc = "Country data not loaded yet; it will load on the next question set request."
    else:
        indicator = "operational"
        desc = "All systems functional."

    return HealthResponse(
        page=PageInfo(
            name=config.PROJECT_NAME,
            version=config.PROJECT_VERSION,
            time=t,
        ),
        status=StatusObject(
            indicator=indicator,
            description=desc,
        ),
        components={
            "countries": countries_status,
        },
    )
