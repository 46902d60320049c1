# flagquiz/api/v1/endpoints/countries.py
import asyncio
import logging

from fastapi import APIRouter, Depends, Request

from flagquiz.api.deps import get_country_cache, utc_isoformat
from flagquiz.core.rate_limit import limiter, reload_limit
from flagquiz.infra.cache.country_cache import CountryCache
from flagquiz.schemas.questionset_schemas import ReloadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/countries", tags=["countries"])


@router.post("/reload", response_model=ReloadResponse)
@limiter.limit(reload_limit)
async def reload_countries(request: Request, cache: CountryCache = Depends(get_country_cache)):
    # Si falla, FetchError -> 500 y la cache anterior se mantiene
    countries = await asyncio.to_thread(cache.reload)
    logger.info(f"🔄 Recarga manual de países: {len(countries)}")
    return ReloadResponse(
        status="reloaded",
        count=len(countries),
        loaded_at=utc_isoformat(cache.loaded_at),
    )
