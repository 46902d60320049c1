# flagquiz/api/v1/router.py
from fastapi import APIRouter

from flagquiz.api.v1.endpoints.health import router as health_router
from flagquiz.api.v1.endpoints.questionset import router as questionset_router
from flagquiz.api.v1.endpoints.countries import router as countries_router


api_router_v1 = APIRouter(prefix="/api")

api_router_v1.include_router(health_router)
api_router_v1.include_router(questionset_router)
api_router_v1.include_router(countries_router)
