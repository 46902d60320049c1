# flagquiz/api/v1/endpoints/questionset.py
import asyncio
import logging
import time
from typing import Tuple

from fastapi import APIRouter, Depends, Query, Request, Response

from flagquiz.api.deps import get_country_cache, get_settings
from flagquiz.core.config import Settings
from flagquiz.core.errors import NO_CACHE_HEADERS, InternalError, QuizError, QueryValidationError
from flagquiz.core.rate_limit import limiter, questionset_limit
from flagquiz.domain.services.question_builder import MODES, QUICKFIRE, QuestionSetBuilder
from flagquiz.infra.cache.country_cache import CountryCache
from flagquiz.schemas.questionset_schemas import QuestionOut, QuestionSetResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["questionset"])

FLAGS = "flags"
CATEGORIES = (FLAGS,)


def parse_query(mode: str | None, category: str | None) -> Tuple[str, str]:
    mode = (mode or QUICKFIRE).strip().lower()
    category = (category or FLAGS).strip().lower()

    if category not in CATEGORIES:
        raise QueryValidationError(f"Unknown category '{category}'. Only 'flags' supported right now.")
    if mode not in MODES:
        raise QueryValidationError(f"Unknown mode '{mode}'. Supported modes: {', '.join(MODES)}.")
    return mode, category


@router.get("/questionset", response_model=QuestionSetResponse)
@limiter.limit(questionset_limit)
async def get_question_set(
    request: Request,
    response: Response,
    mode: str = Query(QUICKFIRE),
    category: str = Query(FLAGS),
    cache: CountryCache = Depends(get_country_cache),
    config: Settings = Depends(get_settings),
):
    """Devuelve un set nuevo de preguntas en cada petición (sin cache HTTP)."""
    response.headers.update(NO_CACHE_HEADERS)

    try:
        mode, category = parse_query(mode, category)
        # La descarga usa requests (bloqueante): ejecutar en thread
        countries = await asyncio.to_thread(cache.ensure_loaded)
        builder = QuestionSetBuilder.from_settings(config)
        questions = builder.build(mode, countries)
        total_planned = builder.planned_total(mode)
    except QuizError:
        raise
    except Exception as e:
        logger.exception(f"❌ Error generando question set: {e}")
        raise InternalError(str(e)) from e

    logger.info(f"✅ Question set {mode}/{category}: {len(questions)} preguntas de {len(countries)} países")

    return QuestionSetResponse(
        mode=mode,
        category=category,
        total_planned=total_planned,
        total_available=len(countries),
        total_used=len(questions),
        questions=[
            QuestionOut(
                prompt_id=q.prompt_id,
                image_url=q.image_url,
                choices=q.choices,
                correct_index=q.correct_index,
            )
            for q in questions
        ],
        generated_at=int(time.time() * 1000),
    )
