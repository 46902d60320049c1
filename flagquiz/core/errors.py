# flagquiz/core/errors.py
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class QuizError(Exception):
    """Base de los errores que llegan al cliente como {"error": mensaje}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FetchError(QuizError):
    """El proveedor de países no respondió o devolvió un status de error."""

    status_code = 500


class QueryValidationError(QuizError):
    """Parámetro de consulta no soportado (category / mode)."""

    status_code = 400


class NotReadyError(QuizError):
    """La cache de países está vacía y no se permite cargarla en la petición."""

    status_code = 503


class InternalError(QuizError):
    status_code = 500


class ConfigurationError(QuizError):
    status_code = 500


async def quiz_error_handler(request: Request, exc: QuizError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=NO_CACHE_HEADERS,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"❌ Error no controlado en {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": str(exc) or exc.__class__.__name__},
        headers=NO_CACHE_HEADERS,
    )
