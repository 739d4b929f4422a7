import logging

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.config import settings
from app.utils.errors import AccountError, status_for

logger = logging.getLogger(__name__)


def create_response(content: dict, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Return a JSON body with the given status code."""
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def error_response(message: str, status_code: int, **extra) -> JSONResponse:
    return create_response({"error": message, **extra}, status_code)


def handle_exception(error: Exception, fallback_message: str = "Internal server error") -> JSONResponse:
    """Coerce raised errors into the shared `{error: ...}` response structure."""
    if isinstance(error, AccountError):
        return create_response(error.payload(), status_for(error))

    logger.exception("%s: %s", fallback_message, error)
    message = fallback_message
    if settings.EXPOSE_ERROR_DETAILS:
        message = f"{fallback_message}: {error}"
    return error_response(message, status.HTTP_500_INTERNAL_SERVER_ERROR)
