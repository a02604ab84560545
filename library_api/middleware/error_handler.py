"""Global error handlers for the application."""
import logging
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from library_api.utils.errors import ApiError, BadRequestError, InternalError

logger = logging.getLogger(__name__)


def _envelope(status_code: int, error: str, detail, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "detail": jsonable_encoder(detail)},
        headers=headers,
    )


async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error(f"{exc.error_type}: {exc.detail}")
    return _envelope(exc.status_code, exc.error_type, exc.detail, exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _envelope(exc.status_code, f"HTTP_{exc.status_code}", exc.detail, getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return _envelope(400, BadRequestError.error_type, "; ".join(messages))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _envelope(500, InternalError.error_type, InternalError.default_detail)
