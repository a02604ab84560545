"""Request/response logging middleware."""
import logging
import time
import uuid
from starlette.requests import Request
from starlette.middleware.base import BaseHTTPMiddleware
from library_api.core.logger import set_request_id

logger = logging.getLogger("library_api.middleware.logging")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        set_request_id(request_id)
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "elapsed_ms": elapsed_ms,
            },
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
