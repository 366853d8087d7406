from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import time
import uuid
from typing import Callable
from structlog import get_logger

from .exceptions import AppBaseException

logger = get_logger(__name__)

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
        request.state.request_id = request_id

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            logger.info(
                "request_processed",
                request_id=request_id,
                method=request.method,
                url=str(request.url),
                status_code=response.status_code,
                processing_time=f"{process_time:.3f}s"
            )
            response.headers["X-Request-ID"] = request_id

            return response

        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "request_failed",
                request_id=request_id,
                method=request.method,
                url=str(request.url),
                error=str(e),
                processing_time=f"{process_time:.3f}s"
            )
            raise

class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except AppBaseException as e:
            logger.warning(
                "application_error",
                error_type=e.__class__.__name__,
                detail=e.detail,
                status_code=e.status_code
            )
            raise
        except Exception as e:
            logger.error(
                "unexpected_error",
                error=str(e),
                error_type=e.__class__.__name__
            )
            raise
