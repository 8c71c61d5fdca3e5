"""
Logging Middleware
Logs every HTTP request with its outcome and duration
"""

import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from src.utils.logger import setup_logger

logger = setup_logger()


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests and responses"""

    async def dispatch(self, request: Request, call_next):
        """Process request, tag it with a request id and log the outcome"""
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        start_time = time.time()
        client = request.client.host if request.client else "unknown"

        with logger.contextualize(request_id=request_id):
            logger.info(f"Request [{request_id}]: {request.method} {request.url.path} | Client: {client}")

            try:
                response = await call_next(request)
            except Exception:
                duration = time.time() - start_time
                logger.exception(
                    f"Error [{request_id}]: {request.method} {request.url.path} | "
                    f"Duration: {duration:.3f}s"
                )
                raise

            duration = time.time() - start_time
            logger.info(
                f"Response [{request_id}]: {request.method} {request.url.path} | "
                f"Status: {response.status_code} | Duration: {duration:.3f}s"
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{duration:.3f}"
        return response
