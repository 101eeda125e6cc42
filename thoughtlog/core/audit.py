"""
HTTP middleware - request auditing and CORS.

RequestIdMiddleware tags each request with an id that appears in every log
line written while handling it and in the X-Request-ID response header.
AuditMiddleware logs every request with its status and duration.
CORSHeadersMiddleware answers preflight requests and tags every response
with the permissive CORS headers browser clients expect.
"""
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from thoughtlog.core.logging_config import bind_request_id, get_logger, request_id_var, reset_request_id

logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
}


class AuditMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging all requests and responses.

    Captures timing information and key request metadata
    for debugging purposes.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log audit information."""
        start_time = time.time()

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"REQUEST FAILED: {method} {path} "
                f"client={client_ip} duration={duration:.3f}s error={e}"
            )
            raise

        duration = time.time() - start_time
        self._log_request(method, path, response.status_code, duration, client_ip)
        response.headers["X-Response-Time"] = f"{duration:.3f}s"

        return response

    def _log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration: float,
        client_ip: str
    ) -> None:
        """Log request details."""
        if path.startswith("/health"):
            logger.debug(f"HEALTH: {path} status={status_code} duration={duration:.3f}s")
            return

        if status_code >= 500:
            log_fn = logger.error
        elif status_code >= 400:
            log_fn = logger.warning
        else:
            log_fn = logger.info

        log_fn(
            f"REQUEST: {method} {path} "
            f"status={status_code} duration={duration:.3f}s client={client_ip}"
        )


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware that handles CORS for every route.

    - OPTIONS requests are answered 204 without reaching a route
    - All other responses get the CORS headers appended
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)

        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value

        return response


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Binds the caller's X-Request-ID (or a fresh id) to the request's logs."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        token = bind_request_id(request.headers.get("x-request-id", "")[:64])
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id_var.get()
            return response
        finally:
            reset_request_id(token)
