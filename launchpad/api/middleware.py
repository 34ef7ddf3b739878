import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from launchpad.core.logging import LogContext, bind_context, clear_context
from launchpad.core.metrics import (
    active_requests,
    http_request_duration,
    http_requests_total,
)

logger = LogContext(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tags every log record of a request with its id

    The id comes from the X-Request-ID header when the caller sends one and
    is echoed back on the response so clients can quote it.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        clear_context()
        bind_context(request_id=request_id, method=request.method, path=request.url.path)
        if "after" in request.query_params:
            bind_context(after=request.query_params["after"])

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Request crashed",
                extra={"duration_ms": _elapsed_ms(start)},
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(start),
            },
        )
        return response


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Counts and times requests per route template"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        active_requests.inc()
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            endpoint = route_template(request)
            http_request_duration.labels(
                method=request.method, endpoint=endpoint
            ).observe(time.perf_counter() - start)
            http_requests_total.labels(
                method=request.method, endpoint=endpoint, status_code=status_code
            ).inc()
            active_requests.dec()


def route_template(request: Request) -> str:
    """
    Path of the route that handled the request, e.g. /api/v1/launches/{launch_id}

    Unrouted requests share one label so stray URLs cannot grow the series.
    """
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
