"""
Monitoring and observability utilities for the TrackP service.

Provides:
- Prometheus metrics (requests, latencies, errors)
- Request tracing (unique request IDs)
- Health information for the /health endpoint
"""
import re
import time
import uuid
import logging
from typing import Callable, Dict, Any
from contextvars import ContextVar

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware
from prometheus_client import Counter, Histogram, Gauge, generate_latest

# Request context variable for tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

# Prometheus metrics
http_requests_total = Counter(
    'trackp_http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'trackp_http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint', 'status_code'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
)

http_errors_total = Counter(
    'trackp_http_errors_total',
    'Total number of HTTP errors',
    ['method', 'endpoint', 'status_code', 'error_type']
)

service_uptime_seconds = Gauge(
    'trackp_service_uptime_seconds',
    'Service uptime in seconds'
)

service_start_time = time.time()

logger = logging.getLogger(__name__)


def get_request_id() -> str:
    """Get the current request ID from context."""
    return request_id_var.get('')


def set_request_id(request_id: str) -> None:
    """Set the request ID in context."""
    request_id_var.set(request_id)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware for collecting Prometheus metrics and request tracing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        set_request_id(request_id)

        endpoint = self._get_endpoint_path(request.url.path)
        start_time = time.time()
        service_uptime_seconds.set(time.time() - service_start_time)

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                "Request failed with exception",
                exc_info=True,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "duration_seconds": duration,
                    "exception_type": type(e).__name__,
                }
            )
            http_errors_total.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                error_type="exception"
            ).inc()
            raise

        status_code = response.status_code
        duration = time.time() - start_time
        logger.info(f"{request.method} {request.url.path} {status_code} ({duration:.4f}s)")

        http_requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=status_code
        ).inc()
        http_request_duration_seconds.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=status_code
        ).observe(duration)

        if status_code >= 400:
            error_type = "client_error" if status_code < 500 else "server_error"
            http_errors_total.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=status_code,
                error_type=error_type
            ).inc()

        response.headers["X-Request-ID"] = request_id
        return response

    @staticmethod
    def _get_endpoint_path(path: str) -> str:
        """Normalize endpoint path for metrics (numeric IDs become {id})."""
        path = re.sub(r'/\d+', '/{id}', path)
        return path[:100]


def get_metrics() -> str:
    """Get Prometheus metrics in text format."""
    return generate_latest().decode('utf-8')


def get_health_info(store=None) -> Dict[str, Any]:
    """
    Get health information including uptime and storage status.

    Args:
        store: Optional storage backend to check

    Returns:
        Dictionary with an overall status and per-component statuses
    """
    uptime = time.time() - service_start_time
    components: Dict[str, Any] = {
        "service": {
            "status": "healthy",
            "uptime_seconds": uptime,
            "uptime_formatted": _format_uptime(uptime)
        }
    }
    overall_status = "healthy"

    if store is not None:
        storage_health = store.health()
        components["storage"] = storage_health
        if storage_health.get("status") != "healthy":
            overall_status = "unhealthy"

    return {
        "status": overall_status,
        "service": "trackp",
        "timestamp": time.time(),
        "uptime_seconds": uptime,
        "uptime_formatted": _format_uptime(uptime),
        "components": components
    }


def _format_uptime(seconds: float) -> str:
    """Format uptime in human-readable format."""
    days = int(seconds // 86400)
    hours = int((seconds % 86400) // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)

    if days > 0:
        return f"{days}d {hours}h {minutes}m {secs}s"
    elif hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    elif minutes > 0:
        return f"{minutes}m {secs}s"
    else:
        return f"{secs}s"
