"""
Prometheus-style metrics endpoint.
"""
import time
from typing import TYPE_CHECKING, Callable, Optional

from fastapi import APIRouter, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

from msgboard.core.config import get_settings
from msgboard.core.logging import get_logger

if TYPE_CHECKING:
    from msgboard.tasks.statistics_reporter import StatisticsReporter

logger = get_logger(__name__)

router = APIRouter(tags=["Metrics"])

# Simple in-memory metrics storage
_metrics = {
    "http_requests_total": {},  # {(method, path, status): count}
    "http_request_duration_seconds": {},  # {(method, path): [durations]}
    "startup_time": None,
}

MAX_DURATION_SAMPLES = 1000


def record_request(method: str, path: str, status_code: int, duration: float) -> None:
    """Record an HTTP request metric."""
    key = (method, path, status_code)
    _metrics["http_requests_total"][key] = _metrics["http_requests_total"].get(key, 0) + 1
    
    durations = _metrics["http_request_duration_seconds"].setdefault((method, path), [])
    durations.append(duration)
    
    if len(durations) > MAX_DURATION_SAMPLES:
        _metrics["http_request_duration_seconds"][(method, path)] = durations[-MAX_DURATION_SAMPLES:]


def set_startup_time() -> None:
    """Record application startup time."""
    _metrics["startup_time"] = time.time()


def reset_metrics() -> None:
    """Clear recorded request metrics."""
    _metrics["http_requests_total"].clear()
    _metrics["http_request_duration_seconds"].clear()
    _metrics["startup_time"] = None


def _route_template(request: Request) -> str:
    # /api/messages/{message_id} instead of one series per id
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return route.path
    return request.url.path


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect request metrics."""
    
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)
        
        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time
        
        record_request(
            method=request.method,
            path=_route_template(request),
            status_code=response.status_code,
            duration=duration,
        )
        
        return response


def generate_prometheus_metrics(reporter: Optional["StatisticsReporter"] = None) -> str:
    """Generate Prometheus-format metrics output."""
    lines = []
    
    lines.append("# HELP app_info Application information")
    lines.append("# TYPE app_info gauge")
    lines.append(f'app_info{{version="{get_settings().app_version}"}} 1')
    lines.append("")
    
    if _metrics["startup_time"]:
        lines.append("# HELP app_start_time_seconds Unix timestamp when the app started")
        lines.append("# TYPE app_start_time_seconds gauge")
        lines.append(f'app_start_time_seconds {_metrics["startup_time"]:.3f}')
        lines.append("")
    
    lines.append("# HELP http_requests_total Total number of HTTP requests")
    lines.append("# TYPE http_requests_total counter")
    for (method, path, status), count in _metrics["http_requests_total"].items():
        lines.append(f'http_requests_total{{method="{method}",path="{path}",status="{status}"}} {count}')
    lines.append("")
    
    lines.append("# HELP http_request_duration_seconds HTTP request duration in seconds")
    lines.append("# TYPE http_request_duration_seconds summary")
    for (method, path), durations in _metrics["http_request_duration_seconds"].items():
        if durations:
            lines.append(f'http_request_duration_seconds_sum{{method="{method}",path="{path}"}} {sum(durations):.6f}')
            lines.append(f'http_request_duration_seconds_count{{method="{method}",path="{path}"}} {len(durations)}')
    lines.append("")
    
    if reporter is not None:
        lines.append("# HELP statistics_reporter_runs_total Completed statistics reporter runs")
        lines.append("# TYPE statistics_reporter_runs_total counter")
        lines.append(f"statistics_reporter_runs_total {reporter.run_count}")
        lines.append("# HELP statistics_reporter_failures_total Failed statistics reporter runs")
        lines.append("# TYPE statistics_reporter_failures_total counter")
        lines.append(f"statistics_reporter_failures_total {reporter.failure_count}")
        
        report = reporter.last_report
        if report is not None:
            lines.append("# HELP messages Message counts from the last statistics report")
            lines.append("# TYPE messages gauge")
            lines.append(f'messages{{state="total"}} {report.total_messages}')
            lines.append(f'messages{{state="active"}} {report.active_messages}')
            lines.append(f'messages{{state="inactive"}} {report.inactive_messages}')
            lines.append(f'messages{{state="recent"}} {report.recent_messages}')
    
    return "\n".join(lines)


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Returns metrics in Prometheus exposition format.",
    response_class=Response,
)
async def metrics(request: Request) -> Response:
    """
    Prometheus-style metrics endpoint.
    
    Returns metrics in Prometheus text format.
    """
    reporter = getattr(request.app.state, "reporter", None)
    content = generate_prometheus_metrics(reporter)
    return Response(
        content=content,
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
