"""请求指标上报（Prometheus）。"""
from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUESTS_TOTAL = Counter(
    "rdf4j_client_requests_total",
    "RDF4J 请求总数（按方法与状态码）",
    ["operation", "status"],
)
REQUEST_DURATION = Histogram(
    "rdf4j_client_request_duration_seconds",
    "RDF4J 请求耗时（秒）",
    ["operation"],
)
FAILURES_TOTAL = Counter(
    "rdf4j_client_failures_total",
    "RDF4J 请求失败次数（按原因）",
    ["operation", "reason"],
)


def observe_rdf4j_response(operation: str, status: int, duration_seconds: float) -> None:
    """记录一次已收到响应的请求。"""

    REQUESTS_TOTAL.labels(operation=operation, status=str(status)).inc()
    REQUEST_DURATION.labels(operation=operation).observe(duration_seconds)


def observe_rdf4j_failure(operation: str, reason: str) -> None:
    """记录一次失败，``reason`` 例如 ``"server_error"``、``"timeout"``。"""

    FAILURES_TOTAL.labels(operation=operation, reason=reason).inc()


__all__ = ["observe_rdf4j_response", "observe_rdf4j_failure"]
