"""Prometheus metrics for the LoanLink service.

Metrics are organized into two categories:

Business Metrics (for Product/Finance):
- loanlink_application_submitted_total: Applications submitted
- loanlink_application_transitions_total: Lifecycle transitions by type
- loanlink_settlement_total: Settlement callbacks by outcome
- loanlink_payment_amount_dollars_total: Settled fee volume by currency

Technical Metrics (for Engineering/SRE):
- loanlink_upstream_latency_seconds: Identity/payment provider latency
- loanlink_upstream_failures_total: Identity/payment provider failures
- loanlink_upstream_retry_total: Upstream retries
- loanlink_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from decimal import Decimal
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Finance dashboards)
# =============================================================================

application_submitted_total = Counter(
    "loanlink_application_submitted_total",
    "Total number of loan applications submitted",
)

application_transitions_total = Counter(
    "loanlink_application_transitions_total",
    "Application lifecycle transitions",
    ["transition"],  # approve, reject, cancel, withdraw
)

settlement_total = Counter(
    "loanlink_settlement_total",
    "Payment settlement callbacks by outcome",
    ["outcome"],  # settled, already_settled, incomplete, conflict
)

payment_amount_total = Counter(
    "loanlink_payment_amount_dollars_total",
    "Total application fee volume settled, in major currency units",
    ["currency"],
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

upstream_latency = Histogram(
    "loanlink_upstream_latency_seconds",
    "Latency of calls to external providers in seconds",
    ["upstream"],  # payment, identity
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

upstream_failures = Counter(
    "loanlink_upstream_failures_total",
    "Total number of failed calls to external providers",
    ["upstream", "error_type"],  # timeout, error, rejected, malformed
)

upstream_retries = Counter(
    "loanlink_upstream_retry_total",
    "Total number of retried calls to external providers",
    ["upstream"],
)

http_requests_total = Counter(
    "loanlink_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "loanlink_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_application_submitted() -> None:
    """Record a submitted application."""
    application_submitted_total.inc()


def record_transition(transition: str) -> None:
    """Record an application lifecycle transition."""
    application_transitions_total.labels(transition=transition).inc()


def record_settlement(outcome: str) -> None:
    """Record the outcome of a settlement callback."""
    settlement_total.labels(outcome=outcome).inc()


def record_payment_amount(amount: Decimal, currency: str) -> None:
    """Record settled fee volume."""
    payment_amount_total.labels(currency=currency.lower()).inc(float(amount))


@contextmanager
def track_upstream_latency(upstream: str) -> Generator[None, None, None]:
    """Context manager to track latency of an external provider call."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        upstream_latency.labels(upstream=upstream).observe(duration)


def record_upstream_failure(upstream: str, error_type: str) -> None:
    """Record a failed call to an external provider."""
    upstream_failures.labels(upstream=upstream, error_type=error_type).inc()


def record_upstream_retry(upstream: str) -> None:
    """Record a retry against an external provider."""
    upstream_retries.labels(upstream=upstream).inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
