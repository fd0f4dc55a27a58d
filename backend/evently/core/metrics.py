"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_attempts = Counter(
    'booking_attempts_total',
    'Total booking attempts',
    ['status']  # success, invalid, not_found, conflict
)

booking_latency = Histogram(
    'booking_latency_seconds',
    'Booking write latency',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Event metrics
event_writes = Counter(
    'event_writes_total',
    'Event create/update attempts',
    ['operation', 'status']  # create/update, success/invalid/conflict/not_found
)

# Database metrics
db_connection_attempts = Counter(
    'db_connection_attempts_total',
    'Database connection attempts',
    ['result']  # success, failure
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(status: str):
    """Record booking attempt. Status: success, invalid, not_found, conflict"""
    booking_attempts.labels(status=status).inc()


def record_event_write(operation: str, status: str):
    event_writes.labels(operation=operation, status=status).inc()


def record_db_connection(success: bool):
    result = "success" if success else "failure"
    db_connection_attempts.labels(result=result).inc()
