"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_attempts = Counter(
    'seat_booking_attempts_total',
    'Total seat booking attempts',
    ['status', 'mode']  # success/rejected/conflict, manual/auto
)

booking_latency = Histogram(
    'seat_booking_latency_seconds',
    'Seat booking latency (load, allocate, commit)',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

cancellations = Counter(
    'seat_cancellations_total',
    'Seat cancellation attempts',
    ['status']  # success, rejected
)

# Snapshot metrics
snapshot_loads = Counter(
    'seat_snapshot_loads_total',
    'Seat snapshot loads',
    ['backend', 'result']  # hit, empty, invalid
)

seats_booked = Gauge(
    'seats_booked',
    'Seats currently booked in the car'
)

redis_connection_errors = Counter(
    'redis_connection_errors_total',
    'Redis connection errors'
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(status: str, mode: str):
    """Record booking attempt. Status: success, rejected, conflict"""
    booking_attempts.labels(status=status, mode=mode).inc()


def record_cancellation(success: bool):
    cancellations.labels(status="success" if success else "rejected").inc()


def record_snapshot_load(backend: str, result: str):
    """Record snapshot load. Result: hit, empty, invalid"""
    snapshot_loads.labels(backend=backend, result=result).inc()
