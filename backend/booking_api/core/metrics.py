"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

booking_operations = Counter(
    'booking_operations_total',
    'Booking service operations',
    ['operation', 'result']  # create/action/list/get/delete, success/not_found/invalid/error
)

booking_admin_actions = Counter(
    'booking_admin_actions_total',
    'Admin actions applied to bookings',
    ['action']  # Confirmed, Canceled
)

booking_latency = Histogram(
    'booking_request_latency_seconds',
    'Booking service operation latency',
    ['operation'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

notifications = Counter(
    'notifications_total',
    'Booking outcome notifications',
    ['result']  # sent, failed
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_operation(operation: str, result: str):
    booking_operations.labels(operation=operation, result=result).inc()


def record_admin_action(action: str):
    booking_admin_actions.labels(action=action).inc()


def record_notification(sent: bool):
    """Record notification outcome."""
    result = "sent" if sent else "failed"
    notifications.labels(result=result).inc()
