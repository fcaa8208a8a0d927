"""
Prometheus metrics for the PayU client and the notification receiver.

Client-side metrics are plain prometheus_client collectors updated by
``payu.oauth`` and ``payu.client``. The receiver app additionally exposes
them, together with HTTP instrumentation, at ``/metrics``.
"""

from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

token_fetch_total = Counter(
    "payu_token_fetch_total",
    "Access token requests sent to the PayU authorization endpoint",
    ["outcome"],  # success, auth_error, transport_error
)

api_requests_total = Counter(
    "payu_api_requests_total",
    "Order API calls made to PayU",
    ["operation", "outcome"],
)

api_latency = Histogram(
    "payu_api_latency_seconds",
    "Latency of order API calls made to PayU",
    ["operation"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

notifications_total = Counter(
    "payu_notifications_total",
    "Payment notifications received by the webhook",
    ["result"],  # accepted, bad_ip, bad_signature, invalid
)


def init_metrics(app):
    """
    Initialize Prometheus metrics instrumentation for the FastAPI app.

    Args:
        app: FastAPI application instance

    Returns:
        Instrumentator instance
    """
    inst = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
    )
    inst.instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)
    return inst
