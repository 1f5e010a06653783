"""
Prometheus metrics for stability and business events.

- FastAPI: request count, latency (Instrumentator)
- Node/instance: app_info
- Stability: exceptions_total, db_errors_total, ownership_attach_failures_total
- HA: ready gauge (1=up, 0=shutting down)
- Business: registrations, logins, album/photo operations, access denials
"""
import socket

from prometheus_client import REGISTRY, Counter, Gauge
from prometheus_fastapi_instrumentator import Instrumentator

from album_api.config import get_settings

# --- Stability ---
exceptions_total = Counter(
    "album_api_exceptions_total",
    "Total unhandled exceptions",
    registry=REGISTRY,
)
db_errors_total = Counter(
    "album_api_db_errors_total",
    "Total store call failures",
    ["store"],  # store: sql | mongo
    registry=REGISTRY,
)
ownership_attach_failures_total = Counter(
    "album_api_ownership_attach_failures_total",
    "Resources inserted whose owner reference could not be recorded",
    ["kind"],  # kind: album | photo
    registry=REGISTRY,
)

# --- HA ---
ready = Gauge(
    "album_api_ready",
    "1 when the application accepts traffic, 0 while shutting down",
    registry=REGISTRY,
)

# --- Business ---
user_registration_total = Counter(
    "album_api_user_registration_total",
    "User registration attempts",
    ["result"],  # success | conflict | invalid
    registry=REGISTRY,
)
user_login_total = Counter(
    "album_api_user_login_total",
    "Login attempts",
    ["result"],  # success | failure
    registry=REGISTRY,
)
album_operations_total = Counter(
    "album_api_album_operations_total",
    "Album operations",
    ["operation", "result"],
    registry=REGISTRY,
)
photo_operations_total = Counter(
    "album_api_photo_operations_total",
    "Photo operations",
    ["operation", "result"],
    registry=REGISTRY,
)
access_denied_total = Counter(
    "album_api_access_denied_total",
    "Requests rejected by authentication or ownership checks",
    ["reason"],  # no_token | invalid_token | owner_mismatch
    registry=REGISTRY,
)


def setup_prometheus(app) -> None:
    """
    Register Prometheus instrumentation and expose /metrics.
    """
    settings = get_settings()
    app_info = Gauge(
        "album_api_app_info",
        "Application and node identity (labels only, value is 1)",
        ["node", "app", "version", "environment"],
        registry=REGISTRY,
    )
    app_info.labels(
        node=socket.gethostname(),
        app=settings.app_name,
        version=settings.app_version,
        environment=settings.environment.value,
    ).set(1)

    Instrumentator(should_group_status_codes=False).instrument(app).expose(
        app, endpoint="/metrics"
    )
