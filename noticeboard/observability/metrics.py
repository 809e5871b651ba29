from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from noticeboard.core.config import get_settings

REQUEST_COUNT = Counter(
    "board_requests_total",
    "Total requests sent to the message store",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "board_request_duration_seconds",
    "Message store request latency in seconds",
    ["method", "path"],
)
OPERATIONS = Counter(
    "board_operations_total",
    "Board operations by outcome",
    ["operation", "outcome"],
)


@dataclass
class Stats:
    counters: dict[str, int] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)

    def inc(self, key: str, amount: int = 1) -> None:
        with self._lock:
            self.counters[key] = self.counters.get(key, 0) + amount

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self.counters)

    def reset(self) -> None:
        with self._lock:
            self.counters.clear()


stats = Stats()


def metrics_response() -> tuple[bytes, str]:
    payload = generate_latest()
    return payload, CONTENT_TYPE_LATEST


def record_request(method: str, path: str, status_code: int | None, latency_ms: float) -> None:
    settings = get_settings()
    method = method.upper()
    # Transport failures never produce a status; label them separately.
    status_code_str = str(status_code) if status_code is not None else "error"

    if settings.metrics_enabled:
        REQUEST_COUNT.labels(method=method, path=path, status_code=status_code_str).inc()
        REQUEST_LATENCY.labels(method=method, path=path).observe(latency_ms / 1000.0)

    if settings.stats_enabled:
        stats.inc("requests.total")
        stats.inc(f"requests.by_method.{method}")
        stats.inc(f"requests.by_path.{path}")
        stats.inc(f"responses.by_status.{status_code_str}")


def record_operation(operation: str, outcome: str) -> None:
    settings = get_settings()
    if settings.metrics_enabled:
        OPERATIONS.labels(operation=operation, outcome=outcome).inc()
    if settings.stats_enabled:
        stats.inc(f"operations.{operation}.{outcome}")
