"""Table pipeline metrics.

Collectors live in a module-private `CollectorRegistry` so re-imports and
test runs never collide with the process-global default registry. Exporting
is left to the embedding process (`prometheus_client.start_http_server(port,
registry=REGISTRY)` or `generate_latest(REGISTRY)`).

Metrics Exposed:
  - a1s_table_refresh_total        (Counter[resource, outcome])
  - a1s_table_refresh_seconds      (Histogram[resource])
  - a1s_table_rows                 (Gauge[resource])
  - a1s_render_skipped_total       (Counter[resource])
  - a1s_cache_hits_total / a1s_cache_misses_total / a1s_cache_evictions_total
  - a1s_cache_size                 (Gauge)
  - a1s_ui_render_skipped_total    (Counter[resource])
"""
from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

REGISTRY = CollectorRegistry(auto_describe=True)

table_refresh_total = Counter(
    "a1s_table_refresh_total",
    "Table refresh attempts by outcome (ok, error, discarded)",
    ["resource", "outcome"],
    registry=REGISTRY,
)
table_refresh_seconds = Histogram(
    "a1s_table_refresh_seconds",
    "Wall time of one table refresh including the remote listing",
    ["resource"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    registry=REGISTRY,
)
table_rows = Gauge(
    "a1s_table_rows",
    "Rows in the current published snapshot",
    ["resource"],
    registry=REGISTRY,
)
render_skipped_total = Counter(
    "a1s_render_skipped_total",
    "Provider objects skipped because the renderer failed",
    ["resource"],
    registry=REGISTRY,
)
cache_hits_total = Counter("a1s_cache_hits_total", "Resource cache hits", registry=REGISTRY)
cache_misses_total = Counter("a1s_cache_misses_total", "Resource cache misses (absent or expired)", registry=REGISTRY)
cache_evictions_total = Counter("a1s_cache_evictions_total", "Resource cache capacity evictions", registry=REGISTRY)
cache_size = Gauge("a1s_cache_size", "Resident resource cache entries", registry=REGISTRY)
ui_render_skipped_total = Counter(
    "a1s_ui_render_skipped_total",
    "Redraws skipped because another redraw was in progress",
    ["resource"],
    registry=REGISTRY,
)


def sample(name: str, labels: dict[str, str] | None = None) -> float:
    """Current value of a sample (0.0 when absent); handy for tests and status lines."""
    v = REGISTRY.get_sample_value(name, labels or {})
    return float(v) if v is not None else 0.0


__all__ = [
    "REGISTRY",
    "table_refresh_total",
    "table_refresh_seconds",
    "table_rows",
    "render_skipped_total",
    "cache_hits_total",
    "cache_misses_total",
    "cache_evictions_total",
    "cache_size",
    "ui_render_skipped_total",
    "sample",
]
