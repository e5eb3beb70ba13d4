"""
Prometheus metrics for the log journal service.

A dedicated registry keeps these series separate from the process-wide
default one, so importing the app more than once never re-registers them.
"""

from prometheus_client import CollectorRegistry, Counter, Histogram

PROM_REGISTRY = CollectorRegistry()

REQUEST_COUNTER = Counter(
    "logjournal_http_requests_total",
    "Total HTTP requests handled by the log journal",
    ["method", "endpoint"],
    registry=PROM_REGISTRY,
)

INGEST_COUNTER = Counter(
    "logjournal_ingest_total",
    "Log ingestion attempts by outcome",
    ["status"],  # accepted | rejected | failed
    registry=PROM_REGISTRY,
)

QUERY_COUNTER = Counter(
    "logjournal_query_total",
    "Log queries by outcome",
    ["status"],  # ok | rejected | failed
    registry=PROM_REGISTRY,
)

QUERY_RESULTS = Histogram(
    "logjournal_query_results",
    "Number of entries returned per query",
    buckets=[0, 1, 5, 10, 50, 100, 500, 1000, 5000],
    registry=PROM_REGISTRY,
)

STORE_LATENCY_SECONDS = Histogram(
    "logjournal_store_operation_seconds",
    "Latency of log store operations",
    ["operation"],  # append | read_all
    registry=PROM_REGISTRY,
)
