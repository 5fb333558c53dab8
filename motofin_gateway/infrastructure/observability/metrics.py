"""Prometheus metrics for classification, eligibility, quotation issuance, rate refresh and webhooks"""

from typing import Optional

from prometheus_client import Counter, Histogram

# Classifier metrics
classification_counter = Counter(
    "motofin_classification_total",
    "Category classifications by resolution method",
    ["method"],  # exact | synonym | fuzzy | none
)

# Router metrics
routing_counter = Counter(
    "motofin_routing_total",
    "Eligibility routing outcomes",
    ["status"],  # Eligible | Conditional | Rejected
)

# Sequencer metrics
quotes_issued_counter = Counter(
    "motofin_quotes_issued_total",
    "Quotation ids issued",
)

sequencer_conflict_counter = Counter(
    "motofin_sequencer_conflicts_total",
    "Counter transactions retried after a concurrent write",
)

sequencer_failure_counter = Counter(
    "motofin_sequencer_failures_total",
    "Quotation id allocations that could not commit",
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Quote webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "webhook_failures_total",
    "Failed webhook deliveries",
)

# Rate refresh metrics
rate_refresh_counter = Counter(
    "motofin_rate_refresh_total",
    "Usury rate refresh runs by outcome",
    ["outcome"],  # updated | failed
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_classification(method: Optional[str]) -> None:
    classification_counter.labels(method=method or "none").inc()


def record_routing(status: str) -> None:
    routing_counter.labels(status=status).inc()
