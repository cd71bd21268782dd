"""Prometheus metrics for loan volume, decision outcomes and store health"""

from prometheus_client import Counter, Histogram

# Lifecycle metrics
loans_created_counter = Counter(
    "tredgate_loans_created_total",
    "Loan applications created",
)

decision_counter = Counter(
    "tredgate_loan_decision_total",
    "Loan decisions applied",
    ["operation", "outcome"],  # approve | reject | auto_decide x approved | rejected
)

loans_deleted_counter = Counter(
    "tredgate_loans_deleted_total",
    "Loan applications deleted",
)

validation_failure_counter = Counter(
    "tredgate_validation_failures_total",
    "Creation requests rejected by validation",
)

# Store health
store_load_failures_counter = Counter(
    "tredgate_store_load_failures_total",
    "Store loads that fell back to an empty collection",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decision(operation: str, outcome: str) -> None:
    """Record decision metrics for monitoring approval rates"""
    decision_counter.labels(operation=operation, outcome=outcome).inc()
