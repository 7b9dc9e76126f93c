"""Prometheus metrics for seeding runs, ledger API calls and HTTP traffic"""

from prometheus_client import Counter, Histogram

# Run metrics
run_counter = Counter(
    "ledger_seeder_runs_total",
    "Seeding runs finished",
    ["outcome"],  # success | failure
)

transactions_generated_counter = Counter(
    "ledger_seeder_transactions_generated_total",
    "Transactions produced by the generation pipeline",
)

transactions_created_counter = Counter(
    "ledger_seeder_transactions_created_total",
    "Transactions confirmed created by the ledger API",
)

dropped_items_counter = Counter(
    "ledger_seeder_items_dropped_total",
    "Generated items dropped because a category or account could not be resolved",
)

batch_failure_counter = Counter(
    "ledger_seeder_batch_failures_total",
    "Transaction batches rejected by the ledger API",
)

# Ledger API metrics
ledger_request_histogram = Histogram(
    "ledger_api_request_seconds",
    "Ledger API response time",
    ["method", "endpoint"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

ledger_request_failures_counter = Counter(
    "ledger_api_failures_total",
    "Failed ledger API calls",
    ["endpoint"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_run(success: bool, generated: int, created: int, dropped: int) -> None:
    """Record run outcome and transaction volumes"""
    run_counter.labels(outcome="success" if success else "failure").inc()
    transactions_generated_counter.inc(generated)
    transactions_created_counter.inc(created)
    dropped_items_counter.inc(dropped)
