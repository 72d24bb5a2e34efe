"""Prometheus metrics for monitoring simulations, advisory calls, and feedback"""

from prometheus_client import Counter, Histogram

# Simulation metrics
simulation_counter = Counter(
    "fiscal_simulation_total",
    "Total regime simulations completed",
    ["advantageous_regime"],  # micro | reel | equal
)

simulation_error_counter = Counter(
    "fiscal_simulation_errors_total",
    "Simulations answered with an in-band error",
    ["kind"],  # validation | calculation
)

activity_counter = Counter(
    "fiscal_simulation_activity_total",
    "Completed simulations by activity type",
    ["activity_type"],
)

# Advisory API metrics
advisory_latency_histogram = Histogram(
    "advisory_latency_seconds",
    "Advisory text API response time",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 15.0, 30.0],
)

advisory_failure_counter = Counter(
    "advisory_failures_total",
    "Failed advisory text generations",
)

# Feedback
feedback_counter = Counter(
    "feedback_submissions_total",
    "Feedback submissions",
    ["outcome"],  # stored | failed
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_simulation(advantageous_regime: str, activity_type: str) -> None:
    """Record a completed simulation for regime mix and activity distribution"""
    simulation_counter.labels(advantageous_regime=advantageous_regime).inc()
    activity_counter.labels(activity_type=activity_type).inc()


def record_simulation_error(kind: str) -> None:
    simulation_error_counter.labels(kind=kind).inc()
