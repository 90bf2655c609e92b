"""Prometheus metrics for retry runs.

Metrics are registered in the default prometheus_client registry; the
embedding application decides whether and where to expose them.
Suggested alerts:
- retry_runs_total{outcome!="success"} (runs giving up)
- retry_attempts_total{result="failure"} (high per-attempt failure rate)
"""

from prometheus_client import Counter, Histogram

retry_attempts_total = Counter(
    "retry_attempts_total",
    "Total operation attempts by result",
    ["result"],
)
"""
Attempts counter.

Labels:
- result: success (operation returned), failure (operation raised)
"""

retry_runs_total = Counter(
    "retry_runs_total",
    "Total retry runs by terminal outcome",
    ["outcome"],
)
"""
Runs counter.

Labels:
- outcome: success, max_tries_exceeded, timeout_exceeded
"""

retry_run_duration_seconds = Histogram(
    "retry_run_duration_seconds",
    "Wall-clock duration of a retry run in seconds",
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)
