"""Metrics instrumentation for retry runs.

Exports Prometheus metrics for operational monitoring and alerting.
"""

from retryloop.monitoring.metrics import (
    retry_attempts_total,
    retry_run_duration_seconds,
    retry_runs_total,
)

__all__ = [
    "retry_attempts_total",
    "retry_runs_total",
    "retry_run_duration_seconds",
]
