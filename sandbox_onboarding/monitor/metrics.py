"""Metrics collection for the onboarding progress monitor."""

from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram


class MonitorMetrics:
    """Prometheus metrics for the onboarding progress monitor."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """Register the monitor metrics.

        Args:
            registry: Registry to register on. Defaults to the global
                REGISTRY, which accepts these metric names only once per
                process; pass a fresh CollectorRegistry for each additional
                instance.
        """
        self.registry = registry if registry is not None else REGISTRY

        self.executions_total = Counter(
            "onboarding_monitor_executions_total",
            "Total monitor executions",
            ["status"],
            registry=self.registry,
        )
        self.duration_seconds = Histogram(
            "onboarding_monitor_duration_seconds",
            "Monitor execution duration",
            registry=self.registry,
        )
        self.issues_checked_total = Counter(
            "onboarding_issues_checked_total",
            "Onboarding issues checked",
            registry=self.registry,
        )
        self.actions_total = Counter(
            "onboarding_actions_total",
            "Actions taken on onboarding issues",
            ["action"],
            registry=self.registry,
        )
        self.health_issues_created_total = Counter(
            "onboarding_health_issues_created_total",
            "Health issues filed in the TOC repository",
            registry=self.registry,
        )
        self.errors_total = Counter(
            "onboarding_monitor_errors_total",
            "Monitor errors",
            ["error_type"],
            registry=self.registry,
        )

    def record_execution_success(self, duration: float):
        """Record successful execution."""
        self.executions_total.labels(status="success").inc()
        self.duration_seconds.observe(duration)

    def record_execution_failure(self, error_type: str):
        """Record failed execution."""
        self.executions_total.labels(status="error").inc()
        self.errors_total.labels(error_type=error_type).inc()

    def record_issues_checked(self, count: int):
        self.issues_checked_total.inc(count)

    def record_action(self, action: str, count: int = 1):
        self.actions_total.labels(action=action).inc(count)

    def record_health_issues_created(self, count: int):
        self.health_issues_created_total.inc(count)

    def record_issue_errors(self, count: int):
        """Record per-issue failures that did not abort the run."""
        if count:
            self.errors_total.labels(error_type="issue_processing").inc(count)
