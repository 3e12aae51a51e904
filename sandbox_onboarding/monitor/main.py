"""Onboarding progress monitor entrypoint for scheduled execution."""

import time
from datetime import datetime
from typing import Callable, Optional

import structlog
from prometheus_client import push_to_gateway

from sandbox_onboarding.common.config import (
    MonitorSettings,
    redact_secret,
    split_repository,
)
from sandbox_onboarding.github.client import GitHubClient
from sandbox_onboarding.github.tracker import IssueTracker
from sandbox_onboarding.monitor.health import HealthIssueEscalator
from sandbox_onboarding.monitor.metrics import MonitorMetrics
from sandbox_onboarding.monitor.workflow import OnboardingMonitorWorkflow
from sandbox_onboarding.progress.age import utc_now

logger = structlog.get_logger()


def build_github_client(settings: MonitorSettings) -> GitHubClient:
    return GitHubClient(
        token=settings.github_token,
        base_url=settings.github_base_url,
        max_retries=settings.github_max_retries,
        timeout=settings.github_timeout_seconds,
    )


def build_workflow(
    settings: MonitorSettings,
    tracker: IssueTracker,
    clock: Callable[[], datetime] = utc_now,
) -> OnboardingMonitorWorkflow:
    """Wire the monitor workflow from settings."""
    health_owner, health_repo = split_repository(settings.health_repository)
    escalator = HealthIssueEscalator(
        tracker,
        owner=health_owner,
        repo=health_repo,
        labels=settings.health_issue_labels,
        assignees=settings.health_issue_assignees,
    )
    return OnboardingMonitorWorkflow(
        tracker,
        owner=settings.owner,
        repo=settings.repo,
        escalator=escalator,
        team_assignees=settings.team_assignees,
        check_all=settings.check_all,
        test_offset_days=settings.test_offset_days,
        clock=clock,
    )


class OnboardingMonitor:
    """Main onboarding monitor application."""

    def __init__(
        self,
        settings: MonitorSettings,
        tracker: Optional[IssueTracker] = None,
        metrics: Optional[MonitorMetrics] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.settings = settings
        self.metrics = metrics if metrics is not None else MonitorMetrics()
        self._owns_tracker = tracker is None
        self.tracker = tracker if tracker is not None else build_github_client(settings)
        self.workflow = build_workflow(settings, self.tracker, clock)

    async def run(self) -> int:
        """Execute the monitor workflow with metrics and error handling.

        Returns:
            Process exit code: 0 on success, 1 if the run failed or any
            issue could not be processed.
        """
        start_time = time.time()

        logger.info(
            "Starting onboarding monitor execution",
            repository=self.settings.repository,
            github_base_url=self.settings.github_base_url,
            github_token=redact_secret(self.settings.github_token),
            check_all=self.settings.check_all,
        )

        try:
            results = await self.workflow.execute()
        except Exception as e:
            self.metrics.record_execution_failure(type(e).__name__)
            logger.error("Monitor execution failed", error=str(e), exc_info=True)
            return 1
        finally:
            if self._owns_tracker:
                await self.tracker.close()

        execution_time = time.time() - start_time
        self.metrics.record_execution_success(execution_time)
        self.metrics.record_issues_checked(results.issues_checked)
        self.metrics.record_health_issues_created(results.health_issues_created)
        self.metrics.record_issue_errors(results.errors)
        for action, count in results.actions_taken.items():
            self.metrics.record_action(action, count)

        self._push_metrics()

        logger.info(
            "Monitor execution completed",
            execution_time=execution_time,
            **results.to_dict(),
        )

        if results.errors > 0:
            logger.warning("Monitor completed with errors", error_count=results.errors)
            return 1

        return 0

    def _push_metrics(self) -> None:
        """Push metrics to Prometheus gateway if configured."""
        gateway_url = self.settings.prometheus_gateway_url
        if not gateway_url:
            return
        try:
            push_to_gateway(
                gateway_url,
                job="sandbox-onboarding-monitor",
                registry=self.metrics.registry,
            )
            logger.debug("Metrics pushed to gateway", gateway_url=gateway_url)
        except Exception as e:
            logger.warning("Failed to push metrics", error=str(e))
