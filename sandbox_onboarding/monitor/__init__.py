"""Onboarding progress monitor.

Runs on a schedule, labels and comments on aging onboarding issues,
files health issues at ten months and archives issues at twelve.
"""

from sandbox_onboarding.monitor.health import HealthIssueEscalator
from sandbox_onboarding.monitor.main import OnboardingMonitor, build_workflow
from sandbox_onboarding.monitor.metrics import MonitorMetrics
from sandbox_onboarding.monitor.workflow import (
    MonitorResult,
    OnboardingMonitorWorkflow,
    parse_project_name,
)

__all__ = [
    "HealthIssueEscalator",
    "MonitorMetrics",
    "MonitorResult",
    "OnboardingMonitor",
    "OnboardingMonitorWorkflow",
    "build_workflow",
    "parse_project_name",
]
