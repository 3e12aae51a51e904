"""Onboarding progress monitor workflow orchestration.

Each run lists the open onboarding issues and, one at a time in list
order, classifies the issue by age, applies the skip policy, and
requests the label, comment and action-specific side effects. A failure
on one issue is logged and counted; the run moves on to the next issue.
Only a failure to list the issues aborts the run.
"""

import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional, Sequence

import structlog

from sandbox_onboarding.github.models import IssueRecord
from sandbox_onboarding.github.tracker import IssueTracker
from sandbox_onboarding.monitor.health import HealthIssueEscalator
from sandbox_onboarding.progress.age import calculate_age, utc_now
from sandbox_onboarding.progress.classifier import classify_progress
from sandbox_onboarding.progress.comments import (
    format_health_issue_reference,
    format_progress_comment,
)
from sandbox_onboarding.progress.models import (
    ONBOARDING_LABELS,
    ActionDecision,
    ActionKind,
    AgeInfo,
)
from sandbox_onboarding.progress.skip_policy import should_skip_issue


logger = structlog.get_logger()

_TITLE_PATTERN = re.compile(r"^\[PROJECT ONBOARDING\]\s*(.+)$")


def parse_project_name(title: str) -> Optional[str]:
    """Extract the project name from an onboarding issue title.

    Returns:
        The project name, or None if the title is not an onboarding title.
    """
    match = _TITLE_PATTERN.match(title)
    if match is None:
        return None
    project_name = match.group(1).strip()
    return project_name or None


@dataclass
class MonitorResult:
    """Counters describing one monitor run."""

    issues_found: int = 0
    issues_checked: int = 0
    skipped_not_onboarding: int = 0
    no_action: int = 0
    skipped: int = 0
    actions_taken: Dict[str, int] = field(default_factory=dict)
    health_issues_created: int = 0
    errors: int = 0

    def record_action(self, action: ActionKind) -> None:
        self.actions_taken[action.value] = self.actions_taken.get(action.value, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class OnboardingMonitorWorkflow:
    """Orchestrates onboarding progress monitoring for one repository."""

    def __init__(
        self,
        tracker: IssueTracker,
        owner: str,
        repo: str,
        escalator: HealthIssueEscalator,
        team_assignees: Sequence[str] = ("riaankleinhans",),
        check_all: bool = False,
        test_offset_days: int = 0,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the workflow.

        Args:
            tracker: Issue tracker holding the onboarding issues.
            owner: Owner of the onboarding repository.
            repo: Name of the onboarding repository.
            escalator: Files health issues at the ten-month milestone.
            team_assignees: Users assigned when teams are tagged.
            check_all: Ignore existing milestone labels (initial rollout).
            test_offset_days: Days added to "now" for aging and the skip policy.
            clock: Source of the current UTC time.
        """
        self.tracker = tracker
        self.owner = owner
        self.repo = repo
        self.escalator = escalator
        self.team_assignees = list(team_assignees)
        self.check_all = check_all
        self.test_offset_days = test_offset_days
        self.clock = clock

    async def execute(self) -> MonitorResult:
        """Execute one monitoring pass.

        Returns:
            Counters for the run.

        Raises:
            GitHubAPIError: If the onboarding issues cannot be listed.
        """
        result = MonitorResult()

        issues = await self.tracker.list_open_issues_by_label(
            self.owner, self.repo, list(ONBOARDING_LABELS)
        )
        result.issues_found = len(issues)

        logger.info(
            "Starting onboarding progress monitoring",
            repository=f"{self.owner}/{self.repo}",
            issue_count=len(issues),
            check_all=self.check_all,
            test_offset_days=self.test_offset_days,
        )
        if self.check_all:
            logger.info("Initial deployment: processing issues regardless of existing labels")

        now = self.clock() + timedelta(days=self.test_offset_days)

        for issue in issues:
            try:
                await self._process_issue(issue, now, result)
            except Exception as e:
                logger.error(
                    "Error processing issue",
                    issue_number=issue.number,
                    error=str(e),
                    exc_info=True,
                )
                result.errors += 1

        logger.info("Onboarding progress monitoring completed", **result.to_dict())
        return result

    async def _process_issue(
        self,
        issue: IssueRecord,
        now: datetime,
        result: MonitorResult,
    ) -> None:
        project_name = parse_project_name(issue.title)
        if project_name is None:
            logger.warning("Skipping issue, not an onboarding issue", issue_number=issue.number)
            result.skipped_not_onboarding += 1
            return

        result.issues_checked += 1
        age = calculate_age(issue.created_at, now=now)
        decision = classify_progress(age)

        log = logger.bind(issue_number=issue.number, project_name=project_name)
        log.info(
            "Processing issue",
            age_months=age.months,
            age_weeks=age.weeks,
            age_days=age.days,
        )

        if decision is None:
            log.info("No action needed", age_months=age.months)
            result.no_action += 1
            return

        log.info("Action selected", action=decision.action.value, label=decision.label)

        if should_skip_issue(issue, decision, force_reclassify=self.check_all, now=now):
            log.info("Skipping, recently updated or already processed")
            result.skipped += 1
            return

        await self._apply_decision(issue, project_name, age, decision, result)
        result.record_action(decision.action)
        log.info("Completed processing issue")

    async def _apply_decision(
        self,
        issue: IssueRecord,
        project_name: str,
        age: AgeInfo,
        decision: ActionDecision,
        result: MonitorResult,
    ) -> None:
        await self.tracker.add_label(self.owner, self.repo, issue.number, decision.label)

        comment = format_progress_comment(age, decision, project_name)
        if decision.action == ActionKind.CREATE_HEALTH_ISSUE:
            reference = await self._escalate(issue, project_name, result)
            if reference:
                comment = f"{comment}\n\n{reference}"
        await self.tracker.create_comment(self.owner, self.repo, issue.number, comment)

        if decision.action == ActionKind.TAG_TEAMS:
            await self.tracker.add_assignees(
                self.owner, self.repo, issue.number, self.team_assignees
            )
        elif decision.action == ActionKind.ARCHIVE:
            await self.tracker.update_state(self.owner, self.repo, issue.number, "closed")
            logger.info(
                "Closed onboarding issue; health issue in the TOC repository needs a manual follow-up",
                issue_number=issue.number,
            )

    async def _escalate(
        self,
        issue: IssueRecord,
        project_name: str,
        result: MonitorResult,
    ) -> Optional[str]:
        """File the health issue and return the line linking to it, if filed."""
        created = await self.escalator.escalate(
            project_name, self.owner, self.repo, issue.number
        )
        if created is None:
            return None

        result.health_issues_created += 1
        return format_health_issue_reference(
            created.number, self.escalator.health_issue_url(created.number)
        )
