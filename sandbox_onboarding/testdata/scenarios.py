"""Seed onboarding issues of various simulated ages.

GitHub does not allow backdating issues, so seeded issues carry their
simulated age in the body; the monitor's test_offset_days setting makes
them look older when it runs.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, NamedTuple, Optional, Sequence

import structlog

from sandbox_onboarding.github.models import CreatedIssue
from sandbox_onboarding.github.tracker import IssueTracker
from sandbox_onboarding.progress.age import DAYS_PER_MONTH, utc_now
from sandbox_onboarding.progress.models import ONBOARDING_LABELS, ONBOARDING_TITLE_PREFIX


logger = structlog.get_logger()

LABEL_TEST = "test"

TEST_PROJECTS = [
    "Test Project Alpha",
    "Test Project Beta",
    "Test Project Gamma",
    "Test Project Delta",
    "Test Project Epsilon",
]


class Scenario(NamedTuple):
    name: str
    days: int
    description: str


TEST_SCENARIOS = [
    Scenario("Fresh (1 day)", 1, "Just created - should not trigger any actions"),
    Scenario("New (30 days)", 30, "1 month old - too early for any action"),
    Scenario("Stale (180 days)", 180, "6 months old - should trigger stale label"),
    Scenario("Warning (270 days)", 270, "9 months old - should trigger warning label"),
    Scenario("Critical (305 days)", 305, "10 months old - should create health issue"),
    Scenario("Urgent (335 days)", 335, "11 months old - should trigger weekly warnings"),
    Scenario("Archival (365 days)", 365, "12 months old - should trigger archival"),
]


@dataclass(frozen=True)
class SeedIssue:
    """An onboarding issue to be created for a test scenario."""

    title: str
    body: str
    labels: List[str]
    creation_date: datetime
    scenario: Scenario


@dataclass
class SeedResult:
    """Outcome of a seeding run."""

    planned: List[SeedIssue] = field(default_factory=list)
    created: List[CreatedIssue] = field(default_factory=list)
    failed: int = 0


def project_name_for(index: int) -> str:
    """Project name for the scenario at the given index."""
    if index < len(TEST_PROJECTS):
        return TEST_PROJECTS[index]
    return f"Test Project {chr(ord('A') + index)}"


def build_seed_issue(
    project_name: str,
    scenario: Scenario,
    now: Optional[datetime] = None,
) -> SeedIssue:
    """Build the issue that simulates one scenario."""
    if now is None:
        now = utc_now()
    creation_date = now - timedelta(days=scenario.days)
    months = scenario.days // DAYS_PER_MONTH

    body = f"""# Test Onboarding Issue

This is a **test issue** created by the setup script to test the onboarding monitor.

## Test Scenario: {scenario.name}
- **Simulated Age:** {scenario.days} days ({months} months)
- **Expected Action:** {scenario.description}
- **Created:** {creation_date.isoformat()}

## Test Checklist

This is a test issue with a simulated checklist:

- [ ] Test task 1
- [ ] Test task 2
- [ ] Test task 3
- [ ] Test task 4
- [ ] Test task 5

## Notes

- This issue was created for testing purposes
- It simulates an onboarding issue that is {scenario.days} days old
- The onboarding monitor should process this issue according to its age
- You can safely delete this issue after testing

---

*Created by test setup script on {now.isoformat()}*"""

    return SeedIssue(
        title=f"{ONBOARDING_TITLE_PREFIX}{project_name}",
        body=body,
        labels=[*ONBOARDING_LABELS, LABEL_TEST],
        creation_date=creation_date,
        scenario=scenario,
    )


class TestIssueSeeder:
    """Creates one onboarding issue per test scenario."""

    __test__ = False

    def __init__(
        self,
        tracker: IssueTracker,
        owner: str,
        repo: str,
        scenarios: Sequence[Scenario] = tuple(TEST_SCENARIOS),
        creation_delay_seconds: float = 1.0,
    ):
        self.tracker = tracker
        self.owner = owner
        self.repo = repo
        self.scenarios = list(scenarios)
        self.creation_delay_seconds = creation_delay_seconds

    def plan(self, now: Optional[datetime] = None) -> List[SeedIssue]:
        return [
            build_seed_issue(project_name_for(index), scenario, now)
            for index, scenario in enumerate(self.scenarios)
        ]

    async def seed(self, dry_run: bool = False) -> SeedResult:
        """Verify access and create the scenario issues.

        Args:
            dry_run: Only plan the issues, do not create them.

        Returns:
            The planned issues and those actually created.

        Raises:
            GitHubAPIError: If the repository is not accessible.
        """
        await self.tracker.get_repository(self.owner, self.repo)
        logger.info("Repository access confirmed", repository=f"{self.owner}/{self.repo}")

        result = SeedResult(planned=self.plan())
        if dry_run:
            logger.info("Dry run complete, no issues created", planned=len(result.planned))
            return result

        for seed_issue in result.planned:
            try:
                created = await self.tracker.create_issue(
                    self.owner,
                    self.repo,
                    title=seed_issue.title,
                    body=seed_issue.body,
                    labels=seed_issue.labels,
                )
            except Exception as e:
                logger.error(
                    "Failed to create test issue",
                    title=seed_issue.title,
                    error=str(e),
                )
                result.failed += 1
                continue

            result.created.append(created)
            logger.info(
                "Created test issue",
                issue_number=created.number,
                url=created.html_url,
                scenario=seed_issue.scenario.name,
            )
            await asyncio.sleep(self.creation_delay_seconds)

        return result
