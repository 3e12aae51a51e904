"""Health issue escalation to the TOC repository.

When an onboarding issue reaches ten months, a Project Health issue is
filed in the TOC repository following its project-health template.
A failure to file it is logged and reported as None so the monitor can
carry on with the remaining issues.
"""

from typing import Optional, Sequence

import structlog

from sandbox_onboarding.github.models import CreatedIssue
from sandbox_onboarding.github.tracker import IssueTracker
from sandbox_onboarding.progress.models import HEALTH_TITLE_FORMAT


logger = structlog.get_logger()


HEALTH_ISSUE_TEMPLATE = """**Purpose of This Issue**

This Project Health Issue has been filed to ascertain the current activity and health of the project so the TOC may identify the appropriate support and guidance for the project to return to an optimal state of health or determination of archival.

It is intended to **initiate a public discussion to seek understanding** and define a path forward. Perceptions or commentary counter to this are not constructive for the project or the community.

Should maintainers have sensitive, confidential, or private factors and concerns that influence or affect the project, they are encouraged to contact the TOC directly through CNCF Staff, the private-toc mailing list, Slack, or email.

---

## Project name
{project_name}

## Project Issue Link
{onboarding_issue_url}

## Concern
This sandbox project has been in the onboarding process for 10+ months and is approaching the automatic archival deadline. The project has not completed the required onboarding tasks within the expected timeframe, which may indicate:

- Lack of active maintainer engagement
- Insufficient resources to complete onboarding
- Project may no longer be actively maintained
- Need for additional support or guidance

**Timeline:**
- **Current:** 10+ months in onboarding process
- **Deadline:** 12 months (automatic archival)
- **Remaining:** ~2 months

**Onboarding Issue:** [#{onboarding_issue_number}]({onboarding_issue_url})

**Automated Monitoring:** This health issue was automatically created by the CNCF onboarding progress monitor when the project reached the 10-month milestone.

## Prior engagement
This is an automated health check triggered by the onboarding progress monitoring system. No prior TOC engagement has been initiated for this specific onboarding delay.

## Additional Information
The CNCF onboarding progress monitor automatically tracks sandbox project onboarding progress and creates health issues for projects that have been in the onboarding process for 10+ months. This ensures timely intervention before automatic archival occurs.

**Next Steps:**
- Contact project maintainers to assess current status
- Determine if additional support is needed
- Evaluate if extension is warranted
- Provide guidance for completing onboarding tasks

---
*This health issue was automatically created by the CNCF onboarding progress monitor.*"""


def issue_url(owner: str, repo: str, issue_number: int) -> str:
    """Browser URL of an issue on github.com."""
    return f"https://github.com/{owner}/{repo}/issues/{issue_number}"


def build_health_issue_title(project_name: str) -> str:
    return HEALTH_TITLE_FORMAT.format(project_name=project_name)


def build_health_issue_body(
    project_name: str,
    onboarding_owner: str,
    onboarding_repo: str,
    onboarding_issue_number: int,
) -> str:
    """Render the Project Health issue body for a stalled onboarding."""
    return HEALTH_ISSUE_TEMPLATE.format(
        project_name=project_name,
        onboarding_issue_number=onboarding_issue_number,
        onboarding_issue_url=issue_url(
            onboarding_owner, onboarding_repo, onboarding_issue_number
        ),
    )


class HealthIssueEscalator:
    """Files Project Health issues in the TOC repository.

    Attributes:
        tracker: Issue tracker used to create the health issue.
        owner: Owner of the health issue repository.
        repo: Name of the health issue repository.
        labels: Labels applied to every health issue.
        assignees: Users assigned to every health issue.
    """

    def __init__(
        self,
        tracker: IssueTracker,
        owner: str = "cncf",
        repo: str = "toc",
        labels: Sequence[str] = ("needs-triage", "toc", "kind/review", "review/health"),
        assignees: Sequence[str] = ("riaankleinhans",),
    ):
        self.tracker = tracker
        self.owner = owner
        self.repo = repo
        self.labels = list(labels)
        self.assignees = list(assignees)

    async def escalate(
        self,
        project_name: str,
        onboarding_owner: str,
        onboarding_repo: str,
        onboarding_issue_number: int,
    ) -> Optional[CreatedIssue]:
        """Create the health issue for a stalled onboarding issue.

        Args:
            project_name: Project name parsed from the onboarding issue title.
            onboarding_owner: Owner of the onboarding repository.
            onboarding_repo: Name of the onboarding repository.
            onboarding_issue_number: Number of the onboarding issue.

        Returns:
            The created health issue, or None if creation failed.
        """
        body = build_health_issue_body(
            project_name,
            onboarding_owner,
            onboarding_repo,
            onboarding_issue_number,
        )

        try:
            created = await self.tracker.create_issue(
                self.owner,
                self.repo,
                title=build_health_issue_title(project_name),
                body=body,
                labels=self.labels,
                assignees=self.assignees,
            )
        except Exception as e:
            logger.error(
                "Failed to create health issue",
                project_name=project_name,
                onboarding_issue_number=onboarding_issue_number,
                health_repository=f"{self.owner}/{self.repo}",
                error=str(e),
                exc_info=True,
            )
            return None

        logger.info(
            "Created health issue",
            project_name=project_name,
            health_issue_number=created.number,
            health_repository=f"{self.owner}/{self.repo}",
        )
        return created

    def health_issue_url(self, health_issue_number: int) -> str:
        return issue_url(self.owner, self.repo, health_issue_number)
