"""Onboarding issue creation after a successful community vote.

The onboarding issue body comes from the repository's issue template:
its YAML front matter is dropped, a reference to the vote issue is
inserted under the welcome heading, and a related-issue footer is
appended. The vote issue then gets a congratulations comment and is
closed.
"""

import re
from pathlib import Path
from typing import Sequence, Union

import structlog

from sandbox_onboarding.github.tracker import IssueTracker
from sandbox_onboarding.progress.models import ONBOARDING_LABELS, ONBOARDING_TITLE_PREFIX


logger = structlog.get_logger()

_FRONT_MATTER = re.compile(r"^---\n.*?\n---\n", re.DOTALL)
_WELCOME_HEADING = re.compile(r"(# Welcome to CNCF Project Onboarding)")


class OnboardingTemplateError(Exception):
    """Raised when the onboarding issue template cannot be read."""


def render_onboarding_body(template_text: str, vote_issue_number: int) -> str:
    """Render the onboarding issue body from the issue template.

    Args:
        template_text: Raw template, possibly with YAML front matter.
        vote_issue_number: Issue where the community vote took place.

    Returns:
        Markdown body for the onboarding issue.
    """
    body = _FRONT_MATTER.sub("", template_text, count=1)
    body = _WELCOME_HEADING.sub(
        lambda m: f"{m.group(1)}\n\nref: #{vote_issue_number}", body, count=1
    )
    body += (
        "\n\n---\n\n**Related Issue:** This onboarding issue was automatically "
        f"created after the community vote was completed in issue #{vote_issue_number}."
    )
    return body


def render_vote_closing_comment(project_name: str, onboarding_issue_number: int) -> str:
    return f"""🎉 Congratulations! The onboarding issue has been created for **{project_name}**.

The community vote has been completed successfully, and your project is now ready to begin the CNCF onboarding process.

**Next Steps:**
- Please review and work through the tasks in the onboarding issue: #{onboarding_issue_number}
- Complete onboarding within one month of acceptance
- Contact CNCF staff if you have any questions

Good luck with your project's journey in the CNCF! 🚀"""


class OnboardingIssueCreator:
    """Creates onboarding issues and closes the originating vote issue."""

    def __init__(
        self,
        tracker: IssueTracker,
        owner: str,
        repo: str,
        template_path: Union[str, Path],
        assignees: Sequence[str] = (),
    ):
        self.tracker = tracker
        self.owner = owner
        self.repo = repo
        self.template_path = Path(template_path)
        self.assignees = list(assignees)

    def _read_template(self) -> str:
        try:
            return self.template_path.read_text(encoding="utf-8")
        except OSError as e:
            raise OnboardingTemplateError(
                f"Cannot read onboarding template {self.template_path}: {e}"
            ) from e

    async def create_onboarding_issue(self, project_name: str, vote_issue_number: int) -> int:
        """Create the onboarding issue for a newly accepted project.

        Args:
            project_name: Name of the accepted project.
            vote_issue_number: Issue where the community vote took place.

        Returns:
            Number of the created onboarding issue.

        Raises:
            OnboardingTemplateError: If the template file cannot be read.
            GitHubAPIError: If the issue cannot be created.
        """
        body = render_onboarding_body(self._read_template(), vote_issue_number)

        created = await self.tracker.create_issue(
            self.owner,
            self.repo,
            title=f"{ONBOARDING_TITLE_PREFIX}{project_name}",
            body=body,
            labels=list(ONBOARDING_LABELS),
            assignees=self.assignees,
        )

        logger.info(
            "Created onboarding issue",
            project_name=project_name,
            issue_number=created.number,
            vote_issue_number=vote_issue_number,
        )
        return created.number

    async def comment_and_close(
        self,
        vote_issue_number: int,
        onboarding_issue_number: int,
        project_name: str,
    ) -> None:
        """Point the vote issue at the onboarding issue and close it."""
        await self.tracker.create_comment(
            self.owner,
            self.repo,
            vote_issue_number,
            render_vote_closing_comment(project_name, onboarding_issue_number),
        )
        await self.tracker.update_state(self.owner, self.repo, vote_issue_number, "closed")

        logger.info(
            "Commented on vote issue and closed it",
            vote_issue_number=vote_issue_number,
            onboarding_issue_number=onboarding_issue_number,
        )

    async def onboard(self, project_name: str, vote_issue_number: int) -> int:
        """Create the onboarding issue, then close the vote issue."""
        onboarding_issue_number = await self.create_onboarding_issue(
            project_name, vote_issue_number
        )
        await self.comment_and_close(vote_issue_number, onboarding_issue_number, project_name)
        return onboarding_issue_number
