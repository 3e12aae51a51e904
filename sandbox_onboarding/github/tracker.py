"""Issue tracker interface consumed by the monitor and issue creators.

The GitHub REST implementation is in client.py. Tests substitute an
AsyncMock or any object with the same coroutine methods.
"""

from typing import Any, Dict, List, Protocol, Sequence

from sandbox_onboarding.github.models import CreatedIssue, IssueRecord


class IssueTracker(Protocol):
    """Protocol for the issue operations the automation needs.

    Every method is a network call and may raise GitHubAPIError.
    """

    async def list_open_issues_by_label(
        self,
        owner: str,
        repo: str,
        labels: Sequence[str],
    ) -> List[IssueRecord]:
        """List open issues carrying all of the given labels."""
        ...

    async def add_label(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        label: str,
    ) -> List[Dict[str, Any]]:
        """Add a label to an issue."""
        ...

    async def create_comment(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        body: str,
    ) -> Dict[str, Any]:
        """Create a comment on an issue."""
        ...

    async def update_state(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        state: str,
    ) -> Dict[str, Any]:
        """Open or close an issue."""
        ...

    async def add_assignees(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        assignees: Sequence[str],
    ) -> Dict[str, Any]:
        """Assign users to an issue."""
        ...

    async def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str,
        labels: Sequence[str] = (),
        assignees: Sequence[str] = (),
    ) -> CreatedIssue:
        """Create an issue and return its number and URL."""
        ...

    async def get_repository(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch repository metadata, failing if it is not accessible."""
        ...
