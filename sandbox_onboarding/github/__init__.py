"""GitHub API access for onboarding automation.

This module provides:
- IssueTracker: the protocol the monitor and issue creators depend on
- GitHubClient: async REST implementation of that protocol
- IssueRecord / CreatedIssue: issue snapshots returned by the tracker
"""

from sandbox_onboarding.github.client import (
    GitHubAPIError,
    GitHubClient,
    RateLimitError,
)
from sandbox_onboarding.github.models import CreatedIssue, IssueRecord
from sandbox_onboarding.github.tracker import IssueTracker

__all__ = [
    "CreatedIssue",
    "GitHubAPIError",
    "GitHubClient",
    "IssueRecord",
    "IssueTracker",
    "RateLimitError",
]
