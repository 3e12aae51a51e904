"""GitHub issue models.

This module defines the snapshots the tracker hands to the monitor:
- IssueRecord: Read-only view of an issue at listing time
- CreatedIssue: Result of creating an issue

The models use Pydantic for validation, consistent with the settings
approach in common/config.py.
"""

from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IssueRecord(BaseModel):
    """Snapshot of a GitHub issue used for one classification pass.

    Attributes:
        number: The issue number within the repository.
        title: The issue title text.
        created_at: When the issue was opened (UTC).
        updated_at: When the issue last changed (UTC).
        comment_count: Number of comments on the issue.
        labels: Names of the labels currently on the issue.
        state: "open" or "closed".
        html_url: Browser URL of the issue.
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., gt=0, description="Issue number (positive integer)")

    title: str = Field(default="", description="Issue title text")

    created_at: datetime = Field(..., description="Creation time (UTC)")

    updated_at: datetime = Field(..., description="Last update time (UTC)")

    comment_count: int = Field(default=0, ge=0, description="Number of comments")

    labels: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Names of the labels attached to the issue",
    )

    state: str = Field(default="open", description="Issue state")

    html_url: str = Field(default="", description="Browser URL of the issue")

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def from_github_response(cls, data: Dict[str, Any]) -> "IssueRecord":
        """Build a record from a GitHub REST issue payload.

        Label entries may be label objects or plain names.

        Args:
            data: Issue JSON as returned by the GitHub API.

        Returns:
            The parsed IssueRecord.
        """
        labels = []
        for label in data.get("labels") or []:
            if isinstance(label, dict):
                labels.append(label["name"])
            else:
                labels.append(str(label))

        return cls(
            number=data["number"],
            title=data.get("title") or "",
            created_at=data["created_at"],
            updated_at=data.get("updated_at") or data["created_at"],
            comment_count=data.get("comments", 0),
            labels=frozenset(labels),
            state=data.get("state", "open"),
            html_url=data.get("html_url", ""),
        )

    @property
    def last_activity_at(self) -> datetime:
        """Time of the last comment, approximated by updated_at.

        Falls back to created_at for issues without comments.
        """
        if self.comment_count > 0:
            return self.updated_at
        return self.created_at


class CreatedIssue(BaseModel):
    """Result of creating a GitHub issue.

    Attributes:
        number: The new issue number.
        html_url: Browser URL of the new issue.
    """

    number: int = Field(..., gt=0)

    html_url: str = Field(default="")

    @classmethod
    def from_github_response(cls, data: Dict[str, Any]) -> "CreatedIssue":
        return cls(number=data["number"], html_url=data.get("html_url", ""))
