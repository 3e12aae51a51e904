"""Unit tests for the GitHub issue models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from sandbox_onboarding.github.models import CreatedIssue, IssueRecord


class TestIssueRecord:

    def test_from_github_response(self):
        issue = IssueRecord.from_github_response(
            {
                "number": 12,
                "title": "[PROJECT ONBOARDING] Acme",
                "created_at": "2025-01-01T00:00:00Z",
                "updated_at": "2025-03-01T08:30:00Z",
                "comments": 4,
                "labels": [{"name": "sandbox"}, "project onboarding"],
                "state": "open",
                "html_url": "https://github.com/cncf/sandbox/issues/12",
            }
        )

        assert issue.number == 12
        assert issue.comment_count == 4
        assert issue.labels == frozenset({"sandbox", "project onboarding"})
        assert issue.created_at == datetime(2025, 1, 1, tzinfo=timezone.utc)

    def test_missing_optional_fields_default(self):
        issue = IssueRecord.from_github_response(
            {"number": 3, "created_at": "2025-01-01T00:00:00Z", "labels": None}
        )

        assert issue.title == ""
        assert issue.comment_count == 0
        assert issue.labels == frozenset()
        assert issue.updated_at == issue.created_at

    def test_naive_timestamps_are_utc(self):
        issue = IssueRecord(
            number=1,
            created_at=datetime(2025, 1, 1),
            updated_at=datetime(2025, 1, 2),
        )

        assert issue.created_at.tzinfo == timezone.utc

    def test_rejects_non_positive_number(self):
        with pytest.raises(ValidationError):
            IssueRecord(
                number=0,
                created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
                updated_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
            )

    def test_is_frozen(self):
        issue = IssueRecord(
            number=1,
            created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
            updated_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )

        with pytest.raises(ValidationError):
            issue.title = "changed"

    def test_last_activity_uses_update_time_when_commented(self):
        created = datetime(2025, 1, 1, tzinfo=timezone.utc)
        updated = datetime(2025, 2, 1, tzinfo=timezone.utc)

        commented = IssueRecord(number=1, created_at=created, updated_at=updated, comment_count=2)
        silent = IssueRecord(number=1, created_at=created, updated_at=updated, comment_count=0)

        assert commented.last_activity_at == updated
        assert silent.last_activity_at == created


def test_created_issue_from_response():
    created = CreatedIssue.from_github_response(
        {"number": 5, "html_url": "https://github.com/cncf/toc/issues/5", "id": 999}
    )

    assert created == CreatedIssue(number=5, html_url="https://github.com/cncf/toc/issues/5")
