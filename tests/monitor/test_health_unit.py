"""Unit tests for health issue escalation."""

import asyncio
from unittest.mock import AsyncMock

import httpx

from sandbox_onboarding.github.client import GitHubAPIError
from sandbox_onboarding.github.models import CreatedIssue
from sandbox_onboarding.monitor.health import (
    HealthIssueEscalator,
    build_health_issue_body,
    build_health_issue_title,
)


def run_async(coro):
    return asyncio.run(coro)


REQUIRED_SECTIONS = [
    "**Purpose of This Issue**",
    "## Project name",
    "## Project Issue Link",
    "## Concern",
    "## Prior engagement",
    "## Additional Information",
]


class TestHealthIssueContent:

    def test_title(self):
        assert (
            build_health_issue_title("Kube Widgets")
            == "[HEALTH]: Kube Widgets - Onboarding Deadline Approaching"
        )

    def test_body_has_template_sections(self):
        body = build_health_issue_body("Acme", "cncf", "sandbox", 42)

        for section in REQUIRED_SECTIONS:
            assert section in body

    def test_body_links_onboarding_issue(self):
        body = build_health_issue_body("Acme", "cncf", "sandbox", 42)

        assert "## Project name\nAcme\n" in body
        assert "## Project Issue Link\nhttps://github.com/cncf/sandbox/issues/42\n" in body
        assert "[#42](https://github.com/cncf/sandbox/issues/42)" in body
        assert "**Remaining:** ~2 months" in body


class TestEscalate:

    def test_creates_issue_in_toc_repository(self):
        tracker = AsyncMock()
        tracker.create_issue.return_value = CreatedIssue(number=9, html_url="u")
        escalator = HealthIssueEscalator(tracker)

        created = run_async(escalator.escalate("Acme", "cncf", "sandbox", 42))

        assert created.number == 9
        call = tracker.create_issue.await_args
        assert call.args == ("cncf", "toc")
        assert call.kwargs["labels"] == ["needs-triage", "toc", "kind/review", "review/health"]
        assert call.kwargs["assignees"] == ["riaankleinhans"]

    def test_custom_destination(self):
        tracker = AsyncMock()
        tracker.create_issue.return_value = CreatedIssue(number=3)
        escalator = HealthIssueEscalator(
            tracker, owner="acme", repo="governance", labels=["health"], assignees=[]
        )

        run_async(escalator.escalate("Acme", "cncf", "sandbox", 42))

        call = tracker.create_issue.await_args
        assert call.args == ("acme", "governance")
        assert call.kwargs["labels"] == ["health"]
        assert escalator.health_issue_url(3) == "https://github.com/acme/governance/issues/3"

    def test_api_failure_returns_none(self):
        tracker = AsyncMock()
        tracker.create_issue.side_effect = GitHubAPIError("GitHub API error: 422", status_code=422)

        assert run_async(HealthIssueEscalator(tracker).escalate("Acme", "cncf", "sandbox", 1)) is None

    def test_transport_failure_returns_none(self):
        tracker = AsyncMock()
        tracker.create_issue.side_effect = httpx.ConnectError("connection refused")

        assert run_async(HealthIssueEscalator(tracker).escalate("Acme", "cncf", "sandbox", 1)) is None
