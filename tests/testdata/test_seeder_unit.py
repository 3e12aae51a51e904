"""Unit tests for test issue seeding."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from sandbox_onboarding.github.client import GitHubAPIError
from sandbox_onboarding.github.models import CreatedIssue
from sandbox_onboarding.testdata.scenarios import (
    TEST_SCENARIOS,
    Scenario,
    TestIssueSeeder,
    build_seed_issue,
    project_name_for,
)


def run_async(coro):
    return asyncio.run(coro)


@pytest.fixture
def tracker():
    tracker = AsyncMock()
    tracker.get_repository.return_value = {"full_name": "acme/sandbox-test"}
    numbers = iter(range(1, 100))

    async def create_issue(owner, repo, title, body, labels=(), assignees=()):
        number = next(numbers)
        return CreatedIssue(number=number, html_url=f"https://github.com/{owner}/{repo}/issues/{number}")

    tracker.create_issue.side_effect = create_issue
    return tracker


def _seeder(tracker, **kwargs):
    return TestIssueSeeder(tracker, "acme", "sandbox-test", creation_delay_seconds=0, **kwargs)


def test_scenarios_cover_every_milestone():
    assert [s.days for s in TEST_SCENARIOS] == [1, 30, 180, 270, 305, 335, 365]


def test_project_names():
    assert project_name_for(0) == "Test Project Alpha"
    assert project_name_for(4) == "Test Project Epsilon"
    assert project_name_for(5) == "Test Project F"
    assert project_name_for(6) == "Test Project G"


def test_build_seed_issue(now):
    scenario = Scenario("Stale (180 days)", 180, "6 months old")

    seed_issue = build_seed_issue("Test Project Gamma", scenario, now=now)

    assert seed_issue.title == "[PROJECT ONBOARDING] Test Project Gamma"
    assert seed_issue.labels == ["project onboarding", "sandbox", "test"]
    assert seed_issue.creation_date == now - timedelta(days=180)
    assert "**Simulated Age:** 180 days (6 months)" in seed_issue.body
    assert "## Test Scenario: Stale (180 days)" in seed_issue.body


class TestSeed:

    def test_dry_run_creates_nothing(self, tracker):
        result = run_async(_seeder(tracker).seed(dry_run=True))

        tracker.get_repository.assert_awaited_once_with("acme", "sandbox-test")
        tracker.create_issue.assert_not_awaited()
        assert len(result.planned) == len(TEST_SCENARIOS)
        assert result.created == []

    def test_creates_one_issue_per_scenario(self, tracker):
        result = run_async(_seeder(tracker).seed())

        assert [c.number for c in result.created] == list(range(1, len(TEST_SCENARIOS) + 1))
        titles = [c.kwargs["title"] for c in tracker.create_issue.await_args_list]
        assert titles[0] == "[PROJECT ONBOARDING] Test Project Alpha"
        assert titles[-1] == "[PROJECT ONBOARDING] Test Project G"

    def test_failed_creation_does_not_stop_others(self, tracker):
        calls = []

        async def create_issue(owner, repo, title, body, labels=(), assignees=()):
            calls.append(title)
            if len(calls) == 2:
                raise GitHubAPIError("GitHub API error: 422", status_code=422)
            return CreatedIssue(number=len(calls))

        tracker.create_issue.side_effect = create_issue

        result = run_async(_seeder(tracker).seed())

        assert result.failed == 1
        assert len(result.created) == len(TEST_SCENARIOS) - 1

    def test_inaccessible_repository_propagates(self, tracker):
        tracker.get_repository.side_effect = GitHubAPIError("GitHub API error: 404", status_code=404)

        with pytest.raises(GitHubAPIError):
            run_async(_seeder(tracker).seed())

        tracker.create_issue.assert_not_awaited()

    def test_custom_scenarios(self, tracker):
        seeder = _seeder(tracker, scenarios=[Scenario("Only", 100, "one")])

        result = run_async(seeder.seed())

        assert len(result.created) == 1
