"""Test onboarding issue seeding."""

from sandbox_onboarding.testdata.scenarios import (
    TEST_PROJECTS,
    TEST_SCENARIOS,
    Scenario,
    SeedIssue,
    SeedResult,
    TestIssueSeeder,
    build_seed_issue,
    project_name_for,
)

__all__ = [
    "Scenario",
    "SeedIssue",
    "SeedResult",
    "TEST_PROJECTS",
    "TEST_SCENARIOS",
    "TestIssueSeeder",
    "build_seed_issue",
    "project_name_for",
]
