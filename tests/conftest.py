"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

import pytest

from sandbox_onboarding.github.models import IssueRecord


FIXED_NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_issue(
    days_old: float = 0,
    number: int = 42,
    title: str = "[PROJECT ONBOARDING] Acme",
    labels: Iterable[str] = ("project onboarding", "sandbox"),
    comment_count: int = 0,
    updated_ago: Optional[timedelta] = None,
    now: datetime = FIXED_NOW,
) -> IssueRecord:
    """Build an onboarding issue opened ``days_old`` days before ``now``."""
    created_at = now - timedelta(days=days_old)
    updated_at = now - updated_ago if updated_ago is not None else created_at
    return IssueRecord(
        number=number,
        title=title,
        created_at=created_at,
        updated_at=updated_at,
        comment_count=comment_count,
        labels=frozenset(labels),
    )


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clean_env(monkeypatch):
    """Remove ONBOARDING_* variables inherited from the environment."""
    import os

    for key in list(os.environ):
        if key.startswith("ONBOARDING_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def sample_config_env(clean_env):
    """Minimal valid configuration in the environment."""
    clean_env.setenv("ONBOARDING_GITHUB_TOKEN", "test-token")
    clean_env.setenv("ONBOARDING_REPOSITORY", "cncf/sandbox")
    return clean_env


@pytest.fixture
def issue_factory():
    return make_issue
