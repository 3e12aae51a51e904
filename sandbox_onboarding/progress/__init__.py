"""Onboarding progress decision core.

This package turns an onboarding issue's age into a decision without
any I/O:
- age: elapsed days/weeks/months from the creation time
- classifier: ordered milestone table mapping age to label and action
- skip_policy: recency and label gates against duplicate side effects
- comments: markdown comment templates for each action
"""

from sandbox_onboarding.progress.age import calculate_age, utc_now
from sandbox_onboarding.progress.classifier import (
    PROGRESS_RULES,
    classify_progress,
    day_in_week,
    week_in_month,
)
from sandbox_onboarding.progress.comments import (
    format_health_issue_reference,
    format_progress_comment,
)
from sandbox_onboarding.progress.models import (
    HEALTH_TITLE_FORMAT,
    LABEL_APPROACHING_ARCHIVAL,
    LABEL_ARCHIVED,
    LABEL_INCOMPLETE,
    LABEL_PROJECT_ONBOARDING,
    LABEL_SANDBOX,
    LABEL_STALE,
    LABEL_WARNING,
    ONBOARDING_LABELS,
    ONBOARDING_TITLE_PREFIX,
    ActionDecision,
    ActionKind,
    AgeInfo,
)
from sandbox_onboarding.progress.skip_policy import should_skip_issue

__all__ = [
    # Models
    "ActionDecision",
    "ActionKind",
    "AgeInfo",
    "HEALTH_TITLE_FORMAT",
    "LABEL_APPROACHING_ARCHIVAL",
    "LABEL_ARCHIVED",
    "LABEL_INCOMPLETE",
    "LABEL_PROJECT_ONBOARDING",
    "LABEL_SANDBOX",
    "LABEL_STALE",
    "LABEL_WARNING",
    "ONBOARDING_LABELS",
    "ONBOARDING_TITLE_PREFIX",
    # Decisions
    "PROGRESS_RULES",
    "calculate_age",
    "classify_progress",
    "day_in_week",
    "should_skip_issue",
    "utc_now",
    "week_in_month",
    # Comments
    "format_health_issue_reference",
    "format_progress_comment",
]
