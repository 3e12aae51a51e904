"""Onboarding progress classification.

Maps an issue's age onto the milestone it has reached. The rules form an
ordered table and the first matching row wins; the month 11 rows must
come before the generic ``months >= 10`` row so the weekly and daily
warning cadences are not swallowed by it.

    month 11, weeks 1-3  -> approaching-archival / weekly_warning
    month 11, week 4+    -> approaching-archival / daily_warning
    months >= 12         -> archived / archive
    months >= 10         -> approaching-archival / create_health_issue
    months >= 9          -> warning / tag_teams
    months >= 6          -> stale / tag_teams
    months >= 3          -> incomplete / comment
    otherwise            -> no action
"""

from typing import Callable, NamedTuple, Optional, Tuple

from sandbox_onboarding.progress.age import DAYS_PER_MONTH, DAYS_PER_WEEK
from sandbox_onboarding.progress.models import (
    LABEL_APPROACHING_ARCHIVAL,
    LABEL_ARCHIVED,
    LABEL_INCOMPLETE,
    LABEL_STALE,
    LABEL_WARNING,
    ActionDecision,
    ActionKind,
    AgeInfo,
)


ARCHIVAL_MONTH = 12
FINAL_WARNING_MONTH = 11
LAST_WEEKLY_WARNING_WEEK = 3


class ProgressRule(NamedTuple):
    """One row of the classification table."""

    name: str
    matches: Callable[[AgeInfo], bool]
    label: str
    action: ActionKind


def week_in_month(days: int) -> int:
    """1-based week within the current 30-day month."""
    return (days % DAYS_PER_MONTH) // DAYS_PER_WEEK + 1


def day_in_week(days: int) -> int:
    """1-based day within the current week."""
    return days % DAYS_PER_WEEK + 1


def _in_final_warning_weeks(age: AgeInfo) -> bool:
    return (
        age.months == FINAL_WARNING_MONTH
        and week_in_month(age.days) <= LAST_WEEKLY_WARNING_WEEK
    )


def _in_final_warning_days(age: AgeInfo) -> bool:
    return (
        age.months == FINAL_WARNING_MONTH
        and week_in_month(age.days) > LAST_WEEKLY_WARNING_WEEK
    )


PROGRESS_RULES: Tuple[ProgressRule, ...] = (
    ProgressRule(
        name="final_month_weekly",
        matches=_in_final_warning_weeks,
        label=LABEL_APPROACHING_ARCHIVAL,
        action=ActionKind.WEEKLY_WARNING,
    ),
    ProgressRule(
        name="final_month_daily",
        matches=_in_final_warning_days,
        label=LABEL_APPROACHING_ARCHIVAL,
        action=ActionKind.DAILY_WARNING,
    ),
    ProgressRule(
        name="archived",
        matches=lambda age: age.months >= ARCHIVAL_MONTH,
        label=LABEL_ARCHIVED,
        action=ActionKind.ARCHIVE,
    ),
    ProgressRule(
        name="approaching_archival",
        matches=lambda age: age.months >= 10,
        label=LABEL_APPROACHING_ARCHIVAL,
        action=ActionKind.CREATE_HEALTH_ISSUE,
    ),
    ProgressRule(
        name="warning",
        matches=lambda age: age.months >= 9,
        label=LABEL_WARNING,
        action=ActionKind.TAG_TEAMS,
    ),
    ProgressRule(
        name="stale",
        matches=lambda age: age.months >= 6,
        label=LABEL_STALE,
        action=ActionKind.TAG_TEAMS,
    ),
    ProgressRule(
        name="incomplete",
        matches=lambda age: age.months >= 3,
        label=LABEL_INCOMPLETE,
        action=ActionKind.COMMENT,
    ),
)

_CADENCE_ACTIONS = frozenset({ActionKind.WEEKLY_WARNING, ActionKind.DAILY_WARNING})


def match_rule(age: AgeInfo) -> Optional[ProgressRule]:
    """Return the first rule matching the given age, if any."""
    for rule in PROGRESS_RULES:
        if rule.matches(age):
            return rule
    return None


def classify_progress(age: AgeInfo) -> Optional[ActionDecision]:
    """Decide which label and action apply to an issue of the given age.

    Args:
        age: Elapsed time since the onboarding issue was opened.

    Returns:
        The ActionDecision for the first matching rule, or None when the
        issue is younger than three months.
    """
    rule = match_rule(age)
    if rule is None:
        return None

    if rule.action in _CADENCE_ACTIONS:
        return ActionDecision(
            label=rule.label,
            action=rule.action,
            week_in_month=week_in_month(age.days),
            day_in_week=day_in_week(age.days),
        )
    return ActionDecision(label=rule.label, action=rule.action)
