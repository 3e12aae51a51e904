"""Onboarding progress models.

This module defines the derived values used to classify an onboarding
issue by age:
- AgeInfo: Elapsed days, weeks and months since the issue was opened
- ActionKind: Enum of the side effects the monitor can request
- ActionDecision: Label and action chosen for an issue's current age

It also holds the fixed label vocabulary and the issue title contract
shared by the monitor, the onboarding issue creator and the test seeder.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# Labels carried by every onboarding issue
LABEL_PROJECT_ONBOARDING = "project onboarding"
LABEL_SANDBOX = "sandbox"

# Milestone labels applied by the progress monitor
LABEL_INCOMPLETE = "onboarding/incomplete"
LABEL_STALE = "onboarding/stale"
LABEL_WARNING = "onboarding/warning"
LABEL_APPROACHING_ARCHIVAL = "onboarding/approaching-archival"
LABEL_ARCHIVED = "onboarding/archived"

ONBOARDING_LABELS = (LABEL_PROJECT_ONBOARDING, LABEL_SANDBOX)

ONBOARDING_TITLE_PREFIX = "[PROJECT ONBOARDING] "
HEALTH_TITLE_FORMAT = "[HEALTH]: {project_name} - Onboarding Deadline Approaching"


class ActionKind(str, Enum):
    """Side effects requested for an onboarding issue.

    Attributes:
        COMMENT: Post a reminder comment.
        TAG_TEAMS: Comment and assign the TOC / projects team.
        CREATE_HEALTH_ISSUE: Comment and file a health issue in the TOC repo.
        WEEKLY_WARNING: Weekly archival warning (month 11, weeks 1-3).
        DAILY_WARNING: Daily archival warning (month 11, week 4).
        ARCHIVE: Comment and close the onboarding issue.
    """

    COMMENT = "comment"
    TAG_TEAMS = "tag_teams"
    CREATE_HEALTH_ISSUE = "create_health_issue"
    WEEKLY_WARNING = "weekly_warning"
    DAILY_WARNING = "daily_warning"
    ARCHIVE = "archive"


@dataclass(frozen=True)
class AgeInfo:
    """Elapsed time since an onboarding issue was opened.

    Months are a fixed 30 days, not calendar months.
    """

    days: int
    weeks: int
    months: int


@dataclass(frozen=True)
class ActionDecision:
    """Label and action for an issue at a given age.

    week_in_month and day_in_week are only set for the month 11
    warning cadences.
    """

    label: str
    action: ActionKind
    week_in_month: Optional[int] = None
    day_in_week: Optional[int] = None
