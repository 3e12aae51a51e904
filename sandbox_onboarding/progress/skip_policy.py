"""Skip policy for repeated monitor runs.

The monitor runs on a schedule and has no state of its own. Warning
cadences are gated on how long ago the issue last saw activity, since a
label cannot tell one week's warning from the next. Milestone actions
are gated on the milestone label already being present, unless the run
was asked to reclassify every issue.
"""

from datetime import datetime, timedelta
from typing import Optional

from sandbox_onboarding.github.models import IssueRecord
from sandbox_onboarding.progress.age import utc_now
from sandbox_onboarding.progress.models import ActionDecision, ActionKind


DAILY_WARNING_MIN_GAP = timedelta(hours=20)
WEEKLY_WARNING_MIN_GAP = timedelta(days=6)


def should_skip_issue(
    issue: IssueRecord,
    decision: ActionDecision,
    force_reclassify: bool = False,
    now: Optional[datetime] = None,
) -> bool:
    """Decide whether this run should leave the issue alone.

    Args:
        issue: The issue snapshot, including its current labels.
        decision: The decision computed for the issue's age.
        force_reclassify: Ignore existing milestone labels. The recency
            gates for the warning cadences still apply.
        now: Reference time. Defaults to the current UTC time.

    Returns:
        True when no label, comment or other side effect should be applied.
    """
    if now is None:
        now = utc_now()

    since_activity = now - issue.last_activity_at

    if decision.action == ActionKind.DAILY_WARNING:
        return since_activity < DAILY_WARNING_MIN_GAP

    if decision.action == ActionKind.WEEKLY_WARNING:
        return since_activity < WEEKLY_WARNING_MIN_GAP

    if force_reclassify:
        return False

    return decision.label in issue.labels
