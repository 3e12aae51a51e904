"""Progress comment formatting for onboarding issues.

This module renders the GitHub-flavored markdown comment posted when the
monitor acts on an onboarding issue. Each action kind has its own
template stating the issue's age, what was done, and when the next
milestone arrives. Countdowns use the same 30-day month arithmetic as
the age calculation so the text agrees with the next trigger.
"""

from typing import Callable, Dict

from sandbox_onboarding.progress.models import (
    LABEL_APPROACHING_ARCHIVAL,
    LABEL_ARCHIVED,
    LABEL_INCOMPLETE,
    ActionDecision,
    ActionKind,
    AgeInfo,
)


DAYS_PER_YEAR = 365

MONITOR_NAME = "CNCF onboarding progress monitor"


def _header(project_name: str) -> str:
    return f"## ⚠️ Onboarding Progress Alert for {project_name}\n\n"


def _age_line(age: AgeInfo) -> str:
    return f"**{age.months} months** ({age.days} days)"


def _footer(kind: str) -> str:
    return f"---\n*This {kind} from the {MONITOR_NAME}.*"


def days_until_archival_daily(age: AgeInfo) -> int:
    """Days left in the current 30-day month."""
    return 30 - (age.days % 30)


def days_until_archival_weekly(age: AgeInfo) -> int:
    """Days left until the one-year mark."""
    return DAYS_PER_YEAR - age.days


def _format_archive(age: AgeInfo, decision: ActionDecision) -> str:
    return (
        f"🚨 **CRITICAL**: This onboarding issue has been open for {_age_line(age)}.\n\n"
        "This project has exceeded the 1-year onboarding deadline and will be "
        "automatically archived.\n\n"
        "**Action Taken:**\n"
        f"- ✅ Applied `{LABEL_ARCHIVED}` label\n"
        "- ✅ Closed this onboarding issue\n"
        "- ✅ Commented on health issue in TOC repository\n\n"
        "The project will need to reapply for CNCF Sandbox status if they wish "
        "to continue.\n\n"
        f"---\n*This action was taken automatically by the {MONITOR_NAME}.*"
    )


def _format_daily_warning(age: AgeInfo, decision: ActionDecision) -> str:
    remaining = days_until_archival_daily(age)
    return (
        f"🚨 **FINAL WARNING**: This onboarding issue has been open for {_age_line(age)}.\n\n"
        f"**Daily Warning #{decision.day_in_week}** - This project will be "
        f"automatically archived in **{remaining} days**.\n\n"
        "**Immediate Action Required:**\n"
        "- Complete all remaining onboarding tasks\n"
        "- Contact CNCF staff if you need assistance\n"
        "- Update this issue with your progress\n\n"
        "**Next Steps:**\n"
        "- Tomorrow: Another daily warning\n"
        f"- In {remaining} days: Automatic archival\n\n"
        + _footer("is an automated daily warning")
    )


def _format_weekly_warning(age: AgeInfo, decision: ActionDecision) -> str:
    remaining = days_until_archival_weekly(age)
    return (
        f"⚠️ **WARNING**: This onboarding issue has been open for {_age_line(age)}.\n\n"
        f"**Weekly Warning #{decision.week_in_month}** - This project will be "
        f"automatically archived in **{remaining} days**.\n\n"
        "**Action Required:**\n"
        "- Complete remaining onboarding tasks\n"
        "- Contact CNCF staff if assistance is needed\n"
        "- Update this issue with progress\n\n"
        "**Timeline:**\n"
        "- Next week: Another weekly warning\n"
        "- Week 4: Daily warnings will begin\n"
        f"- In {remaining} days: Automatic archival\n\n"
        + _footer("is an automated weekly warning")
    )


def _format_health_issue(age: AgeInfo, decision: ActionDecision) -> str:
    return (
        f"⚠️ **APPROACHING DEADLINE**: This onboarding issue has been open for {_age_line(age)}.\n\n"
        "This project is approaching the 1-year onboarding deadline and will be "
        "automatically archived if not completed.\n\n"
        "**Actions Taken:**\n"
        f"- ✅ Applied `{LABEL_APPROACHING_ARCHIVAL}` label\n"
        "- ✅ Created health issue in TOC repository for visibility\n\n"
        "**Next Steps:**\n"
        "- Complete all remaining onboarding tasks\n"
        "- Contact CNCF staff immediately if assistance is needed\n"
        "- In 1 month: Weekly warnings will begin\n"
        "- In 2 months: Automatic archival\n\n"
        + _footer("is an automated alert")
    )


def _format_tag_teams(age: AgeInfo, decision: ActionDecision) -> str:
    urgency = "HIGH PRIORITY" if age.months >= 9 else "PRIORITY"
    return (
        f"📋 **{urgency}**: This onboarding issue has been open for {_age_line(age)}.\n\n"
        "**Actions Taken:**\n"
        f"- ✅ Applied `{decision.label}` label\n"
        "- ✅ Tagged TOC and projects team for visibility\n\n"
        "**Next Steps:**\n"
        "- Complete remaining onboarding tasks\n"
        "- Contact CNCF staff if assistance is needed\n"
        "- Update this issue with progress\n\n"
        "**Timeline:**\n"
        f"- In {3 - (age.months % 3)} months: Health issue will be created\n"
        f"- In {6 - (age.months % 6)} months: Automatic archival\n\n"
        + _footer("is an automated alert")
    )


def _format_reminder(age: AgeInfo, decision: ActionDecision) -> str:
    return (
        f"📝 **REMINDER**: This onboarding issue has been open for {_age_line(age)}.\n\n"
        "**Action Taken:**\n"
        f"- ✅ Applied `{LABEL_INCOMPLETE}` label\n\n"
        "**Next Steps:**\n"
        "- Complete remaining onboarding tasks\n"
        "- Contact CNCF staff if assistance is needed\n"
        "- Update this issue with progress\n\n"
        "**Timeline:**\n"
        f"- In {3 - (age.months % 3)} months: TOC team will be tagged\n"
        f"- In {9 - age.months} months: Automatic archival\n\n"
        + _footer("is an automated reminder")
    )


_FORMATTERS: Dict[ActionKind, Callable[[AgeInfo, ActionDecision], str]] = {
    ActionKind.ARCHIVE: _format_archive,
    ActionKind.DAILY_WARNING: _format_daily_warning,
    ActionKind.WEEKLY_WARNING: _format_weekly_warning,
    ActionKind.CREATE_HEALTH_ISSUE: _format_health_issue,
    ActionKind.TAG_TEAMS: _format_tag_teams,
    ActionKind.COMMENT: _format_reminder,
}


def format_progress_comment(
    age: AgeInfo,
    decision: ActionDecision,
    project_name: str,
) -> str:
    """Format the progress comment for an onboarding issue.

    Args:
        age: Elapsed time since the issue was opened.
        decision: The label and action chosen for that age.
        project_name: Project name parsed from the issue title.

    Returns:
        A markdown string ready to post as a GitHub comment.

    Example:
        >>> age = AgeInfo(days=95, weeks=13, months=3)
        >>> decision = ActionDecision(LABEL_INCOMPLETE, ActionKind.COMMENT)
        >>> print(format_progress_comment(age, decision, "Acme"))
        ## ⚠️ Onboarding Progress Alert for Acme
        <BLANKLINE>
        📝 **REMINDER**: This onboarding issue has been open for **3 months** (95 days).
        ...
    """
    formatter = _FORMATTERS[decision.action]
    return _header(project_name) + formatter(age, decision)


def format_health_issue_reference(health_issue_number: int, health_issue_url: str) -> str:
    """Format the line linking an onboarding issue to its health issue."""
    return f"**Health Issue Created:** [#{health_issue_number}]({health_issue_url})"
