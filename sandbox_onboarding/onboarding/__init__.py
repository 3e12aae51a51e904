"""Onboarding issue creation after a community vote."""

from sandbox_onboarding.onboarding.creator import (
    OnboardingIssueCreator,
    OnboardingTemplateError,
    render_onboarding_body,
    render_vote_closing_comment,
)

__all__ = [
    "OnboardingIssueCreator",
    "OnboardingTemplateError",
    "render_onboarding_body",
    "render_vote_closing_comment",
]
