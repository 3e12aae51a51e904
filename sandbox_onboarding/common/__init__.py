"""Shared configuration and logging setup."""

from sandbox_onboarding.common.config import (
    MonitorSettings,
    get_settings,
    redact_secret,
    split_repository,
)
from sandbox_onboarding.common.logging import configure_logging

__all__ = [
    "MonitorSettings",
    "configure_logging",
    "get_settings",
    "redact_secret",
    "split_repository",
]
