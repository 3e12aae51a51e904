"""Onboarding automation configuration using pydantic-settings.

This module defines the MonitorSettings class that reads configuration
from environment variables with the ONBOARDING_ prefix. List-valued
settings are read as JSON arrays, e.g.
ONBOARDING_TEAM_ASSIGNEES='["alice", "bob"]'.
"""

from typing import List, Optional, Tuple

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ONBOARDING_ASSIGNEES = [
    "caniszczyk",
    "idvoretskyi",
    "jeefy",
    "krook",
    "mrbobbytables",
    "RobertKielty",
    "cynthia-sg",
    "lukaszgryglicki",
    "riaankleinhans",
]


def split_repository(value: str) -> Tuple[str, str]:
    """Split an "owner/repo" string into its two parts.

    Raises:
        ValueError: If the value is not in "owner/repo" form.
    """
    parts = value.strip().split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f'Repository must be in format "owner/repo": {value!r}')
    return parts[0], parts[1]


class MonitorSettings(BaseSettings):
    """Onboarding automation configuration from environment variables.

    All environment variables are prefixed with ONBOARDING_
    (e.g., ONBOARDING_GITHUB_TOKEN).

    Required fields:
    - github_token: GitHub API token for labels, comments and issues
    - repository: "owner/repo" holding the onboarding issues
    """

    model_config = SettingsConfigDict(
        env_prefix="ONBOARDING_",
        case_sensitive=False,
    )

    # -------------------------------------------------------------------------
    # GitHub Configuration
    # -------------------------------------------------------------------------
    github_token: str

    # Base URL for GitHub API (supports GitHub Enterprise)
    github_base_url: str = "https://api.github.com"

    # Retries for transient API failures; 0 leaves them to the next run
    github_max_retries: int = 0

    github_timeout_seconds: float = 30.0

    # Repository holding the onboarding issues, as "owner/repo"
    repository: str

    # -------------------------------------------------------------------------
    # Monitor Configuration
    # -------------------------------------------------------------------------
    # Ignore existing milestone labels (initial rollout)
    check_all: bool = False

    # Shift "now" forward so freshly seeded test issues look older
    test_offset_days: int = 0

    # Users assigned when the TOC and projects team are tagged
    team_assignees: List[str] = ["riaankleinhans"]

    # -------------------------------------------------------------------------
    # Health Issue Configuration
    # -------------------------------------------------------------------------
    health_repository: str = "cncf/toc"

    health_issue_labels: List[str] = [
        "needs-triage",
        "toc",
        "kind/review",
        "review/health",
    ]

    health_issue_assignees: List[str] = ["riaankleinhans"]

    # -------------------------------------------------------------------------
    # Onboarding Issue Creation
    # -------------------------------------------------------------------------
    onboarding_template_path: str = ".github/ISSUE_TEMPLATE/project-onboarding.md"

    onboarding_assignees: List[str] = DEFAULT_ONBOARDING_ASSIGNEES

    # -------------------------------------------------------------------------
    # Observability
    # -------------------------------------------------------------------------
    prometheus_gateway_url: Optional[str] = None

    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("github_token")
    @classmethod
    def validate_github_token(cls, v: str) -> str:
        """Validate that GitHub token is not empty."""
        if not v or not v.strip():
            raise ValueError("github_token cannot be empty")
        return v

    @field_validator("github_base_url")
    @classmethod
    def validate_github_base_url(cls, v: str) -> str:
        """Validate that the API base URL is an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("github_base_url must start with http:// or https://")
        return v

    @field_validator("repository", "health_repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        """Validate "owner/repo" format."""
        split_repository(v)
        return v.strip()

    @field_validator("test_offset_days", "github_max_retries")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("value must be at least 0")
        return v

    @field_validator("github_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("github_timeout_seconds must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def owner(self) -> str:
        return split_repository(self.repository)[0]

    @property
    def repo(self) -> str:
        return split_repository(self.repository)[1]


def get_settings(**overrides) -> MonitorSettings:
    """Create and return a MonitorSettings instance.

    Values passed as keyword arguments take precedence over the
    environment.

    Raises:
        pydantic.ValidationError: If required fields are missing or invalid.
    """
    return MonitorSettings(**overrides)


def redact_secret(value: str, visible_chars: int = 4) -> str:
    """Redact a secret value, showing only the first few characters."""
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)
