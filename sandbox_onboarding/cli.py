"""Command line entry points for onboarding automation."""

import asyncio
from typing import Optional

import click
from pydantic import ValidationError

from sandbox_onboarding.common.config import MonitorSettings, get_settings, split_repository
from sandbox_onboarding.common.logging import configure_logging
from sandbox_onboarding.github.client import GitHubAPIError, GitHubClient
from sandbox_onboarding.monitor.main import OnboardingMonitor, build_github_client
from sandbox_onboarding.onboarding.creator import OnboardingIssueCreator, OnboardingTemplateError
from sandbox_onboarding.testdata.scenarios import TEST_SCENARIOS, SeedResult, TestIssueSeeder

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def _load_settings(**overrides) -> MonitorSettings:
    try:
        return get_settings(**overrides)
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration:\n{e}") from e


@click.group(context_settings=CONTEXT_SETTINGS)
def cli() -> None:
    """CNCF Sandbox onboarding automation.

    Configuration is read from ONBOARDING_* environment variables.
    """


@cli.command("monitor")
@click.option(
    "--check-all",
    is_flag=True,
    default=False,
    help="Process all issues regardless of existing milestone labels.",
)
@click.option(
    "--test-offset-days",
    type=click.IntRange(min=0),
    default=None,
    help="Add N days to the current date when computing issue age.",
)
def monitor_cmd(check_all: bool, test_offset_days: Optional[int]) -> None:
    """Label, comment on and escalate aging onboarding issues."""
    overrides = {}
    if check_all:
        overrides["check_all"] = True
    if test_offset_days is not None:
        overrides["test_offset_days"] = test_offset_days

    settings = _load_settings(**overrides)
    configure_logging(settings.log_level)

    exit_code = asyncio.run(OnboardingMonitor(settings).run())
    raise SystemExit(exit_code)


@cli.command("create-onboarding-issue")
@click.option("--project-name", required=True, help="Name of the accepted project.")
@click.option(
    "--vote-issue",
    type=click.IntRange(min=1),
    required=True,
    help="Issue number where the community vote completed.",
)
def create_onboarding_issue_cmd(project_name: str, vote_issue: int) -> None:
    """Create the onboarding issue and close the vote issue."""
    settings = _load_settings()
    configure_logging(settings.log_level)

    async def _run() -> int:
        async with build_github_client(settings) as client:
            creator = OnboardingIssueCreator(
                client,
                owner=settings.owner,
                repo=settings.repo,
                template_path=settings.onboarding_template_path,
                assignees=settings.onboarding_assignees,
            )
            return await creator.onboard(project_name, vote_issue)

    try:
        issue_number = asyncio.run(_run())
    except (OnboardingTemplateError, GitHubAPIError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Created onboarding issue #{issue_number} for {project_name}")


def _echo_seed_summary(owner: str, repo: str, result: SeedResult, dry_run: bool) -> None:
    for index, seed_issue in enumerate(result.planned, start=1):
        scenario = seed_issue.scenario
        click.echo(f"{index}. {seed_issue.title}")
        click.echo(f"   Age: {scenario.days} days ({scenario.days // 30} months)")
        click.echo(f"   Expected: {scenario.description}")
        click.echo(f"   Labels: {', '.join(seed_issue.labels)}")

    if dry_run:
        click.echo("DRY RUN COMPLETE: no issues were created.")
        return

    click.echo(f"Created {len(result.created)} test issues in {owner}/{repo}:")
    for created in result.created:
        click.echo(f"#{created.number}: {created.html_url}")
    if result.failed:
        click.echo(f"Failed to create {result.failed} test issues", err=True)


@cli.command(
    "setup-test-issues",
    epilog="Scenarios: "
    + "; ".join(f"{s.name}: {s.description}" for s in TEST_SCENARIOS),
)
@click.option("--repo", required=True, help="GitHub repository as owner/repo.")
@click.option(
    "--token",
    required=True,
    envvar="ONBOARDING_GITHUB_TOKEN",
    help="GitHub personal access token.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show what would be created without creating issues.",
)
def setup_test_issues_cmd(repo: str, token: str, dry_run: bool) -> None:
    """Create onboarding issues of various simulated ages."""
    try:
        owner, repo_name = split_repository(repo)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    configure_logging()
    click.echo(f"Repository: {owner}/{repo_name}")
    click.echo(f"Mode: {'DRY RUN' if dry_run else 'LIVE'}")

    async def _run() -> SeedResult:
        async with GitHubClient(token=token) as client:
            seeder = TestIssueSeeder(client, owner, repo_name)
            return await seeder.seed(dry_run=dry_run)

    try:
        result = asyncio.run(_run())
    except GitHubAPIError as e:
        raise click.ClickException(f"Error accessing repository: {e}") from e

    _echo_seed_summary(owner, repo_name, result, dry_run)


if __name__ == "__main__":
    cli()
