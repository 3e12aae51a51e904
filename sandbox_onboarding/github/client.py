"""GitHub API client for onboarding issue interactions.

This module provides an async wrapper around the GitHub REST API for:
- Listing open issues by label
- Creating issues and comments
- Managing labels, assignees and issue state

Rate limit responses raise RateLimitError. Retry with exponential backoff
is available but disabled by default; a failed call waits for the next
scheduled run.
"""

import asyncio
import random
import time
from typing import Any, Dict, List, Optional, Sequence

import httpx
import structlog

from sandbox_onboarding.github.models import CreatedIssue, IssueRecord


logger = structlog.get_logger()

PAGE_SIZE = 100


class GitHubAPIError(Exception):
    """Raised when a GitHub API request fails.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from the response.
        response_body: Response body from GitHub API.
        request_url: The URL that was requested.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        request_url: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.request_url = request_url
        super().__init__(message)


class RateLimitError(GitHubAPIError):
    """Raised when GitHub API rate limit is exceeded.

    Attributes:
        reset_at: Unix timestamp when the rate limit resets.
        retry_after: Seconds to wait before retrying.
    """

    def __init__(
        self,
        message: str,
        reset_at: Optional[int] = None,
        retry_after: Optional[int] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.reset_at = reset_at
        self.retry_after = retry_after


class GitHubClient:
    """Async GitHub API client implementing the IssueTracker protocol.

    Attributes:
        token: GitHub API token (PAT or GitHub App token).
        base_url: Base URL for GitHub API (default: https://api.github.com).
        max_retries: Retry attempts for transient failures (default: none).
        base_delay: Base delay in seconds for exponential backoff.
        max_delay: Maximum delay in seconds between retries.
        timeout: Request timeout in seconds.

    Example:
        >>> async with GitHubClient(token="ghp_xxx") as client:
        ...     issues = await client.list_open_issues_by_label(
        ...         "cncf", "sandbox", ["project onboarding", "sandbox"]
        ...     )
    """

    # HTTP status codes that should trigger a retry
    RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        max_retries: int = 0,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the GitHub client.

        Args:
            token: GitHub API token for authentication.
            base_url: Base URL for GitHub API. Use this to support
                      GitHub Enterprise Server endpoints.
            max_retries: Maximum number of retry attempts.
            base_delay: Base delay in seconds for exponential backoff.
            max_delay: Maximum delay in seconds between retries.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used by tests.
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating it if necessary."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._default_headers(),
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def _default_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "sandbox-onboarding/0.1",
        }

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _calculate_backoff(self, attempt: int) -> float:
        """Exponential backoff with full jitter.

        Args:
            attempt: The current retry attempt (0-indexed).

        Returns:
            Delay in seconds before the next retry.
        """
        exponential_delay = self.base_delay * (2 ** attempt)
        capped_delay = min(exponential_delay, self.max_delay)
        return random.uniform(0, capped_delay)

    @staticmethod
    def _parse_int_header(headers: httpx.Headers, name: str) -> Optional[int]:
        value = headers.get(name)
        if value is not None:
            try:
                return int(value)
            except ValueError:
                return None
        return None

    def _raise_rate_limit(self, response: httpx.Response) -> None:
        """Raise RateLimitError with reset information from the response.

        Raises:
            RateLimitError: Always.
        """
        reset_at = self._parse_int_header(response.headers, "x-ratelimit-reset")

        retry_after = None
        if reset_at is not None:
            retry_after = max(0, reset_at - int(time.time()))

        retry_after_header = self._parse_int_header(response.headers, "retry-after")
        if retry_after_header is not None:
            retry_after = retry_after_header

        logger.warning(
            "GitHub API rate limit exceeded",
            reset_at=reset_at,
            retry_after=retry_after,
            limit=self._parse_int_header(response.headers, "x-ratelimit-limit"),
        )

        raise RateLimitError(
            message="GitHub API rate limit exceeded",
            status_code=response.status_code,
            reset_at=reset_at,
            retry_after=retry_after,
            request_url=str(response.url),
        )

    def _is_rate_limited(self, response: httpx.Response) -> bool:
        if response.status_code == 429:
            return True
        if response.status_code == 403:
            remaining = self._parse_int_header(response.headers, "x-ratelimit-remaining")
            return remaining == 0
        return False

    async def _request(
        self,
        method: str,
        path: str,
        json_data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make an HTTP request, retrying transient failures if enabled.

        Args:
            method: HTTP method (GET, POST, PATCH).
            path: API path (e.g., /repos/owner/repo/issues/1/comments).
            json_data: Optional JSON body for the request.
            params: Optional query parameters.

        Returns:
            The HTTP response from GitHub.

        Raises:
            GitHubAPIError: If the request fails after all retries.
            RateLimitError: If rate limit is exceeded.
        """
        last_exception: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.request(
                    method=method,
                    url=path,
                    json=json_data,
                    params=params,
                )
            except httpx.RequestError as e:
                last_exception = e
                if attempt < self.max_retries:
                    delay = self._calculate_backoff(attempt)
                    logger.warning(
                        "Request error, retrying",
                        error=str(e),
                        attempt=attempt + 1,
                        max_retries=self.max_retries,
                        delay=delay,
                        path=path,
                    )
                    await asyncio.sleep(delay)
                    continue
                break

            if self._is_rate_limited(response):
                self._raise_rate_limit(response)

            if response.status_code in self.RETRYABLE_STATUS_CODES and attempt < self.max_retries:
                delay = self._calculate_backoff(attempt)
                logger.warning(
                    "Retryable error from GitHub API",
                    status_code=response.status_code,
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    delay=delay,
                    path=path,
                )
                await asyncio.sleep(delay)
                continue

            if response.status_code >= 400:
                error_body = response.text
                logger.error(
                    "GitHub API error",
                    status_code=response.status_code,
                    path=path,
                    method=method,
                    response_body=error_body[:500],
                )
                raise GitHubAPIError(
                    message=f"GitHub API error: {response.status_code}",
                    status_code=response.status_code,
                    response_body=error_body,
                    request_url=str(response.url),
                )

            return response

        logger.error(
            "GitHub API request failed",
            path=path,
            method=method,
            max_retries=self.max_retries,
            last_error=str(last_exception),
        )
        raise GitHubAPIError(
            message=f"Request failed after {self.max_retries} retries: {last_exception}",
            request_url=f"{self.base_url}{path}",
        )

    async def list_open_issues_by_label(
        self,
        owner: str,
        repo: str,
        labels: Sequence[str],
    ) -> List[IssueRecord]:
        """List open issues carrying all of the given labels.

        Follows pagination until a short page is returned. Pull requests,
        which the issues endpoint also returns, are dropped.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.
            labels: Label names the issues must all carry.

        Returns:
            Issue snapshots in the order GitHub returns them.

        Raises:
            GitHubAPIError: If any page request fails.
        """
        path = f"/repos/{owner}/{repo}/issues"
        issues: List[IssueRecord] = []
        page = 1

        while True:
            response = await self._request(
                method="GET",
                path=path,
                params={
                    "state": "open",
                    "labels": ",".join(labels),
                    "per_page": PAGE_SIZE,
                    "page": page,
                },
            )
            items = response.json()
            for item in items:
                if "pull_request" in item:
                    continue
                issues.append(IssueRecord.from_github_response(item))

            if len(items) < PAGE_SIZE:
                break
            page += 1

        logger.info(
            "Listed open issues",
            owner=owner,
            repo=repo,
            labels=list(labels),
            issue_count=len(issues),
        )
        return issues

    async def add_label(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        label: str,
    ) -> List[Dict[str, Any]]:
        """Add a label to an issue.

        Returns:
            List of all labels on the issue after adding.
        """
        response = await self._request(
            method="POST",
            path=f"/repos/{owner}/{repo}/issues/{issue_number}/labels",
            json_data={"labels": [label]},
        )
        logger.info(
            "Label added",
            owner=owner,
            repo=repo,
            issue_number=issue_number,
            label=label,
        )
        return response.json()

    async def create_comment(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        body: str,
    ) -> Dict[str, Any]:
        """Create a comment on an issue.

        Returns:
            The created comment data from GitHub API.
        """
        response = await self._request(
            method="POST",
            path=f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            json_data={"body": body},
        )
        result = response.json()
        logger.info(
            "Comment created",
            owner=owner,
            repo=repo,
            issue_number=issue_number,
            comment_id=result.get("id"),
        )
        return result

    async def update_state(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        state: str,
    ) -> Dict[str, Any]:
        """Set an issue's state to "open" or "closed"."""
        if state not in ("open", "closed"):
            raise ValueError(f"Invalid issue state: {state}")

        response = await self._request(
            method="PATCH",
            path=f"/repos/{owner}/{repo}/issues/{issue_number}",
            json_data={"state": state},
        )
        logger.info(
            "Issue state updated",
            owner=owner,
            repo=repo,
            issue_number=issue_number,
            state=state,
        )
        return response.json()

    async def add_assignees(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        assignees: Sequence[str],
    ) -> Dict[str, Any]:
        """Assign users to an issue."""
        response = await self._request(
            method="POST",
            path=f"/repos/{owner}/{repo}/issues/{issue_number}/assignees",
            json_data={"assignees": list(assignees)},
        )
        logger.info(
            "Assignees added",
            owner=owner,
            repo=repo,
            issue_number=issue_number,
            assignees=list(assignees),
        )
        return response.json()

    async def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str,
        labels: Sequence[str] = (),
        assignees: Sequence[str] = (),
    ) -> CreatedIssue:
        """Create an issue.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.
            title: Issue title.
            body: Issue body in markdown format.
            labels: Label names to apply.
            assignees: GitHub usernames to assign.

        Returns:
            CreatedIssue with the new issue number and URL.

        Raises:
            GitHubAPIError: If the request fails.
        """
        payload: Dict[str, Any] = {"title": title, "body": body}
        if labels:
            payload["labels"] = list(labels)
        if assignees:
            payload["assignees"] = list(assignees)

        response = await self._request(
            method="POST",
            path=f"/repos/{owner}/{repo}/issues",
            json_data=payload,
        )
        created = CreatedIssue.from_github_response(response.json())
        logger.info(
            "Issue created",
            owner=owner,
            repo=repo,
            issue_number=created.number,
            title=title,
        )
        return created

    async def get_repository(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch repository metadata.

        Raises:
            GitHubAPIError: If the repository does not exist or is not
                accessible with the configured token.
        """
        response = await self._request(method="GET", path=f"/repos/{owner}/{repo}")
        return response.json()
