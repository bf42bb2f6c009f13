"""
GitHub API helper utilities.

Rate limit parsing and error response handling shared by the app-token
exchange and issue creation.
"""

import logging

import httpx

from feedback_widget.services.github.exceptions import GitHubAPIError

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def _error_detail(response: httpx.Response) -> str:
    """Best-effort ``message`` field from a GitHub error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text[:200]


def handle_error_response(response: httpx.Response, context: str) -> None:
    """
    Raise for any non-success GitHub API response.

    Args:
        response: The HTTP response from GitHub API
        context: What was being attempted, for error messages
            (e.g. "owner/repo issues", "installation token")

    Raises:
        GitHubAPIError: For authentication, authorization, or other API errors
    """
    if response.status_code in (200, 201):
        return

    rate_info = RateLimitInfo(response)
    detail = _error_detail(response)

    if response.status_code == 401:
        raise GitHubAPIError(f"GitHub rejected credentials for {context}", 401)
    elif response.status_code == 403 or response.status_code == 429:
        if rate_info.is_exhausted or response.status_code == 429:
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                response.status_code,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise GitHubAPIError(f"GitHub API forbidden for {context}: {detail}", 403)
    elif response.status_code == 404:
        raise GitHubAPIError(f"GitHub resource not found: {context}", 404)
    elif response.status_code == 410:
        raise GitHubAPIError(f"Issues are disabled for {context}", 410)
    elif response.status_code == 422:
        logger.warning(f"GitHub validation failed for {context}: {detail}")
        raise GitHubAPIError(f"GitHub validation failed for {context}: {detail}", 422)

    raise GitHubAPIError(
        f"GitHub API returned {response.status_code} for {context}: {detail}",
        response.status_code,
    )
