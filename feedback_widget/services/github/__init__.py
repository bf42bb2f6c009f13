"""
GitHub issue filing package.

Usage: `from feedback_widget.services.github import GitHubIssueService`

Module structure:
- issues.py: GitHubIssueService, files reports as issues
- auth.py: GitHub App JWT and installation token cache
- http_client.py: Shared pooled AsyncClient
- helpers.py: Rate limit handling and error utilities
- types.py: Data types
- exceptions.py: Custom exceptions
"""

from feedback_widget.services.github.auth import GitHubAppAuth, clear_token_cache
from feedback_widget.services.github.exceptions import GitHubAPIError, GitHubNotConfiguredError
from feedback_widget.services.github.helpers import RateLimitInfo, handle_error_response
from feedback_widget.services.github.http_client import close_github_client, get_github_client
from feedback_widget.services.github.issues import (
    CATEGORY_LABELS,
    GitHubIssueService,
    attribution_line,
)
from feedback_widget.services.github.types import CreatedIssue

__all__ = [
    # Service (main entry point)
    "GitHubIssueService",
    "GitHubAppAuth",
    "CATEGORY_LABELS",
    "attribution_line",
    # Types
    "CreatedIssue",
    # Exceptions
    "GitHubAPIError",
    "GitHubNotConfiguredError",
    # Utilities
    "RateLimitInfo",
    "handle_error_response",
    "clear_token_cache",
    "get_github_client",
    "close_github_client",
]
