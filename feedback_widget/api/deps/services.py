"""Service providers, overridable in tests via ``app.dependency_overrides``."""

from functools import lru_cache

from feedback_widget.core.rate_limit import RateLimiter, rate_limiter
from feedback_widget.services.chat import FeedbackChatService
from feedback_widget.services.github import GitHubIssueService
from feedback_widget.services.screenshots import LocalScreenshotStorage


@lru_cache
def get_chat_service() -> FeedbackChatService:
    return FeedbackChatService.from_settings()


def get_issue_service() -> GitHubIssueService:
    """Build the issue service; raises GitHubNotConfiguredError if unset."""
    return GitHubIssueService.from_settings()


@lru_cache
def get_screenshot_storage() -> LocalScreenshotStorage:
    return LocalScreenshotStorage.from_settings()


def get_rate_limiter() -> RateLimiter:
    return rate_limiter
