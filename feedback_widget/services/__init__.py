# Services package

from feedback_widget.services.chat import FeedbackChatService
from feedback_widget.services.github import GitHubIssueService
from feedback_widget.services.screenshots import LocalScreenshotStorage

__all__ = [
    "FeedbackChatService",
    "GitHubIssueService",
    "LocalScreenshotStorage",
]
