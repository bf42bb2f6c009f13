"""
GitHub issue filing.

Turns a confirmed feedback report into an issue on the configured
repository, labelled by category and attributed to the submitting user.
"""

import logging

import httpx

from feedback_widget.config import Settings, settings
from feedback_widget.services.chat.types import ReportCategory
from feedback_widget.services.github.auth import API_VERSION, BASE_URL, GitHubAppAuth
from feedback_widget.services.github.exceptions import GitHubAPIError, GitHubNotConfiguredError
from feedback_widget.services.github.helpers import handle_error_response
from feedback_widget.services.github.http_client import get_github_client
from feedback_widget.services.github.types import CreatedIssue

logger = logging.getLogger(__name__)

CATEGORY_LABELS: dict[ReportCategory, str] = {
    ReportCategory.BUG: "bug",
    ReportCategory.FEATURE: "enhancement",
    ReportCategory.FEEDBACK: "feedback",
}


def attribution_line(identity: str) -> str:
    return f"\n\n---\n_Submitted via feedback widget by user {identity}_"


class GitHubIssueService:
    """Files feedback reports as GitHub issues via a GitHub App installation."""

    def __init__(
        self,
        auth: GitHubAppAuth,
        repo_owner: str,
        repo_name: str,
        feedback_label: str = "user-feedback",
    ):
        if not (repo_owner and repo_name):
            raise GitHubNotConfiguredError()
        self.auth = auth
        self.repo_owner = repo_owner
        self.repo_name = repo_name
        self.feedback_label = feedback_label

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "GitHubIssueService":
        """Build from settings; raises GitHubNotConfiguredError if anything is missing."""
        auth = GitHubAppAuth(
            app_id=config.github_app_id,
            private_key=config.github_app_private_key,
            installation_id=config.github_app_installation_id,
        )
        return cls(
            auth,
            repo_owner=config.github_repo_owner,
            repo_name=config.github_repo_name,
            feedback_label=config.github_feedback_label,
        )

    @property
    def repo_full_name(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"

    def labels_for(self, category: ReportCategory) -> list[str]:
        return [self.feedback_label, CATEGORY_LABELS[ReportCategory(category)]]

    async def create_issue(
        self,
        title: str,
        body: str,
        category: ReportCategory,
        identity: str,
    ) -> CreatedIssue:
        """
        Create an issue on the configured repository.

        Args:
            title: Issue title, used as given
            body: Markdown body; an attribution line is appended
            category: Report category, mapped to a GitHub label
            identity: Identifier of the submitting user

        Returns:
            URL and number of the new issue

        Raises:
            GitHubAPIError: If the token exchange or issue creation fails
        """
        token = await self.auth.get_installation_token()

        client = get_github_client()
        try:
            response = await client.post(
                f"{BASE_URL}/repos/{self.repo_owner}/{self.repo_name}/issues",
                headers={
                    "Authorization": f"Bearer {token}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": API_VERSION,
                },
                json={
                    "title": title,
                    "body": body + attribution_line(identity),
                    "labels": self.labels_for(category),
                },
            )
        except httpx.HTTPError as err:
            raise GitHubAPIError(f"Failed to reach GitHub: {err}") from err

        handle_error_response(response, f"{self.repo_full_name} issues")

        data = response.json()
        issue = CreatedIssue(url=data["html_url"], number=int(data["number"]))
        logger.info(f"Created GitHub issue #{issue.number} on {self.repo_full_name}")
        return issue
