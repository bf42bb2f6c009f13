"""Data types for GitHub API responses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CreatedIssue:
    """An issue filed on GitHub."""

    url: str
    number: int
