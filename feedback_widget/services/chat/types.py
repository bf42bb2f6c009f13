"""Input/output types for the feedback conversation.

All types are immutable: a turn never changes once sent, and a result is
built once per model reply.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

# Sentinel key the assistant embeds in its completion JSON object
COMPLETION_MARKER = "__done__"

DEFAULT_LOCALE = "en"

Role = Literal["user", "assistant"]


class ReportCategory(str, Enum):
    """What kind of report the user is filing."""

    BUG = "bug"
    FEATURE = "feature"
    FEEDBACK = "feedback"


@dataclass(frozen=True)
class ConversationTurn:
    """One role-tagged message in the conversation history."""

    role: Role
    content: str


@dataclass(frozen=True)
class StructuredData:
    """Title/body pair extracted from the completion object."""

    title: str
    body: str


@dataclass(frozen=True)
class ChatResult:
    """Outcome of one assistant reply.

    ``structured_data`` is set if and only if ``is_complete`` is true.
    """

    reply: str
    is_complete: bool = False
    structured_data: StructuredData | None = None

    def __post_init__(self) -> None:
        if self.is_complete != (self.structured_data is not None):
            raise ValueError("structured_data must be present exactly when is_complete is true")


@dataclass(frozen=True)
class PromptConfig:
    """Per-deployment values baked into every system prompt."""

    app_name: str
    locale: str = DEFAULT_LOCALE
