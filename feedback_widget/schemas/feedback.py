"""Pydantic schemas for the feedback widget endpoints."""

from collections.abc import Sequence
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from feedback_widget.config import settings
from feedback_widget.services.chat import ConversationTurn, ReportCategory

GENERIC_VALIDATION_MESSAGE = "The request is invalid."

# (field, pydantic error type) -> message shown in the widget
FRIENDLY_MESSAGES: dict[tuple[str, str], str] = {
    ("message", "missing"): "Please enter a message.",
    ("message", "string_too_short"): "Please enter a message.",
    ("message", "value_error"): "Please enter a message.",
    (
        "message",
        "string_too_long",
    ): f"Your message is too long. Please keep it under {settings.max_message_length} characters.",
    (
        "history",
        "too_long",
    ): "Conversation history is too long. Please start a new conversation.",
    ("type", "missing"): "Please select a feedback type.",
    ("type", "enum"): "Invalid feedback type.",
    ("title", "missing"): "An issue title is required.",
    ("title", "string_too_short"): "An issue title is required.",
    (
        "title",
        "string_too_long",
    ): f"The title is too long. Please keep it under {settings.max_title_length} characters.",
    ("title", "value_error"): "An issue title is required.",
    ("body", "missing"): "An issue body is required.",
    ("body", "value_error"): "An issue body is required.",
    ("body", "string_too_short"): "An issue body is required.",
    (
        "body",
        "string_too_long",
    ): f"The body is too long. Please keep it under {settings.max_body_length:,} characters.",
}


def friendly_message(errors: Sequence[Any]) -> str:
    """Pick a user-facing message for the first validation error."""
    if not errors:
        return GENERIC_VALIDATION_MESSAGE

    first = errors[0]
    loc = list(first.get("loc", ()))
    # FastAPI prefixes request errors with where the field came from
    if len(loc) > 1 and loc[0] in ("body", "query"):
        loc = loc[1:]
    if not loc:
        return GENERIC_VALIDATION_MESSAGE

    field = str(loc[0])
    return FRIENDLY_MESSAGES.get((field, first.get("type", "")), GENERIC_VALIDATION_MESSAGE)


class HistoryTurn(BaseModel):
    """One prior turn as sent by the widget."""

    role: Literal["user", "assistant"]
    content: str = Field(min_length=1, max_length=settings.max_history_content_length)

    def to_turn(self) -> ConversationTurn:
        return ConversationTurn(role=self.role, content=self.content)


class ChatRequest(BaseModel):
    """Request body for POST /feedback/chat."""

    message: str = Field(min_length=1, max_length=settings.max_message_length)
    history: list[HistoryTurn] = Field(default_factory=list, max_length=settings.max_history_turns)
    type: ReportCategory

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Please enter a message.")
        return value

    def history_turns(self) -> tuple[ConversationTurn, ...]:
        return tuple(turn.to_turn() for turn in self.history)


class StructuredReport(BaseModel):
    """Title/body extracted once the report is ready to file."""

    title: str
    body: str


class ChatResponse(BaseModel):
    """Response for POST /feedback/chat."""

    reply: str
    done: bool
    structured: StructuredReport | None = None


class IssueRequest(BaseModel):
    """Title, body and category for POST /feedback/issue.

    The optional screenshot travels as a multipart file and is validated
    by the screenshot storage, not here.
    """

    title: str = Field(min_length=1, max_length=settings.max_title_length)
    body: str = Field(min_length=1, max_length=settings.max_body_length)
    type: ReportCategory

    @field_validator("title", "body")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class IssueResponse(BaseModel):
    """Response for POST /feedback/issue."""

    url: str
    number: int


class ErrorResponse(BaseModel):
    """Error body shared by every failure path."""

    error: str
