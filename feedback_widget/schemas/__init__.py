"""Pydantic schemas for API request/response validation."""

from feedback_widget.schemas.feedback import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HistoryTurn,
    IssueRequest,
    IssueResponse,
    StructuredReport,
    friendly_message,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HistoryTurn",
    "IssueRequest",
    "IssueResponse",
    "StructuredReport",
    "friendly_message",
]
