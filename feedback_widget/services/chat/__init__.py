"""Feedback conversation package.

Quick start:
    from feedback_widget.services.chat import FeedbackChatService, ReportCategory

    service = FeedbackChatService.from_settings()
    result = await service.chat("The save button does nothing", [], ReportCategory.BUG)
    if result.is_complete:
        print(result.structured_data.title)
"""

from .driver import ConversationDriver, ensure_turn_budget
from .exceptions import (
    ConversationBusyError,
    ConversationCompleteError,
    ConversationError,
    ConversationLimitError,
    EmptyReplyError,
    FeedbackChatError,
)
from .parser import FALLBACK_REPLY, parse_completion
from .prompts import build_system_prompt
from .service import FeedbackChatService
from .types import (
    COMPLETION_MARKER,
    DEFAULT_LOCALE,
    ChatResult,
    ConversationTurn,
    PromptConfig,
    ReportCategory,
    StructuredData,
)

__all__ = [
    "COMPLETION_MARKER",
    "DEFAULT_LOCALE",
    "FALLBACK_REPLY",
    "ChatResult",
    "ConversationBusyError",
    "ConversationCompleteError",
    "ConversationDriver",
    "ConversationError",
    "ConversationLimitError",
    "ConversationTurn",
    "EmptyReplyError",
    "FeedbackChatError",
    "FeedbackChatService",
    "PromptConfig",
    "ReportCategory",
    "StructuredData",
    "build_system_prompt",
    "ensure_turn_budget",
    "parse_completion",
]
