"""Conversation driver: owns one conversation's history and its bounds."""

import asyncio
from collections.abc import Sequence
from typing import Any

from feedback_widget.services.chat.exceptions import (
    ConversationBusyError,
    ConversationCompleteError,
    ConversationLimitError,
)
from feedback_widget.services.chat.service import FeedbackChatService
from feedback_widget.services.chat.types import (
    ChatResult,
    ConversationTurn,
    ReportCategory,
    StructuredData,
)

DEFAULT_MAX_TURNS = 20


def ensure_turn_budget(history: Sequence[Any], max_turns: int) -> None:
    """Raise ConversationLimitError if ``history`` is longer than ``max_turns``."""
    if len(history) > max_turns:
        raise ConversationLimitError(max_turns)


class ConversationDriver:
    """Drives a single feedback conversation against the chat service.

    At most one request is outstanding at a time; a second ``send`` while one
    is pending is rejected rather than queued, because the next prompt is
    built from the full prior history.
    """

    def __init__(
        self,
        chat_service: FeedbackChatService,
        category: ReportCategory,
        max_turns: int = DEFAULT_MAX_TURNS,
    ) -> None:
        self.chat_service = chat_service
        self.category = ReportCategory(category)
        self.max_turns = max_turns
        self._history: list[ConversationTurn] = []
        self._result: ChatResult | None = None
        self._lock = asyncio.Lock()

    @property
    def history(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._history)

    @property
    def result(self) -> ChatResult | None:
        """Result of the last successful exchange."""
        return self._result

    @property
    def is_complete(self) -> bool:
        return self._result is not None and self._result.is_complete

    @property
    def structured_data(self) -> StructuredData | None:
        return self._result.structured_data if self._result else None

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    async def send(self, message: str) -> ChatResult:
        """Send a user message and record the exchange on success.

        The history is only extended once the reply is known; on failure it
        is left exactly as it was and the error propagates.
        """
        if self._lock.locked():
            raise ConversationBusyError()
        if self.is_complete:
            raise ConversationCompleteError()
        ensure_turn_budget(self._history, self.max_turns)

        async with self._lock:
            result = await self.chat_service.chat(message, tuple(self._history), self.category)

            self._history.append(ConversationTurn(role="user", content=message))
            self._history.append(ConversationTurn(role="assistant", content=result.reply))
            self._result = result
            return result

    def reset(self, category: ReportCategory | None = None) -> None:
        """Start over, optionally switching category."""
        if self._lock.locked():
            raise ConversationBusyError()
        self._history.clear()
        self._result = None
        if category is not None:
            self.category = ReportCategory(category)
