"""Feedback chat service: one assistant turn per call."""

from collections.abc import Sequence
from typing import Literal, cast

import anthropic
from anthropic.types import MessageParam

from feedback_widget.config import Settings, settings
from feedback_widget.services.chat.exceptions import EmptyReplyError, FeedbackChatError
from feedback_widget.services.chat.parser import parse_completion
from feedback_widget.services.chat.prompts import build_system_prompt
from feedback_widget.services.chat.types import (
    DEFAULT_LOCALE,
    ChatResult,
    ConversationTurn,
    PromptConfig,
    ReportCategory,
)


class FeedbackChatService:
    """Conversational assistant that gathers report details.

    Stateless: the caller sends the full history with every message, and
    each call is an independent request/reply exchange with the model.
    """

    model: str = "claude-sonnet-4-20250514"
    temperature: float = 0.7
    max_tokens: int = 1024
    max_retries: int = 2
    timeout: float = 60.0

    def __init__(
        self,
        prompt_config: PromptConfig,
        api_key: str | None = None,
        model: str | None = None,
    ) -> None:
        self.prompt_config = prompt_config
        self.api_key = api_key or settings.anthropic_api_key
        if model:
            self.model = model
        self._client: anthropic.AsyncAnthropic | None = None

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "FeedbackChatService":
        service = cls(
            PromptConfig(app_name=config.app_name, locale=config.locale or DEFAULT_LOCALE),
            api_key=config.anthropic_api_key,
            model=config.feedback_model,
        )
        service.temperature = config.feedback_temperature
        service.max_tokens = config.feedback_max_tokens
        service.max_retries = config.feedback_max_retries
        service.timeout = config.feedback_timeout_seconds
        return service

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        """Lazy-loaded async client."""
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self.api_key,
                max_retries=self.max_retries,
                timeout=self.timeout,
            )
        return self._client

    async def chat(
        self,
        message: str,
        history: Sequence[ConversationTurn],
        category: ReportCategory,
    ) -> ChatResult:
        """Send the next user message and interpret the assistant's reply.

        Args:
            message: The new user message.
            history: Prior turns, oldest first. Trusted as given.
            category: Report category selecting the system prompt.

        Returns:
            The parsed reply, flagged complete when the report is ready to file.

        Raises:
            EmptyReplyError: The model returned no text.
            FeedbackChatError: The model call failed; the SDK error is the cause.
        """
        system = build_system_prompt(category, self.prompt_config)

        typed_messages: list[MessageParam] = [
            {
                "role": cast(Literal["user", "assistant"], turn.role),
                "content": turn.content,
            }
            for turn in history
        ]
        typed_messages.append({"role": "user", "content": message})

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system,
                messages=typed_messages,
            )
        except anthropic.APIError as err:
            raise FeedbackChatError(f"Feedback chat failed: {err}", cause=err) from err

        content = ""
        if response.content:
            first_block = response.content[0]
            content = first_block.text if hasattr(first_block, "text") else ""

        if content == "":
            raise EmptyReplyError()

        return parse_completion(content)
