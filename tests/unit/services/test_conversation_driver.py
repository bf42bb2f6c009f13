"""Unit tests for ConversationDriver — history, bounds and serialisation."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from feedback_widget.services.chat import (
    ChatResult,
    ConversationBusyError,
    ConversationCompleteError,
    ConversationDriver,
    ConversationLimitError,
    ConversationTurn,
    FeedbackChatError,
    ReportCategory,
    StructuredData,
    ensure_turn_budget,
)

PENDING = ChatResult(reply="Tell me more.")
DONE = ChatResult(
    reply="Filing it.",
    is_complete=True,
    structured_data=StructuredData(title="[Bug] X", body="## Steps"),
)


def _make_driver(*results: ChatResult | Exception, max_turns: int = 20) -> ConversationDriver:
    service = MagicMock()
    service.chat = AsyncMock(side_effect=list(results))
    return ConversationDriver(service, ReportCategory.BUG, max_turns=max_turns)


class TestEnsureTurnBudget:
    def test_within_budget(self):
        ensure_turn_budget([None] * 20, 20)  # should not raise

    def test_over_budget(self):
        with pytest.raises(ConversationLimitError) as exc_info:
            ensure_turn_budget([None] * 21, 20)

        assert exc_info.value.max_turns == 20


class TestSend:
    @pytest.mark.asyncio
    async def test_records_exchange(self):
        driver = _make_driver(PENDING)

        result = await driver.send("The save button does nothing")

        assert result is PENDING
        assert driver.history == (
            ConversationTurn(role="user", content="The save button does nothing"),
            ConversationTurn(role="assistant", content="Tell me more."),
        )
        assert driver.is_complete is False
        assert driver.structured_data is None

    @pytest.mark.asyncio
    async def test_passes_prior_history_only(self):
        driver = _make_driver(PENDING, PENDING)

        await driver.send("first")
        await driver.send("second")

        second_call = driver.chat_service.chat.call_args_list[1]
        message, history, category = second_call.args
        assert message == "second"
        assert [turn.content for turn in history] == ["first", "Tell me more."]
        assert category is ReportCategory.BUG

    @pytest.mark.asyncio
    async def test_completion_recorded(self):
        driver = _make_driver(DONE)

        await driver.send("yes, send it")

        assert driver.is_complete is True
        assert driver.structured_data == StructuredData(title="[Bug] X", body="## Steps")
        assert driver.history[-1].content == "Filing it."

    @pytest.mark.asyncio
    async def test_rejects_turns_after_completion(self):
        driver = _make_driver(DONE)
        await driver.send("yes")

        with pytest.raises(ConversationCompleteError):
            await driver.send("one more thing")

        assert driver.chat_service.chat.await_count == 1

    @pytest.mark.asyncio
    async def test_failure_leaves_history_unchanged(self):
        driver = _make_driver(PENDING, FeedbackChatError("boom"))
        await driver.send("first")

        with pytest.raises(FeedbackChatError):
            await driver.send("second")

        assert len(driver.history) == 2
        assert driver.result is PENDING
        assert driver.is_busy is False

    @pytest.mark.asyncio
    async def test_limit_rejected_without_model_call(self):
        driver = _make_driver(PENDING, PENDING, max_turns=2)
        await driver.send("first")
        await driver.send("second")

        with pytest.raises(ConversationLimitError):
            await driver.send("third")

        assert driver.chat_service.chat.await_count == 2

    @pytest.mark.asyncio
    async def test_concurrent_send_rejected(self):
        release = asyncio.Event()

        async def slow_chat(*_args):
            await release.wait()
            return PENDING

        service = MagicMock()
        service.chat = AsyncMock(side_effect=slow_chat)
        driver = ConversationDriver(service, ReportCategory.FEATURE)

        first = asyncio.create_task(driver.send("first"))
        await asyncio.sleep(0)
        assert driver.is_busy is True

        with pytest.raises(ConversationBusyError):
            await driver.send("second")

        release.set()
        await first
        assert len(driver.history) == 2
        assert service.chat.await_count == 1


class TestReset:
    @pytest.mark.asyncio
    async def test_reset_clears_state(self):
        driver = _make_driver(DONE, PENDING)
        await driver.send("yes")

        driver.reset(ReportCategory.FEEDBACK)

        assert driver.history == ()
        assert driver.result is None
        assert driver.is_complete is False
        assert driver.category is ReportCategory.FEEDBACK

        await driver.send("new report")
        assert len(driver.history) == 2
