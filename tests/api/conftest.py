"""API test fixtures — mocked collaborators and authenticated clients.

Overrides the chat service, issue service, screenshot storage and rate
limiter dependencies so endpoint logic runs without Anthropic, GitHub or
the real filesystem layout.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from feedback_widget.api.deps import (
    get_chat_service,
    get_issue_service,
    get_rate_limiter,
    get_screenshot_storage,
)
from feedback_widget.core.rate_limit import RateLimiter
from feedback_widget.services.chat import ChatResult
from feedback_widget.services.github import CreatedIssue
from feedback_widget.services.screenshots import LocalScreenshotStorage


@pytest.fixture
def chat_service() -> MagicMock:
    service = MagicMock()
    service.chat = AsyncMock(return_value=ChatResult(reply="Can you describe the steps?"))
    return service


@pytest.fixture
def issue_service() -> MagicMock:
    service = MagicMock()
    service.create_issue = AsyncMock(
        return_value=CreatedIssue(url="https://github.com/acme/app/issues/7", number=7)
    )
    return service


@pytest.fixture
def screenshot_storage(tmp_path: Path) -> LocalScreenshotStorage:
    return LocalScreenshotStorage(
        tmp_path, "https://feedback.example.com", "/feedback-screenshots", max_bytes=1024
    )


@pytest.fixture
def limiter() -> RateLimiter:
    return RateLimiter()


@pytest.fixture
def override_dependencies(chat_service, issue_service, screenshot_storage, limiter):
    from feedback_widget.main import app

    app.dependency_overrides[get_chat_service] = lambda: chat_service
    app.dependency_overrides[get_issue_service] = lambda: issue_service
    app.dependency_overrides[get_screenshot_storage] = lambda: screenshot_storage
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def api_client(override_dependencies, auth_headers):
    """HTTP client carrying a valid session token."""
    transport = ASGITransport(app=override_dependencies)
    async with AsyncClient(transport=transport, base_url="http://test", headers=auth_headers) as client:
        yield client


@pytest.fixture
async def anon_client(override_dependencies):
    """HTTP client without any Authorization header."""
    transport = ASGITransport(app=override_dependencies)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
