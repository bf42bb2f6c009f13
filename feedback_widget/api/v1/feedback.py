"""Feedback widget endpoints: assistant chat turns and issue filing."""

import logging
from typing import Any

import anthropic
from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from feedback_widget.api.deps import (
    CurrentIdentity,
    get_chat_service,
    get_issue_service,
    get_rate_limiter,
    get_screenshot_storage,
)
from feedback_widget.config import settings
from feedback_widget.core.exceptions import UpstreamError, ValidationError
from feedback_widget.core.rate_limit import CHAT_LIMIT, ISSUE_LIMIT, RateLimiter
from feedback_widget.schemas.feedback import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    IssueRequest,
    IssueResponse,
    StructuredReport,
    friendly_message,
)
from feedback_widget.services.chat import FeedbackChatError, FeedbackChatService
from feedback_widget.services.github import GitHubAPIError, GitHubIssueService
from feedback_widget.services.screenshots import (
    LocalScreenshotStorage,
    ScreenshotRejectedError,
    screenshot_markdown,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.route_prefix, tags=["feedback"])

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")

# Every failure reaches the widget as {"error": "..."}
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    code: {"model": ErrorResponse} for code in (401, 419, 422, 429, 500, 502, 503)
}


def _chat_failure(err: FeedbackChatError) -> UpstreamError:
    """Map a failed model exchange to the status the widget retries on."""
    if isinstance(err.cause, anthropic.RateLimitError):
        return UpstreamError(
            "The assistant is busy right now. Please try again in a moment.",
            status.HTTP_429_TOO_MANY_REQUESTS,
        )
    if isinstance(err.cause, (anthropic.APIConnectionError, anthropic.InternalServerError)):
        return UpstreamError(
            "The assistant is temporarily unavailable. Please try again.",
            status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return UpstreamError(
        "Something went wrong. Please try again.",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@router.post("/chat", response_model=ChatResponse, responses=ERROR_RESPONSES)
async def chat(
    data: ChatRequest,
    identity: CurrentIdentity,
    chat_service: FeedbackChatService = Depends(get_chat_service),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> ChatResponse:
    """Send the next user message and return the assistant's reply."""
    limiter.check_rate_limit(identity, "chat", CHAT_LIMIT)

    try:
        result = await chat_service.chat(data.message, data.history_turns(), data.type)
    except FeedbackChatError as e:
        logger.exception(f"Feedback chat failed for user {identity}: {e.message}")
        raise _chat_failure(e) from e

    structured = None
    if result.structured_data is not None:
        structured = StructuredReport(
            title=result.structured_data.title,
            body=result.structured_data.body,
        )

    return ChatResponse(reply=result.reply, done=result.is_complete, structured=structured)


async def _read_issue_submission(request: Request) -> tuple[IssueRequest, UploadFile | None]:
    """Parse an issue submission sent as JSON or as a (multipart) form."""
    content_type = request.headers.get("content-type", "")
    screenshot: UploadFile | None = None

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields = {key: value for key, value in form.items() if isinstance(value, str)}
        upload = form.get("screenshot")
        # Browsers send an empty file part when nothing was attached
        if isinstance(upload, UploadFile) and upload.filename:
            screenshot = upload
    else:
        try:
            fields = await request.json()
        except ValueError as e:
            raise ValidationError("The request body must be JSON or form data.") from e
        if not isinstance(fields, dict):
            raise ValidationError("The request body must be JSON or form data.")

    try:
        data = IssueRequest.model_validate(fields)
    except PydanticValidationError as e:
        raise ValidationError(friendly_message(e.errors())) from e

    return data, screenshot


async def _read_upload(upload: UploadFile, storage: LocalScreenshotStorage) -> bytes:
    """Read an upload, stopping one byte past the limit so oversized files fail validation."""
    if upload.size is not None:
        storage.check_size(upload.size)
    return await upload.read(storage.max_bytes + 1)


@router.post("/issue", response_model=IssueResponse, responses=ERROR_RESPONSES)
async def create_issue(
    request: Request,
    identity: CurrentIdentity,
    issue_service: GitHubIssueService = Depends(get_issue_service),
    storage: LocalScreenshotStorage = Depends(get_screenshot_storage),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> IssueResponse:
    """File a confirmed report as a GitHub issue, with an optional screenshot."""
    limiter.check_rate_limit(identity, "issue", ISSUE_LIMIT)

    data, screenshot = await _read_issue_submission(request)

    body = data.body
    if screenshot is not None:
        try:
            url = await storage.store(
                await _read_upload(screenshot, storage), screenshot.content_type
            )
        except ScreenshotRejectedError as e:
            raise ValidationError(e.message) from e
        finally:
            await screenshot.close()
        body += screenshot_markdown(url)

    try:
        issue = await issue_service.create_issue(
            title=data.title,
            body=body,
            category=data.type,
            identity=identity,
        )
    except GitHubAPIError as e:
        logger.exception(f"Failed to create feedback issue for user {identity}: {e.message}")
        raise UpstreamError("Failed to create the issue. Please try again.") from e

    return IssueResponse(url=issue.url, number=issue.number)
