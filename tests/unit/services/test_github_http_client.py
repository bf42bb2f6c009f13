"""Unit tests for GitHub HTTP client and helpers.

Tests the shared HTTP client singleton, rate limit parsing and error
response processing.
"""

from __future__ import annotations

import httpx
import pytest

import feedback_widget.services.github.http_client as http_client_module
from feedback_widget.services.github.exceptions import GitHubAPIError
from feedback_widget.services.github.helpers import RateLimitInfo, handle_error_response
from feedback_widget.services.github.http_client import close_github_client, get_github_client

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_response(
    status_code: int = 200,
    json_data: object = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a fake httpx.Response."""
    return httpx.Response(
        status_code=status_code,
        json=json_data,
        headers=headers or {},
    )


# ═══════════════════════════════════════════════════════════════════════════
# RateLimitInfo
# ═══════════════════════════════════════════════════════════════════════════


class TestRateLimitInfo:
    """Tests for rate limit header parsing."""

    def test_extracts_remaining_and_reset(self):
        resp = _make_response(
            headers={
                "X-RateLimit-Remaining": "42",
                "X-RateLimit-Reset": "1700000000",
            }
        )
        info = RateLimitInfo(resp)

        assert info.remaining == "42"
        assert info.reset_timestamp == 1700000000
        assert info.is_exhausted is False

    def test_detects_exhausted(self):
        resp = _make_response(headers={"X-RateLimit-Remaining": "0"})

        assert RateLimitInfo(resp).is_exhausted is True

    def test_missing_headers(self):
        info = RateLimitInfo(_make_response(headers={}))

        assert info.remaining is None
        assert info.reset_timestamp is None
        assert info.is_exhausted is False


# ═══════════════════════════════════════════════════════════════════════════
# handle_error_response
# ═══════════════════════════════════════════════════════════════════════════


class TestHandleErrorResponse:
    """Tests for centralized GitHub API error handling."""

    @pytest.mark.parametrize("status_code", [200, 201])
    def test_success_does_nothing(self, status_code: int):
        handle_error_response(_make_response(status_code=status_code), "acme/app issues")

    def test_401_raises_credentials_error(self):
        with pytest.raises(GitHubAPIError, match="rejected credentials") as exc_info:
            handle_error_response(_make_response(status_code=401), "installation token")

        assert exc_info.value.status_code == 401

    def test_403_with_rate_limit_exhausted(self):
        resp = _make_response(
            status_code=403,
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
        )

        with pytest.raises(GitHubAPIError, match="rate limit") as exc_info:
            handle_error_response(resp, "acme/app issues")

        assert exc_info.value.rate_limit_reset == 1700000000

    def test_429_is_rate_limit(self):
        with pytest.raises(GitHubAPIError, match="rate limit") as exc_info:
            handle_error_response(_make_response(status_code=429), "acme/app issues")

        assert exc_info.value.status_code == 429

    def test_403_without_rate_limit_raises_forbidden(self):
        resp = _make_response(
            status_code=403,
            json_data={"message": "Resource not accessible by integration"},
            headers={"X-RateLimit-Remaining": "50"},
        )

        with pytest.raises(GitHubAPIError, match="Resource not accessible"):
            handle_error_response(resp, "acme/app issues")

    def test_404_raises_not_found(self):
        with pytest.raises(GitHubAPIError, match="not found"):
            handle_error_response(_make_response(status_code=404), "acme/app issues")

    def test_410_issues_disabled(self):
        with pytest.raises(GitHubAPIError, match="Issues are disabled"):
            handle_error_response(_make_response(status_code=410), "acme/app issues")

    def test_422_includes_github_message(self):
        resp = _make_response(status_code=422, json_data={"message": "Validation Failed"})

        with pytest.raises(GitHubAPIError, match="Validation Failed") as exc_info:
            handle_error_response(resp, "acme/app issues")

        assert exc_info.value.status_code == 422

    def test_500_raises_generic_error(self):
        resp = httpx.Response(status_code=500, text="upstream exploded")

        with pytest.raises(GitHubAPIError, match="500.*upstream exploded"):
            handle_error_response(resp, "acme/app issues")


# ═══════════════════════════════════════════════════════════════════════════
# HTTP Client Singleton
# ═══════════════════════════════════════════════════════════════════════════


class TestGitHubHttpClient:
    """Tests for the shared HTTP client singleton."""

    @pytest.mark.asyncio
    async def test_client_is_shared_and_closable(self):
        original = http_client_module._client
        http_client_module._client = None
        try:
            a = get_github_client()
            b = get_github_client()

            assert isinstance(a, httpx.AsyncClient)
            assert a is b
            assert a.timeout.connect == 5.0

            await close_github_client()

            assert a.is_closed
            assert http_client_module._client is None
        finally:
            http_client_module._client = original

    @pytest.mark.asyncio
    async def test_recreated_after_close(self):
        original = http_client_module._client
        http_client_module._client = None
        try:
            first = get_github_client()
            await first.aclose()

            second = get_github_client()

            assert second is not first
            await close_github_client()
        finally:
            http_client_module._client = original

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self):
        original = http_client_module._client
        http_client_module._client = None
        try:
            await close_github_client()
        finally:
            http_client_module._client = original
