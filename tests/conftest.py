"""Root conftest — test infrastructure for all feedback widget tests.

Provides:
- A known JWT secret and a token factory for authenticated requests
- Fresh in-memory rate limiter and GitHub token cache per test
- Token factory for expired, foreign or subject-less sessions
"""

from __future__ import annotations

import time

import pytest
from jose import jwt

from feedback_widget.config.settings import settings
from feedback_widget.core.rate_limit import rate_limiter
from feedback_widget.services.github.auth import clear_token_cache

TEST_JWT_SECRET = "test-secret-for-feedback-widget-tests"
TEST_IDENTITY = "user-42"


# ─────────────────────────────────────────────────────────────────────────────
# Auth
# ─────────────────────────────────────────────────────────────────────────────


def make_token(
    subject: str | None = TEST_IDENTITY,
    expires_in: int = 3600,
    secret: str = TEST_JWT_SECRET,
    audience: str = "authenticated",
) -> str:
    """Sign a session JWT the way the host application does."""
    now = int(time.time())
    claims: dict[str, object] = {"aud": audience, "iat": now, "exp": now + expires_in}
    if subject is not None:
        claims["sub"] = subject
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch: pytest.MonkeyPatch) -> str:
    """Every test runs against the same known signing secret."""
    monkeypatch.setattr(settings, "auth_jwt_secret", TEST_JWT_SECRET)
    monkeypatch.setattr(settings, "auth_jwt_audience", "authenticated")
    return TEST_JWT_SECRET


@pytest.fixture
def token_factory():
    return make_token


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


# ─────────────────────────────────────────────────────────────────────────────
# Shared State Reset
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def reset_shared_state():
    """Rate limiter and installation token cache are module singletons."""
    rate_limiter.reset()
    clear_token_cache()
    yield
    rate_limiter.reset()
    clear_token_cache()
