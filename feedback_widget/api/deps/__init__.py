"""API dependencies - re-exports from submodules."""

from .auth import CurrentIdentity, decode_session_token, get_current_identity, security
from .services import (
    get_chat_service,
    get_issue_service,
    get_rate_limiter,
    get_screenshot_storage,
)

__all__ = [
    # Auth
    "CurrentIdentity",
    "decode_session_token",
    "get_current_identity",
    "security",
    # Services
    "get_chat_service",
    "get_issue_service",
    "get_rate_limiter",
    "get_screenshot_storage",
]
