"""
GitHub App authentication.

Issues are filed as a GitHub App installation. A short-lived app JWT (RS256,
signed with the app's private key) is exchanged for an installation access
token, which is cached until shortly before GitHub expires it (1 hour).
"""

import base64
import binascii
import logging
import time
from typing import Any

import httpx
from cachetools import TTLCache  # type: ignore[import-untyped]
from jose import jwt

from feedback_widget.services.github.exceptions import GitHubAPIError, GitHubNotConfiguredError
from feedback_widget.services.github.helpers import handle_error_response
from feedback_widget.services.github.http_client import get_github_client

logger = logging.getLogger(__name__)

BASE_URL = "https://api.github.com"
API_VERSION = "2022-11-28"

JWT_LIFETIME_SECONDS = 9 * 60  # GitHub caps app JWTs at 10 minutes
TOKEN_CACHE_TTL_SECONDS = 3000  # 50 min; installation tokens live 60

# installation_id -> token
_token_cache: TTLCache[str, str] = TTLCache(maxsize=16, ttl=TOKEN_CACHE_TTL_SECONDS)


def clear_token_cache() -> None:
    """Drop all cached installation tokens."""
    _token_cache.clear()


def decode_private_key(private_key: str) -> str:
    """Return the PEM text of a private key given as base64 or as raw PEM."""
    if private_key.lstrip().startswith("-----BEGIN"):
        return private_key
    try:
        return base64.b64decode(private_key, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as err:
        raise GitHubAPIError("GitHub App private key is not valid base64") from err


class GitHubAppAuth:
    """Generates app JWTs and caches installation access tokens."""

    def __init__(self, app_id: str, private_key: str, installation_id: str):
        if not (app_id and private_key and installation_id):
            raise GitHubNotConfiguredError()
        self.app_id = app_id
        self.private_key = private_key
        self.installation_id = installation_id

    def generate_jwt(self, now: int | None = None) -> str:
        """Generate a short-lived JWT identifying the GitHub App."""
        issued_at = int(time.time()) if now is None else now
        claims: dict[str, Any] = {
            "iss": self.app_id,
            "iat": issued_at,
            "exp": issued_at + JWT_LIFETIME_SECONDS,
        }
        return jwt.encode(claims, decode_private_key(self.private_key), algorithm="RS256")

    async def get_installation_token(self) -> str:
        """Get a cached installation access token, requesting a new one if needed."""
        cached = _token_cache.get(self.installation_id)
        if cached is not None:
            return cached

        client = get_github_client()
        try:
            response = await client.post(
                f"{BASE_URL}/app/installations/{self.installation_id}/access_tokens",
                headers={
                    "Authorization": f"Bearer {self.generate_jwt()}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": API_VERSION,
                },
            )
        except httpx.HTTPError as err:
            raise GitHubAPIError(f"Failed to reach GitHub: {err}") from err
        handle_error_response(response, "installation token")

        token = response.json().get("token")
        if not token:
            raise GitHubAPIError("GitHub returned no installation token", response.status_code)

        _token_cache[self.installation_id] = token
        logger.debug(f"Obtained installation token for installation {self.installation_id}")
        return token
