"""Rate limiting for the feedback endpoints.

Every chat turn costs a language-model call and every issue lands in a
repository, so both are throttled per submitting user. Uses a sliding
window with periodic cleanup of expired entries.
"""

import time
from collections import defaultdict
from dataclasses import dataclass
from typing import TypeAlias

from feedback_widget.config import settings
from feedback_widget.core.exceptions import RateLimitedError


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting."""

    requests: int  # Maximum requests allowed
    window_seconds: int  # Time window in seconds


CHAT_LIMIT = RateLimitConfig(requests=settings.chat_rate_limit, window_seconds=60)
ISSUE_LIMIT = RateLimitConfig(requests=settings.issue_rate_limit, window_seconds=60)


Identity: TypeAlias = str
Timestamp: TypeAlias = float


class RateLimiter:
    """In-memory rate limiter with sliding window.

    Tracks request timestamps per identity and endpoint. Suitable for
    single-instance deployments only.
    """

    def __init__(self, clock=time.time) -> None:
        self._clock = clock
        # identity -> endpoint_key -> timestamps
        self._requests: dict[Identity, dict[str, list[Timestamp]]] = defaultdict(
            lambda: defaultdict(list)
        )
        self._last_cleanup = clock()
        self._cleanup_interval = 300  # Clean up every 5 minutes

    def _cleanup_expired(self, window_seconds: int) -> None:
        """Remove expired entries to prevent memory growth."""
        now = self._clock()

        if now - self._last_cleanup < self._cleanup_interval:
            return

        cutoff = now - window_seconds
        identities_to_remove: list[Identity] = []

        for identity, endpoints in self._requests.items():
            endpoints_to_remove: list[str] = []
            for endpoint, timestamps in endpoints.items():
                endpoints[endpoint] = [ts for ts in timestamps if ts > cutoff]
                if not endpoints[endpoint]:
                    endpoints_to_remove.append(endpoint)

            for endpoint in endpoints_to_remove:
                del endpoints[endpoint]

            if not endpoints:
                identities_to_remove.append(identity)

        for identity in identities_to_remove:
            del self._requests[identity]

        self._last_cleanup = now

    def check_rate_limit(
        self,
        identity: Identity,
        endpoint_key: str,
        config: RateLimitConfig,
    ) -> None:
        """Record a request, or reject it if the window is full.

        Args:
            identity: The submitting user
            endpoint_key: "chat" or "issue"
            config: Rate limit configuration to apply

        Raises:
            RateLimitedError: 429 with Retry-After if the limit is exceeded
        """
        now = self._clock()
        cutoff = now - config.window_seconds

        self._cleanup_expired(config.window_seconds)

        timestamps = self._requests[identity][endpoint_key]
        recent_requests = [ts for ts in timestamps if ts > cutoff]

        if len(recent_requests) >= config.requests:
            retry_after = int(min(recent_requests) + config.window_seconds - now) + 1
            raise RateLimitedError(retry_after)

        recent_requests.append(now)
        self._requests[identity][endpoint_key] = recent_requests

    def reset(self) -> None:
        self._requests.clear()


# Singleton instance for application-wide use
rate_limiter = RateLimiter()
