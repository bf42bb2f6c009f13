"""
Screenshot storage for issue attachments.

Uploaded images are written under a local directory served as static files,
and the issue body links to them by public URL.
"""

import asyncio
import logging
import uuid
from pathlib import Path

from feedback_widget.config import Settings, settings

logger = logging.getLogger(__name__)

# content type -> file extension
ALLOWED_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


class ScreenshotRejectedError(Exception):
    """The upload is not an accepted image or is too large."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def screenshot_markdown(url: str) -> str:
    """Markdown image reference appended to an issue body."""
    return f"\n\n![Screenshot]({url})"


class LocalScreenshotStorage:
    """Stores screenshots on the local filesystem."""

    def __init__(
        self,
        directory: str | Path,
        base_url: str,
        url_prefix: str,
        max_bytes: int = 5 * 1024 * 1024,
    ):
        self.directory = Path(directory)
        self.base_url = base_url.rstrip("/")
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "LocalScreenshotStorage":
        return cls(
            directory=config.screenshot_dir,
            base_url=config.public_base_url,
            url_prefix=config.screenshot_url_prefix,
            max_bytes=config.screenshot_max_bytes,
        )

    def validate(self, data: bytes, content_type: str | None) -> str:
        """Check type and size, returning the file extension to use."""
        extension = ALLOWED_CONTENT_TYPES.get((content_type or "").lower())
        if extension is None:
            raise ScreenshotRejectedError("The screenshot must be a JPEG, PNG, WebP or GIF image.")
        if not data:
            raise ScreenshotRejectedError("The screenshot is empty.")
        self.check_size(len(data))
        return extension

    def check_size(self, size: int) -> None:
        if size > self.max_bytes:
            limit_mb = self.max_bytes // (1024 * 1024)
            raise ScreenshotRejectedError(f"The screenshot must be smaller than {limit_mb} MB.")

    async def store(self, data: bytes, content_type: str | None) -> str:
        """
        Persist an uploaded screenshot.

        Args:
            data: Raw image bytes
            content_type: MIME type reported by the client

        Returns:
            Absolute public URL of the stored image

        Raises:
            ScreenshotRejectedError: Unsupported type, empty, or too large
        """
        extension = self.validate(data, content_type)
        filename = f"{uuid.uuid4().hex}.{extension}"

        await asyncio.to_thread(self._write, filename, data)

        logger.info(f"Stored screenshot {filename} ({len(data)} bytes)")
        return f"{self.base_url}{self.url_prefix}/{filename}"

    def _write(self, filename: str, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / filename).write_bytes(data)
