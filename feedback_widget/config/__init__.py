"""Configuration package."""

from feedback_widget.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
