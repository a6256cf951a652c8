"""Telegram utilities."""

from src.telegram.utils.config import (
    SendPolicy,
    TaskKeyboard,
    TelegramConfig,
    get_telegram_settings,
)
from src.telegram.utils.formatting import (
    LEGACY_MARKDOWN,
    MARKDOWN_V2,
    bold_markdown,
    format_message,
)

__all__ = [
    "LEGACY_MARKDOWN",
    "MARKDOWN_V2",
    "SendPolicy",
    "TaskKeyboard",
    "TelegramConfig",
    "bold_markdown",
    "format_message",
    "get_telegram_settings",
]
