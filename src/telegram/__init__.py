"""Telegram bot for browsing and rescheduling Notion tasks.

Run the polling bot with: python -m src.telegram
"""

from src.telegram.callbacks import (
    CallbackAction,
    CallbackDataError,
    ParsedCallback,
    parse_callback_data,
)
from src.telegram.client import TelegramClient, TelegramClientError
from src.telegram.handler import MessageHandler, UnauthorisedUserError, parse_command
from src.telegram.models import (
    CallbackQuery,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    SendMessageResult,
    TelegramChat,
    TelegramMessageInfo,
    TelegramUpdate,
    TelegramUser,
)
from src.telegram.polling import PollingRunner
from src.telegram.utils.config import SendPolicy, TaskKeyboard, TelegramConfig, get_telegram_settings

__all__ = [
    "CallbackAction",
    "CallbackDataError",
    "CallbackQuery",
    "InlineKeyboardButton",
    "InlineKeyboardMarkup",
    "MessageHandler",
    "ParsedCallback",
    "PollingRunner",
    "SendMessageResult",
    "SendPolicy",
    "TaskKeyboard",
    "TelegramChat",
    "TelegramClient",
    "TelegramClientError",
    "TelegramConfig",
    "TelegramMessageInfo",
    "TelegramUpdate",
    "TelegramUser",
    "UnauthorisedUserError",
    "get_telegram_settings",
    "parse_callback_data",
    "parse_command",
]
