"""Telegram Bot API client for sending and receiving messages."""

import logging
from typing import Any

import requests

from src.telegram.models import (
    BotCommand,
    InlineKeyboardMarkup,
    ReplyKeyboardMarkup,
    SendMessageResult,
    TelegramUpdate,
)
from src.telegram.utils.formatting import LEGACY_MARKDOWN

logger = logging.getLogger(__name__)

# Seconds before a non-polling Bot API call is abandoned
DEFAULT_REQUEST_TIMEOUT = 30

# Extra seconds granted on top of the long poll so the server answers first
POLL_GRACE_SECONDS = 10

# Update types the bot subscribes to when polling
ALLOWED_UPDATES = ("message", "callback_query")

ReplyMarkup = InlineKeyboardMarkup | ReplyKeyboardMarkup


class TelegramClientError(Exception):
    """Raised when a Bot API call fails or Telegram answers ``ok: false``."""


class TelegramClient:
    """Synchronous client for the handful of Bot API methods the bot needs.

    Outgoing calls default to a configured chat, which for this bot is the
    owner's private chat.
    """

    def __init__(
        self,
        *,
        bot_token: str,
        chat_id: str | None = None,
        poll_timeout: int = 30,
    ) -> None:
        """Initialise the Telegram client.

        :param bot_token: Token issued by @BotFather.
        :param chat_id: Chat used when a call does not name one.
        :param poll_timeout: Seconds Telegram may hold a getUpdates call open.
        """
        self._chat_id = chat_id
        self._poll_timeout = poll_timeout
        self._base_url = f"https://api.telegram.org/bot{bot_token}"

    @property
    def chat_id(self) -> str | None:
        """Chat used when a call does not name one."""
        return self._chat_id

    def _resolve_chat_id(self, chat_id: str | None) -> str:
        target = chat_id or self._chat_id
        if not target:
            raise ValueError("No chat_id given and no default chat configured (TELEGRAM_OWNER_ID)")
        return target

    def _call(
        self,
        method: str,
        payload: dict[str, Any],
        timeout: int = DEFAULT_REQUEST_TIMEOUT,
    ) -> Any:
        """POST a Bot API method with a JSON body.

        :param method: Bot API method name, e.g. ``sendMessage``.
        :param payload: JSON body.
        :param timeout: Seconds before the HTTP request is abandoned.
        :returns: The ``result`` field of the response.
        :raises TelegramClientError: On transport failure or an ``ok: false`` answer.
        """
        try:
            response = requests.post(f"{self._base_url}/{method}", json=payload, timeout=timeout)
            body = response.json()
        except requests.exceptions.Timeout as e:
            raise TelegramClientError(f"{method} timed out after {timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise TelegramClientError(f"{method} failed: {e}") from e
        except ValueError as e:
            raise TelegramClientError(f"{method} returned invalid JSON") from e

        # Telegram explains 4xx errors in the body, so read it before the status
        if not body.get("ok"):
            description = body.get("description", f"HTTP {response.status_code}")
            raise TelegramClientError(f"{method} rejected: {description}")

        return body.get("result")

    @staticmethod
    def _message_payload(
        text: str,
        parse_mode: str,
        reply_markup: ReplyMarkup | None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"text": text, "disable_web_page_preview": True}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        if reply_markup is not None:
            payload["reply_markup"] = reply_markup.to_payload()
        return payload

    def send_message(
        self,
        text: str,
        chat_id: str | None = None,
        parse_mode: str = LEGACY_MARKDOWN,
        reply_markup: ReplyMarkup | None = None,
    ) -> SendMessageResult:
        """Send a text message with link previews disabled.

        :param text: Message text.
        :param chat_id: Target chat. Defaults to the configured chat.
        :param parse_mode: Markdown, MarkdownV2, HTML, or empty for plain text.
        :param reply_markup: Inline or reply keyboard to attach.
        :returns: IDs of the sent message and its chat.
        :raises TelegramClientError: If the call fails.
        :raises ValueError: If no chat is given or configured.
        """
        target = self._resolve_chat_id(chat_id)
        payload = {"chat_id": target, **self._message_payload(text, parse_mode, reply_markup)}

        message = self._call("sendMessage", payload) or {}
        result = SendMessageResult(
            message_id=message.get("message_id"),
            chat_id=message.get("chat", {}).get("id"),
        )
        logger.info(f"Sent message: message_id={result.message_id}, chat_id={target}")
        return result

    def edit_message_text(
        self,
        text: str,
        message_id: int,
        chat_id: str | None = None,
        parse_mode: str = LEGACY_MARKDOWN,
        reply_markup: InlineKeyboardMarkup | None = None,
    ) -> None:
        """Replace the text of a sent message, and its keyboard if given.

        :param text: New message text.
        :param message_id: Message to edit.
        :param chat_id: Chat holding the message. Defaults to the configured chat.
        :param parse_mode: Parse mode of the new text.
        :param reply_markup: New inline keyboard. Without one the keyboard is removed.
        :raises TelegramClientError: If the call fails.
        """
        target = self._resolve_chat_id(chat_id)
        payload = {
            "chat_id": target,
            "message_id": message_id,
            **self._message_payload(text, parse_mode, reply_markup),
        }

        self._call("editMessageText", payload)
        logger.info(f"Edited message: message_id={message_id}, chat_id={target}")

    def edit_message_reply_markup(
        self,
        message_id: int,
        reply_markup: InlineKeyboardMarkup,
        chat_id: str | None = None,
    ) -> None:
        """Swap the inline keyboard of a sent message, leaving its text alone.

        :param message_id: Message to edit.
        :param reply_markup: Replacement keyboard.
        :param chat_id: Chat holding the message. Defaults to the configured chat.
        :raises TelegramClientError: If the call fails.
        """
        self._call(
            "editMessageReplyMarkup",
            {
                "chat_id": self._resolve_chat_id(chat_id),
                "message_id": message_id,
                "reply_markup": reply_markup.to_payload(),
            },
        )

    def answer_callback_query(
        self,
        callback_query_id: str,
        text: str | None = None,
        show_alert: bool = False,
    ) -> None:
        """Acknowledge a button press so the client stops its spinner.

        :param callback_query_id: ID of the callback query.
        :param text: Optional toast shown to the user.
        :param show_alert: Show the text as a modal alert instead of a toast.
        :raises TelegramClientError: If the call fails.
        """
        payload: dict[str, Any] = {"callback_query_id": callback_query_id}
        if text:
            payload["text"] = text
            payload["show_alert"] = show_alert

        self._call("answerCallbackQuery", payload)

    def set_my_commands(self, commands: list[BotCommand]) -> None:
        """Publish the command menu shown by Telegram clients.

        :param commands: Commands in menu order.
        :raises TelegramClientError: If the call fails.
        """
        self._call("setMyCommands", {"commands": [c.model_dump() for c in commands]})
        logger.info(f"Registered commands: {', '.join(c.command for c in commands)}")

    def get_updates(
        self,
        offset: int | None = None,
        timeout: int | None = None,
    ) -> list[TelegramUpdate]:
        """Long poll for new messages and button presses.

        :param offset: One more than the last update_id already handled.
            Telegram forgets every update below it.
        :param timeout: Long poll duration. Defaults to the configured poll_timeout.
        :returns: Updates in arrival order, possibly empty.
        :raises TelegramClientError: If the call fails.
        """
        poll_timeout = self._poll_timeout if timeout is None else timeout
        payload: dict[str, Any] = {
            "timeout": poll_timeout,
            "allowed_updates": list(ALLOWED_UPDATES),
        }
        if offset is not None:
            payload["offset"] = offset

        raw_updates = self._call(
            "getUpdates", payload, timeout=poll_timeout + POLL_GRACE_SECONDS
        ) or []
        updates = [TelegramUpdate.model_validate(u) for u in raw_updates]

        if updates:
            logger.debug(f"Received {len(updates)} updates from offset {offset}")
        return updates
