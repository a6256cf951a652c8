"""Long polling entry point for the Telegram task bot."""

from __future__ import annotations

import logging
import signal
import sys
import time
from types import FrameType

from dotenv import load_dotenv
from pydantic import ValidationError

from src.notion.client import NotionClient
from src.notion.config import NotionConfig, get_notion_settings
from src.notion.tasks import TaskRepository
from src.paths import ENV_FILE
from src.telegram.callbacks import CallbackDataError
from src.telegram.client import TelegramClient, TelegramClientError
from src.telegram.handler import COMMANDS, MessageHandler, UnauthorisedUserError
from src.telegram.messages import main_keyboard
from src.telegram.models import TelegramUpdate
from src.telegram.utils.config import TelegramConfig, get_telegram_settings
from src.utils.logging import configure_logging

logger = logging.getLogger(__name__)

STARTUP_MESSAGE = "I started!"


class PollingRunner:
    """Pulls updates from Telegram and hands them to the MessageHandler.

    The update offset lives in memory only, so after a restart Telegram
    redelivers anything that was not acknowledged by a previous poll.
    """

    def __init__(
        self,
        client: TelegramClient | None = None,
        settings: TelegramConfig | None = None,
        handler: MessageHandler | None = None,
        notion_settings: NotionConfig | None = None,
    ) -> None:
        """Initialise the polling runner.

        :param client: Telegram client. Built from settings when omitted.
        :param settings: Telegram settings. Loaded from the environment when omitted.
        :param handler: Update handler. Built against the Notion database when omitted.
        :param notion_settings: Only used to build the default handler.
        """
        self._settings = settings or get_telegram_settings()
        self._client = client or TelegramClient(
            bot_token=self._settings.bot_token,
            chat_id=self._settings.owner_id,
            poll_timeout=self._settings.poll_timeout,
        )
        self._handler = handler or self._build_handler(notion_settings or get_notion_settings())
        self._offset: int | None = None
        self._running = False
        self._error_streak = 0

    def _build_handler(self, notion_settings: NotionConfig) -> MessageHandler:
        notion = NotionClient(token=notion_settings.integration_secret)
        return MessageHandler(
            settings=self._settings,
            telegram_client=self._client,
            repository=TaskRepository(notion, notion_settings.database_id),
        )

    def run(self) -> None:
        """Announce the bot, then poll until SIGINT or SIGTERM."""
        self._running = True
        self._install_signal_handlers()
        logger.info(
            f"Polling started: poll_timeout={self._settings.poll_timeout}s, "
            f"send_policy={self._settings.send_policy}, "
            f"task_keyboard={self._settings.task_keyboard}"
        )

        try:
            self._announce_startup()
            while self._running:
                self._poll_once()
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            logger.info("Polling stopped")

    def stop(self) -> None:
        """Finish the current poll and leave the loop."""
        self._running = False

    def _install_signal_handlers(self) -> None:
        def on_signal(signum: int, frame: FrameType | None) -> None:
            logger.info(f"Received {signal.Signals(signum).name}, shutting down")
            self.stop()

        signal.signal(signal.SIGINT, on_signal)
        signal.signal(signal.SIGTERM, on_signal)

    def _announce_startup(self) -> None:
        try:
            self._client.set_my_commands(COMMANDS)
            self._client.send_message(STARTUP_MESSAGE, reply_markup=main_keyboard())
        except TelegramClientError:
            logger.exception("Could not announce startup to the owner")

    def _poll_once(self) -> None:
        """Fetch one batch of updates and dispatch each of them."""
        try:
            updates = self._client.get_updates(offset=self._offset)
        except TelegramClientError as e:
            self._on_poll_error(e)
            return

        self._error_streak = 0
        for update in updates:
            self._dispatch(update)
            # Acknowledged on the next poll, even if handling failed
            self._offset = update.update_id + 1

    def _dispatch(self, update: TelegramUpdate) -> None:
        """Handle one update. Failures are logged and never reach the chat."""
        try:
            self._handler.handle_update(update)
        except UnauthorisedUserError as e:
            logger.warning(f"Rejected update {update.update_id} from user {e.user_id}")
        except CallbackDataError as e:
            logger.error(f"Rejected update {update.update_id}: {e}")
        except Exception:
            logger.exception(f"Failed to handle update {update.update_id}")

    def _on_poll_error(self, error: TelegramClientError) -> None:
        """Sleep before the next poll, longer once errors keep repeating."""
        self._error_streak += 1
        logger.warning(f"Polling failed ({self._error_streak} in a row): {error}")

        if self._error_streak < self._settings.max_consecutive_errors:
            time.sleep(self._settings.error_retry_delay)
            return

        logger.error(
            f"{self._error_streak} polling failures in a row, "
            f"pausing for {self._settings.backoff_delay}s"
        )
        time.sleep(self._settings.backoff_delay)
        self._error_streak = 0


def main() -> None:
    """Run the bot until interrupted.

    Exits with status 1 when required settings are missing or invalid.
    """
    load_dotenv(ENV_FILE)
    configure_logging()

    try:
        get_telegram_settings()
        get_notion_settings()
    except ValidationError as e:
        logger.error(f"Invalid or missing configuration:\n{e}")
        sys.exit(1)

    PollingRunner().run()


if __name__ == "__main__":
    main()
