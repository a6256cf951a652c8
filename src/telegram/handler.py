"""Command and callback dispatch for the Telegram task bot."""

from __future__ import annotations

import concurrent.futures
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING

from src.notion.tasks import tasks_due_on, tasks_with_tag, unscheduled_tasks
from src.telegram.callbacks import CallbackAction, ParsedCallback, parse_callback_data
from src.telegram.client import TelegramClientError
from src.telegram.messages import (
    render_task_message,
    schedule_keyboard,
    tags_keyboard,
    task_keyboard,
)
from src.telegram.models import BotCommand
from src.telegram.utils.config import SendPolicy
from src.telegram.utils.formatting import format_message

if TYPE_CHECKING:
    from src.notion.models import Task
    from src.notion.tasks import TaskRepository
    from src.telegram.client import TelegramClient
    from src.telegram.models import (
        CallbackQuery,
        TelegramMessageInfo,
        TelegramUpdate,
        TelegramUser,
    )
    from src.telegram.utils.config import TelegramConfig

logger = logging.getLogger(__name__)

# Pattern to match Telegram commands (e.g., /today, /all@my_bot)
# Captures: group 1 = command name, group 2 = optional args (may be None)
COMMAND_PATTERN = re.compile(r"^/([a-zA-Z_]+)(?:@\w+)?(?:\s+(.*))?$", re.DOTALL)

COMMANDS: list[BotCommand] = [
    BotCommand(command="start", description="Get started with the bot"),
    BotCommand(command="all", description="List all tasks"),
    BotCommand(command="today", description="List today's tasks"),
    BotCommand(command="unscheduled", description="List unscheduled tasks"),
    BotCommand(command="tags", description="List tags"),
]

START_MESSAGE = "Type (or press) /all to start.\n\n" + "\n".join(
    f"- /{c.command}: {c.description}" for c in COMMANDS if c.command != "start"
)

DENIAL_MESSAGE = "You are not allowed to use this bot. Maybe later..."

NO_CONTENT_MESSAGE = "No content"


@dataclass
class ParsedCommand:
    """Parsed Telegram command."""

    name: str
    args: str | None


def parse_command(text: str) -> ParsedCommand | None:
    """Parse a Telegram command from message text.

    :param text: The message text to parse.
    :returns: ParsedCommand if text starts with a command, None otherwise.
    """
    match = COMMAND_PATTERN.match(text.strip())
    if match:
        return ParsedCommand(
            name=match.group(1).lower(),
            args=match.group(2).strip() if match.group(2) else None,
        )
    return None


class UnauthorisedUserError(Exception):
    """Raised when an update comes from someone other than the owner."""

    def __init__(self, user_id: str | None) -> None:
        """Initialise the error.

        :param user_id: The sender's user ID, if known.
        """
        self.user_id = user_id
        super().__init__(f"Unauthorised user: {user_id}")


class MessageHandler:
    """Routes Telegram commands and button presses to task operations.

    Responsibilities:
    - Enforce the single-owner check on every command and callback
    - Fetch, filter and render tasks
    - Send task messages and attach their action rows
    - Reschedule tasks and edit their messages in place
    """

    def __init__(
        self,
        settings: TelegramConfig,
        telegram_client: TelegramClient,
        repository: TaskRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialise the message handler.

        :param settings: Telegram settings.
        :param telegram_client: Client used to send and edit messages. Its
            default chat should be the owner's chat.
        :param repository: Task access for the configured Notion database.
        :param today: Returns the current local calendar day.
        """
        self._settings = settings
        self._client = telegram_client
        self._repository = repository
        self._today = today

    def handle_update(self, update: TelegramUpdate) -> None:
        """Handle a Telegram update.

        :param update: The Telegram update to process.
        :raises UnauthorisedUserError: If the sender is not the owner.
        :raises CallbackDataError: If a button carries malformed data.
        """
        if update.callback_query is not None:
            self._handle_callback(update.callback_query)
        elif update.message is not None:
            self._handle_message(update.message)
        else:
            logger.debug(f"Ignoring update without message: update_id={update.update_id}")

    # Authorisation

    def _is_owner(self, user: TelegramUser | None) -> bool:
        return user is not None and str(user.id) == self._settings.owner_id

    def _ensure_owner(self, user: TelegramUser | None, reply_chat_id: str) -> None:
        """Reject the update unless it comes from the owner.

        Non-owners get a denial reply and the owner gets an alert.

        :param user: The sender of the update.
        :param reply_chat_id: Chat to send the denial to.
        :raises UnauthorisedUserError: If the sender is not the owner.
        """
        if self._is_owner(user):
            return

        user_id = str(user.id) if user is not None else None
        logger.warning(f"Someone tried to use the bot: user_id={user_id}")

        try:
            self._client.send_message(DENIAL_MESSAGE, chat_id=reply_chat_id, parse_mode="")
        except TelegramClientError:
            logger.exception(f"Failed to send denial to chat_id={reply_chat_id}")

        try:
            text, parse_mode = format_message(self._format_intruder_alert(user))
            self._client.send_message(text, parse_mode=parse_mode)
        except TelegramClientError:
            logger.exception("Failed to alert owner about unauthorised use")

        raise UnauthorisedUserError(user_id)

    @staticmethod
    def _format_intruder_alert(user: TelegramUser | None) -> str:
        lines = [
            "**Someone tried to use this bot**",
            "",
            f"Time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
        ]
        if user is None:
            lines.append("Sender: unknown")
        else:
            lines.append(f"ID: {user.id}")
            lines.append(f"Username: {user.username or 'none'}")
            lines.append(f"Name: {user.full_name}")
        return "\n".join(lines)

    # Commands

    def _handle_message(self, message: TelegramMessageInfo) -> None:
        chat_id = str(message.chat.id)
        text = message.text

        # Ignore messages without text (e.g., photos, stickers)
        if not text:
            logger.debug(f"Ignoring message without text: chat_id={chat_id}")
            return

        self._ensure_owner(message.from_user, chat_id)

        command = parse_command(text)
        if command is None:
            logger.debug(f"Ignoring non-command message: chat_id={chat_id}")
            return

        # Command dispatch table - add new commands here
        handlers: dict[str, Callable[[], None]] = {
            "start": self._cmd_start,
            "all": self._cmd_all,
            "today": self._cmd_today,
            "unscheduled": self._cmd_unscheduled,
            "tags": self._cmd_tags,
        }

        handler = handlers.get(command.name)
        if handler is None:
            logger.debug(f"Unknown command: /{command.name}")
            return

        logger.info(f"Handle '{command.name}' command")
        handler()

    def _cmd_start(self) -> None:
        text, parse_mode = format_message(START_MESSAGE)
        self._client.send_message(text, parse_mode=parse_mode)

    def _cmd_all(self) -> None:
        self.send_tasks(self._repository.list_tasks())

    def _cmd_today(self) -> None:
        tasks = tasks_due_on(self._repository.list_tasks(), self._today())
        self._client.send_message(f"{len(tasks)} tasks for today.")
        self.send_tasks(tasks)

    def _cmd_unscheduled(self) -> None:
        tasks = unscheduled_tasks(self._repository.list_tasks())
        self._client.send_message(f"{len(tasks)} unscheduled tasks.")
        self.send_tasks(tasks)

    def _cmd_tags(self) -> None:
        tags = self._repository.list_tags()
        if not tags:
            self._client.send_message("No tags found.")
            return
        self._client.send_message("Filter tasks by tag:", reply_markup=tags_keyboard(tags))

    # Callbacks

    def _handle_callback(self, callback_query: CallbackQuery) -> None:
        # Stop the button's loading indicator whatever happens next
        try:
            self._client.answer_callback_query(callback_query.id)
        except TelegramClientError:
            logger.warning(f"Failed to answer callback query: id={callback_query.id}")

        if callback_query.message is not None:
            reply_chat_id = str(callback_query.message.chat.id)
        else:
            reply_chat_id = str(callback_query.from_user.id)
        self._ensure_owner(callback_query.from_user, reply_chat_id)

        if not callback_query.data:
            logger.warning(f"Callback query without data: id={callback_query.id}")
            return

        parsed = parse_callback_data(callback_query.data)
        if parsed is None:
            return

        handlers: dict[CallbackAction, Callable[[ParsedCallback], None]] = {
            CallbackAction.SCHEDULE: self._cb_schedule,
            CallbackAction.SET_DATE: self._cb_set_date,
            CallbackAction.TAG: self._cb_tag,
            CallbackAction.TASK: self._cb_task,
        }

        logger.info(f"Handle '{parsed.action}' callback")
        handlers[parsed.action](parsed)

    def _cb_schedule(self, callback: ParsedCallback) -> None:
        self._client.edit_message_reply_markup(
            callback.message_id,
            schedule_keyboard(callback.task_id, callback.message_id, self._today()),
        )

    def _cb_set_date(self, callback: ParsedCallback) -> None:
        task = self._repository.set_task_date(callback.task_id, callback.scheduled_for)
        logger.info(f"Rescheduled task: task_id={task.id}, date={task.date}")

        self._client.edit_message_text(
            self._render(task),
            callback.message_id,
            reply_markup=task_keyboard(task, callback.message_id, self._settings.task_keyboard),
        )

    def _cb_tag(self, callback: ParsedCallback) -> None:
        self.send_tasks(tasks_with_tag(self._repository.list_tasks(), callback.tag))

    def _cb_task(self, callback: ParsedCallback) -> None:
        content = self._repository.get_content(callback.task_id)
        self._client.send_message(content if content.strip() else NO_CONTENT_MESSAGE)

    # Task messages

    def _render(self, task: Task) -> str:
        return render_task_message(
            task,
            self._repository.get_content(task.id),
            content_placeholder=self._settings.content_placeholder,
        )

    def send_task(self, task: Task) -> int:
        """Send one task message and attach its action row.

        The action row embeds the new message's ID, so it is added by editing
        the message after it has been sent.

        :param task: The task to send.
        :returns: ID of the sent message.
        :raises TelegramClientError: If sending or editing fails.
        """
        result = self._client.send_message(self._render(task))
        self._client.edit_message_reply_markup(
            result.message_id,
            task_keyboard(task, result.message_id, self._settings.task_keyboard),
        )
        return result.message_id

    def send_tasks(self, tasks: list[Task]) -> None:
        """Send a message per task according to the configured send policy.

        A failure for one task is logged and does not stop the others.

        :param tasks: Tasks to send.
        """
        if not tasks:
            return

        if self._settings.send_policy == SendPolicy.PARALLEL:
            with concurrent.futures.ThreadPoolExecutor(
                max_workers=self._settings.max_workers
            ) as executor:
                futures = {executor.submit(self.send_task, task): task for task in tasks}
                for future in concurrent.futures.as_completed(futures):
                    self._log_send_failure(futures[future], future.exception())
            return

        for task in tasks:
            try:
                self.send_task(task)
            except Exception as e:
                self._log_send_failure(task, e)

    @staticmethod
    def _log_send_failure(task: Task, error: BaseException | None) -> None:
        if error is not None:
            logger.error(f"Failed to send task: task_id={task.id}", exc_info=error)
