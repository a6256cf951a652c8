"""Rendering of task messages and their inline keyboards."""

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from src.notion.models import Task
from src.telegram.callbacks import schedule_data, set_date_data, tag_data, task_data
from src.telegram.models import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)
from src.telegram.utils.config import TaskKeyboard
from src.telegram.utils.formatting import bold_markdown

# Number of tag buttons per keyboard row
TAGS_PER_ROW = 4

# strftime pattern for the date line, e.g. "Mon Oct 19 2026"
DATE_LINE_FORMAT = "%a %b %d %Y"


def render_task_message(task: Task, content: str, *, content_placeholder: bool = True) -> str:
    """Render a task as a legacy Markdown message.

    :param task: The task to render.
    :param content: The rendered page content, possibly empty.
    :param content_placeholder: Replace blank content with an "Add content" link.
    :returns: Message text.
    """
    if content_placeholder and not content.strip():
        content = f"[Add content]({task.url})"

    message = f"{task.icon} {bold_markdown(task.name)}\n\n{content}"
    if task.date is not None:
        message += f"\n\nDate: {task.date.strftime(DATE_LINE_FORMAT)}"
    return message


def task_keyboard(task: Task, message_id: int, variant: TaskKeyboard) -> InlineKeyboardMarkup:
    """Build the action row for a sent task message.

    :param task: The task the message shows.
    :param message_id: ID of the message the keyboard is attached to.
    :param variant: Which action row to build.
    :returns: Inline keyboard with a single row.
    """
    if variant == TaskKeyboard.SELECT:
        row = [InlineKeyboardButton(text="Show content", callback_data=task_data(task.id))]
    else:
        row = [
            InlineKeyboardButton(text="Go to task", url=task.url),
            InlineKeyboardButton(text="Reschedule", callback_data=schedule_data(task.id, message_id)),
        ]
    return InlineKeyboardMarkup(inline_keyboard=[row])


def date_choices(today: date) -> list[tuple[str, date]]:
    """Dates offered when rescheduling a task.

    :param today: The current calendar day.
    :returns: Labelled dates for today, tomorrow, next week and next month.
    """
    tomorrow = today + timedelta(days=1)
    return [
        ("Today", today),
        ("Tomorrow", tomorrow),
        ("Next week", tomorrow + timedelta(days=6)),
        # Same day next month, clamped to the month's last day
        ("Next month", today + relativedelta(months=1)),
    ]


def schedule_keyboard(task_id: str, message_id: int, today: date) -> InlineKeyboardMarkup:
    """Build the date-choice keyboard that replaces a task's action row.

    :param task_id: The task being rescheduled.
    :param message_id: ID of the task message being edited.
    :param today: The current calendar day.
    :returns: Inline keyboard with two rows of two date buttons.
    """
    buttons = [
        InlineKeyboardButton(text=label, callback_data=set_date_data(message_id, task_id, day))
        for label, day in date_choices(today)
    ]
    return InlineKeyboardMarkup(inline_keyboard=[buttons[:2], buttons[2:]])


def tags_keyboard(tags: list[str]) -> InlineKeyboardMarkup:
    """Build a grid of tag filter buttons.

    :param tags: Tag names.
    :returns: Inline keyboard with up to TAGS_PER_ROW buttons per row.
    """
    buttons = [InlineKeyboardButton(text=tag, callback_data=tag_data(tag)) for tag in tags]
    rows = [buttons[i : i + TAGS_PER_ROW] for i in range(0, len(buttons), TAGS_PER_ROW)]
    return InlineKeyboardMarkup(inline_keyboard=rows)


def main_keyboard() -> ReplyKeyboardMarkup:
    """Reply keyboard with shortcuts for the list commands."""
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text="/all"), KeyboardButton(text="/today")],
            [KeyboardButton(text="/unscheduled"), KeyboardButton(text="/tags")],
        ]
    )
