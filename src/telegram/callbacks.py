"""Callback data encoding and parsing for inline keyboard buttons.

Callback data is a colon-delimited string ``action:arg1[:arg2[:arg3]]``:

- ``schedule:<task_id>:<message_id>``
- ``set_date:<message_id>:<task_id>:<iso_date>``
- ``tag:<tag_name>``
- ``task:<task_id>``
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

logger = logging.getLogger(__name__)

CALLBACK_SEPARATOR = ":"

# Telegram rejects buttons whose callback data exceeds this many bytes
MAX_CALLBACK_DATA_BYTES = 64


class CallbackAction(StrEnum):
    """Actions carried by inline keyboard buttons."""

    SCHEDULE = "schedule"
    SET_DATE = "set_date"
    TAG = "tag"
    TASK = "task"


class CallbackDataError(ValueError):
    """Raised when callback data has a known action but malformed arguments."""

    def __init__(self, data: str, reason: str) -> None:
        """Initialise the error.

        :param data: The raw callback data.
        :param reason: What was wrong with it.
        """
        self.data = data
        super().__init__(f"Invalid callback data {data!r}: {reason}")


@dataclass(frozen=True)
class ParsedCallback:
    """Parsed callback data.

    Only the fields relevant to ``action`` are set.
    """

    action: CallbackAction
    task_id: str | None = None
    message_id: int | None = None
    scheduled_for: date | None = None
    tag: str | None = None


def parse_callback_data(data: str) -> ParsedCallback | None:
    """Parse callback data from an inline keyboard button.

    :param data: Callback data string.
    :returns: The parsed callback, or None if the action is not recognised.
    :raises CallbackDataError: If the action is known but its arguments are malformed.
    """
    prefix, _, rest = data.partition(CALLBACK_SEPARATOR)

    try:
        action = CallbackAction(prefix)
    except ValueError:
        logger.debug(f"Ignoring callback with unknown action: {data}")
        return None

    if action == CallbackAction.TAG:
        # Tag names may themselves contain the separator
        if not rest:
            raise CallbackDataError(data, "missing tag name")
        return ParsedCallback(action=action, tag=rest)

    parts = rest.split(CALLBACK_SEPARATOR) if rest else []

    if action == CallbackAction.TASK:
        if len(parts) != 1 or not parts[0]:
            raise CallbackDataError(data, "expected task:<task_id>")
        return ParsedCallback(action=action, task_id=parts[0])

    if action == CallbackAction.SCHEDULE:
        if len(parts) != 2 or not parts[0]:  # noqa: PLR2004
            raise CallbackDataError(data, "expected schedule:<task_id>:<message_id>")
        return ParsedCallback(
            action=action,
            task_id=parts[0],
            message_id=_parse_message_id(data, parts[1]),
        )

    if len(parts) != 3 or not parts[1]:  # noqa: PLR2004
        raise CallbackDataError(data, "expected set_date:<message_id>:<task_id>:<iso_date>")
    try:
        scheduled_for = date.fromisoformat(parts[2])
    except ValueError as e:
        raise CallbackDataError(data, f"unparseable date {parts[2]!r}") from e
    return ParsedCallback(
        action=action,
        message_id=_parse_message_id(data, parts[0]),
        task_id=parts[1],
        scheduled_for=scheduled_for,
    )


def _parse_message_id(data: str, raw: str) -> int:
    try:
        message_id = int(raw)
    except ValueError as e:
        raise CallbackDataError(data, f"can't parse message id {raw!r}") from e
    if message_id <= 0:
        raise CallbackDataError(data, f"message id must be positive, got {message_id}")
    return message_id


def _build(*parts: object) -> str:
    data = CALLBACK_SEPARATOR.join(str(part) for part in parts)
    if len(data.encode("utf-8")) > MAX_CALLBACK_DATA_BYTES:
        logger.warning(f"Callback data exceeds {MAX_CALLBACK_DATA_BYTES} bytes: {data}")
    return data


def schedule_data(task_id: str, message_id: int) -> str:
    """Build callback data for the reschedule button."""
    return _build(CallbackAction.SCHEDULE, task_id, message_id)


def set_date_data(message_id: int, task_id: str, scheduled_for: date) -> str:
    """Build callback data for a date choice button."""
    return _build(CallbackAction.SET_DATE, message_id, task_id, scheduled_for.isoformat())


def tag_data(tag: str) -> str:
    """Build callback data for a tag filter button."""
    return _build(CallbackAction.TAG, tag)


def task_data(task_id: str) -> str:
    """Build callback data for a task selection button."""
    return _build(CallbackAction.TASK, task_id)
