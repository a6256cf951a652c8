"""Shared fixtures for Telegram tests."""

from datetime import UTC, date, datetime
from typing import Any

from src.notion.enums import TaskStatus
from src.notion.models import Task
from src.telegram.models import TelegramUpdate

OWNER_ID = 12345
STRANGER_ID = 666


def make_task(
    task_id: str = "page-1",
    name: str = "Buy milk",
    due: date | None = None,
    tags: list[str] | None = None,
    icon: str = "🥛",
) -> Task:
    """Build a parsed task."""
    return Task(
        id=task_id,
        name=name,
        icon=icon,
        status=TaskStatus.NOT_STARTED,
        date=due,
        created_time=datetime(2024, 1, 15, 9, 30, tzinfo=UTC),
        tags=tags or [],
        url=f"https://www.notion.so/{task_id}",
    )


def _user(user_id: int) -> dict[str, Any]:
    return {"id": user_id, "is_bot": False, "first_name": "Sam", "username": f"user{user_id}"}


def make_message_update(
    text: str | None, user_id: int = OWNER_ID, update_id: int = 1
) -> TelegramUpdate:
    """Build an update carrying a private text message."""
    return TelegramUpdate.model_validate(
        {
            "update_id": update_id,
            "message": {
                "message_id": 100,
                "date": 1700000000,
                "chat": {"id": user_id, "type": "private"},
                "from": _user(user_id),
                "text": text,
            },
        }
    )


def make_callback_update(
    data: str | None, user_id: int = OWNER_ID, update_id: int = 1
) -> TelegramUpdate:
    """Build an update carrying an inline button press on message 42."""
    return TelegramUpdate.model_validate(
        {
            "update_id": update_id,
            "callback_query": {
                "id": "cb-1",
                "from": _user(user_id),
                "message": {
                    "message_id": 42,
                    "date": 1700000000,
                    "chat": {"id": user_id, "type": "private"},
                },
                "data": data,
            },
        }
    )
