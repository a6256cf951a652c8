"""Shared fixtures for Notion tests."""

from datetime import date
from typing import Any


def make_page(
    page_id: str = "page-123",
    name: str | list[str] = "My Task",
    icon: dict[str, Any] | None = None,
    status: str = "Not started",
    due: date | str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Build a raw Notion page as returned by the database query endpoint."""
    fragments = [name] if isinstance(name, str) else name
    if isinstance(due, date):
        due = due.isoformat()

    return {
        "object": "page",
        "id": page_id,
        "created_time": "2024-01-15T09:30:00.000Z",
        "icon": icon,
        "url": f"https://www.notion.so/{page_id}",
        "properties": {
            "Name": {"type": "title", "title": [{"plain_text": f} for f in fragments]},
            "Status": {"type": "status", "status": {"name": status}},
            "Date": {"type": "date", "date": {"start": due} if due else None},
            "Tags": {
                "type": "multi_select",
                "multi_select": [{"name": tag} for tag in tags or []],
            },
        },
    }


def make_database(tags: list[str]) -> dict[str, Any]:
    """Build a raw Notion database schema with the given tag options."""
    return {
        "object": "database",
        "id": "db-123",
        "properties": {
            "Name": {"type": "title", "title": {}},
            "Tags": {
                "type": "multi_select",
                "multi_select": {"options": [{"name": tag, "color": "blue"} for tag in tags]},
            },
        },
    }


def make_block(block_type: str, *texts: str, **extra: Any) -> dict[str, Any]:
    """Build a raw Notion block carrying one rich text run per text."""
    return {
        "object": "block",
        "type": block_type,
        block_type: {
            "rich_text": [{"type": "text", "plain_text": text} for text in texts],
            **extra,
        },
    }
