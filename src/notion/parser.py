"""Parser functions for Notion API responses.

This module handles the conversion between raw Notion API responses
and the Pydantic models used by the application, plus the request
payloads sent back to Notion.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from src.notion.exceptions import TaskParseError
from src.notion.models import Task

# Prefix used when a page icon is not an emoji (e.g. uploaded file or external URL)
UNKNOWN_ICON_PREFIX = "Unknown type: "


class FieldType(StrEnum):
    """Notion property types used by the tasks database."""

    TITLE = "title"
    STATUS = "status"
    DATE = "date"
    MULTI_SELECT = "multi_select"


@dataclass(frozen=True)
class TaskField:
    """Metadata for a task field mapping to Notion properties."""

    notion_name: str
    field_type: FieldType


# Field registry for the tasks database schema
TASK_FIELDS: dict[str, TaskField] = {
    "name": TaskField("Name", FieldType.TITLE),
    "status": TaskField("Status", FieldType.STATUS),
    "date": TaskField("Date", FieldType.DATE),
    "tags": TaskField("Tags", FieldType.MULTI_SELECT),
}


def parse_page_to_task(page: dict[str, Any]) -> Task:
    """Parse a Notion page response into a Task model.

    :param page: Raw page object from Notion API response.
    :returns: Parsed Task with extracted properties.
    :raises TaskParseError: If the page does not match the tasks schema.
    """
    try:
        properties = page["properties"]

        return Task(
            id=page["id"],
            name=_extract_title(_property(properties, "name")),
            icon=_extract_icon(page.get("icon")),
            status=_extract_status(_property(properties, "status")),
            date=_extract_date(_property(properties, "date")),
            created_time=page["created_time"],
            tags=_extract_multi_select(_property(properties, "tags")),
            url=page["url"],
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        # pydantic's ValidationError is a ValueError subclass
        page_id = page.get("id") if isinstance(page, dict) else None
        raise TaskParseError(f"Page {page_id} does not match the tasks schema: {e!r}") from e


def parse_database_tags(database: dict[str, Any]) -> list[str]:
    """Extract the option names of the Tags property from a database schema.

    :param database: Raw database object from Notion API response.
    :returns: Tag names in the order Notion lists them.
    :raises TaskParseError: If the schema has no Tags multi-select property.
    """
    notion_name = TASK_FIELDS["tags"].notion_name
    try:
        options = database["properties"][notion_name]["multi_select"]["options"]
        return [option["name"] for option in options]
    except (KeyError, TypeError) as e:
        raise TaskParseError(f"Database schema has no usable {notion_name} property") from e


def _property(properties: dict[str, Any], field_name: str) -> dict[str, Any]:
    """Look up a required property group by its registry name."""
    return properties[TASK_FIELDS[field_name].notion_name]


def _extract_icon(icon: dict[str, Any] | None) -> str:
    """Extract the emoji from a page icon."""
    if not icon:
        return ""
    if icon["type"] == "emoji":
        return icon["emoji"]
    return f"{UNKNOWN_ICON_PREFIX}{icon['type']}"


def _extract_title(prop: dict[str, Any]) -> str:
    """Join the plain text fragments of a title property."""
    return " ".join(item["plain_text"] for item in prop["title"])


def _extract_status(prop: dict[str, Any]) -> str:
    """Extract status name from a status property."""
    return prop["status"]["name"]


def _extract_date(prop: dict[str, Any]) -> date | None:
    """Extract the start date from a date property.

    Date-time starts are truncated to their calendar date in the host's local
    time zone.
    """
    date_obj = prop["date"]
    if date_obj is None:
        return None
    start = date_obj.get("start")
    if start is None:
        return None
    if "T" in start:
        return datetime.fromisoformat(start).astimezone().date()
    return date.fromisoformat(start)


def _extract_multi_select(prop: dict[str, Any]) -> list[str]:
    """Extract option names from a multi-select property."""
    return [option["name"] for option in prop["multi_select"]]


def build_tasks_query() -> dict[str, Any]:
    """Build the fixed query body for listing tasks.

    Only pages with a non-empty title are returned, sorted by date ascending.

    :returns: Notion API query body.
    """
    return {
        "filter": {
            "or": [
                {
                    "property": TASK_FIELDS["name"].notion_name,
                    "title": {"is_not_empty": True},
                }
            ]
        },
        "sorts": [
            {
                "property": TASK_FIELDS["date"].notion_name,
                "direction": "ascending",
            }
        ],
    }


def build_date_properties(value: date | None) -> dict[str, Any]:
    """Build the properties payload that sets or clears the task date.

    :param value: New date, or None to unschedule.
    :returns: Properties object for the page update endpoint.
    """
    notion_name = TASK_FIELDS["date"].notion_name
    if value is None:
        return {notion_name: {"date": None}}
    return {notion_name: {"date": {"start": value.isoformat()}}}

