"""Enums for Notion task field values and block kinds."""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Valid status values for tasks."""

    NOT_STARTED = "Not started"
    IN_PROGRESS = "In progress"
    DONE = "Done"


class BlockType(StrEnum):
    """Notion block kinds the renderer understands."""

    TO_DO = "to_do"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    PARAGRAPH = "paragraph"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TOGGLE = "toggle"
    QUOTE = "quote"
    CALLOUT = "callout"
    SYNCED_BLOCK = "synced_block"
    TEMPLATE = "template"
    COLUMN = "column"
    CHILD_PAGE = "child_page"
    CHILD_DATABASE = "child_database"
    TABLE = "table"
