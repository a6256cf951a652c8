"""Notion API integration module for querying tasks and rendering page content."""

from src.notion.client import NotionClient
from src.notion.documents import render_document
from src.notion.exceptions import NotionClientError, TaskParseError
from src.notion.models import Task
from src.notion.tasks import TaskRepository

__all__ = [
    "NotionClient",
    "NotionClientError",
    "Task",
    "TaskParseError",
    "TaskRepository",
    "render_document",
]
