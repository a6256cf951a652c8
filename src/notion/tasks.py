"""Task access bound to a single Notion database."""

import logging
from datetime import date

from src.notion.client import NotionClient
from src.notion.documents import render_document
from src.notion.exceptions import NotionClientError, TaskParseError
from src.notion.models import Task
from src.notion.parser import (
    build_date_properties,
    build_tasks_query,
    parse_database_tags,
    parse_page_to_task,
)

logger = logging.getLogger(__name__)


class TaskRepository:
    """Reads and reschedules tasks stored in one Notion database.

    Listing operations degrade to empty results on upstream failures so that
    chat handlers can always reply.
    """

    def __init__(self, client: NotionClient, database_id: str) -> None:
        """Initialise the repository.

        :param client: Notion API client.
        :param database_id: ID of the tasks database.
        """
        self._client = client
        self._database_id = database_id

    def list_tasks(self) -> list[Task]:
        """Fetch all titled tasks, sorted by date ascending.

        :returns: Parsed tasks, or an empty list if the fetch or parse fails.
        """
        try:
            pages = self._client.query_database(self._database_id, build_tasks_query())
            tasks = [parse_page_to_task(page) for page in pages]
        except (NotionClientError, TaskParseError):
            logger.exception(f"Failed to list tasks from database: {self._database_id}")
            return []

        logger.info(f"Found {len(tasks)} tasks: {', '.join(t.name for t in tasks)}")
        return tasks

    def list_tags(self) -> list[str]:
        """Fetch the tag options defined on the database schema.

        :returns: Tag names, or an empty list if the fetch or parse fails.
        """
        try:
            tags = parse_database_tags(self._client.get_database(self._database_id))
        except (NotionClientError, TaskParseError):
            logger.exception(f"Failed to list tags from database: {self._database_id}")
            return []

        logger.info(f"Found {len(tags)} tags: {', '.join(tags)}")
        return tags

    def set_task_date(self, task_id: str, value: date | None) -> Task:
        """Set a task's date and return the updated task.

        :param task_id: The Notion page ID of the task.
        :param value: New date, or None to unschedule.
        :returns: The task as returned by Notion after the update.
        :raises NotionClientError: If the update request fails.
        :raises TaskParseError: If the returned page cannot be parsed.
        """
        page = self._client.update_page(task_id, build_date_properties(value))
        return parse_page_to_task(page)

    def get_content(self, task_id: str) -> str:
        """Render the task page's content.

        :param task_id: The Notion page ID of the task.
        :returns: Rendered content, empty on failure.
        """
        return render_document(self._client, task_id)


def tasks_due_on(tasks: list[Task], day: date) -> list[Task]:
    """Tasks scheduled for the given calendar day."""
    return [task for task in tasks if task.date == day]


def unscheduled_tasks(tasks: list[Task]) -> list[Task]:
    """Tasks without a date."""
    return [task for task in tasks if task.date is None]


def tasks_with_tag(tasks: list[Task], tag: str) -> list[Task]:
    """Tasks carrying the given tag."""
    return [task for task in tasks if tag in task.tags]
