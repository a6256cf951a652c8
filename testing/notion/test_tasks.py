"""Tests for Notion tasks module."""

import unittest
from datetime import date, timedelta
from unittest.mock import MagicMock

from src.notion.exceptions import NotionClientError
from src.notion.parser import build_tasks_query, parse_page_to_task
from src.notion.tasks import (
    TaskRepository,
    tasks_due_on,
    tasks_with_tag,
    unscheduled_tasks,
)
from testing.notion.fixtures import make_block, make_database, make_page

TODAY = date(2025, 6, 10)


class TestTaskRepository(unittest.TestCase):
    """Tests for TaskRepository class."""

    def setUp(self) -> None:
        """Set up a repository over a mocked Notion client."""
        self.mock_client = MagicMock()
        self.repository = TaskRepository(self.mock_client, "db-123")

    def test_list_tasks(self) -> None:
        """Test that pages are queried with the fixed query and parsed."""
        self.mock_client.query_database.return_value = [
            make_page(page_id="page-1", name="First", due=TODAY),
            make_page(page_id="page-2", name="Second"),
        ]

        tasks = self.repository.list_tasks()

        self.assertEqual([t.id for t in tasks], ["page-1", "page-2"])
        self.mock_client.query_database.assert_called_once_with("db-123", build_tasks_query())

    def test_list_tasks_client_error_returns_empty(self) -> None:
        """Test that upstream failures degrade to an empty list."""
        self.mock_client.query_database.side_effect = NotionClientError("500")

        with self.assertLogs("src.notion.tasks", level="ERROR"):
            self.assertEqual(self.repository.list_tasks(), [])

    def test_list_tasks_parse_error_returns_empty(self) -> None:
        """Test that a page off the schema degrades to an empty list."""
        broken = make_page()
        del broken["properties"]["Status"]
        self.mock_client.query_database.return_value = [make_page(), broken]

        with self.assertLogs("src.notion.tasks", level="ERROR"):
            self.assertEqual(self.repository.list_tasks(), [])

    def test_list_tags(self) -> None:
        """Test that tag options come from the database schema."""
        self.mock_client.get_database.return_value = make_database(["Work", "Home"])

        self.assertEqual(self.repository.list_tags(), ["Work", "Home"])
        self.mock_client.get_database.assert_called_once_with("db-123")

    def test_list_tags_error_returns_empty(self) -> None:
        """Test that schema fetch failures degrade to an empty list."""
        self.mock_client.get_database.side_effect = NotionClientError("401")

        with self.assertLogs("src.notion.tasks", level="ERROR"):
            self.assertEqual(self.repository.list_tags(), [])

    def test_set_task_date(self) -> None:
        """Test that the date is written and the returned page parsed."""
        self.mock_client.update_page.return_value = make_page(page_id="page-1", due=TODAY)

        task = self.repository.set_task_date("page-1", TODAY)

        self.assertEqual(task.date, TODAY)
        self.mock_client.update_page.assert_called_once_with(
            "page-1", {"Date": {"date": {"start": "2025-06-10"}}}
        )

    def test_set_task_date_propagates_errors(self) -> None:
        """Test that update failures reach the caller."""
        self.mock_client.update_page.side_effect = NotionClientError("409")

        with self.assertRaises(NotionClientError):
            self.repository.set_task_date("page-1", TODAY)

    def test_get_content(self) -> None:
        """Test that content is rendered from the task page's blocks."""
        self.mock_client.get_block_children.return_value = [make_block("quote", "Hi")]

        self.assertEqual(self.repository.get_content("page-1"), "> Hi")
        self.mock_client.get_block_children.assert_called_once_with("page-1")


class TestTaskFilters(unittest.TestCase):
    """Tests for the task list filters."""

    def setUp(self) -> None:
        """Build tasks covering yesterday, today, tomorrow and no date."""
        self.yesterday = parse_page_to_task(
            make_page(page_id="y", due=TODAY - timedelta(days=1), tags=["Home"])
        )
        self.today = parse_page_to_task(make_page(page_id="t", due=TODAY, tags=["Work"]))
        self.tomorrow = parse_page_to_task(
            make_page(page_id="m", due=TODAY + timedelta(days=1), tags=["Work", "Home"])
        )
        self.unscheduled = parse_page_to_task(make_page(page_id="u"))
        self.tasks = [self.yesterday, self.today, self.tomorrow, self.unscheduled]

    def test_tasks_due_on(self) -> None:
        """Test that only tasks dated exactly on the day are kept."""
        self.assertEqual(tasks_due_on(self.tasks, TODAY), [self.today])

    def test_unscheduled_tasks(self) -> None:
        """Test that only tasks without a date are kept."""
        self.assertEqual(unscheduled_tasks(self.tasks), [self.unscheduled])

    def test_tasks_with_tag_keeps_order(self) -> None:
        """Test that tag filtering keeps the source order."""
        self.assertEqual(tasks_with_tag(self.tasks, "Home"), [self.yesterday, self.tomorrow])

    def test_tasks_with_unknown_tag(self) -> None:
        """Test that an unused tag matches nothing."""
        self.assertEqual(tasks_with_tag(self.tasks, "Garden"), [])


if __name__ == "__main__":
    unittest.main()
