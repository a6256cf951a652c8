"""Tests for Notion documents module."""

import unittest
from unittest.mock import MagicMock

from src.notion.documents import render_document
from src.notion.exceptions import NotionClientError
from testing.notion.fixtures import make_block


class TestRenderDocument(unittest.TestCase):
    """Tests for render_document function."""

    def setUp(self) -> None:
        """Set up a mocked Notion client."""
        self.mock_client = MagicMock()

    def test_renders_fetched_blocks(self) -> None:
        """Test that the page's blocks are fetched and rendered in order."""
        self.mock_client.get_block_children.return_value = [
            make_block("heading_1", "Notes"),
            make_block("paragraph", "Call back after lunch"),
        ]

        result = render_document(self.mock_client, "page-123")

        self.assertEqual(result, "NOTES\nCall back after lunch")
        self.mock_client.get_block_children.assert_called_once_with("page-123")

    def test_empty_page_renders_empty(self) -> None:
        """Test that a page without blocks renders as an empty string."""
        self.mock_client.get_block_children.return_value = []

        self.assertEqual(render_document(self.mock_client, "page-123"), "")

    def test_client_error_returns_empty(self) -> None:
        """Test that fetch failures are logged and never raised."""
        self.mock_client.get_block_children.side_effect = NotionClientError("404")

        with self.assertLogs("src.notion.documents", level="ERROR"):
            result = render_document(self.mock_client, "page-123")

        self.assertEqual(result, "")

    def test_unexpected_error_returns_empty(self) -> None:
        """Test that any other failure is logged and never raised."""
        self.mock_client.get_block_children.side_effect = RuntimeError("boom")

        with self.assertLogs("src.notion.documents", level="ERROR"):
            result = render_document(self.mock_client, "page-123")

        self.assertEqual(result, "")


if __name__ == "__main__":
    unittest.main()
