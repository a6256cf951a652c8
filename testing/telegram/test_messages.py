"""Tests for Telegram task message rendering."""

import unittest
from datetime import date

from src.telegram.messages import (
    date_choices,
    main_keyboard,
    render_task_message,
    schedule_keyboard,
    tags_keyboard,
    task_keyboard,
)
from src.telegram.utils.config import TaskKeyboard
from testing.telegram.fixtures import make_task


class TestRenderTaskMessage(unittest.TestCase):
    """Tests for render_task_message function."""

    def test_unscheduled_task_with_content(self) -> None:
        """Test the header and body of a task without a date."""
        task = make_task(name="Buy milk")

        result = render_task_message(task, "- \\[ ] Semi-skimmed")

        self.assertEqual(result, "🥛 *Buy milk*\n\n- \\[ ] Semi-skimmed")

    def test_scheduled_task_has_date_line(self) -> None:
        """Test that scheduled tasks end with a human-readable date."""
        task = make_task(due=date(2025, 6, 10))

        result = render_task_message(task, "Notes")

        self.assertEqual(result, "🥛 *Buy milk*\n\nNotes\n\nDate: Tue Jun 10 2025")

    def test_title_keeps_a_single_bold_entity(self) -> None:
        """Test that asterisks in the title are dropped and nothing is backslash-escaped."""
        task = make_task(name="fix_bug *now*")

        result = render_task_message(task, "x")

        self.assertTrue(result.startswith("🥛 *fix_bug now*\n\n"))
        self.assertNotIn("\\", result)

    def test_blank_content_gets_placeholder_link(self) -> None:
        """Test that empty pages link to the task so content can be added."""
        task = make_task(task_id="page-9")

        for content in ("", "\n\n", "   "):
            with self.subTest(content=content):
                result = render_task_message(task, content)
                self.assertIn("[Add content](https://www.notion.so/page-9)", result)

    def test_placeholder_can_be_disabled(self) -> None:
        """Test that blank content is kept when the placeholder is off."""
        result = render_task_message(make_task(), "", content_placeholder=False)

        self.assertEqual(result, "🥛 *Buy milk*\n\n")


class TestTaskKeyboard(unittest.TestCase):
    """Tests for task_keyboard function."""

    def test_reschedule_variant(self) -> None:
        """Test the link and reschedule buttons."""
        markup = task_keyboard(make_task(task_id="page-1"), 42, TaskKeyboard.RESCHEDULE)

        self.assertEqual(
            markup.to_payload(),
            {
                "inline_keyboard": [
                    [
                        {"text": "Go to task", "url": "https://www.notion.so/page-1"},
                        {"text": "Reschedule", "callback_data": "schedule:page-1:42"},
                    ]
                ]
            },
        )

    def test_select_variant(self) -> None:
        """Test the single show-content button."""
        markup = task_keyboard(make_task(task_id="page-1"), 42, TaskKeyboard.SELECT)

        self.assertEqual(
            markup.to_payload(),
            {"inline_keyboard": [[{"text": "Show content", "callback_data": "task:page-1"}]]},
        )


class TestScheduleKeyboard(unittest.TestCase):
    """Tests for date choices and the schedule keyboard."""

    def test_date_choices(self) -> None:
        """Test the offered dates relative to today."""
        choices = date_choices(date(2025, 6, 10))

        self.assertEqual(
            choices,
            [
                ("Today", date(2025, 6, 10)),
                ("Tomorrow", date(2025, 6, 11)),
                ("Next week", date(2025, 6, 17)),
                ("Next month", date(2025, 7, 10)),
            ],
        )

    def test_next_month_is_clamped_to_month_end(self) -> None:
        """Test that the next month choice never skips a month."""
        choices = dict(date_choices(date(2025, 1, 31)))

        self.assertEqual(choices["Next month"], date(2025, 2, 28))
        self.assertEqual(choices["Next week"], date(2025, 2, 7))

    def test_schedule_keyboard_layout(self) -> None:
        """Test two rows of two date buttons carrying the message and task IDs."""
        markup = schedule_keyboard("page-1", 42, date(2025, 6, 10))

        rows = markup.inline_keyboard
        self.assertEqual([len(row) for row in rows], [2, 2])
        self.assertEqual(
            [button.text for row in rows for button in row],
            ["Today", "Tomorrow", "Next week", "Next month"],
        )
        self.assertEqual(rows[0][0].callback_data, "set_date:42:page-1:2025-06-10")
        self.assertEqual(rows[1][1].callback_data, "set_date:42:page-1:2025-07-10")


class TestTagsKeyboard(unittest.TestCase):
    """Tests for tags_keyboard function."""

    def test_rows_of_four(self) -> None:
        """Test that tags are laid out four per row."""
        tags = ["A", "B", "C", "D", "E", "F"]

        markup = tags_keyboard(tags)

        self.assertEqual([len(row) for row in markup.inline_keyboard], [4, 2])
        self.assertEqual(markup.inline_keyboard[1][1].callback_data, "tag:F")

    def test_no_tags(self) -> None:
        """Test that no tags produce an empty keyboard."""
        self.assertEqual(tags_keyboard([]).inline_keyboard, [])


class TestMainKeyboard(unittest.TestCase):
    """Tests for main_keyboard function."""

    def test_has_list_command_shortcuts(self) -> None:
        """Test the reply keyboard buttons."""
        markup = main_keyboard()

        self.assertEqual(
            [[button.text for button in row] for row in markup.keyboard],
            [["/all", "/today"], ["/unscheduled", "/tags"]],
        )
        self.assertTrue(markup.resize_keyboard)


if __name__ == "__main__":
    unittest.main()
