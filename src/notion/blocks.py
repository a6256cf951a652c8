"""Notion blocks to chat text conversion.

This module renders Notion block objects as text for Telegram's legacy
Markdown parse mode. Rendering is total: a block that is unknown or
malformed renders to an empty string instead of raising.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from src.notion.enums import BlockType

# Checkbox markers; the opening bracket is escaped so Telegram shows it literally
CHECKED_BOX = "- \\[x]"
UNCHECKED_BOX = "- \\[ ]"

RunFormatter = Callable[[int, str], str]


def _plain(_index: int, text: str) -> str:
    return text


def _upper(_index: int, text: str) -> str:
    return text.upper()


def _bullet(_index: int, text: str) -> str:
    return f"- {text}"


def _numbered(index: int, text: str) -> str:
    return f"{index + 1}. {text}"


def _quote(_index: int, text: str) -> str:
    return f"> {text}"


def _code(_index: int, text: str) -> str:
    return f"`{text}`"


# Renderers for blocks whose runs are formatted independently of block state.
# Order matters: the first kind present on a block wins. to_do is handled
# separately because it depends on the checked flag.
RUN_FORMATTERS: dict[BlockType, RunFormatter] = {
    BlockType.HEADING_1: _upper,
    BlockType.HEADING_2: _upper,
    BlockType.HEADING_3: _upper,
    BlockType.PARAGRAPH: _plain,
    BlockType.BULLETED_LIST_ITEM: _bullet,
    BlockType.NUMBERED_LIST_ITEM: _numbered,
    BlockType.TOGGLE: _plain,
    BlockType.QUOTE: _quote,
    BlockType.CALLOUT: _code,
    BlockType.SYNCED_BLOCK: _plain,
    BlockType.TEMPLATE: _plain,
    BlockType.COLUMN: _plain,
    BlockType.CHILD_PAGE: _plain,
    BlockType.CHILD_DATABASE: _plain,
    BlockType.TABLE: _plain,
}


def render_block(block: dict[str, Any]) -> str:
    """Render a single Notion block as chat text.

    Each rich text run becomes one line. Headings are upper-cased, list
    items, quotes and to-dos get a prefix, callouts are wrapped in inline
    code, and container blocks pass their text through unchanged.

    :param block: The Notion block object.
    :returns: Rendered text, or an empty string for unknown or malformed blocks.
    """
    if not isinstance(block, dict):
        return ""

    to_do = block.get(BlockType.TO_DO)
    if to_do:
        return _render_to_do(to_do)

    for block_type, formatter in RUN_FORMATTERS.items():
        content = block.get(block_type)
        if content:
            return _render_runs(content, formatter)

    return ""


def render_blocks(blocks: list[dict[str, Any]]) -> str:
    """Render a list of Notion blocks as one chat message body.

    Blocks are joined with newlines in source order. Blocks that render
    empty still contribute an (empty) line.

    :param blocks: List of Notion block objects.
    :returns: Rendered text.
    """
    return "\n".join(render_block(block) for block in blocks)


def _render_to_do(content: Any) -> str:
    """Render a to_do block's runs with a checkbox prefix."""
    if not isinstance(content, dict):
        return ""
    checkbox = CHECKED_BOX if content.get("checked") else UNCHECKED_BOX
    return _render_runs(content, lambda _index, text: f"{checkbox} {text}")


def _render_runs(content: Any, formatter: RunFormatter) -> str:
    """Format each rich text run and join them with newlines."""
    if not isinstance(content, dict):
        return ""
    rich_text = content.get("rich_text")
    if not isinstance(rich_text, list):
        return ""
    return "\n".join(
        formatter(index, _extract_text(item)) for index, item in enumerate(rich_text)
    )


def _extract_text(item: Any) -> str:
    """Extract plain text from a single rich text run.

    :param item: The rich text object.
    :returns: Plain text string.
    """
    if not isinstance(item, dict):
        return ""
    text = item.get("plain_text")
    if text is None:
        text_obj = item.get("text")
        text = text_obj.get("content", "") if isinstance(text_obj, dict) else ""
    return str(text)
