"""Telegram message formatting utilities.

Two parse modes are in use: task messages are written in Telegram's legacy
Markdown, while free-form bot replies are written in standard Markdown and
converted to MarkdownV2 with telegramify-markdown.
"""

import telegramify_markdown

LEGACY_MARKDOWN = "Markdown"
MARKDOWN_V2 = "MarkdownV2"

# Opens and closes a legacy Markdown bold entity
_BOLD_MARKER = "*"


def format_message(markdown: str) -> tuple[str, str]:
    """Convert standard Markdown into a MarkdownV2 message.

    :param markdown: Standard Markdown text.
    :returns: Tuple of (formatted_text, parse_mode) ready for send_message.
    """
    return telegramify_markdown.markdownify(markdown), MARKDOWN_V2


def bold_markdown(text: str) -> str:
    """Wrap text in a legacy Markdown bold entity.

    Backslash escapes are literal inside an entity, so other markup characters
    are left alone and asterisks, which would close the entity early, are dropped.

    :param text: Raw text, e.g. a task title.
    :returns: Bold entity safe to embed in a legacy Markdown message.
    """
    stripped = text.replace(_BOLD_MARKER, "")
    return f"{_BOLD_MARKER}{stripped}{_BOLD_MARKER}"
