"""Rendering of whole Notion pages as chat text."""

import logging

from src.notion.blocks import render_blocks
from src.notion.client import NotionClient
from src.notion.exceptions import NotionClientError

logger = logging.getLogger(__name__)


def render_document(client: NotionClient, page_id: str) -> str:
    """Fetch a page's blocks and render them as one message body.

    Never raises. On any fetch or parse failure the error is logged and an
    empty string is returned; callers decide what placeholder to show.

    :param client: Notion API client.
    :param page_id: The Notion page ID.
    :returns: Rendered page content, possibly empty.
    """
    try:
        blocks = client.get_block_children(page_id)
        return render_blocks(blocks)
    except NotionClientError:
        logger.exception(f"Failed to fetch content for page: {page_id}")
    except Exception:
        logger.exception(f"Failed to render content for page: {page_id}")
    return ""
