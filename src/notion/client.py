"""Notion API client for the tasks database and its pages."""

import logging
import os
from typing import Any

import requests

from src.notion.exceptions import NotionClientError

logger = logging.getLogger(__name__)

# Seconds before a Notion request is abandoned
REQUEST_TIMEOUT = 30

# Pinned API version; property and block shapes below assume it
NOTION_VERSION = "2022-06-28"

# Largest page the block children endpoint will return
MAX_PAGE_SIZE = 100


class NotionClient:
    """Thin wrapper over the four Notion endpoints the bot uses.

    Database schema, database query, block children and page update. Every
    failure surfaces as NotionClientError.
    """

    BASE_URL = "https://api.notion.com/v1"

    def __init__(self, *, token: str | None = None) -> None:
        """Initialise the Notion client.

        :param token: Integration secret. Falls back to the
            NOTION_INTEGRATION_SECRET environment variable.
        :raises ValueError: If no secret is available.
        """
        self._token = token or os.environ.get("NOTION_INTEGRATION_SECRET")

        if not self._token:
            raise ValueError(
                "No Notion token: pass token= or set NOTION_INTEGRATION_SECRET."
            )

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
            "Notion-Version": NOTION_VERSION,
        }

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Call a Notion endpoint and decode the JSON body.

        :param method: HTTP method.
        :param endpoint: Path below BASE_URL, e.g. ``pages/<id>``.
        :param params: Query string parameters.
        :param payload: JSON request body.
        :returns: Decoded response body.
        :raises NotionClientError: On transport failure, error status or a
            body that is not JSON.
        """
        logger.debug(f"Notion {method} {endpoint}")

        try:
            response = requests.request(
                method,
                f"{self.BASE_URL}/{endpoint}",
                headers=self._headers,
                params=params,
                json=payload,
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            return response.json()

        except requests.exceptions.Timeout as e:
            raise NotionClientError(
                f"Notion {method} {endpoint} timed out after {REQUEST_TIMEOUT}s"
            ) from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code
            raise NotionClientError(
                f"Notion {method} {endpoint} failed: {status} - {_error_detail(e.response)}",
                status_code=status,
            ) from e
        except requests.exceptions.RequestException as e:
            raise NotionClientError(f"Notion {method} {endpoint} failed: {e}") from e
        except ValueError as e:
            raise NotionClientError(f"Notion {method} {endpoint} returned invalid JSON") from e

    def get_database(self, database_id: str) -> dict[str, Any]:
        """Fetch a database object, including its property schema.

        :param database_id: Notion database ID.
        :returns: Raw database object.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Fetching database schema: {database_id}")
        return self._request("GET", f"databases/{database_id}")

    def query_database(
        self,
        database_id: str,
        payload: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Run a database query and return the matching pages.

        Only the first page of results is read; ``has_more`` is ignored.

        :param database_id: Notion database ID.
        :param payload: Query body holding ``filter`` and ``sorts``.
        :returns: Raw page objects.
        :raises NotionClientError: If the request fails or has no results list.
        """
        logger.info(f"Querying database: {database_id}")
        response = self._request("POST", f"databases/{database_id}/query", payload=payload or {})
        pages = _results(response)
        logger.info(f"Query returned {len(pages)} pages")
        return pages

    def update_page(self, page_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        """Overwrite some of a page's properties.

        :param page_id: Notion page ID.
        :param properties: Property values keyed by property name.
        :returns: The page as it is after the update.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Updating page properties: {page_id}")
        return self._request("PATCH", f"pages/{page_id}", payload={"properties": properties})

    def get_block_children(
        self,
        block_id: str,
        page_size: int = MAX_PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        """Fetch the top-level blocks of a page.

        A single request is made, so pages longer than ``page_size`` blocks
        are truncated.

        :param block_id: Page or block ID.
        :param page_size: Blocks to request, capped at MAX_PAGE_SIZE.
        :returns: Raw block objects in page order.
        :raises NotionClientError: If the request fails or has no results list.
        """
        page_size = min(page_size, MAX_PAGE_SIZE)
        response = self._request(
            "GET", f"blocks/{block_id}/children", params={"page_size": page_size}
        )
        blocks = _results(response)

        if response.get("has_more"):
            logger.warning(f"Only the first {page_size} blocks of {block_id} were fetched")

        logger.debug(f"Fetched {len(blocks)} blocks for {block_id}")
        return blocks


def _results(response: dict[str, Any]) -> list[dict[str, Any]]:
    results = response.get("results")
    if not isinstance(results, list):
        raise NotionClientError("Notion response has no results list")
    return results


def _error_detail(response: requests.Response) -> str:
    # Notion error bodies look like {"object": "error", "code": ..., "message": ...}
    try:
        return response.json().get("message", response.text)
    except ValueError:
        return response.text
