"""Exceptions raised by the Notion integration."""


class NotionClientError(Exception):
    """Raised when a Notion API request fails.

    Covers HTTP error responses, unreadable bodies and transport failures
    such as timeouts or refused connections.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialise the error.

        :param message: Human readable description of the failure.
        :param status_code: HTTP status returned by Notion, if a response arrived.
        """
        self.status_code = status_code
        super().__init__(message)


class TaskParseError(Exception):
    """Raised when a Notion record does not match the tasks schema.

    Usually means a database property was renamed or removed upstream.
    """
