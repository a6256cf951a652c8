"""Notion settings read from NOTION_* environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.paths import ENV_FILE


class NotionConfig(BaseSettings):
    """Settings for the Notion side of the bot.

    Read from NOTION_* variables, then the project .env file.

    :param integration_secret: Notion internal integration token.
    :param database_id: ID of the database holding the tasks.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTION_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    integration_secret: str = Field(..., min_length=1, description="Notion integration token")
    database_id: str = Field(..., min_length=1, description="Tasks database ID")


@lru_cache
def get_notion_settings() -> NotionConfig:
    """Load the Notion settings once per process.

    :returns: The shared NotionConfig.
    :raises ValidationError: If a required variable is missing or invalid.
    """
    return NotionConfig()  # type: ignore[call-arg]
