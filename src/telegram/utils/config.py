"""Bot settings read from TELEGRAM_* environment variables."""

from enum import StrEnum
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.paths import ENV_FILE


class SendPolicy(StrEnum):
    """How task lists are sent to the chat."""

    # One message at a time, in source order
    SEQUENTIAL = "sequential"
    # Thread pool, completion order not guaranteed
    PARALLEL = "parallel"


class TaskKeyboard(StrEnum):
    """Action row attached to each task message."""

    # "Go to task" link plus a reschedule button
    RESCHEDULE = "reschedule"
    # Single button that sends the task content
    SELECT = "select"


class TelegramConfig(BaseSettings):
    """Settings for the Telegram side of the bot.

    Read from TELEGRAM_* variables, then the project .env file.

    :param bot_token: Token issued by @BotFather.
    :param owner_id: User ID of the only person allowed to use the bot. Also
        the chat the bot posts to.
    :param poll_timeout: Seconds each getUpdates call may be held open.
    :param error_retry_delay: Pause before retrying a failed poll.
    :param max_consecutive_errors: Failed polls in a row that trigger the long pause.
    :param backoff_delay: Length of the long pause.
    :param send_policy: Whether task lists are sent sequentially or in parallel.
    :param max_workers: Thread pool size for the parallel send policy.
    :param task_keyboard: Which action row to attach to task messages.
    :param content_placeholder: Show an "Add content" link for empty pages.
    """

    model_config = SettingsConfigDict(
        env_prefix="TELEGRAM_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    bot_token: str = Field(..., min_length=1, description="Bot token from @BotFather")
    owner_id: str = Field(
        ...,
        validation_alias=AliasChoices("owner_id", "TELEGRAM_OWNER_ID"),
        description="User ID of the bot owner",
    )
    poll_timeout: int = Field(
        default=30,
        ge=1,
        le=60,
        description="Seconds a getUpdates call may be held open",
    )
    error_retry_delay: int = Field(
        default=5,
        ge=1,
        le=60,
        description="Pause before retrying a failed poll",
    )
    max_consecutive_errors: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Failed polls in a row before the long pause",
    )
    backoff_delay: int = Field(
        default=30,
        ge=5,
        le=300,
        description="Length of the long pause",
    )
    send_policy: SendPolicy = Field(
        default=SendPolicy.SEQUENTIAL,
        description="Sequential or parallel sending of task lists",
    )
    max_workers: int = Field(
        default=4,
        ge=1,
        le=16,
        description="Thread pool size for parallel sending",
    )
    task_keyboard: TaskKeyboard = Field(
        default=TaskKeyboard.RESCHEDULE,
        description="Action row attached to task messages",
    )
    content_placeholder: bool = Field(
        default=True,
        description="Show an 'Add content' link when a task page is empty",
    )

    @field_validator("owner_id")
    @classmethod
    def validate_owner_id(cls, v: str) -> str:
        """Validate that the owner ID is a numeric Telegram ID.

        :param v: Raw value from environment.
        :returns: The stripped ID.
        :raises ValueError: If the value is empty or not an integer.
        """
        owner_id = v.strip()
        if not owner_id.lstrip("-").isdigit():
            raise ValueError(
                "Owner ID must be a numeric Telegram user ID. "
                "Set TELEGRAM_OWNER_ID environment variable."
            )
        return owner_id


@lru_cache
def get_telegram_settings() -> TelegramConfig:
    """Load the Telegram settings once per process.

    :returns: The shared TelegramConfig.
    :raises ValidationError: If a required variable is missing or invalid.
    """
    return TelegramConfig()  # type: ignore[call-arg]
