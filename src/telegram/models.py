"""Pydantic models for the parts of the Bot API the bot reads and writes."""

from pydantic import BaseModel, Field


class TelegramUser(BaseModel):
    """Sender of a message or button press."""

    id: int
    is_bot: bool = False
    first_name: str
    last_name: str | None = None
    username: str | None = None

    @property
    def full_name(self) -> str:
        """First and last name joined with a space."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class TelegramChat(BaseModel):
    """Chat a message belongs to."""

    id: int
    type: str
    title: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class TelegramMessageInfo(BaseModel):
    """A received message. Only text messages are acted on."""

    message_id: int
    date: int
    chat: TelegramChat
    from_user: TelegramUser | None = Field(default=None, alias="from")
    text: str | None = None

    model_config = {"populate_by_name": True}


class CallbackQuery(BaseModel):
    """Inline keyboard button press delivered by Telegram."""

    id: str
    from_user: TelegramUser = Field(alias="from")
    message: TelegramMessageInfo | None = None
    data: str | None = None

    model_config = {"populate_by_name": True}


class TelegramUpdate(BaseModel):
    """One item from getUpdates: a message or a button press."""

    update_id: int
    message: TelegramMessageInfo | None = None
    callback_query: CallbackQuery | None = None


class SendMessageResult(BaseModel):
    """IDs of a message the bot has just sent."""

    message_id: int
    chat_id: int


class InlineKeyboardButton(BaseModel):
    """A button attached to a message.

    Exactly one of ``callback_data`` or ``url`` should be set.
    """

    text: str
    callback_data: str | None = None
    url: str | None = None


class InlineKeyboardMarkup(BaseModel):
    """Rows of inline buttons attached to a message."""

    inline_keyboard: list[list[InlineKeyboardButton]] = Field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        """Serialise for the Bot API, dropping unset button fields."""
        return self.model_dump(exclude_none=True)


class KeyboardButton(BaseModel):
    """A button on the custom reply keyboard."""

    text: str


class ReplyKeyboardMarkup(BaseModel):
    """Custom keyboard shown in place of the system keyboard."""

    keyboard: list[list[KeyboardButton]] = Field(default_factory=list)
    resize_keyboard: bool = True

    def to_payload(self) -> dict[str, object]:
        """Serialise for the Bot API."""
        return self.model_dump(exclude_none=True)


class BotCommand(BaseModel):
    """Command name and description shown in the Telegram command menu."""

    command: str
    description: str
