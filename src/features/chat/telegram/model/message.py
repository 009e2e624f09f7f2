from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from features.chat.telegram.model.attachment.voice import Voice
from features.chat.telegram.model.chat import Chat
from features.chat.telegram.model.user import User


class Message(BaseModel):
    """https://core.telegram.org/bots/api#message"""
    model_config = ConfigDict(populate_by_name = True)

    message_id: int
    chat: Chat
    from_user: User | None = Field(None, alias = "from")
    date: int = 0
    edit_date: int | None = None
    text: str | None = None
    caption: str | None = None
    voice: Voice | None = None
    reply_to_message: Optional["Message"] = None


Message.model_rebuild()
