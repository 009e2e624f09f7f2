from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

from features.chat.telegram.model.callback_query import CallbackQuery
from features.chat.telegram.model.message import Message
from features.chat.telegram.model.update import Update
from util.errors import InvalidVariantError, MissingPayloadError, MissingTextError


class EventKind(str, Enum):
    new = "new"
    edited = "edited"
    post = "post"
    edited_post = "edited_post"
    callback = "callback"
    unknown = "unknown"

    @property
    def is_message_like(self) -> bool:
        return self in MESSAGE_LIKE_KINDS


MESSAGE_LIKE_KINDS = frozenset({EventKind.new, EventKind.edited, EventKind.post, EventKind.edited_post})


class MessageEvent(BaseModel):
    """
    The classified payload of a single update. Exactly one kind is active:
    message-like kinds carry a Message, callbacks carry a CallbackQuery
    and unknown events carry nothing.
    """
    model_config = ConfigDict(frozen = True)

    kind: EventKind
    payload: Message | CallbackQuery | None = None

    @model_validator(mode = "after")
    def check_payload(self) -> "MessageEvent":
        if self.kind == EventKind.unknown:
            if self.payload is not None:
                raise ValueError("Unknown events carry no payload")
        elif self.kind == EventKind.callback:
            if not isinstance(self.payload, CallbackQuery):
                raise ValueError("Callback events must carry a CallbackQuery")
        elif not isinstance(self.payload, Message):
            raise ValueError(f"'{self.kind.value}' events must carry a Message")
        return self

    @staticmethod
    def from_update(update: Update) -> "MessageEvent":
        # the order of these checks breaks ties for malformed updates
        if update.message is not None:
            return MessageEvent(kind = EventKind.new, payload = update.message)
        if update.edited_message is not None:
            return MessageEvent(kind = EventKind.edited, payload = update.edited_message)
        if update.channel_post is not None:
            return MessageEvent(kind = EventKind.post, payload = update.channel_post)
        if update.edited_channel_post is not None:
            return MessageEvent(kind = EventKind.edited_post, payload = update.edited_channel_post)
        if update.callback_query is not None:
            return MessageEvent(kind = EventKind.callback, payload = update.callback_query)
        return MessageEvent.unknown()

    @staticmethod
    def unknown() -> "MessageEvent":
        return MessageEvent(kind = EventKind.unknown)

    def is_message_like(self) -> bool:
        return self.kind.is_message_like

    def to_message(self) -> Message:
        if self.kind.is_message_like:
            return self.payload  # type: ignore
        if self.kind == EventKind.callback:
            embedded = self.payload.message  # type: ignore
            if embedded is None:
                raise MissingPayloadError("Callback query carries no message")
            return embedded
        raise InvalidVariantError("Unknown events can't be converted to a message")

    def text(self) -> str:
        if self.kind.is_message_like:
            text = self.payload.text  # type: ignore
            if text is None:
                raise MissingTextError(f"The '{self.kind.value}' message has no text")
            return text
        if self.kind == EventKind.callback:
            data = self.payload.data  # type: ignore
            if data is None:
                raise MissingTextError("Callback query has no data")
            return data
        raise InvalidVariantError("Unknown events carry no text")
