from types import ModuleType
from typing import Any

from features.chat.telegram.model.callback_query import CallbackQuery
from features.chat.telegram.model.message import Message
from features.chat.telegram.model.update import Update
from features.chat.telegram.model.user import User
from features.chat.telegram.sdk.telegram_bot_api import TelegramBotAPI
from features.dispatch.message_event import EventKind, MessageEvent
from util import log as default_log
from util.errors import InvalidVariantError, MissingPayloadError, TypeMismatchError


class Event:
    """
    An event sent to chat handlers: the classified update together with
    the outbound API client (for calls beyond replies) and the logger.
    """
    api: TelegramBotAPI
    message: MessageEvent
    log: ModuleType | Any

    def __init__(self, api: TelegramBotAPI, message: MessageEvent, log: ModuleType | Any = default_log):
        self.api = api
        self.message = message
        self.log = log

    @staticmethod
    def from_update(api: TelegramBotAPI, update: Update, log: ModuleType | Any = default_log) -> "Event":
        return Event(api, MessageEvent.from_update(update), log)

    @property
    def kind(self) -> EventKind:
        return self.message.kind

    def as_message(self) -> Message:
        """Returns a new or edited message."""
        return self.__expect(EventKind.new, EventKind.edited)

    def as_new_message(self) -> Message:
        return self.__expect(EventKind.new)

    def as_edited_message(self) -> Message:
        return self.__expect(EventKind.edited)

    def as_post(self) -> Message:
        """Returns a new or edited channel post."""
        return self.__expect(EventKind.post, EventKind.edited_post)

    def as_new_post(self) -> Message:
        return self.__expect(EventKind.post)

    def as_edited_post(self) -> Message:
        return self.__expect(EventKind.edited_post)

    def as_callback(self) -> CallbackQuery:
        return self.__expect(EventKind.callback)

    def to_message(self) -> Message:
        """Any message-like payload, or the message a callback was attached to."""
        return self.message.to_message()

    def text(self) -> str:
        """Message text, or the callback data for callbacks."""
        return self.message.text()

    def chat_id(self) -> int:
        if self.kind == EventKind.unknown:
            raise InvalidVariantError("Unknown events don't belong to a chat")
        try:
            return self.message.to_message().chat.id
        except MissingPayloadError as e:
            raise MissingPayloadError("Can't resolve the chat of a callback without a message") from e

    def sender(self) -> User | None:
        match self.kind:
            case EventKind.callback:
                return self.as_callback().from_user
            case EventKind.unknown:
                raise InvalidVariantError("Unknown events have no sender")
            case _:
                return self.message.to_message().from_user

    def __expect(self, *kinds: EventKind) -> Any:
        if self.kind not in kinds:
            expected = "|".join(kind.value for kind in kinds)
            raise TypeMismatchError(expected = expected, actual = self.kind.value)
        return self.message.payload

    def __repr__(self) -> str:
        return f"Event(kind={self.kind.value}, payload={self.message.payload!r})"
