from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class ActionKind(str, Enum):
    next = "next"
    done = "done"
    reply_text = "reply_text"
    reply_markdown = "reply_markdown"
    reply_sticker = "reply_sticker"


REPLY_KINDS = frozenset({ActionKind.reply_text, ActionKind.reply_markdown, ActionKind.reply_sticker})


class Action(BaseModel):
    """
    What to do after a handler has seen an event.

    - next: continue with the next handler
    - done: stop, no further handlers see this event
    - reply_text: reply with plain text, then continue
    - reply_markdown: reply with MarkdownV2 text (escape user input!), then continue
    - reply_sticker: reply with the sticker of the given file ID, then continue
    """
    model_config = ConfigDict(frozen = True)

    kind: ActionKind
    payload: str | None = None

    @model_validator(mode = "after")
    def check_payload(self) -> "Action":
        if self.kind in REPLY_KINDS and self.payload is None:
            raise ValueError(f"'{self.kind.value}' needs a payload")
        if self.kind not in REPLY_KINDS and self.payload is not None:
            raise ValueError(f"'{self.kind.value}' takes no payload")
        return self

    @staticmethod
    def next() -> "Action":
        return Action(kind = ActionKind.next)

    @staticmethod
    def done() -> "Action":
        return Action(kind = ActionKind.done)

    @staticmethod
    def reply_text(text: str) -> "Action":
        return Action(kind = ActionKind.reply_text, payload = text)

    @staticmethod
    def reply_markdown(text: str) -> "Action":
        return Action(kind = ActionKind.reply_markdown, payload = text)

    @staticmethod
    def reply_sticker(file_id: str) -> "Action":
        return Action(kind = ActionKind.reply_sticker, payload = file_id)

    def is_reply(self) -> bool:
        return self.kind in REPLY_KINDS

    def stops_chain(self) -> bool:
        return self.kind == ActionKind.done
