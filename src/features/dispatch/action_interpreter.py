import asyncio

from features.dispatch.action import Action, ActionKind
from features.dispatch.event import Event


class ActionInterpreter:
    """Turns reply actions into Bot API calls against the chat the event came from."""

    async def perform(self, event: Event, action: Action) -> dict | None:
        if not action.is_reply():
            return None
        chat_id = event.chat_id()
        event.log.t(f"Performing '{action.kind.value}' in chat #{chat_id}")
        # the API client blocks on HTTP, so it runs off the event loop
        match action.kind:
            case ActionKind.reply_text:
                return await asyncio.to_thread(event.api.send_text_message, chat_id, action.payload)
            case ActionKind.reply_markdown:
                return await asyncio.to_thread(event.api.send_markdown_message, chat_id, action.payload)
            case ActionKind.reply_sticker:
                return await asyncio.to_thread(event.api.send_sticker, chat_id, action.payload)
        return None
