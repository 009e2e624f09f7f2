from typing import Any

from features.dispatch.action import Action
from features.dispatch.event import Event
from features.dispatch.message_event import EventKind
from features.dispatch.state import State
from util.errors import UnsupportedEventKindError


async def log_handler(event: Event, _: State[Any]) -> Action:
    """Logs every message and callback it sees, then lets the chain continue."""
    match event.kind:
        case EventKind.new | EventKind.edited | EventKind.post | EventKind.edited_post:
            message = event.to_message()
            first_name = message.from_user.first_name if message.from_user else ""
            text = message.text or ""
            event.log.i(f"({message.chat.id}) Message from {first_name}: {text}")
            return Action.next()
        case EventKind.callback:
            query = event.as_callback()
            chat_id = query.message.chat.id if query.message else 0
            data = query.data or ""
            event.log.i(f"({chat_id}) Callback from {query.from_user.first_name}: {data}")
            return Action.next()
        case _:
            raise UnsupportedEventKindError(event.kind.value)
