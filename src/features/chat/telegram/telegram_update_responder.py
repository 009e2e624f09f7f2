from features.chat.telegram.model.update import Update
from features.dispatch.dispatcher import Dispatcher
from util import log


async def respond_to_update(dispatcher: Dispatcher, update: Update) -> bool:
    """Dispatches a webhook update; failures are logged here and never reach Telegram."""
    try:
        actions = await dispatcher.dispatch_update(update)
        log.t(f"Update #{update.update_id} produced {len(actions)} action(s)")
        return True
    except Exception as e:
        log.e(f"Failed to handle update #{update.update_id}", e)
        return False
