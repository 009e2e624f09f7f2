import multiprocessing
import os
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import BackgroundTasks, Depends, FastAPI

from api.auth import verify_telegram_auth_key
from features.chat.telegram.model.update import Update
from features.chat.telegram.sdk.telegram_bot_api import TelegramBotAPI
from features.chat.telegram.telegram_update_responder import respond_to_update
from features.dispatch.dispatcher import Dispatcher
from features.dispatch.handler import Handler
from features.dispatch.handlers.log_handler import log_handler
from util import log
from util.config import config


def create_dispatcher() -> Dispatcher:
    return Dispatcher(
        api = TelegramBotAPI(),
        handlers = [Handler(log_handler)],
    )


# noinspection PyUnusedLocal
@asynccontextmanager
async def lifespan(owner: FastAPI):
    process_name = multiprocessing.current_process().name
    worker_type = "main" if process_name == "MainProcess" else "worker"
    worker_info = f"[{worker_type}-{os.getpid()}] {process_name}"
    log.i(f"Lifecycle: Starting up {worker_info}")
    owner.state.dispatcher = create_dispatcher()
    yield  # this holds the app alive until the server is shut down
    log.i(f"Lifecycle: Shutting down {worker_info}...")


app = FastAPI(
    docs_url = None,
    redoc_url = None,
    title = "Chat Dispatch",
    description = "Receives Telegram updates and runs them through the handler chains.",
    debug = config.log_level in ["local", "trace", "debug"],
    lifespan = lifespan,
)


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "version": config.version}


@app.post("/telegram/chat-update")
async def telegram_chat_update(
    update: Update,
    offloader: BackgroundTasks,
    _ = Depends(verify_telegram_auth_key),
) -> dict:
    offloader.add_task(respond_to_update, app.state.dispatcher, update)
    return {"status": "ok"}


# The main runner
if __name__ == "__main__":
    if "--dev" in sys.argv:
        os.environ["LOG_LEVEL"] = "debug"
        config.log_level = "debug"
        reload = True
        print("INFO:     Launching in dev mode...")
    else:
        reload = False
        print("INFO:     Launching in production mode...")
    uvicorn_log_level = "debug" if config.log_level == "local" else config.log_level

    # a single worker keeps every chat's chain and state in one process
    uvicorn.run(
        "main:app",
        host = "0.0.0.0",
        port = int(os.environ.get("PORT", "80")),
        log_level = uvicorn_log_level,
        workers = 1,
        reload = reload,
    )
