import asyncio
from types import ModuleType
from typing import Any

from features.chat.telegram.model.update import Update
from features.chat.telegram.sdk.telegram_bot_api import TelegramBotAPI
from features.dispatch.action import Action
from features.dispatch.action_interpreter import ActionInterpreter
from features.dispatch.event import Event
from features.dispatch.handler import Handler
from util import log as default_log
from util.config import config
from util.errors import EventError, HandlerFailedError

ChatScope = int | None


class Dispatcher:
    """
    Runs the handler chain of each chat for every incoming event.

    Every chat gets its own chain, built lazily from the template handlers on the
    chat's first event (owned state is derived per chat, shared state stays shared).
    Events of one chat go through its chain one at a time and in order, while
    different chats are dispatched concurrently. Events without a chat (unknown
    updates, callbacks detached from messages) share the `None` scope.

    Chains and their locks stay in memory for the lifetime of the dispatcher.
    A template whose state cannot be set up for a chat fails that event with
    `HandlerFailedError` regardless of the error policy.
    """
    __api: TelegramBotAPI
    __templates: list[Handler]
    __interpreter: ActionInterpreter
    __log: ModuleType | Any
    __abort_on_error: bool
    __chains: dict[ChatScope, list[Handler]]
    __chat_locks: dict[ChatScope, asyncio.Lock]

    def __init__(
        self,
        api: TelegramBotAPI,
        handlers: list[Handler],
        interpreter: ActionInterpreter | None = None,
        log: ModuleType | Any = default_log,
        abort_on_error: bool | None = None,
    ):
        self.__api = api
        self.__templates = list(handlers)
        self.__interpreter = interpreter or ActionInterpreter()
        self.__log = log
        self.__abort_on_error = config.dispatch_abort_on_error if abort_on_error is None else abort_on_error
        self.__chains = {}
        self.__chat_locks = {}

    def register_chat(self, chat_id: ChatScope, handlers: list[Handler]):
        """Installs an explicit chain for one chat, replacing the one built from templates."""
        self.__chains[chat_id] = list(handlers)

    def chain_of(self, chat_id: ChatScope) -> list[Handler] | None:
        chain = self.__chains.get(chat_id)
        return list(chain) if chain is not None else None

    async def dispatch_update(self, update: Update) -> list[Action]:
        if config.log_telegram_update:
            self.__log.t(f"Dispatching update #{update.update_id}: `{update}`")
        return await self.dispatch(Event.from_update(self.__api, update, self.__log))

    async def dispatch(self, event: Event) -> list[Action]:
        """
        Feeds the event through the chat's chain and returns the actions produced,
        ending with `done` if a handler stopped the chain.

        With abort-on-error (the default) a failing handler ends the chain and
        `HandlerFailedError` is raised with the actions collected so far.
        Otherwise the failure is logged and the next handler runs.
        """
        scope = self.__scope_of(event)
        lock = self.__chat_locks.setdefault(scope, asyncio.Lock())
        async with lock:
            chain = await self.__resolve_chain(scope)
            return await self.__run_chain(event, chain)

    async def __run_chain(self, event: Event, chain: list[Handler]) -> list[Action]:
        actions: list[Action] = []
        for handler in chain:
            try:
                action = await handler.invoke(event)
                actions.append(action)
                if action.stops_chain():
                    self.__log.t(f"Handler '{handler.name}' stopped the chain")
                    break
                await self.__interpreter.perform(event, action)
            except Exception as e:
                if self.__abort_on_error:
                    self.__log.d(f"Handler '{handler.name}' failed, aborting the chain")
                    raise HandlerFailedError(handler.name, actions) from e
                self.__log.e(f"Handler '{handler.name}' failed, skipping it", e)
        return actions

    async def __resolve_chain(self, scope: ChatScope) -> list[Handler]:
        chain = self.__chains.get(scope)
        if chain is None:
            self.__log.d(f"Building the handler chain for chat #{scope}")
            chain = []
            for template in self.__templates:
                try:
                    chain.append(await template.for_chat())
                except Exception as e:
                    # the chain is not installed, the next event of this chat retries
                    self.__log.d(f"Handler '{template.name}' could not be set up for chat #{scope}")
                    raise HandlerFailedError(template.name, []) from e
            self.__chains[scope] = chain
        return chain

    # noinspection PyMethodMayBeStatic
    def __scope_of(self, event: Event) -> ChatScope:
        try:
            return event.chat_id()
        except EventError:
            return None
