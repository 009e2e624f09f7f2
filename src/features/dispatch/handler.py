from typing import Any, Awaitable, Callable, Generic, TypeVar

from features.dispatch.action import Action
from features.dispatch.event import Event
from features.dispatch.state import State, StateCell
from util.error_codes import UNSUPPORTED_ACTION
from util.errors import InternalError

S = TypeVar("S")

HandlerFunction = Callable[[Event, State[S]], Awaitable[Action]]


class Handler(Generic[S]):
    """
    An async handler function bound to its state. The state is owned by the
    handler unless it was bound to a shared handle, in which case everyone
    holding that handle sees the same value.
    """
    function: HandlerFunction
    state: State[S]
    name: str
    __shared: bool

    def __init__(
        self,
        function: HandlerFunction,
        default_factory: Callable[[], S] = dict,
        name: str | None = None,
    ):
        self.function = function
        self.state = State(default_factory())
        self.name = name or getattr(function, "__name__", type(function).__name__)
        self.__shared = False

    @property
    def is_shared(self) -> bool:
        return self.__shared

    def with_state(self, initial: S) -> "Handler[S]":
        self.state = State(initial)
        self.__shared = False
        return self

    def bind_shared_state(self, handle: StateCell[S]) -> "Handler[S]":
        self.state = State.from_handle(handle)
        self.__shared = True
        return self

    async def invoke(self, event: Event) -> Action:
        action: Any = await self.function(event, self.state)
        if not isinstance(action, Action):
            raise InternalError(f"Handler '{self.name}' returned {action!r} instead of an Action", UNSUPPORTED_ACTION)
        return action

    async def for_chat(self) -> "Handler[S]":
        """The instance serving a single chat: shared state stays shared, owned state is derived."""
        chat_handler = Handler.__new__(Handler)
        chat_handler.function = self.function
        chat_handler.name = self.name
        chat_handler.__shared = self.__shared
        chat_handler.state = self.state if self.__shared else await self.state.derive()
        return chat_handler

    def __repr__(self) -> str:
        return f"Handler({self.name}, shared={self.__shared})"
