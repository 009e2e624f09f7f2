from contextlib import asynccontextmanager
from copy import deepcopy
from typing import AsyncIterator, Generic, TypeVar

from features.dispatch.read_write_lock import ReadWriteLock

T = TypeVar("T")


class StateCell(Generic[T]):
    """The lockable home of a state value. Every container holding the same cell shares the value."""
    lock: ReadWriteLock
    value: T

    def __init__(self, value: T):
        self.lock = ReadWriteLock()
        self.value = value


class ReadGuard(Generic[T]):

    _cell: StateCell[T]
    _released: bool

    def __init__(self, cell: StateCell[T]):
        self._cell = cell
        self._released = False

    @property
    def value(self) -> T:
        self._check_held()
        return self._cell.value

    def release(self):
        self._released = True

    def _check_held(self):
        if self._released:
            raise RuntimeError("State guard used after its lock was released")


class WriteGuard(ReadGuard[T]):

    @property
    def value(self) -> T:
        self._check_held()
        return self._cell.value

    @value.setter
    def value(self, value: T):
        self._check_held()
        self._cell.value = value


class State(Generic[T]):
    """
    A concurrency-safe container of arbitrary state.

    Reads are shared, writes are exclusive. Containers built from the same handle
    observe each other's mutations; derived containers own a deep copy and are
    fully independent from their source.
    """
    __cell: StateCell[T]

    def __init__(self, value: T):
        self.__cell = StateCell(value)

    @staticmethod
    def from_handle(handle: StateCell[T]) -> "State[T]":
        state = State.__new__(State)
        state.__cell = handle
        return state

    @asynccontextmanager
    async def read(self) -> AsyncIterator[ReadGuard[T]]:
        async with self.__cell.lock.reading():
            guard = ReadGuard(self.__cell)
            try:
                yield guard
            finally:
                guard.release()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[WriteGuard[T]]:
        async with self.__cell.lock.writing():
            guard = WriteGuard(self.__cell)
            try:
                yield guard
            finally:
                guard.release()

    async def derive(self) -> "State[T]":
        """Snapshot of the value as of acquiring the read lock, in a brand-new container."""
        async with self.read() as guard:
            snapshot = deepcopy(guard.value)
        return State(snapshot)

    def handle(self) -> StateCell[T]:
        return self.__cell

    def shares_with(self, other: "State") -> bool:
        return self.__cell is other.handle()

    def __repr__(self) -> str:
        return f"State({self.__cell.value!r})"
