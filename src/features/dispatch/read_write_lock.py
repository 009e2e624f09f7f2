import asyncio
from collections import deque
from contextlib import asynccontextmanager
from typing import AsyncIterator


class ReadWriteLock:
    """
    An asyncio lock allowing any number of concurrent readers or one exclusive writer.

    Waiters are served in arrival order: once a writer is queued, readers arriving
    after it wait too, so writers can't be starved by a steady stream of readers.
    Releasing never suspends, which keeps the lock consistent when the owning task
    is cancelled while unwinding.
    """
    __readers: int
    __writing: bool
    __waiters: deque[tuple[bool, asyncio.Future]]

    def __init__(self):
        self.__readers = 0
        self.__writing = False
        self.__waiters = deque()

    @property
    def readers(self) -> int:
        return self.__readers

    @property
    def is_writing(self) -> bool:
        return self.__writing

    async def acquire_read(self):
        if not self.__writing and not self.__waiters:
            self.__readers += 1
            return
        await self.__wait(is_writer = False)

    async def acquire_write(self):
        if not self.__writing and self.__readers == 0 and not self.__waiters:
            self.__writing = True
            return
        await self.__wait(is_writer = True)

    def release_read(self):
        if self.__readers <= 0:
            raise RuntimeError("Read lock released too many times")
        self.__readers -= 1
        self.__wake_up()

    def release_write(self):
        if not self.__writing:
            raise RuntimeError("Write lock released without being held")
        self.__writing = False
        self.__wake_up()

    @asynccontextmanager
    async def reading(self) -> AsyncIterator[None]:
        await self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @asynccontextmanager
    async def writing(self) -> AsyncIterator[None]:
        await self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    async def __wait(self, is_writer: bool):
        waiter = (is_writer, asyncio.get_running_loop().create_future())
        self.__waiters.append(waiter)
        try:
            await waiter[1]
        except asyncio.CancelledError:
            if waiter[1].done() and not waiter[1].cancelled():
                # the lock was handed over just before the cancellation arrived
                if is_writer:
                    self.release_write()
                else:
                    self.release_read()
            else:
                if waiter in self.__waiters:
                    self.__waiters.remove(waiter)
                self.__wake_up()
            raise

    def __wake_up(self):
        while self.__waiters and not self.__writing:
            is_writer, future = self.__waiters[0]
            if future.done():
                self.__waiters.popleft()
                continue
            if is_writer:
                if self.__readers == 0:
                    self.__waiters.popleft()
                    self.__writing = True
                    future.set_result(True)
                return
            self.__waiters.popleft()
            self.__readers += 1
            future.set_result(True)
