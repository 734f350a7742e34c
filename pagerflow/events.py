"""
Observable primitives used by the Paginator.

StateStream is a broadcast holder of the latest value: every observer gets
the current value on subscription and every later change.
SingleEvent is a one-shot channel: each posted value reaches at most one
observer and is never delivered twice.

Observers are plain callables invoked synchronously. A failing observer is
logged and skipped so it can never break the producer or other observers.
"""

import asyncio
from collections.abc import Callable
from typing import Generic, TypeVar

from ._logging import logger

S = TypeVar("S")
E = TypeVar("E")

# Queued by Subscription.close() to wake a pending consumer
_CLOSED = object()


def _notify(observer: Callable[[S], None], value: S, channel: str) -> None:
    try:
        observer(value)
    except Exception:
        logger.exception(
            "Observer raised", extra={"channel": channel, "observer": repr(observer)}
        )


class StateStream(Generic[S]):
    """Current-value cache with replay-last-on-subscribe semantics."""

    def __init__(self, initial: S) -> None:
        self._value = initial
        self._observers: list[Callable[[S], None]] = []

    @property
    def value(self) -> S:
        return self._value

    def observe(self, observer: Callable[[S], None]) -> Callable[[], None]:
        """
        Registers an observer and immediately hands it the current value.

        Args:
            observer: Callable receiving each value

        Returns:
            A callable that removes the observer
        """
        self._observers.append(observer)
        _notify(observer, self._value, "state")

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def subscribe(self) -> "Subscription[S]":
        """
        Opens an async iterator over the values of this stream.

        Usage:
            with paginator.state.subscribe() as states:
                async for state in states:
                    render(state)
        """
        return Subscription(self)

    def emit(self, value: S) -> None:
        """Replaces the current value and notifies observers. Equal values are dropped."""
        if value == self._value:
            return
        self._value = value
        for observer in list(self._observers):
            _notify(observer, value, "state")


class Subscription(Generic[S]):
    """Queue-backed view of a StateStream, yielding every value in emission order."""

    def __init__(self, stream: StateStream[S]) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._closed = False
        self._unsubscribe = stream.observe(self._queue.put_nowait)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._unsubscribe()
        self._queue.put_nowait(_CLOSED)

    def __enter__(self) -> "Subscription[S]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __aiter__(self) -> "Subscription[S]":
        return self

    async def __anext__(self) -> S:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        value = await self._queue.get()
        if value is _CLOSED:
            raise StopAsyncIteration
        return value  # type: ignore[return-value]


class SingleEvent(Generic[E]):
    """
    One-shot notification channel.

    A posted value is handed to a pending wait() caller, or else to the
    first registered observer, and then forgotten. When nobody observes, the value stays pending and goes to the
    next observer that attaches. Only the latest pending value is kept.
    """

    def __init__(self) -> None:
        self._value: E | None = None
        self._pending = False
        self._observers: list[Callable[[E], None]] = []

    @property
    def has_pending(self) -> bool:
        return self._pending

    def post(self, value: E) -> None:
        self._value = value
        self._pending = True
        self._dispatch()

    def observe(self, observer: Callable[[E], None]) -> Callable[[], None]:
        """
        Registers an observer. A pending value is delivered right away.

        Returns:
            A callable that removes the observer
        """
        self._observers.append(observer)
        self._dispatch()

        def unsubscribe() -> None:
            self._discard(observer)

        return unsubscribe

    def consume(self) -> E | None:
        """Takes the pending value, if any, without going through an observer."""
        if not self._pending:
            return None
        value = self._value
        self._pending = False
        self._value = None
        return value

    async def wait(self) -> E:
        """
        Waits for the next value and consumes it.

        A waiter takes precedence over observers registered with observe(),
        the most recent waiter first.
        """
        future: asyncio.Future[E] = asyncio.get_running_loop().create_future()

        def resolve(value: E) -> None:
            self._discard(resolve)
            if not future.done():
                future.set_result(value)

        self._observers.insert(0, resolve)
        try:
            self._dispatch()
            return await future
        finally:
            self._discard(resolve)

    def _discard(self, observer: Callable[[E], None]) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _dispatch(self) -> None:
        if not self._pending or not self._observers:
            return
        observer = self._observers[0]
        value = self.consume()
        _notify(observer, value, "error_event")  # type: ignore[arg-type]
