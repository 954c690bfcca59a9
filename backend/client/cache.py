"""
Query cache.

Keyed cache of server reads with a staleness window:
- Fresh entries are served without a request.
- Concurrent reads of one key share a single in-flight asyncio.Task.
- query() serves stale data immediately and refreshes in the background.
- Invalidated entries are never served; the next read awaits a refetch.
- Invalidating or clearing cancels the in-flight request, and its
  replacement waits for the cancelled one to finish, so one key never
  has two requests on the wire.
- Failed fetches keep the previous data and raise to every awaiter.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetcher = Callable[[], Awaitable[Any]]
Listener = Callable[["QueryState[Any]"], None]


@dataclass
class QueryState(Generic[T]):
    """Snapshot of one cache entry."""
    data: Optional[T] = None
    error: Optional[BaseException] = None
    updated_at: Optional[float] = None
    is_invalidated: bool = False
    is_fetching: bool = False

    @property
    def has_data(self) -> bool:
        return self.updated_at is not None


@dataclass
class _Entry:
    state: QueryState[Any] = field(default_factory=QueryState)
    task: Optional["asyncio.Task[Any]"] = None
    generation: int = 0
    listeners: list[Listener] = field(default_factory=list)


class QueryCache:
    """
    Cache of query results keyed by resource path and parameters.

    Args:
        stale_time: Seconds an entry stays fresh after a successful fetch
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        stale_time: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.stale_time = stale_time
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        # Cancelled requests per key that have not finished unwinding yet
        self._retiring: dict[str, "asyncio.Task[Any]"] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[str]:
        return list(self._entries)

    def get_state(self, key: str) -> Optional[QueryState[Any]]:
        entry = self._entries.get(key)
        return replace(entry.state) if entry else None

    def get_data(self, key: str) -> Any:
        entry = self._entries.get(key)
        return entry.state.data if entry else None

    def is_stale(self, key: str, stale_time: Optional[float] = None) -> bool:
        entry = self._entries.get(key)
        return entry is None or self._entry_is_stale(entry, stale_time)

    def _entry_is_stale(self, entry: _Entry, stale_time: Optional[float]) -> bool:
        state = entry.state
        if state.updated_at is None or state.is_invalidated:
            return True
        window = self.stale_time if stale_time is None else stale_time
        return self._clock() - state.updated_at >= window

    def _entry(self, key: str) -> _Entry:
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _Entry()
        return entry

    async def fetch(self, key: str, fetcher: Fetcher, stale_time: Optional[float] = None) -> Any:
        """
        Return fresh data for `key`, awaiting a request if needed.

        Raises:
            Whatever the fetcher raised, to every caller sharing the request
        """
        entry = self._entry(key)
        if not self._entry_is_stale(entry, stale_time):
            logger.debug(f"Cache hit: {key}")
            return entry.state.data
        return await self._await_fetch(key, entry, fetcher)

    async def query(
        self,
        key: str,
        fetcher: Fetcher,
        stale_time: Optional[float] = None,
    ) -> QueryState[Any]:
        """
        Stale-while-revalidate read.

        Data that is merely old is returned at once, with is_fetching set
        while a background refresh runs. Missing or invalidated data is
        awaited, and a failure raises.
        """
        entry = self._entry(key)
        usable = entry.state.has_data and not entry.state.is_invalidated
        if usable:
            if self._entry_is_stale(entry, stale_time):
                self._start_fetch(key, entry, fetcher)
            return replace(entry.state)

        await self._await_fetch(key, entry, fetcher)
        return replace(entry.state)

    def prefetch(self, key: str, fetcher: Fetcher) -> "asyncio.Task[Any]":
        """Start (or join) a background fetch without awaiting it."""
        return self._start_fetch(key, self._entry(key), fetcher)

    def set_data(self, key: str, data: Any) -> None:
        """Store a value as if it had just been fetched."""
        entry = self._entry(key)
        self._cancel_fetch(key, entry)
        entry.generation += 1
        entry.state = QueryState(data=data, updated_at=self._clock())
        self._notify(entry)

    async def _await_fetch(self, key: str, entry: _Entry, fetcher: Fetcher) -> Any:
        while True:
            task = self._start_fetch(key, entry, fetcher)
            try:
                # shield: a cancelled caller must not cancel the shared request
                return await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
            # The shared request was cancelled by an invalidation; follow its replacement
            logger.debug(f"Fetch for {key} was cancelled, retrying")
            entry = self._entry(key)

    def _start_fetch(self, key: str, entry: _Entry, fetcher: Fetcher) -> "asyncio.Task[Any]":
        if entry.task is not None and not entry.task.done():
            logger.debug(f"Joining in-flight fetch: {key}")
            return entry.task

        logger.debug(f"Fetching: {key}")
        entry.state.is_fetching = True
        previous = self._retiring.pop(key, None)
        task = asyncio.create_task(
            self._run_fetch(key, entry, entry.generation, fetcher, previous)
        )
        task.add_done_callback(self._consume_result)
        entry.task = task
        return task

    def _cancel_fetch(self, key: str, entry: _Entry) -> None:
        task = entry.task
        entry.task = None
        if task is None or task.done():
            return
        task.cancel()
        self._retiring[key] = task

        def forget(done: "asyncio.Task[Any]") -> None:
            if self._retiring.get(key) is done:
                del self._retiring[key]

        task.add_done_callback(forget)

    async def _run_fetch(
        self,
        key: str,
        entry: _Entry,
        generation: int,
        fetcher: Fetcher,
        previous: Optional["asyncio.Task[Any]"] = None,
    ) -> Any:
        if previous is not None and not previous.done():
            await asyncio.wait({previous})

        try:
            data = await fetcher()
        except Exception as e:
            if entry.generation == generation:
                entry.state.error = e
                entry.state.is_fetching = False
                entry.task = None
                self._notify(entry)
            logger.warning(f"Fetch failed for {key}: {e}")
            raise

        # An invalidation or removal while in flight makes this result outdated
        if entry.generation == generation and self._entries.get(key) is entry:
            entry.state = QueryState(data=data, updated_at=self._clock())
            entry.task = None
            self._notify(entry)
        return data

    @staticmethod
    def _consume_result(task: "asyncio.Task[Any]") -> None:
        # Mark background failures as retrieved; awaiters still get them
        if not task.cancelled():
            task.exception()

    def _notify(self, entry: _Entry) -> None:
        snapshot = replace(entry.state)
        for listener in list(entry.listeners):
            listener(snapshot)

    def subscribe(self, key: str, listener: Listener) -> Callable[[], None]:
        """
        Observe results for `key`.

        Returns an unsubscribe function. Unsubscribing only stops delivery;
        an in-flight request keeps running for other readers.
        """
        entry = self._entry(key)
        entry.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in entry.listeners:
                entry.listeners.remove(listener)

        return unsubscribe

    def invalidate(self, key: str) -> None:
        """
        Mark an entry stale so the next read awaits a refetch.

        A request already in flight is cancelled; readers waiting on it
        move to the refetch.
        """
        entry = self._entries.get(key)
        if entry is None:
            return
        self._cancel_fetch(key, entry)
        entry.generation += 1
        entry.state.is_invalidated = True
        entry.state.is_fetching = False
        logger.debug(f"Invalidated: {key}")

    def remove(self, key: str) -> None:
        entry = self._entries.pop(key, None)
        if entry is not None:
            self._cancel_fetch(key, entry)

    def clear(self) -> None:
        for key, entry in list(self._entries.items()):
            self._cancel_fetch(key, entry)
        self._entries.clear()
        logger.debug("Query cache cleared")
