"""Cached board query: the authoritative value as last fetched or optimistically set."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from boardsync.model.tree import Board

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Board]]
Subscriber = Callable[[Board | None], None]


class BoardQuery:
    """Holds the cached board and pushes every new value to subscribers.

    Implements the cache contract used by optimistic mutations:
    cancel(), get_current(), set_current(value), invalidate().
    """

    def __init__(self, fetch: Fetcher):
        self._fetch = fetch
        self._data: Board | None = None
        self._task: asyncio.Task | None = None
        self._subscribers: list[Subscriber] = []

    def get_current(self) -> Board | None:
        return self._data

    def set_current(self, value: Board | None) -> None:
        """Replace the cached value and notify subscribers."""
        self._data = value
        for cb in list(self._subscribers):
            cb(value)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register callback(value) for every new value. Returns an unsubscribe callable."""
        self._subscribers.append(callback)
        return lambda: callback in self._subscribers and self._subscribers.remove(callback)

    @property
    def fetching(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        """Cancel the in-flight fetch so it cannot overwrite a newer local value."""
        if self.fetching:
            logger.debug("cancelling in-flight board fetch")
            self._task.cancel()
        self._task = None

    async def invalidate(self) -> Board | None:
        """Drop any in-flight fetch and load fresh data from the source."""
        self.cancel()
        task = asyncio.create_task(self._fetch())
        self._task = task
        try:
            board = await task
        except asyncio.CancelledError:
            if task.cancelled() and not _current_task_cancelling():
                # superseded by a newer fetch or an optimistic write
                return self._data
            raise
        except Exception:
            logger.exception("board fetch failed")
            return self._data
        finally:
            if self._task is task:
                self._task = None
        self.set_current(board)
        return board

    refetch = invalidate


def _current_task_cancelling() -> bool:
    """True if the task awaiting us was itself cancelled."""
    current = asyncio.current_task()
    return current is not None and current.cancelling() > 0
