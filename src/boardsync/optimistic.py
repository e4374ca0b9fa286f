"""Optimistic mutations: apply locally, call remote, roll back or resync.

create_optimistic_update() builds the three callbacks every remote-mutating
operation uses:

- on_mutate: cancel in-flight fetches, snapshot the cache, write the
  optimistic value. Runs synchronously, before the remote call is issued.
- on_error: restore the snapshot exactly and tell the user.
- on_settled: always runs; invalidates the cache so the next fetch
  replaces the local value with the server's.

Mutation runs a remote call under those callbacks. There is no conflict
detection between mutations: each one snapshots whatever the cache holds
when it starts, and later writes win.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)

DataT = TypeVar("DataT")
InputT = TypeVar("InputT")
ResultT = TypeVar("ResultT")


class Cache(Protocol[DataT]):
    def cancel(self) -> None: ...

    def get_current(self) -> DataT | None: ...

    def set_current(self, value: DataT | None) -> None: ...

    async def invalidate(self) -> Any: ...


@dataclass(frozen=True)
class MutationContext(Generic[DataT]):
    """Snapshot taken before an optimistic write, used only for rollback."""

    previous: DataT | None


@dataclass(frozen=True)
class OptimisticCallbacks(Generic[InputT, DataT]):
    on_mutate: Callable[[InputT], MutationContext[DataT]]
    on_error: Callable[[BaseException, InputT, MutationContext[DataT] | None], None]
    on_settled: Callable[[], Awaitable[None]]


def create_optimistic_update(
    cache: Cache[DataT],
    update_fn: Callable[[DataT, InputT], DataT],
    on_error: Callable[[BaseException], None] | None = None,
    on_visual_complete: Callable[[], None] | None = None,
) -> OptimisticCallbacks[InputT, DataT]:
    """Build optimistic callbacks around a pure update_fn(current, input)."""

    def _on_mutate(mutation_input: InputT) -> MutationContext[DataT]:
        cache.cancel()
        previous = cache.get_current()
        if previous is not None:
            cache.set_current(update_fn(previous, mutation_input))
        return MutationContext(previous)

    def _on_error(exc: BaseException, mutation_input: InputT, context: MutationContext[DataT] | None) -> None:
        if context is not None and context.previous is not None:
            cache.set_current(context.previous)
        if on_visual_complete is not None:
            on_visual_complete()
        if on_error is not None:
            on_error(exc)

    async def _on_settled() -> None:
        if on_visual_complete is not None:
            on_visual_complete()
        await cache.invalidate()

    return OptimisticCallbacks(_on_mutate, _on_error, _on_settled)


def create_optimistic_delete(
    cache: Cache[DataT],
    filter_fn: Callable[[DataT, InputT], DataT],
    on_error: Callable[[BaseException], None] | None = None,
    on_visual_complete: Callable[[], None] | None = None,
) -> OptimisticCallbacks[InputT, DataT]:
    """create_optimistic_update with a filter that removes the deleted entity."""
    return create_optimistic_update(cache, filter_fn, on_error=on_error, on_visual_complete=on_visual_complete)


class Mutation(Generic[InputT, ResultT]):
    """A remote call wrapped in optimistic callbacks."""

    def __init__(
        self,
        name: str,
        remote: Callable[[InputT], Awaitable[ResultT]],
        callbacks: OptimisticCallbacks[InputT, Any],
    ):
        self.name = name
        self._remote = remote
        self._callbacks = callbacks
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def pending_tasks(self) -> list[asyncio.Task]:
        return list(self._pending)

    def mutate(self, mutation_input: InputT) -> asyncio.Task:
        """Apply optimistically now, then run the remote call in the background."""
        loop = asyncio.get_running_loop()
        context = self._callbacks.on_mutate(mutation_input)
        task = loop.create_task(self._execute(mutation_input, context))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def mutate_async(self, mutation_input: InputT) -> ResultT | None:
        """Like mutate() but wait for the outcome. None means the call failed."""
        return await self.mutate(mutation_input)

    async def _execute(self, mutation_input: InputT, context: MutationContext) -> ResultT | None:
        try:
            result = await self._remote(mutation_input)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("%s failed, rolling back: %s", self.name, exc)
            self._callbacks.on_error(exc, mutation_input, context)
            return None
        finally:
            await self._callbacks.on_settled()
        logger.debug("%s succeeded", self.name)
        return result
