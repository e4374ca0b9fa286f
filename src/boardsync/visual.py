"""Two-phase visual state: a local copy that follows remote data unless suspended.

While at least one suspension token is outstanding, observed remote values
are remembered but not shown. Local writes through set_visual always take
effect, which is what keeps a drag gesture from snapping back.
"""

from __future__ import annotations

import itertools
import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Watcher = Callable[[T | None, T | None], None]

_token_ids = itertools.count(1)


class SuspendError(Exception):
    """A suspension token was released twice or belongs to another unit."""


class SuspendToken:
    """Handle returned by VisualState.suspend(); pass it back to resume()."""

    __slots__ = ("id", "owner")

    def __init__(self, owner: str):
        self.id = next(_token_ids)
        self.owner = owner

    def __repr__(self) -> str:
        return f"<SuspendToken {self.id} ({self.owner})>"


class VisualState(Generic[T]):
    """Visual copy of remote data with an owned-token freeze window."""

    def __init__(self, initial: T | None = None):
        self._visual: T | None = initial
        self._remote: T | None = initial
        self._tokens: set[SuspendToken] = set()
        self._watchers: list[Watcher] = []

    def current(self) -> T | None:
        """Latest visual value."""
        return self._visual

    @property
    def remote(self) -> T | None:
        """Last value passed to observe(), shown or not."""
        return self._remote

    @property
    def is_suspended(self) -> bool:
        return bool(self._tokens)

    def observe(self, value: T | None) -> None:
        """Record a new authoritative value; show it unless suspended."""
        if value is None:
            return
        self._remote = value
        if self._tokens:
            logger.debug("observe while suspended; holding remote value")
            return
        self._show(value)

    def set_visual(self, value: T | None) -> None:
        """Unconditional local write."""
        self._show(value)

    def suspend(self, owner: str = "") -> SuspendToken:
        """Start ignoring observe() until the returned token is resumed."""
        token = SuspendToken(owner)
        self._tokens.add(token)
        logger.debug("suspended by %r (%d outstanding)", token, len(self._tokens))
        return token

    def resume(self, token: SuspendToken, discard_local: bool = False) -> None:
        """Release a suspension token.

        When the last token is released with discard_local, the last observed
        remote value replaces the visual value at once. Without it the visual
        value stays as it is until the next observe(), so the caller must
        trigger a refetch if it needs fresh data.
        """
        if token not in self._tokens:
            raise SuspendError(f"{token!r} is not an active suspension")
        self._tokens.discard(token)
        logger.debug("resumed %r (%d outstanding)", token, len(self._tokens))
        if discard_local and not self._tokens and self._remote is not None:
            self._show(self._remote)

    def watch(self, callback: Watcher) -> Callable[[], None]:
        """Call callback(old, new) whenever the visual value changes. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    def _show(self, value: T | None) -> None:
        old = self._visual
        self._visual = value
        if old is value:
            return
        for cb in list(self._watchers):
            cb(old, value)
