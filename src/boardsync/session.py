"""A board view: query cache, visual state, selection, mutations and drag, wired together."""

from __future__ import annotations

import logging
from pathlib import Path

from boardsync.drag import DragCoordinator
from boardsync.git import read_config
from boardsync.model.calendar import DEFAULT_ORIGIN, DEFAULT_STEP
from boardsync.model.tree import Board
from boardsync.mutations import BoardMutations, Notifier, log_notice
from boardsync.query import BoardQuery
from boardsync.selection import Selection
from boardsync.store import BoardClient, GitBoardStore
from boardsync.visual import VisualState

logger = logging.getLogger(__name__)


class BoardSession:
    """Everything one board view needs.

    Data flows client -> query -> visual: every value the query cache
    receives (fetched or optimistic) is observed by the visual state, which
    shows it unless a drag has it suspended.
    """

    def __init__(
        self,
        client: BoardClient,
        notify: Notifier = log_notice,
        calendar_step: float = DEFAULT_STEP,
        calendar_origin: float = DEFAULT_ORIGIN,
    ):
        self.client = client
        self.query = BoardQuery(client.fetch_board)
        self.visual: VisualState[Board] = VisualState()
        self._unsubscribe = self.query.subscribe(self.visual.observe)
        self.selection = Selection(self.visual.current)
        self.mutations = BoardMutations(client, self.query, notify)
        self.drag = DragCoordinator(
            self.visual,
            self.selection,
            self.mutations,
            calendar_step=calendar_step,
            calendar_origin=calendar_origin,
        )

    @classmethod
    def for_repo(cls, repo_path: str | Path, notify: Notifier = log_notice) -> BoardSession:
        """Session over the git-backed board in repo_path, configured from git config."""
        config = read_config(repo_path)
        return cls(
            GitBoardStore(repo_path),
            notify=notify,
            calendar_step=config["calendar_step"],
            calendar_origin=config["calendar_origin"],
        )

    @property
    def board(self) -> Board | None:
        """The board as currently rendered."""
        return self.visual.current()

    async def load(self) -> Board | None:
        """Fetch the board; the first value also seeds the visual state."""
        return await self.query.refetch()

    async def settle(self) -> None:
        """Wait for all dispatched mutations and their resyncs."""
        await self.mutations.settle()

    def close(self) -> None:
        self._unsubscribe()
