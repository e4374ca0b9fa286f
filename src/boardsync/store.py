"""Authoritative board stores: the remote side of every mutation.

BoardClient is the surface the client core calls. MemoryBoardStore keeps
the board in process and validates every request the way a server would.
GitBoardStore additionally commits each accepted change to a git branch.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol, Sequence

from boardsync.git import read_config
from boardsync.ids import CARD_PREFIX, LIST_PREFIX, next_id
from boardsync.model.inputs import BulkMove, CardUpdate, DeleteCard, DeleteList, MoveCard, MoveList
from boardsync.model.loader import load_board
from boardsync.model.reorder import (
    add_card,
    add_list,
    apply_card_updates,
    move_cards,
    move_list_to,
    remove_card,
    remove_list,
)
from boardsync.model.tree import Board, Card, CardList
from boardsync.model.writer import save_board

logger = logging.getLogger(__name__)

NOT_FOUND = "NOT_FOUND"
BAD_REQUEST = "BAD_REQUEST"


class StoreError(Exception):
    """The store rejected a request."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class BoardClient(Protocol):
    async def fetch_board(self) -> Board: ...

    async def move_list(self, request: MoveList) -> int: ...

    async def move_card(self, request: MoveCard) -> int: ...

    async def bulk_move_cards(self, request: BulkMove) -> int: ...

    async def bulk_update_cards(self, updates: Sequence[CardUpdate]) -> int: ...

    async def update_card(self, update: CardUpdate) -> int: ...

    async def delete_card(self, request: DeleteCard) -> int: ...

    async def delete_list(self, request: DeleteList) -> int: ...


class MemoryBoardStore:
    """In-process authoritative board.

    Every mutation returns the number of entities it changed. latency,
    in seconds, is awaited before each call is handled.
    """

    def __init__(self, board: Board | None = None, latency: float = 0.0):
        self._board = board if board is not None else Board()
        self._board.check()
        self.latency = latency

    @property
    def board(self) -> Board:
        return self._board

    async def fetch_board(self) -> Board:
        await asyncio.sleep(self.latency)
        return self._board

    # --- lists ---

    async def create_list(self, name: str) -> CardList:
        await asyncio.sleep(self.latency)
        list_id = next_id([lst.id for lst in self._board.lists], LIST_PREFIX)
        board = add_list(self._board, CardList(id=list_id, name=name))
        await self._commit(board, f"Add list {list_id}: {name}")
        return board.find_list(list_id)

    async def move_list(self, request: MoveList) -> int:
        await asyncio.sleep(self.latency)
        self._require_list(request.list_id)
        board = move_list_to(self._board, request.list_id, request.index)
        await self._commit(board, f"Move list {request.list_id} to {request.index}")
        return 1

    async def delete_list(self, request: DeleteList) -> int:
        await asyncio.sleep(self.latency)
        self._require_list(request.list_id)
        await self._commit(remove_list(self._board, request.list_id), f"Delete list {request.list_id}")
        return 1

    # --- cards ---

    async def create_card(self, list_id: str, title: str, description: str = "", index: int | None = None) -> Card:
        await asyncio.sleep(self.latency)
        self._require_list(list_id)
        if not title:
            raise StoreError(BAD_REQUEST, "Card title must not be empty")
        card_id = next_id([card.id for _, card in self._board.iter_cards()], CARD_PREFIX)
        board = add_card(self._board, list_id, Card(id=card_id, title=title, description=description), index)
        await self._commit(board, f"Add card {card_id}: {title}")
        return board.find_card(card_id)[1]

    async def move_card(self, request: MoveCard) -> int:
        await asyncio.sleep(self.latency)
        self._require_card(request.card_id)
        self._require_list(request.list_id)
        board = move_cards(self._board, [request.card_id], request.list_id, request.index)
        await self._commit(board, f"Move card {request.card_id} to {request.list_id}")
        return 1

    async def bulk_move_cards(self, request: BulkMove) -> int:
        await asyncio.sleep(self.latency)
        self._require_card(request.card_ids[0])
        self._require_list(request.list_id)
        known = [card_id for card_id in request.card_ids if self._board.find_card(card_id) is not None]
        board = move_cards(self._board, known, request.list_id, request.start_index)
        await self._commit(board, f"Move {len(known)} cards to {request.list_id}")
        return len(known)

    async def bulk_update_cards(self, updates: Sequence[CardUpdate]) -> int:
        await asyncio.sleep(self.latency)
        if not updates:
            return 0
        self._require_card(updates[0].card_id)
        applied = [u for u in updates if u.fields and self._board.find_card(u.card_id) is not None]
        if applied:
            board = apply_card_updates(self._board, applied)
            await self._commit(board, f"Update {len(applied)} cards")
        return len(applied)

    async def update_card(self, update: CardUpdate) -> int:
        await asyncio.sleep(self.latency)
        self._require_card(update.card_id)
        if not update.fields:
            return 0
        await self._commit(apply_card_updates(self._board, [update]), f"Update card {update.card_id}")
        return 1

    async def delete_card(self, request: DeleteCard) -> int:
        await asyncio.sleep(self.latency)
        self._require_card(request.card_id)
        await self._commit(remove_card(self._board, request.card_id), f"Delete card {request.card_id}")
        return 1

    # --- internals ---

    def _require_list(self, list_id: str) -> None:
        if self._board.find_list(list_id) is None:
            raise StoreError(NOT_FOUND, f"List with public ID {list_id} not found")

    def _require_card(self, card_id: str) -> None:
        if self._board.find_card(card_id) is None:
            raise StoreError(NOT_FOUND, f"Card with public ID {card_id} not found")

    async def _commit(self, board: Board, message: str) -> None:
        """Accept a new board state."""
        board.check()
        self._board = board
        logger.debug("store: %s", message)


class GitBoardStore(MemoryBoardStore):
    """MemoryBoardStore that commits the board file after every accepted change."""

    def __init__(self, repo_path: str | Path, latency: float = 0.0):
        self.repo_path = str(Path(repo_path).resolve())
        config = read_config(self.repo_path)
        self.branch = config["branch"]
        self.board_file = config["board_file"]
        super().__init__(load_board(self.repo_path, self.branch, self.board_file), latency=latency)
        self.commit: str | None = None

    async def _commit(self, board: Board, message: str) -> None:
        board.check()
        self.commit = await asyncio.to_thread(
            save_board, self.repo_path, board, message, self.branch, self.board_file
        )
        self._board = board
        logger.debug("committed %s: %s", self.commit[:8], message)
