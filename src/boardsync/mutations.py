"""The optimistic board mutations of a board view."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Sequence

from boardsync.model.inputs import BulkMove, CardUpdate, DeleteCard, DeleteList, MoveCard, MoveList
from boardsync.model.reorder import apply_card_updates, move_cards, move_list_to, remove_card, remove_list
from boardsync.model.tree import Board
from boardsync.optimistic import Mutation, create_optimistic_delete, create_optimistic_update
from boardsync.query import BoardQuery
from boardsync.store import BoardClient

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]

RETRY_LATER = "Please try again later, or contact customer support."


def log_notice(header: str, message: str) -> None:
    """Default notifier: send user notices to the log."""
    logger.warning("%s: %s", header, message)


def _move_list(board: Board, request: MoveList) -> Board:
    return move_list_to(board, request.list_id, request.index)


def _move_card(board: Board, request: MoveCard) -> Board:
    return move_cards(board, [request.card_id], request.list_id, request.index)


def _bulk_move(board: Board, request: BulkMove) -> Board:
    return move_cards(board, request.card_ids, request.list_id, request.start_index)


def _bulk_update(board: Board, updates: Sequence[CardUpdate]) -> Board:
    return apply_card_updates(board, updates)


def _update_card(board: Board, update: CardUpdate) -> Board:
    return apply_card_updates(board, [update])


def _delete_card(board: Board, request: DeleteCard) -> Board:
    return remove_card(board, request.card_id)


def _delete_list(board: Board, request: DeleteList) -> Board:
    return remove_list(board, request.list_id)


class BoardMutations:
    """One Mutation per remote operation, all writing through the same query cache."""

    def __init__(self, client: BoardClient, query: BoardQuery, notify: Notifier = log_notice):
        self.client = client
        self.query = query
        self.notify = notify

        self.move_list = self._build("move_list", client.move_list, _move_list, "Unable to update list")
        self.move_card = self._build("move_card", client.move_card, _move_card, "Unable to update card")
        self.bulk_move = self._build("bulk_move", client.bulk_move_cards, _bulk_move, "Unable to move cards")
        self.bulk_update = self._build(
            "bulk_update", client.bulk_update_cards, _bulk_update, "Unable to update cards"
        )
        self.update_card = self._build("update_card", client.update_card, _update_card, "Unable to update card")
        self.delete_card = self._build(
            "delete_card", client.delete_card, _delete_card, "Unable to delete card", delete=True
        )
        self.delete_list = self._build(
            "delete_list", client.delete_list, _delete_list, "Unable to delete list", delete=True
        )

    def all(self) -> list[Mutation]:
        return [
            self.move_list,
            self.move_card,
            self.bulk_move,
            self.bulk_update,
            self.update_card,
            self.delete_card,
            self.delete_list,
        ]

    @property
    def pending(self) -> int:
        """Mutations whose remote call has not settled yet."""
        return sum(m.pending for m in self.all())

    async def settle(self) -> None:
        """Wait until every dispatched mutation has settled."""
        while self.pending:
            await asyncio.gather(*(t for m in self.all() for t in m.pending_tasks()))

    def _build(self, name, remote, update_fn, header: str, delete: bool = False) -> Mutation:
        def on_error(exc: BaseException) -> None:
            self.notify(header, RETRY_LATER)

        factory = create_optimistic_delete if delete else create_optimistic_update
        return Mutation(name, remote, factory(self.query, update_fn, on_error=on_error))
