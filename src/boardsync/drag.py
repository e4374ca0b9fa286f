"""Drag-and-drop coordination for lists, cards and the calendar lane.

A gesture runs idle -> dragging -> idle. on_drag_start suspends the visual
state so no remote refresh can move things under the pointer. on_drag_end
computes the new board locally, writes it to the visual state, fires the
matching optimistic mutation and resumes. Remote failures are rolled back
by the mutation itself, never here.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Literal

from boardsync.model.calendar import DEFAULT_ORIGIN, DEFAULT_STEP, calendar_placements
from boardsync.model.inputs import BulkMove, MoveCard, MoveList
from boardsync.model.reorder import apply_card_updates, move_cards, move_list
from boardsync.model.tree import Board
from boardsync.mutations import BoardMutations
from boardsync.selection import Selection
from boardsync.visual import SuspendToken, VisualState

logger = logging.getLogger(__name__)

DragKind = Literal["list", "card"]

CALENDAR_PREFIX = "calendar-"
UNSCHEDULED_IDS = frozenset({"unscheduled", "calendar-unscheduled"})


@dataclass(frozen=True)
class DragLocation:
    droppable_id: str
    index: int


@dataclass(frozen=True)
class DragStart:
    dragged_id: str
    kind: DragKind


@dataclass(frozen=True)
class DropResult:
    dragged_id: str
    kind: DragKind
    source: DragLocation
    destination: DragLocation | None


# --- drop targets ---


@dataclass(frozen=True)
class ListDrop:
    """A slot in a list (or, for list drags, on the board)."""

    list_id: str
    index: int


@dataclass(frozen=True)
class DateBucketDrop:
    day: date
    index: int


@dataclass(frozen=True)
class UnscheduledDrop:
    index: int


DropTarget = ListDrop | DateBucketDrop | UnscheduledDrop


def calendar_droppable_id(day: date | None) -> str:
    """Droppable id for a calendar day, or the unscheduled lane for None."""
    if day is None:
        return "calendar-unscheduled"
    return f"{CALENDAR_PREFIX}{day.isoformat()}"


def classify_drop(location: DragLocation) -> DropTarget | None:
    """Turn a droppable id into a typed drop target.

    Returns None for a calendar id whose date does not parse.
    """
    droppable_id = location.droppable_id
    if droppable_id in UNSCHEDULED_IDS:
        return UnscheduledDrop(location.index)
    if droppable_id.startswith(CALENDAR_PREFIX):
        try:
            day = date.fromisoformat(droppable_id[len(CALENDAR_PREFIX) :])
        except ValueError:
            return None
        return DateBucketDrop(day, location.index)
    return ListDrop(droppable_id, location.index)


class DragCoordinator:
    """Turns drag gestures into local board transforms and remote mutations."""

    def __init__(
        self,
        visual: VisualState[Board],
        selection: Selection,
        mutations: BoardMutations,
        calendar_step: float = DEFAULT_STEP,
        calendar_origin: float = DEFAULT_ORIGIN,
    ):
        self.visual = visual
        self.selection = selection
        self.mutations = mutations
        self.calendar_step = calendar_step
        self.calendar_origin = calendar_origin
        self._token: SuspendToken | None = None

    @property
    def state(self) -> Literal["idle", "dragging"]:
        return "dragging" if self._token is not None else "idle"

    def on_drag_start(self, start: DragStart) -> None:
        """Freeze the visual state; dragging an unselected card selects it alone."""
        if self._token is not None:
            logger.warning("drag start while already dragging; ignoring")
            return
        self._token = self.visual.suspend(owner=f"drag {start.dragged_id}")
        if start.kind == "card" and start.dragged_id not in self.selection:
            self.selection.select_only(start.dragged_id)

    def on_drag_end(self, result: DropResult) -> list[asyncio.Task]:
        """Apply the drop and dispatch mutations. Returns the dispatched tasks."""
        if self._token is None:
            logger.debug("drag end without drag start; ignoring")
            return []
        token, self._token = self._token, None
        try:
            return self._drop(result)
        finally:
            self.visual.resume(token, discard_local=False)

    def cancel(self) -> None:
        """Abandon the gesture without changing anything."""
        if self._token is not None:
            token, self._token = self._token, None
            self.visual.resume(token, discard_local=False)

    def _drop(self, result: DropResult) -> list[asyncio.Task]:
        destination = result.destination
        if destination is None:
            return []
        if destination == result.source:
            return []

        board = self.visual.current()
        if board is None:
            return []

        if result.kind == "list":
            return self._drop_list(board, result, destination)

        target = classify_drop(destination)
        if target is None:
            logger.debug("unrecognised drop target %r", destination.droppable_id)
            return []
        if isinstance(target, ListDrop):
            return self._drop_cards_on_list(board, result.dragged_id, target)
        return self._drop_cards_on_calendar(board, result.dragged_id, target)

    def _drop_list(self, board: Board, result: DropResult, destination: DragLocation) -> list[asyncio.Task]:
        if board.find_list(result.dragged_id) is None:
            return []
        request = MoveList(result.dragged_id, destination.index)
        self.visual.set_visual(move_list(board, result.source.index, destination.index))
        task = self.mutations.move_list.mutate(request)
        self.selection.clear()
        return [task]

    def _drop_cards_on_list(self, board: Board, dragged_id: str, target: ListDrop) -> list[asyncio.Task]:
        if board.find_list(target.list_id) is None:
            return []
        card_ids = [cid for cid in self.selection.ordered_for_drag(dragged_id) if board.find_card(cid) is not None]
        if not card_ids:
            return []

        if len(card_ids) > 1:
            request, mutation = BulkMove(tuple(card_ids), target.list_id, target.index), self.mutations.bulk_move
        else:
            request, mutation = MoveCard(card_ids[0], target.list_id, target.index), self.mutations.move_card
        self.visual.set_visual(move_cards(board, card_ids, target.list_id, target.index))
        task = mutation.mutate(request)
        self.selection.clear()
        return [task]

    def _drop_cards_on_calendar(
        self, board: Board, dragged_id: str, target: DateBucketDrop | UnscheduledDrop
    ) -> list[asyncio.Task]:
        day = target.day if isinstance(target, DateBucketDrop) else None
        card_ids = self.selection.ordered_for_drag(dragged_id)
        updates = calendar_placements(
            board,
            card_ids,
            day,
            target.index,
            step=self.calendar_step,
            origin=self.calendar_origin,
        )
        if not updates:
            return []

        self.visual.set_visual(apply_card_updates(board, updates))
        task = self.mutations.bulk_update.mutate(updates)
        self.selection.clear()
        return [task]
