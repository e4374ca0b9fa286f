"""Immutable board model and pure transforms."""

from boardsync.model.calendar import calendar_placements, place_on_calendar
from boardsync.model.inputs import BulkMove, CardUpdate, DeleteCard, DeleteList, MoveCard, MoveList
from boardsync.model.loader import load_board, parse_board
from boardsync.model.reorder import (
    apply_card_updates,
    flatten,
    move_card,
    move_cards,
    move_list,
    move_list_to,
    remove_card,
    remove_list,
)
from boardsync.model.tree import Board, Card, CardList, InvariantError
from boardsync.model.writer import save_board, serialize_board

__all__ = [
    "Board",
    "BulkMove",
    "Card",
    "CardList",
    "CardUpdate",
    "DeleteCard",
    "DeleteList",
    "InvariantError",
    "MoveCard",
    "MoveList",
    "apply_card_updates",
    "calendar_placements",
    "flatten",
    "load_board",
    "move_card",
    "move_cards",
    "move_list",
    "move_list_to",
    "parse_board",
    "place_on_calendar",
    "remove_card",
    "remove_list",
    "save_board",
    "serialize_board",
]
