"""Multi-select state for cards and lists."""

from __future__ import annotations

from typing import Callable

from boardsync.model.reorder import flatten
from boardsync.model.tree import Board


class Selection:
    """Selected card ids (and list ids) plus the anchor for range selection.

    board_source returns the board in current visual order; range and
    drag ordering read it at call time.
    """

    def __init__(self, board_source: Callable[[], Board | None]):
        self._board_source = board_source
        self._cards: set[str] = set()
        self._lists: set[str] = set()
        self.anchor: str | None = None

    @property
    def card_ids(self) -> frozenset[str]:
        return frozenset(self._cards)

    @property
    def list_ids(self) -> frozenset[str]:
        return frozenset(self._lists)

    @property
    def has_selection(self) -> bool:
        return bool(self._cards or self._lists)

    def __contains__(self, card_id: str) -> bool:
        return card_id in self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def toggle(self, card_id: str) -> None:
        """Flip a card's membership. A newly added card becomes the anchor."""
        if card_id in self._cards:
            self._cards.discard(card_id)
        else:
            self._cards.add(card_id)
            self.anchor = card_id

    def toggle_list(self, list_id: str) -> None:
        if list_id in self._lists:
            self._lists.discard(list_id)
        else:
            self._lists.add(list_id)

    def select_only(self, card_id: str) -> None:
        """Replace the card selection with a single card."""
        self._cards = {card_id}
        self.anchor = card_id

    def select_range(self, from_id: str, to_id: str) -> None:
        """Select every card between from_id and to_id inclusive, across lists.

        Does nothing if either id is not on the board.
        """
        order = [card.id for card in flatten(self._board_source())]
        try:
            start = order.index(from_id)
            end = order.index(to_id)
        except ValueError:
            return
        if start > end:
            start, end = end, start
        self._cards = set(order[start : end + 1])
        self.anchor = to_id

    def extend_to(self, card_id: str) -> None:
        """Shift-click: range from the anchor, or a plain select without one."""
        if self.anchor is None:
            self.select_only(card_id)
        else:
            self.select_range(self.anchor, card_id)

    def ordered_for_drag(self, dragged_id: str) -> list[str]:
        """Selected card ids for a drag, dragged card first.

        Dragging an unselected card selects it alone. The remaining cards
        are sorted by their per-list index, ties kept in board order.
        """
        if dragged_id not in self._cards:
            self.select_only(dragged_id)
        selected = [card for card in flatten(self._board_source()) if card.id in self._cards]
        selected.sort(key=lambda card: (card.id != dragged_id, card.index))
        ordered = [card.id for card in selected]
        if dragged_id not in ordered:
            ordered.insert(0, dragged_id)
        return ordered

    def clear(self) -> None:
        """Drop all selected cards and lists and the anchor."""
        self._cards.clear()
        self._lists.clear()
        self.anchor = None
