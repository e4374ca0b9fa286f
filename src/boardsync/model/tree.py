"""Immutable board tree: lists containing cards."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Iterator

# Fields a CardUpdate may carry.
CARD_FIELDS = ("title", "description", "due_date", "calendar_order")


class InvariantError(Exception):
    """A board tree broke its index or membership invariants."""


@dataclass(frozen=True)
class Card:
    """A card in a list."""

    id: str
    index: int = 0
    title: str = ""
    description: str = ""
    due_date: datetime | None = None
    calendar_order: float | None = None

    @property
    def bucket(self) -> date | None:
        """Calendar day this card is scheduled on, or None if unscheduled."""
        return self.due_date.date() if self.due_date is not None else None


@dataclass(frozen=True)
class CardList:
    """An ordered list of cards."""

    id: str
    index: int = 0
    name: str = ""
    cards: tuple[Card, ...] = ()

    def card_ids(self) -> list[str]:
        return [c.id for c in self.cards]


@dataclass(frozen=True)
class Board:
    """The full board state."""

    id: str = "board"
    name: str = ""
    lists: tuple[CardList, ...] = field(default_factory=tuple)

    def find_list(self, list_id: str) -> CardList | None:
        """Find a list by id."""
        for lst in self.lists:
            if lst.id == list_id:
                return lst
        return None

    def find_card(self, card_id: str) -> tuple[CardList, Card] | None:
        """Find a card and the list holding it."""
        for lst in self.lists:
            for card in lst.cards:
                if card.id == card_id:
                    return lst, card
        return None

    def iter_cards(self) -> Iterator[tuple[CardList, Card]]:
        """Yield (list, card) pairs in visual order."""
        for lst in self.lists:
            for card in lst.cards:
                yield lst, card

    def check(self) -> None:
        """Raise InvariantError if indices are not contiguous or ids repeat."""
        for i, lst in enumerate(self.lists):
            if lst.index != i:
                raise InvariantError(f"list {lst.id} has index {lst.index}, expected {i}")
        seen: set[str] = set()
        for lst in self.lists:
            for i, card in enumerate(lst.cards):
                if card.index != i:
                    raise InvariantError(f"card {card.id} in {lst.id} has index {card.index}, expected {i}")
                if card.id in seen:
                    raise InvariantError(f"card {card.id} appears more than once")
                seen.add(card.id)


def scheduled_at(day: date | None) -> datetime | None:
    """Due date written when a card is dropped on a calendar day (noon)."""
    if day is None:
        return None
    return datetime.combine(day, time(12, 0))


def reindex_cards(cards: list[Card] | tuple[Card, ...]) -> tuple[Card, ...]:
    """Renumber cards 0..n-1, reusing cards whose index is already right."""
    return tuple(c if c.index == i else replace(c, index=i) for i, c in enumerate(cards))


def reindex_lists(lists: list[CardList] | tuple[CardList, ...]) -> tuple[CardList, ...]:
    """Renumber lists 0..n-1, reusing lists whose index is already right."""
    return tuple(lst if lst.index == i else replace(lst, index=i) for i, lst in enumerate(lists))
