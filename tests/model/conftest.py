"""Shared helpers for model tests."""

from datetime import date, datetime

import pytest

from boardsync.model.tree import Board, Card, CardList, reindex_cards, reindex_lists

DAY = date(2024, 3, 14)


def _card(card_id, day=None, order=None):
    """A card scheduled on day (at noon) with an explicit calendar key."""
    due = datetime(day.year, day.month, day.day, 12) if day else None
    return Card(id=card_id, title=f"Card {card_id}", due_date=due, calendar_order=order)


def _board(*lists):
    """Board from lists of cards; list ids are L0, L1, ..."""
    built = [CardList(id=f"L{i}", name=f"List {i}", cards=reindex_cards(cards)) for i, cards in enumerate(lists)]
    return Board(id="board", name="Calendar", lists=reindex_lists(built))


@pytest.fixture
def day_board():
    """Two cards on DAY at keys 100 and 200, two unscheduled cards, one card on the day after."""
    return _board(
        [_card("a", DAY, 100.0), _card("u1"), _card("b", DAY, 200.0)],
        [_card("u2"), _card("x"), _card("next", date(2024, 3, 15), 5.0)],
    )
