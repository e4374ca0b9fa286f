"""Shared fixtures for CLI tests."""

import pytest

from boardsync.model.tree import Board, Card, CardList, reindex_cards, reindex_lists
from boardsync.model.writer import save_board


@pytest.fixture
def initialized_repo(empty_repo):
    """Create a repo with an initialized board (3 lists, 2 cards)."""
    cards = reindex_cards([Card(id="c1", title="First card"), Card(id="c2", title="Second card")])
    lists = [
        CardList(id="l1", name="Backlog", cards=cards),
        CardList(id="l2", name="Doing"),
        CardList(id="l3", name="Done"),
    ]
    save_board(empty_repo, Board(id="board", name="Test Board", lists=reindex_lists(lists)), "Initialize test board")
    return empty_repo
