"""Tests for multi-select state."""

import pytest

from boardsync.selection import Selection


@pytest.fixture
def selection(make_board):
    board = make_board({"A": ["c1", "c2", "c3"], "B": ["c4", "c5"], "C": ["c6"]})
    return Selection(lambda: board)


# --- toggling ---


def test_toggle_adds_and_removes(selection):
    selection.toggle("c1")
    assert "c1" in selection
    assert selection.anchor == "c1"
    selection.toggle("c1")
    assert "c1" not in selection
    assert not selection.has_selection


def test_toggle_list(selection):
    selection.toggle_list("A")
    assert selection.list_ids == {"A"}
    assert selection.has_selection
    selection.toggle_list("A")
    assert selection.list_ids == frozenset()


def test_select_only_replaces(selection):
    selection.toggle("c1")
    selection.toggle("c2")
    selection.select_only("c5")
    assert selection.card_ids == {"c5"}
    assert selection.anchor == "c5"


def test_clear(selection):
    selection.toggle("c1")
    selection.toggle_list("B")
    selection.clear()
    assert not selection.has_selection
    assert selection.anchor is None
    assert len(selection) == 0


# --- ranges ---


def test_select_range_crosses_lists(selection):
    selection.select_range("c2", "c4")
    assert selection.card_ids == {"c2", "c3", "c4"}
    assert selection.anchor == "c4"


def test_select_range_is_order_independent(selection):
    selection.select_range("c5", "c2")
    assert selection.card_ids == {"c2", "c3", "c4", "c5"}


def test_select_range_unknown_id_is_noop(selection):
    selection.toggle("c1")
    selection.select_range("c1", "c99")
    assert selection.card_ids == {"c1"}


def test_extend_to_without_anchor(selection):
    selection.extend_to("c3")
    assert selection.card_ids == {"c3"}


def test_extend_to_from_anchor(selection):
    selection.toggle("c6")
    selection.extend_to("c4")
    assert selection.card_ids == {"c4", "c5", "c6"}


# --- drag ordering ---


def test_ordered_for_drag_dragged_first(selection):
    for card_id in ("c1", "c3", "c5"):
        selection.toggle(card_id)
    assert selection.ordered_for_drag("c3") == ["c3", "c1", "c5"]


def test_ordered_for_drag_sorts_by_index_then_board_order(selection):
    for card_id in ("c6", "c2", "c4"):
        selection.toggle(card_id)
    # c4 and c6 share index 0; c4 comes first on the board
    assert selection.ordered_for_drag("c2") == ["c2", "c4", "c6"]


def test_ordered_for_drag_unselected_collapses(selection):
    selection.toggle("c1")
    selection.toggle("c2")
    assert selection.ordered_for_drag("c5") == ["c5"]
    assert selection.card_ids == {"c5"}


def test_range_reads_board_at_call_time(make_board):
    boards = [make_board({"A": ["c1", "c2", "c3"]})]
    selection = Selection(lambda: boards[-1])
    boards.append(make_board({"A": ["c3", "c2", "c1"]}))
    selection.select_range("c3", "c2")
    assert selection.card_ids == {"c2", "c3"}
