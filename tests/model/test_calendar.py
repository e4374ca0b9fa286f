"""Tests for calendar lane placement."""

from datetime import date, datetime

from boardsync.model.calendar import bucket_view, calendar_placements, effective_order, gap_keys, place_on_calendar

DAY = date(2024, 3, 14)


def _key(board, card_id):
    return board.find_card(card_id)[1].calendar_order


# --- keys ---


def test_gap_keys_midpoint():
    assert gap_keys(100.0, 200.0, 1) == [150.0]


def test_gap_keys_many_strictly_inside():
    keys = gap_keys(100.0, 200.0, 4)
    assert keys == sorted(keys)
    assert len(set(keys)) == 4
    assert all(100.0 < k < 200.0 for k in keys)


def test_gap_keys_without_predecessor():
    assert gap_keys(None, 100.0, 1) == [100.0 - 10000.0 / 2]


def test_gap_keys_without_successor():
    assert gap_keys(200.0, None, 1) == [200.0 + 10000.0 / 2]


def test_gap_keys_empty_bucket_uses_origin():
    assert gap_keys(None, None, 1) == [5000.0]
    assert gap_keys(None, None, 1, step=10.0, origin=5.0) == [10.0]


def test_gap_keys_are_not_rounded():
    keys = gap_keys(1.0, 2.0, 2)
    assert keys[0] < keys[1]
    assert keys[0] != round(keys[0])


# --- views ---


def test_effective_order_fallback(day_board):
    lst, card = day_board.find_card("x")
    assert effective_order(card, lst.index) == 1 * 100000 + 1 * 1000
    lst, card = day_board.find_card("a")
    assert effective_order(card, lst.index) == 100.0


def test_bucket_view_sorted_by_key(day_board):
    assert [card.id for card, _ in bucket_view(day_board, DAY)] == ["a", "b"]
    assert [card.id for card, _ in bucket_view(day_board, None)] == ["u1", "u2", "x"]


def test_bucket_view_excludes(day_board):
    assert [card.id for card, _ in bucket_view(day_board, None, exclude=["u2"])] == ["u1", "x"]


# --- placement ---


def test_drop_between_neighbours_gets_midpoint(day_board):
    result = place_on_calendar(day_board, ["x"], DAY, 1)
    assert _key(result, "x") == 150.0
    assert result.find_card("x")[1].due_date == datetime(2024, 3, 14, 12)
    assert [card.id for card, _ in bucket_view(result, DAY)] == ["a", "x", "b"]


def test_drop_several_keeps_selection_order(day_board):
    result = place_on_calendar(day_board, ["x", "u1", "u2"], DAY, 1)
    keys = [_key(result, cid) for cid in ("x", "u1", "u2")]
    assert keys == sorted(keys)
    assert all(100.0 < k < 200.0 for k in keys)
    assert [card.id for card, _ in bucket_view(result, DAY)] == ["a", "x", "u1", "u2", "b"]


def test_drop_at_start_and_end(day_board):
    first = place_on_calendar(day_board, ["x"], DAY, 0)
    assert _key(first, "x") == -4900.0
    last = place_on_calendar(day_board, ["x"], DAY, 2)
    assert _key(last, "x") == 5200.0


def test_drop_on_empty_day(day_board):
    result = place_on_calendar(day_board, ["x"], date(2024, 1, 1), 0)
    assert _key(result, "x") == 5000.0
    assert result.find_card("x")[1].bucket == date(2024, 1, 1)


def test_drop_into_unscheduled_clears_due_date(day_board):
    result = place_on_calendar(day_board, ["a"], None, 1)
    card = result.find_card("a")[1]
    assert card.due_date is None
    assert card.calendar_order == (1000 + 100000) / 2
    assert [c.id for c, _ in bucket_view(result, None)] == ["u1", "a", "u2", "x"]


def test_reorder_within_same_day(day_board):
    result = place_on_calendar(day_board, ["a"], DAY, 1)
    assert _key(result, "a") == 5200.0
    assert [card.id for card, _ in bucket_view(result, DAY)] == ["b", "a"]


def test_placement_leaves_list_membership_alone(day_board):
    result = place_on_calendar(day_board, ["x"], DAY, 1)
    assert [lst.card_ids() for lst in result.lists] == [lst.card_ids() for lst in day_board.lists]
    result.check()


def test_placements_skip_unknown_cards(day_board):
    assert calendar_placements(day_board, ["nope"], DAY, 0) == []
    updates = calendar_placements(day_board, ["nope", "x"], DAY, 1)
    assert [u.card_id for u in updates] == ["x"]


def test_position_is_clamped(day_board):
    result = place_on_calendar(day_board, ["x"], DAY, 99)
    assert _key(result, "x") == 5200.0
