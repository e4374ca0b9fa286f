"""Tests for the wired-up board session."""

import pytest

from boardsync.drag import DragLocation, DragStart, DropResult
from boardsync.git import write_config_key
from boardsync.model.loader import load_board
from boardsync.session import BoardSession


@pytest.mark.asyncio
async def test_load_seeds_visual(abc_board, make_session):
    session, _, _ = make_session(abc_board)
    assert session.board is None
    assert await session.load() is abc_board
    assert session.board is abc_board


@pytest.mark.asyncio
async def test_selection_reads_visual_order(abc_board, make_session):
    session, _, _ = make_session(abc_board)
    await session.load()
    session.selection.select_range("c2", "c3")
    assert session.selection.card_ids == {"c2", "c3"}


@pytest.mark.asyncio
async def test_close_stops_observing(abc_board, make_board, make_session):
    session, _, _ = make_session(abc_board)
    await session.load()
    session.close()
    session.query.set_current(make_board({"A": []}))
    assert session.board is abc_board


@pytest.mark.asyncio
async def test_for_repo_round_trip(board_repo):
    notices = []
    session = BoardSession.for_repo(board_repo, notify=lambda header, message: notices.append(header))
    await session.load()

    session.drag.on_drag_start(DragStart("c3", "card"))
    session.drag.on_drag_end(DropResult("c3", "card", DragLocation("l2", 0), DragLocation("l1", 0)))
    await session.settle()
    session.close()

    assert notices == []
    assert load_board(str(board_repo)).find_list("l1").card_ids() == ["c3", "c1", "c2"]


@pytest.mark.asyncio
async def test_for_repo_reads_calendar_config(board_repo):
    write_config_key(board_repo, "calendar_step", 50.0)
    write_config_key(board_repo, "calendar_origin", 25.0)
    session = BoardSession.for_repo(board_repo)
    assert session.drag.calendar_step == 50.0
    assert session.drag.calendar_origin == 25.0
    session.close()
