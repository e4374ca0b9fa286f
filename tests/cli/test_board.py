"""Tests for 'boardsync board'."""

import json
from argparse import Namespace

import pytest

from boardsync.cli.board import board_summary


def test_board_summary(initialized_repo, capsys):
    args = Namespace(repo=str(initialized_repo), json=False)
    assert board_summary(args) == 0

    out = capsys.readouterr().out
    assert "Test Board" in out
    assert "Backlog" in out
    assert "2 cards" in out


def test_board_summary_json(initialized_repo, capsys):
    args = Namespace(repo=str(initialized_repo), json=True)
    assert board_summary(args) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["name"] == "Test Board"
    assert data["lists"][0] == {"id": "l1", "name": "Backlog", "cards": 2}
    assert data["scheduled"] == 0


def test_board_summary_no_board(empty_repo, capsys):
    args = Namespace(repo=str(empty_repo), json=True)
    with pytest.raises(SystemExit, match="1"):
        board_summary(args)
    assert "not found" in json.loads(capsys.readouterr().err)["error"]
