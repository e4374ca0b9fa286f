"""Load a board from YAML text or from a git branch."""

from datetime import datetime
from typing import Any

import yaml
from git import Repo

from boardsync.git import BOARDSYNC_DEFAULTS
from boardsync.model.tree import Board, Card, CardList, reindex_cards, reindex_lists


def _parse_due(raw: Any) -> datetime | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw
    return datetime.fromisoformat(str(raw))


def _parse_order(raw: Any) -> float | None:
    return None if raw is None else float(raw)


def board_from_dict(data: dict) -> Board:
    """Build a Board from its plain-dict form.

    List and card indices are taken from sequence order, not from the data.
    """
    lists = []
    for raw_list in data.get("lists") or []:
        cards = [
            Card(
                id=str(raw_card["id"]),
                title=raw_card.get("title") or "",
                description=raw_card.get("description") or "",
                due_date=_parse_due(raw_card.get("due_date")),
                calendar_order=_parse_order(raw_card.get("calendar_order")),
            )
            for raw_card in raw_list.get("cards") or []
        ]
        lists.append(
            CardList(
                id=str(raw_list["id"]),
                name=raw_list.get("name") or "",
                cards=reindex_cards(cards),
            )
        )
    return Board(
        id=str(data.get("id") or "board"),
        name=data.get("name") or "",
        lists=reindex_lists(lists),
    )


def parse_board(text: str) -> Board:
    """Parse YAML board text."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("board file must contain a mapping")
    return board_from_dict(data)


def load_board(
    repo_path: str,
    branch: str = BOARDSYNC_DEFAULTS["branch"],
    board_file: str = BOARDSYNC_DEFAULTS["board-file"],
) -> Board:
    """Load the board file from the tip of a git branch."""
    repo = Repo(repo_path)

    try:
        commit = repo.commit(branch)
    except Exception:
        raise ValueError(f"Branch '{branch}' not found in repository")

    try:
        blob = commit.tree[board_file]
    except KeyError:
        raise ValueError(f"'{board_file}' not found on branch '{branch}'")

    return parse_board(blob.data_stream.read().decode("utf-8"))
