"""Shared helpers for CLI command handlers."""

import asyncio
import json
import sys
from pathlib import Path

from boardsync.model.tree import Board, Card, CardList
from boardsync.session import BoardSession


class NoticeCollector:
    """Notifier that remembers user notices so the command can report them."""

    def __init__(self):
        self.notices: list[tuple[str, str]] = []

    def __call__(self, header: str, message: str) -> None:
        self.notices.append((header, message))


def open_session_or_die(repo: str, json_mode: bool) -> tuple[BoardSession, NoticeCollector]:
    """Open a session on the repo's board. Exit 1 with message if there is none."""
    notices = NoticeCollector()
    try:
        session = BoardSession.for_repo(Path(repo).resolve(), notify=notices)
    except Exception as e:
        error(str(e), json_mode)
    return session, notices


def run(coro) -> int:
    """Run an async command handler to completion."""
    return asyncio.run(coro)


def find_list(board: Board, list_id: str, json_mode: bool) -> CardList:
    """Lookup list by id. Exit 1 listing available lists if not found."""
    lst = board.find_list(list_id)
    if lst is not None:
        return lst
    available = [f"  {lst.id}  {lst.name}" for lst in board.lists]
    error(f"List '{list_id}' not found. Available:\n" + "\n".join(available), json_mode)


def find_card(board: Board, card_id: str, json_mode: bool) -> tuple[CardList, Card]:
    """Lookup card and its list by id. Exit 1 if not found."""
    found = board.find_card(card_id)
    if found is not None:
        return found
    error(f"Card '{card_id}' not found.", json_mode)


def to_index(position: int | None, default: int) -> int:
    """Convert a 1-indexed CLI position to a 0-indexed one."""
    if position is None:
        return default
    return max(position - 1, 0)


def card_summary(card: Card) -> dict:
    """Card as a JSON-friendly dict."""
    return {
        "id": card.id,
        "title": card.title,
        "index": card.index,
        "due_date": card.due_date.isoformat() if card.due_date else None,
        "calendar_order": card.calendar_order,
    }


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def report_notices(notices: NoticeCollector, json_mode: bool) -> int:
    """Print any failure notices raised by mutations. Returns the exit code."""
    if not notices.notices:
        return 0
    header, message = notices.notices[-1]
    if json_mode:
        print(json.dumps({"error": header, "message": message}), file=sys.stderr)
    else:
        print(f"error: {header}. {message}", file=sys.stderr)
    return 1


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)
