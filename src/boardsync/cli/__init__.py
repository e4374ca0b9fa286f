"""CLI argument parser and dispatch for boardsync."""

import argparse

from boardsync.cli.board import board_summary
from boardsync.cli.card import card_add, card_delete, card_list, card_move, card_schedule
from boardsync.cli.init import init_board
from boardsync.cli.lists import list_add, list_delete, list_list, list_move


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--repo", default=".", help="Path to git repository (default: .)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log state changes to stderr")

    parser = argparse.ArgumentParser(
        prog="boardsync",
        description="Kanban board with optimistic drag-and-drop sync",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- init ---
    init_p = nouns.add_parser("init", help="Initialize a board", parents=[common])
    init_p.add_argument("--name", help="Board name (default: repository directory name)")
    init_p.set_defaults(func=init_board)

    # --- board ---
    board_p = nouns.add_parser("board", help="Show board summary", parents=[common])
    board_p.set_defaults(func=board_summary)

    # --- list ---
    list_p = nouns.add_parser("list", help="List operations", parents=[common])
    list_verbs = list_p.add_subparsers(dest="verb")

    list_list_p = list_verbs.add_parser("list", help="Show lists", parents=[common])
    list_list_p.set_defaults(func=list_list)

    list_add_p = list_verbs.add_parser("add", help="Create a list", parents=[common])
    list_add_p.add_argument("name", help="List name")
    list_add_p.set_defaults(func=list_add)

    list_move_p = list_verbs.add_parser("move", help="Move a list", parents=[common])
    list_move_p.add_argument("id", help="List ID")
    list_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    list_move_p.set_defaults(func=list_move)

    list_delete_p = list_verbs.add_parser("delete", help="Delete a list", parents=[common])
    list_delete_p.add_argument("id", help="List ID")
    list_delete_p.set_defaults(func=list_delete)

    # list with no verb = list
    list_p.set_defaults(func=list_list)

    # --- card ---
    card_p = nouns.add_parser("card", help="Card operations", parents=[common])
    card_verbs = card_p.add_subparsers(dest="verb")

    card_list_p = card_verbs.add_parser("list", help="List cards", parents=[common])
    card_list_p.add_argument("--list", dest="list", help="Filter by list ID")
    card_list_p.set_defaults(func=card_list)

    card_add_p = card_verbs.add_parser("add", help="Create a card", parents=[common])
    card_add_p.add_argument("title", help="Card title")
    card_add_p.add_argument("--body", default="", help="Card description")
    card_add_p.add_argument("--list", dest="list", help="Target list ID (default: first list)")
    card_add_p.set_defaults(func=card_add)

    card_move_p = card_verbs.add_parser("move", help="Move cards to a list", parents=[common])
    card_move_p.add_argument("ids", nargs="+", help="Card IDs; the first is the one being dragged")
    card_move_p.add_argument("--list", dest="list", required=True, help="Target list ID")
    card_move_p.add_argument("--position", type=int, help="Position in list (1-indexed, default: end)")
    card_move_p.set_defaults(func=card_move)

    card_schedule_p = card_verbs.add_parser("schedule", help="Drop cards on a calendar day", parents=[common])
    card_schedule_p.add_argument("ids", nargs="+", help="Card IDs; the first is the one being dragged")
    when = card_schedule_p.add_mutually_exclusive_group()
    when.add_argument("--date", help="Day as YYYY-MM-DD")
    when.add_argument("--unscheduled", action="store_true", help="Move to the unscheduled lane")
    card_schedule_p.add_argument("--position", type=int, help="Position within the day (1-indexed, default: end)")
    card_schedule_p.set_defaults(func=card_schedule)

    card_delete_p = card_verbs.add_parser("delete", help="Delete a card", parents=[common])
    card_delete_p.add_argument("id", help="Card ID")
    card_delete_p.set_defaults(func=card_delete)

    # card with no verb = list
    card_p.set_defaults(func=card_list, list=None)

    return parser
