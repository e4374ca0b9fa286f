"""Handlers for 'boardsync list' commands."""

from boardsync.cli._common import (
    find_list,
    open_session_or_die,
    output_json,
    output_result,
    report_notices,
    run,
    to_index,
)
from boardsync.drag import DragLocation, DragStart, DropResult
from boardsync.model.inputs import DeleteList


def list_list(args) -> int:
    """List lists in board order."""
    return run(_list_list(args))


async def _list_list(args) -> int:
    session, _ = open_session_or_die(args.repo, args.json)
    board = await session.load()
    session.close()

    items = [{"id": lst.id, "name": lst.name, "index": lst.index, "cards": len(lst.cards)} for lst in board.lists]
    if args.json:
        output_json(items)
    else:
        for item in items:
            print(f"{item['id']}  {item['name']}")
    return 0


def list_add(args) -> int:
    """Create a list at the end of the board."""
    return run(_list_add(args))


async def _list_add(args) -> int:
    session, _ = open_session_or_die(args.repo, args.json)
    lst = await session.client.create_list(args.name)
    session.close()
    output_result({"id": lst.id, "name": lst.name}, f"Created list {lst.id}: {lst.name}", args.json)
    return 0


def list_move(args) -> int:
    """Move a list to a new position (1-indexed)."""
    return run(_list_move(args))


async def _list_move(args) -> int:
    session, notices = open_session_or_die(args.repo, args.json)
    board = await session.load()
    lst = find_list(board, args.id, args.json)
    new_index = min(to_index(args.position, lst.index), len(board.lists) - 1)

    session.drag.on_drag_start(DragStart(lst.id, "list"))
    session.drag.on_drag_end(
        DropResult(
            lst.id,
            "list",
            source=DragLocation("board", lst.index),
            destination=DragLocation("board", new_index),
        )
    )
    await session.settle()
    session.close()

    code = report_notices(notices, args.json)
    if code:
        return code
    output_result(
        {"id": lst.id, "position": new_index + 1},
        f"Moved list {lst.id} to position {new_index + 1}",
        args.json,
    )
    return 0


def list_delete(args) -> int:
    """Delete a list and its cards."""
    return run(_list_delete(args))


async def _list_delete(args) -> int:
    session, notices = open_session_or_die(args.repo, args.json)
    board = await session.load()
    lst = find_list(board, args.id, args.json)
    await session.mutations.delete_list.mutate_async(DeleteList(lst.id))
    session.close()

    code = report_notices(notices, args.json)
    if code:
        return code
    output_result({"id": lst.id, "deleted": True}, f"Deleted list {lst.id}: {lst.name}", args.json)
    return 0
