"""Handlers for 'boardsync card' commands."""

from datetime import date

from boardsync.cli._common import (
    card_summary,
    error,
    find_card,
    find_list,
    open_session_or_die,
    output_json,
    output_result,
    report_notices,
    run,
    to_index,
)
from boardsync.drag import DragLocation, DragStart, DropResult, calendar_droppable_id
from boardsync.model.calendar import bucket_view, calendar_placements
from boardsync.model.inputs import BulkMove, DeleteCard


def card_list(args) -> int:
    """List cards grouped by list."""
    return run(_card_list(args))


async def _card_list(args) -> int:
    session, _ = open_session_or_die(args.repo, args.json)
    board = await session.load()
    session.close()

    lists = [lst for lst in board.lists if not args.list or lst.id == args.list]
    if args.json:
        output_json(
            [dict(card_summary(card), list={"id": lst.id, "name": lst.name}) for lst in lists for card in lst.cards]
        )
    else:
        for lst in lists:
            print(f"{lst.id}  {lst.name}")
            for card in lst.cards:
                due = f"  ({card.due_date.date().isoformat()})" if card.due_date else ""
                print(f"  {card.id}  {card.title}{due}")
    return 0


def card_add(args) -> int:
    """Create a card in a list."""
    return run(_card_add(args))


async def _card_add(args) -> int:
    session, _ = open_session_or_die(args.repo, args.json)
    board = await session.load()
    lst = find_list(board, args.list, args.json) if args.list else (board.lists[0] if board.lists else None)
    if lst is None:
        error("Board has no lists.", args.json)
    card = await session.client.create_card(lst.id, args.title, args.body)
    session.close()
    output_result(
        {"id": card.id, "title": card.title, "list": {"id": lst.id, "name": lst.name}},
        f"Created card {card.id}: {card.title}",
        args.json,
    )
    return 0


def card_move(args) -> int:
    """Move one or more cards into a list, as a drag of the first one."""
    return run(_card_move(args))


async def _card_move(args) -> int:
    session, notices = open_session_or_die(args.repo, args.json)
    board = await session.load()
    dest = find_list(board, args.list, args.json)
    source_list, dragged = find_card(board, args.ids[0], args.json)
    for card_id in args.ids[1:]:
        find_card(board, card_id, args.json)

    source = DragLocation(source_list.id, dragged.index)
    destination = DragLocation(dest.id, to_index(args.position, len(dest.cards)))
    for card_id in dict.fromkeys(args.ids):
        session.selection.toggle(card_id)
    if destination == source and len(session.selection) > 1:
        # the dragged card stays put, a gesture would drop nothing
        card_ids = session.selection.ordered_for_drag(dragged.id)
        session.mutations.bulk_move.mutate(BulkMove(tuple(card_ids), dest.id, destination.index))
        session.selection.clear()
    else:
        session.drag.on_drag_start(DragStart(dragged.id, "card"))
        session.drag.on_drag_end(DropResult(dragged.id, "card", source, destination))
    await session.settle()
    result = session.board.find_list(dest.id)
    session.close()

    code = report_notices(notices, args.json)
    if code:
        return code
    output_result(
        {"list": {"id": result.id, "name": result.name}, "cards": result.card_ids()},
        f"Moved {len(set(args.ids))} card(s) to {result.name}: {', '.join(result.card_ids())}",
        args.json,
    )
    return 0


def card_schedule(args) -> int:
    """Drop cards on a calendar day (or the unscheduled lane)."""
    return run(_card_schedule(args))


async def _card_schedule(args) -> int:
    if args.date is None and not args.unscheduled:
        error("Either --date or --unscheduled is required.", args.json)
    try:
        day = None if args.unscheduled else date.fromisoformat(args.date)
    except ValueError:
        error(f"Invalid date '{args.date}', expected YYYY-MM-DD.", args.json)

    session, notices = open_session_or_die(args.repo, args.json)
    board = await session.load()
    _, dragged = find_card(board, args.ids[0], args.json)
    for card_id in args.ids[1:]:
        find_card(board, card_id, args.json)

    source_view = [card.id for card, _ in bucket_view(board, dragged.bucket)]
    target_size = len(bucket_view(board, day, exclude=args.ids))

    source = DragLocation(calendar_droppable_id(dragged.bucket), source_view.index(dragged.id))
    destination = DragLocation(calendar_droppable_id(day), to_index(args.position, target_size))
    for card_id in dict.fromkeys(args.ids):
        session.selection.toggle(card_id)
    if destination == source and len(session.selection) > 1:
        updates = calendar_placements(
            board,
            session.selection.ordered_for_drag(dragged.id),
            day,
            destination.index,
            step=session.drag.calendar_step,
            origin=session.drag.calendar_origin,
        )
        session.mutations.bulk_update.mutate(updates)
        session.selection.clear()
    else:
        session.drag.on_drag_start(DragStart(dragged.id, "card"))
        session.drag.on_drag_end(DropResult(dragged.id, "card", source, destination))
    await session.settle()
    moved = [session.board.find_card(card_id)[1] for card_id in dict.fromkeys(args.ids)]
    session.close()

    code = report_notices(notices, args.json)
    if code:
        return code
    label = day.isoformat() if day else "unscheduled"
    output_result(
        {"bucket": label, "cards": [card_summary(card) for card in moved]},
        f"Scheduled {len(moved)} card(s) on {label}",
        args.json,
    )
    return 0


def card_delete(args) -> int:
    """Delete a card."""
    return run(_card_delete(args))


async def _card_delete(args) -> int:
    session, notices = open_session_or_die(args.repo, args.json)
    board = await session.load()
    _, card = find_card(board, args.id, args.json)
    await session.mutations.delete_card.mutate_async(DeleteCard(card.id))
    session.close()

    code = report_notices(notices, args.json)
    if code:
        return code
    output_result({"id": card.id, "deleted": True}, f"Deleted card {card.id}: {card.title}", args.json)
    return 0
