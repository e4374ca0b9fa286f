"""Handler for 'boardsync board'."""

from boardsync.cli._common import open_session_or_die, output_json, run


def board_summary(args) -> int:
    """Show board summary: name, lists, card counts."""
    return run(_board_summary(args))


async def _board_summary(args) -> int:
    session, _ = open_session_or_die(args.repo, args.json)
    board = await session.load()
    session.close()

    lists = [{"id": lst.id, "name": lst.name, "cards": len(lst.cards)} for lst in board.lists]
    scheduled = sum(1 for _, card in board.iter_cards() if card.due_date is not None)

    if args.json:
        output_json({"name": board.name, "lists": lists, "scheduled": scheduled})
    else:
        print(board.name)
        for lst in lists:
            cards = "card" if lst["cards"] == 1 else "cards"
            print(f"  {lst['id']}  {lst['name']:<16} {lst['cards']} {cards}")
        if scheduled:
            print(f"  {scheduled} scheduled")
    return 0
