"""Pure reorder transforms over a board tree.

Every function takes a Board and returns a Board. Lists and cards that a
transform does not touch are shared between input and output. When a
transform has nothing to do it returns the input object itself.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from boardsync.model.inputs import CardUpdate
from boardsync.model.tree import Board, Card, CardList, reindex_cards, reindex_lists


def flatten(board: Board | None) -> list[Card]:
    """All cards across all lists, in visual order."""
    if board is None:
        return []
    return [card for _, card in board.iter_cards()]


def list_position(board: Board, list_id: str) -> int | None:
    """Position of a list in the board, or None."""
    for i, lst in enumerate(board.lists):
        if lst.id == list_id:
            return i
    return None


def move_list(board: Board, from_index: int, to_index: int) -> Board:
    """Move the list at from_index to to_index and renumber all lists."""
    if from_index == to_index:
        return board
    if not 0 <= from_index < len(board.lists):
        return board
    lists = list(board.lists)
    moved = lists.pop(from_index)
    to_index = max(0, min(to_index, len(lists)))
    lists.insert(to_index, moved)
    return replace(board, lists=reindex_lists(lists))


def move_list_to(board: Board, list_id: str, index: int) -> Board:
    """Move a list, found by id, to index."""
    from_index = list_position(board, list_id)
    if from_index is None:
        return board
    return move_list(board, from_index, index)


def move_cards(board: Board, card_ids: Sequence[str], list_id: str, index: int) -> Board:
    """Move cards as one contiguous block to index in the list list_id.

    Cards are removed from whichever lists hold them and inserted in the
    order of card_ids, not their original order. index is a position in
    the destination list after the moved cards have been taken out.
    """
    dest_pos = list_position(board, list_id)
    if dest_pos is None:
        return board

    wanted = list(dict.fromkeys(card_ids))
    if len(wanted) == 1:
        found = board.find_card(wanted[0])
        if found is not None and found[0].id == list_id and found[1].index == index:
            return board

    wanted_set = set(wanted)
    moved: dict[str, Card] = {}
    remaining: list[list[Card]] = []
    for lst in board.lists:
        kept = []
        for card in lst.cards:
            if card.id in wanted_set:
                moved[card.id] = card
            else:
                kept.append(card)
        remaining.append(kept)
    if not moved:
        return board

    block = [moved[card_id] for card_id in wanted if card_id in moved]
    dest = remaining[dest_pos]
    index = max(0, min(index, len(dest)))
    dest[index:index] = block

    lists = []
    for lst, cards in zip(board.lists, remaining):
        if len(cards) == len(lst.cards) and all(a is b for a, b in zip(cards, lst.cards)):
            lists.append(lst)
        else:
            lists.append(replace(lst, cards=reindex_cards(cards)))
    return replace(board, lists=tuple(lists))


def move_card(board: Board, card_id: str, list_id: str, index: int) -> Board:
    """Move one card. The single-card case of move_cards."""
    return move_cards(board, [card_id], list_id, index)


def apply_card_updates(board: Board, updates: Iterable[CardUpdate]) -> Board:
    """Merge field updates into cards. Unknown card ids are skipped."""
    by_id = {u.card_id: u.fields for u in updates}
    if not by_id:
        return board

    changed = False
    lists = []
    for lst in board.lists:
        cards = []
        touched = False
        for card in lst.cards:
            fields = by_id.get(card.id)
            if fields:
                card = replace(card, **fields)
                touched = True
            cards.append(card)
        if touched:
            changed = True
            lists.append(replace(lst, cards=tuple(cards)))
        else:
            lists.append(lst)
    if not changed:
        return board
    return replace(board, lists=tuple(lists))


def remove_card(board: Board, card_id: str) -> Board:
    """Drop a card from whichever list holds it."""
    found = board.find_card(card_id)
    if found is None:
        return board
    owner = found[0]
    cards = [c for c in owner.cards if c.id != card_id]
    lists = tuple(replace(lst, cards=reindex_cards(cards)) if lst is owner else lst for lst in board.lists)
    return replace(board, lists=lists)


def remove_list(board: Board, list_id: str) -> Board:
    """Drop a list and all its cards."""
    if list_position(board, list_id) is None:
        return board
    return replace(board, lists=reindex_lists([lst for lst in board.lists if lst.id != list_id]))


def add_list(board: Board, lst: CardList) -> Board:
    """Append a list at the end of the board."""
    return replace(board, lists=reindex_lists([*board.lists, lst]))


def add_card(board: Board, list_id: str, card: Card, index: int | None = None) -> Board:
    """Insert a card into a list, at the end when index is None."""
    pos = list_position(board, list_id)
    if pos is None:
        return board
    owner = board.lists[pos]
    cards = list(owner.cards)
    if index is None:
        index = len(cards)
    index = max(0, min(index, len(cards)))
    cards.insert(index, card)
    lists = list(board.lists)
    lists[pos] = replace(owner, cards=reindex_cards(cards))
    return replace(board, lists=tuple(lists))
