"""Calendar lane placement with fractional ordering keys.

Cards carry a sparse calendar_order key that orders them within a day.
Dropping cards between two neighbours divides the gap between the
neighbours' keys, so nothing else needs renumbering.
"""

from __future__ import annotations

from datetime import date
from typing import Sequence

from boardsync.model.inputs import CardUpdate
from boardsync.model.reorder import apply_card_updates
from boardsync.model.tree import Board, Card, scheduled_at

DEFAULT_STEP = 10000.0
DEFAULT_ORIGIN = 0.0

# Fallback key weights for cards that were never placed on the calendar.
LIST_WEIGHT = 100000
INDEX_WEIGHT = 1000


def effective_order(card: Card, list_pos: int) -> float:
    """calendar_order, or a key derived from the card's board position."""
    if card.calendar_order is not None:
        return card.calendar_order
    return list_pos * LIST_WEIGHT + card.index * INDEX_WEIGHT


def bucket_view(board: Board, bucket: date | None, exclude: Sequence[str] = ()) -> list[tuple[Card, float]]:
    """Cards in a day bucket (None = unscheduled), sorted by effective order.

    Returns (card, key) pairs. Cards in exclude are left out.
    """
    skip = set(exclude)
    view = []
    for list_pos, lst in enumerate(board.lists):
        for card in lst.cards:
            if card.id in skip or card.bucket != bucket:
                continue
            view.append((card, effective_order(card, list_pos)))
    view.sort(key=lambda pair: pair[1])
    return view


def gap_keys(
    before: float | None,
    after: float | None,
    count: int,
    step: float = DEFAULT_STEP,
    origin: float = DEFAULT_ORIGIN,
) -> list[float]:
    """count strictly ascending keys between before and after (exclusive)."""
    if before is None and after is None:
        before, after = origin, origin + step
    elif before is None:
        before = after - step
    elif after is None:
        after = before + step
    gap = (after - before) / (count + 1)
    return [before + gap * (i + 1) for i in range(count)]


def calendar_placements(
    board: Board,
    card_ids: Sequence[str],
    bucket: date | None,
    position: int,
    step: float = DEFAULT_STEP,
    origin: float = DEFAULT_ORIGIN,
) -> list[CardUpdate]:
    """Compute due date and calendar_order updates for dropping card_ids.

    position is an index into the bucket's sorted view with the moved
    cards taken out. Unknown card ids are skipped.
    """
    ids = [card_id for card_id in dict.fromkeys(card_ids) if board.find_card(card_id) is not None]
    if not ids:
        return []

    view = bucket_view(board, bucket, exclude=ids)
    position = max(0, min(position, len(view)))
    before = view[position - 1][1] if position > 0 else None
    after = view[position][1] if position < len(view) else None

    due = scheduled_at(bucket)
    keys = gap_keys(before, after, len(ids), step=step, origin=origin)
    return [CardUpdate(card_id, {"due_date": due, "calendar_order": key}) for card_id, key in zip(ids, keys)]


def place_on_calendar(
    board: Board,
    card_ids: Sequence[str],
    bucket: date | None,
    position: int,
    step: float = DEFAULT_STEP,
    origin: float = DEFAULT_ORIGIN,
) -> Board:
    """Drop cards into a day bucket at position. Moves them between buckets if needed."""
    updates = calendar_placements(board, card_ids, bucket, position, step=step, origin=origin)
    return apply_card_updates(board, updates)
