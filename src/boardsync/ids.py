"""Public id generation for lists and cards.

Ids are a prefix plus a decimal counter: "l1", "l2" for lists, "c1",
"c2" for cards.
"""

LIST_PREFIX = "l"
CARD_PREFIX = "c"


def id_number(public_id: str, prefix: str) -> int | None:
    """The counter part of an id, or None if it doesn't use prefix.

    "c12" with prefix "c" → 12, "x1" → None, "c" → None
    """
    if not public_id.startswith(prefix):
        return None
    digits = public_id[len(prefix) :]
    return int(digits) if digits.isdigit() else None


def max_number(ids, prefix: str) -> int:
    """Highest counter among ids with prefix, or 0 if there are none."""
    numbers = [n for n in (id_number(i, prefix) for i in ids) if n is not None]
    return max(numbers, default=0)


def next_id(ids, prefix: str) -> str:
    """Generate the next id after the highest existing one with prefix."""
    return f"{prefix}{max_number(ids, prefix) + 1}"
