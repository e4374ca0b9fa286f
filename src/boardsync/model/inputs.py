"""Validated inputs for board mutations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from boardsync.model.tree import CARD_FIELDS


def _require_id(value: str, what: str) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{what} must be a non-empty string")


def _require_index(value: int, what: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"{what} must be a non-negative integer")


@dataclass(frozen=True)
class MoveList:
    list_id: str
    index: int

    def __post_init__(self) -> None:
        _require_id(self.list_id, "list_id")
        _require_index(self.index, "index")


@dataclass(frozen=True)
class MoveCard:
    card_id: str
    list_id: str
    index: int

    def __post_init__(self) -> None:
        _require_id(self.card_id, "card_id")
        _require_id(self.list_id, "list_id")
        _require_index(self.index, "index")


@dataclass(frozen=True)
class BulkMove:
    """Move several cards as one contiguous block, in card_ids order."""

    card_ids: tuple[str, ...]
    list_id: str
    start_index: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "card_ids", tuple(self.card_ids))
        if not self.card_ids:
            raise ValueError("card_ids must not be empty")
        for card_id in self.card_ids:
            _require_id(card_id, "card_ids entry")
        _require_id(self.list_id, "list_id")
        _require_index(self.start_index, "start_index")


@dataclass(frozen=True)
class CardUpdate:
    """Field changes for one card. Only keys in CARD_FIELDS are allowed."""

    card_id: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _require_id(self.card_id, "card_id")
        unknown = set(self.fields) - set(CARD_FIELDS)
        if unknown:
            raise ValueError(f"unknown card fields: {', '.join(sorted(unknown))}")
        if "title" in self.fields and not self.fields["title"]:
            raise ValueError("title must not be empty")
        object.__setattr__(self, "fields", dict(self.fields))


@dataclass(frozen=True)
class DeleteCard:
    card_id: str

    def __post_init__(self) -> None:
        _require_id(self.card_id, "card_id")


@dataclass(frozen=True)
class DeleteList:
    list_id: str

    def __post_init__(self) -> None:
        _require_id(self.list_id, "list_id")
