"""Klondike solitaire engine for cursor-driven play - 100% UI-agnostic."""

from klondike.cards import Card, Color, Rank, Suit, make_deck
from klondike.pile import FOUNDATIONS, RING, TABLEAUX, Pile, PileId, PileKind
from klondike.errors import (
    EmptyHandError,
    HandNotEmptyError,
    IllegalDropError,
    InvalidPileError,
    KlondikeError,
    OutOfRangeIndexError,
)
from klondike.game import Source, Table, TableState

__all__ = [
    "Card",
    "Color",
    "Rank",
    "Suit",
    "make_deck",
    "FOUNDATIONS",
    "RING",
    "TABLEAUX",
    "Pile",
    "PileId",
    "PileKind",
    "EmptyHandError",
    "HandNotEmptyError",
    "IllegalDropError",
    "InvalidPileError",
    "KlondikeError",
    "OutOfRangeIndexError",
    "Source",
    "Table",
    "TableState",
]
