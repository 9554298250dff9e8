"""Piles of cards and the ring they are arranged in."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator

from klondike.cards import Card, Rank


class PileKind(Enum):
    """Kinds of pile, each with its own active-card and acceptance rules."""

    STOCK = auto()
    WASTE = auto()
    FOUNDATION = auto()
    TABLEAU = auto()
    HAND = auto()


class PileId(Enum):
    """Identity of every pile on the table."""

    STOCK = auto()
    WASTE = auto()
    FOUNDATION1 = auto()
    FOUNDATION2 = auto()
    FOUNDATION3 = auto()
    FOUNDATION4 = auto()
    TABLEAU1 = auto()
    TABLEAU2 = auto()
    TABLEAU3 = auto()
    TABLEAU4 = auto()
    TABLEAU5 = auto()
    TABLEAU6 = auto()
    TABLEAU7 = auto()
    HAND = auto()

    def __str__(self) -> str:
        return self.name.title()

    @property
    def kind(self) -> PileKind:
        """Return the kind of pile this id names."""
        if self in FOUNDATIONS:
            return PileKind.FOUNDATION
        if self in TABLEAUX:
            return PileKind.TABLEAU
        return PileKind[self.name]

    def next(self) -> "PileId":
        """Return the following pile in ring order (Hand maps to itself)."""
        if self is PileId.HAND:
            return self
        return RING[(RING.index(self) + 1) % len(RING)]

    def previous(self) -> "PileId":
        """Return the preceding pile in ring order (Hand maps to itself)."""
        if self is PileId.HAND:
            return self
        return RING[(RING.index(self) - 1) % len(RING)]


FOUNDATIONS: tuple[PileId, ...] = (
    PileId.FOUNDATION1,
    PileId.FOUNDATION2,
    PileId.FOUNDATION3,
    PileId.FOUNDATION4,
)

TABLEAUX: tuple[PileId, ...] = (
    PileId.TABLEAU1,
    PileId.TABLEAU2,
    PileId.TABLEAU3,
    PileId.TABLEAU4,
    PileId.TABLEAU5,
    PileId.TABLEAU6,
    PileId.TABLEAU7,
)

# Cursor stepping order; Hand is never visited.
RING: tuple[PileId, ...] = (PileId.STOCK, PileId.WASTE) + FOUNDATIONS + TABLEAUX

# Kinds that expose only their top card.
_SINGLE_ACTIVE_KINDS = (PileKind.STOCK, PileKind.WASTE, PileKind.FOUNDATION)


@dataclass
class Pile:
    """An ordered run of cards; index 0 is the bottom, the last card the top."""

    pile_id: PileId
    kind: PileKind
    cards: list[Card] = field(default_factory=list)

    @classmethod
    def for_id(cls, pile_id: PileId, cards: list[Card] | None = None) -> "Pile":
        """Create a pile whose kind is derived from its id."""
        return cls(pile_id=pile_id, kind=pile_id.kind, cards=cards or [])

    def top_card_index(self) -> int:
        """Return the index of the top card (0 for an empty pile)."""
        return max(len(self.cards) - 1, 0)

    def top_card(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    def bottom_card(self) -> Card | None:
        return self.cards[0] if self.cards else None

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def expose_top_card(self) -> bool:
        """
        Turn the top card face up.

        Returns:
            True if a face-down card was turned over
        """
        top = self.top_card()
        if top is None or top.face_up:
            return False
        top.face_up = True
        return True

    def flip_top_card(self) -> None:
        """Toggle the face state of the top card."""
        top = self.top_card()
        if top is not None:
            top.face_up = not top.face_up

    def next_active_index(self, after: int | None = None) -> int | None:
        """
        Find the next active card index after `after`.

        Stock, waste and foundation piles expose only their top card, so
        stepping into them (`after` is None) lands on the top and stepping
        further finds nothing. Every face-up tableau card is active. An
        empty stock still offers index 0, the slot used to deal.

        Args:
            after: Index to search past, or None to search from the bottom

        Returns:
            The active index, or None if there is none in this direction
        """
        if self.kind is PileKind.HAND:
            return None
        if not self.cards:
            if self.kind is PileKind.STOCK and after is None:
                return 0
            return None
        if self.kind in _SINGLE_ACTIVE_KINDS:
            return len(self.cards) - 1 if after is None else None

        start = 0 if after is None else after + 1
        for index in range(start, len(self.cards)):
            if self.cards[index].face_up:
                return index
        return None

    def previous_active_index(self, before: int | None = None) -> int | None:
        """
        Find the previous active card index before `before`.

        Mirror image of next_active_index: searches downward from the top
        when `before` is None.
        """
        if self.kind is PileKind.HAND:
            return None
        if not self.cards:
            if self.kind is PileKind.STOCK and before is None:
                return 0
            return None
        if self.kind in _SINGLE_ACTIVE_KINDS:
            return len(self.cards) - 1 if before is None else None

        if before is None:
            start = len(self.cards) - 1
        elif before == 0:
            return None
        else:
            start = min(before, len(self.cards)) - 1
        for index in range(start, -1, -1):
            if self.cards[index].face_up:
                return index
        return None

    def is_active_index(self, index: int) -> bool:
        """Check if the card at `index` can be picked up from."""
        if self.kind is PileKind.HAND or not 0 <= index < len(self.cards):
            return False
        if self.kind in _SINGLE_ACTIVE_KINDS:
            return index == len(self.cards) - 1
        return self.cards[index].face_up

    def is_descending_run(self) -> bool:
        """Check the cards are face up and build down in alternating colors."""
        if not all(card.face_up for card in self.cards):
            return False
        return all(
            upper.is_one_below(lower) and not upper.is_same_color(lower)
            for lower, upper in zip(self.cards, self.cards[1:])
        )

    def foundation_can_accept(self, hand: "Pile") -> bool:
        """
        Check if a foundation can take the hand.

        Foundations build up by suit from Ace, one card at a time.
        """
        if len(hand) != 1:
            return False
        card = hand.cards[0]
        top = self.top_card()
        if top is None:
            return card.rank is Rank.ACE
        return card.suit is top.suit and top.is_one_below(card)

    def tableau_can_accept(self, hand: "Pile") -> bool:
        """
        Check if a tableau can take the hand.

        The hand's bottom card lands on the tableau, so it must be a King on
        an empty tableau, or one rank below the top card in the other color.
        """
        card = hand.bottom_card()
        if card is None:
            return False
        top = self.top_card()
        if top is None:
            return card.rank is Rank.KING
        return not top.is_same_color(card) and card.is_one_below(top)

    def can_play(self, hand: "Pile") -> bool:
        """Check if the hand may be dropped on this pile."""
        if self.kind is PileKind.FOUNDATION:
            return self.foundation_can_accept(hand)
        if self.kind is PileKind.TABLEAU:
            return self.tableau_can_accept(hand)
        return False

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        shown = " ".join(str(card) if card.face_up else "##" for card in self.cards)
        return f"{self.pile_id}: {shown or '--'}"
