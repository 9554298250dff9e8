"""Card descriptors and the seeded deck generator."""

from enum import Enum, auto
from random import Random


class Color(Enum):
    """Card colors."""

    BLACK = auto()
    RED = auto()


class Suit(Enum):
    """Card suits, listed in deck enumeration order."""

    DIAMONDS = 2
    CLUBS = 1
    HEARTS = 3
    SPADES = 4

    def __str__(self) -> str:
        return self.symbol

    @property
    def color(self) -> Color:
        """Return the color of this suit."""
        if self in (Suit.DIAMONDS, Suit.HEARTS):
            return Color.RED
        return Color.BLACK

    @property
    def symbol(self) -> str:
        return {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }[self]

    @property
    def letter(self) -> str:
        return self.name[0]


class Rank(Enum):
    """Card ranks, Ace low."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return self.label

    @property
    def label(self) -> str:
        """Return the one-character label (A, 2-9, T, J, Q, K)."""
        if 2 <= self.value <= 9:
            return str(self.value)
        return {
            Rank.ACE: "A",
            Rank.TEN: "T",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }[self]


_RANK_MAP = {rank.label: rank for rank in Rank} | {"10": Rank.TEN}
_SUIT_MAP = {suit.letter: suit for suit in Suit} | {suit.symbol: suit for suit in Suit}


class Card:
    """
    A playing card.

    Suit and rank never change once the card exists; only the face state
    is flipped as the card moves around the table. Equality and hashing
    use the (suit, rank) identity and ignore the face state.
    """

    __slots__ = ("_suit", "_rank", "face_up")

    def __init__(self, suit: Suit, rank: Rank, face_up: bool = False) -> None:
        self._suit = suit
        self._rank = rank
        self.face_up = face_up

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def key(self) -> tuple[Suit, Rank]:
        """Return the (suit, rank) identity of this card."""
        return (self._suit, self._rank)

    def __str__(self) -> str:
        return f"{self._rank}{self._suit}"

    def __repr__(self) -> str:
        face = "up" if self.face_up else "down"
        return f"Card({self._rank.name}, {self._suit.name}, {face})"

    def is_same_color(self, other: "Card") -> bool:
        """Check if both cards share a color."""
        return self._suit.color == other.suit.color

    def is_one_below(self, other: "Card") -> bool:
        """Check if this card ranks exactly one below `other`."""
        return other.rank.value - self._rank.value == 1

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a face-down card from a string like 'AS', 'T♥', '10d'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANK_MAP:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_MAP:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_SUIT_MAP[suit_str], _RANK_MAP[rank_str])


def make_deck(seed: int) -> list[Card]:
    """
    Build a shuffled 52-card deck.

    Cards are generated suit by suit (in Suit order), Ace to King, all face
    down, then shuffled with a generator seeded by `seed`. The same seed
    always yields the same order.
    """
    cards = [Card(suit, rank) for suit in Suit for rank in Rank]
    Random(seed).shuffle(cards)
    return cards
