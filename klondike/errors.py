"""Exceptions raised by the table when a command is rejected.

A rejected command never changes the table.
"""

from klondike.pile import PileId


class KlondikeError(Exception):
    """Base exception for all rejected engine commands."""

    pass


class EmptyHandError(KlondikeError):
    """Raised when dropping cards while nothing is carried."""

    def __init__(self) -> None:
        super().__init__("No cards in hand to put down")


class HandNotEmptyError(KlondikeError):
    """Raised when picking up or dealing while cards are carried."""

    def __init__(self, held: int) -> None:
        self.held = held
        super().__init__(f"Hand already holds {held} card(s)")


class IllegalDropError(KlondikeError, ValueError):
    """Raised when the target pile cannot accept the carried cards."""

    def __init__(self, target: PileId, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot drop on {target}: {reason}")


class OutOfRangeIndexError(KlondikeError, IndexError):
    """Raised when a pickup index lies outside the pile."""

    def __init__(self, pile: PileId, index: int, length: int) -> None:
        self.pile = pile
        self.index = index
        self.length = length
        super().__init__(f"Index {index} out of range for {pile} holding {length} card(s)")


class InvalidPileError(KlondikeError, ValueError):
    """Raised when a command is aimed at a pile it cannot use."""

    def __init__(self, pile: PileId, reason: str) -> None:
        self.pile = pile
        self.reason = reason
        super().__init__(f"Invalid pile {pile}: {reason}")
