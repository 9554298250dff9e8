"""Pytest fixtures for klondike engine tests."""

import pytest

from klondike.cards import Card
from klondike.config import EngineConfig, TableConfig
from klondike.game import Source, Table
from klondike.pile import Pile, PileId

SEED = 42


@pytest.fixture
def engine_config():
    """Configuration with the conservation self-check enabled."""
    return EngineConfig(debug=True, table=TableConfig(deal_count=3))


@pytest.fixture
def table(engine_config):
    """A freshly dealt table."""
    return Table(SEED, config=engine_config)


@pytest.fixture
def bare_table():
    """
    A table with every pile emptied, for hand-built positions.

    The conservation check is off since arranged positions hold fewer
    than 52 cards.
    """
    t = Table(SEED, config=EngineConfig(debug=False, table=TableConfig(deal_count=3)))
    for pile in t.piles:
        pile.cards.clear()
    t.source = Source.stock()
    t.target = PileId.STOCK
    return t


@pytest.fixture
def make_cards():
    """Factory building face-up cards from codes like 'KS', 'TH'."""

    def _make(*codes: str, face_up: bool = True) -> list[Card]:
        cards = [Card.from_string(code) for code in codes]
        for card in cards:
            card.face_up = face_up
        return cards

    return _make


@pytest.fixture
def arrange(make_cards):
    """
    Factory filling a pile of a table.

    The first `face_down` codes are placed face down, the rest face up.
    """

    def _arrange(table: Table, pile_id: PileId, *codes: str, face_down: int = 0) -> Pile:
        pile = table.get_stack_mut(pile_id)
        pile.cards = make_cards(*codes[:face_down], face_up=False) + make_cards(*codes[face_down:])
        return pile

    return _arrange
