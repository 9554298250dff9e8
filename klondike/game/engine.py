"""Klondike table engine with cursor navigation and a state machine."""

import logging
from dataclasses import dataclass
from typing import Callable, NoReturn

from transitions import Machine

from klondike.cards import Card, make_deck
from klondike.config import EngineConfig, config as default_config
from klondike.errors import (
    EmptyHandError,
    HandNotEmptyError,
    IllegalDropError,
    InvalidPileError,
    KlondikeError,
    OutOfRangeIndexError,
)
from klondike.game.events import EventEmitter, EventType, GameEvent
from klondike.game.state import VALID_TRANSITIONS, TableState
from klondike.pile import FOUNDATIONS, RING, TABLEAUX, Pile, PileId, PileKind

logger = logging.getLogger(__name__)

DECK_SIZE = 52

# Machine trigger leading into each state
_TRIGGERS = {
    TableState.CARRYING: "pick_up",
    TableState.SELECTING: "put_down",
}

_DROP_RULES = {
    PileKind.FOUNDATION: "foundations build up by suit from Ace, one card at a time",
    PileKind.TABLEAU: "tableaux build down in alternating colors from King",
}


@dataclass(frozen=True)
class Source:
    """Cursor position: a card index within a pile."""

    pile: PileId
    index: int = 0

    @classmethod
    def stock(cls) -> "Source":
        """Return the resting position on the stock."""
        return cls(PileId.STOCK, 0)


class Table:
    """
    Klondike table driven by a cursor instead of drag and drop.

    While the hand is empty the `source` cursor walks the active cards of
    every pile in ring order. Once cards are picked up, the `target` cursor
    walks the piles that can accept them. Dropping validates the move before
    anything changes, so a rejected command leaves the table untouched.
    """

    # State machine states
    STATES = [s.name.lower() for s in TableState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": _TRIGGERS[dest], "source": source.name.lower(), "dest": dest.name.lower()}
        for source, dests in VALID_TRANSITIONS.items()
        for dest in dests
    ]

    def __init__(self, seed: int, config: EngineConfig | None = None) -> None:
        """
        Shuffle and deal a new game.

        Tableau piles take cards from the end of the shuffled deck, one card
        for the first pile up to seven for the last, with only the top card
        of each turned up. The rest form the face-down stock.

        Args:
            seed: Seed for the deck shuffle; equal seeds deal equal games
            config: Engine configuration (uses the global config if not provided)
        """
        self.seed = seed
        self.config = config or default_config
        self.events = EventEmitter()

        cards = make_deck(seed)

        self.foundations = [Pile.for_id(pile_id) for pile_id in FOUNDATIONS]
        self.tableaux: list[Pile] = []
        for count, pile_id in enumerate(TABLEAUX, start=1):
            pile = Pile.for_id(pile_id, cards[-count:])
            del cards[-count:]
            pile.flip_top_card()
            self.tableaux.append(pile)

        self.stock = Pile.for_id(PileId.STOCK, cards)
        self.waste = Pile.for_id(PileId.WASTE)
        self.hand = Pile.for_id(PileId.HAND)

        self._piles: dict[PileId, Pile] = {
            pile.pile_id: pile
            for pile in (self.stock, self.waste, *self.foundations, *self.tableaux, self.hand)
        }

        self.source = self._stock_top()
        self.target = PileId.STOCK

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="selecting",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        logger.debug("table_dealt", extra={"seed": seed, "stock_count": len(self.stock)})
        self.events.emit_new(EventType.GAME_STARTED, seed=seed)

    @property
    def state(self) -> TableState:
        """Get current table state as enum."""
        return TableState[self._machine_state.upper()]  # type: ignore

    @property
    def piles(self) -> tuple[Pile, ...]:
        """Return every pile, hand included, in id order."""
        return tuple(self._piles[pile_id] for pile_id in PileId)

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to table events."""
        self.events.subscribe(handler, event_type)

    def get_stack(self, pile_id: PileId) -> Pile:
        return self._piles[pile_id]

    def get_stack_mut(self, pile_id: PileId) -> Pile:
        """
        Return a pile for direct editing.

        Changes made through the returned pile skip every rule check and
        event; it exists for tooling and test setups.
        """
        return self._piles[pile_id]

    def cards_in_hand(self) -> bool:
        return not self.hand.is_empty

    # ------------------------------------------------------------------
    # Navigation queries
    # ------------------------------------------------------------------

    def next_active_card(self) -> Source | None:
        """Find the active card after the source cursor, wrapping around the ring."""
        return self._find_active_card(forward=True)

    def previous_active_card(self) -> Source | None:
        """Find the active card before the source cursor, wrapping around the ring."""
        return self._find_active_card(forward=False)

    def _find_active_card(self, forward: bool) -> Source | None:
        pile_id = self.source.pile
        bound: int | None = self.source.index

        # One full revolution plus a return to the starting pile.
        for _ in range(len(RING) + 1):
            pile = self._piles[pile_id]
            if forward:
                index = pile.next_active_index(bound)
            else:
                index = pile.previous_active_index(bound)
            if index is not None:
                return Source(pile_id, index)
            pile_id = pile_id.next() if forward else pile_id.previous()
            bound = None
        return None

    def next_play_location(self) -> PileId:
        """
        Find the next pile that can accept the hand.

        The search gives up when it comes back around to the pile the cards
        were taken from, so the result is not guaranteed to be playable.
        """
        return self._find_play_location(forward=True)

    def previous_play_location(self) -> PileId:
        """Find the previous pile that can accept the hand (see next_play_location)."""
        return self._find_play_location(forward=False)

    def _find_play_location(self, forward: bool) -> PileId:
        def step(pile_id: PileId) -> PileId:
            return pile_id.next() if forward else pile_id.previous()

        target = step(self.target)
        for _ in range(len(RING)):
            if self._piles[target].can_play(self.hand):
                break
            target = step(target)
            if target == self.source.pile:
                break
        return target

    def can_drop(self) -> bool:
        """Check if put_hand_on_target would succeed right now."""
        return self._drop_error() is None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def go_next(self) -> None:
        """Move the active cursor forward: the source card, or the target pile while carrying."""
        self._step(forward=True)

    def go_previous(self) -> None:
        """Move the active cursor backward: the source card, or the target pile while carrying."""
        self._step(forward=False)

    def _step(self, forward: bool) -> None:
        if self.cards_in_hand():
            self.target = self._find_play_location(forward)
            self.events.emit_new(
                EventType.TARGET_MOVED,
                target=self.target.name,
                playable=self.can_drop(),
            )
            return

        self.source = self._find_active_card(forward) or Source.stock()
        self.events.emit_new(
            EventType.CURSOR_MOVED,
            pile=self.source.pile.name,
            index=self.source.index,
        )

    def deal_from_stock(self) -> None:
        """
        Deal from the stock to the waste, or recycle the waste when the stock is empty.

        Dealing turns cards up one at a time from the top of the stock, so
        the last card dealt becomes the top of the waste and each dealt group
        lands in reverse of its stock order. Recycling turns the
        whole waste back down in reverse, restoring the stock's order.
        """
        self._require_empty_hand()

        if self.stock.is_empty:
            cards = self.waste.cards
            self.waste.cards = []
            for card in cards:
                card.face_up = False
            cards.reverse()
            self.stock.cards = cards
            logger.debug("stock_recycled", extra={"count": len(cards)})
            self.events.emit_new(EventType.STOCK_RECYCLED, count=len(cards))
        else:
            count = min(self.config.table.deal_count, len(self.stock))
            dealt: list[Card] = []
            for _ in range(count):
                card = self.stock.cards.pop()
                card.face_up = True
                self.waste.cards.append(card)
                dealt.append(card)
            logger.debug(
                "stock_dealt",
                extra={"count": count, "stock_remaining": len(self.stock)},
            )
            self.events.emit_new(
                EventType.CARDS_DEALT,
                cards=[str(card) for card in dealt],
                stock_remaining=len(self.stock),
            )

        # Keep a cursor resting on the stock or waste on its new top card.
        if self.source.pile is PileId.STOCK:
            self.source = self._stock_top()
        elif self.source.pile is PileId.WASTE:
            self.source = Source(PileId.WASTE, self.waste.top_card_index())
        self._check_conservation()

    def expose_top_card_of_stack(self, pile_id: PileId) -> None:
        """Turn the top card of a pile face up."""
        if self._piles[pile_id].expose_top_card():
            top = self._piles[pile_id].top_card()
            self.events.emit_new(EventType.CARD_EXPOSED, pile=pile_id.name, card=str(top))

    def take_top_card_from_stack(self, pile_id: PileId) -> Card | None:
        """
        Pick up the top card of a pile, turning it face up.

        Args:
            pile_id: Pile to take from

        Returns:
            The card now in hand, or None if the pile was empty
        """
        self._require_pickup_pile(pile_id)

        pile = self._piles[pile_id]
        if pile.is_empty:
            return None

        index = len(pile) - 1
        card = pile.cards.pop()
        card.face_up = True
        self.hand.cards = [card]
        self._begin_carrying(pile_id, index)
        return card

    def take_selected_cards_from_stack(self, pile_id: PileId, index: int) -> list[Card]:
        """
        Pick up every card of a pile from `index` to the top.

        The card at `index` must be active: the top card of a stock, waste
        or foundation, or a face-up tableau card. Taken cards are turned up.

        Args:
            pile_id: Pile to take from
            index: Index of the lowest card to take (the length of the pile takes nothing)

        Returns:
            The cards now in hand, bottom first

        Raises:
            OutOfRangeIndexError: If `index` lies outside the pile
            InvalidPileError: If the card at `index` cannot be picked up
        """
        self._require_pickup_pile(pile_id)

        pile = self._piles[pile_id]
        if not 0 <= index <= len(pile):
            self._reject(OutOfRangeIndexError(pile_id, index, len(pile)))
        if index == len(pile):
            return []
        if not pile.is_active_index(index):
            self._reject(InvalidPileError(pile_id, f"card at index {index} cannot be picked up"))

        run = pile.cards[index:]
        for card in run:
            card.face_up = True
        del pile.cards[index:]
        self.hand.cards = run
        self._begin_carrying(pile_id, index)
        return list(run)

    def put_hand_on_target(self) -> Source:
        """
        Drop the hand on the target pile.

        The drop is checked first: the target must accept the hand, unless
        it is the pile the cards came from. Afterwards the source pile's new
        top card is exposed and the source cursor rests on the first card
        just placed.

        Returns:
            The new source cursor

        Raises:
            EmptyHandError: If nothing is carried
            IllegalDropError: If the target cannot accept the hand
        """
        error = self._drop_error()
        if error is not None:
            self._reject(error)

        target_id = self.target
        target = self._piles[target_id]
        index = len(target)
        cards = self.hand.cards
        self.hand.cards = []
        target.cards.extend(cards)

        self.expose_top_card_of_stack(self.source.pile)
        from_pile = self.source.pile
        self.source = Source(target_id, index)
        self.put_down()

        logger.debug(
            "cards_placed",
            extra={"from": from_pile.name, "to": target_id.name, "count": len(cards)},
        )
        self.events.emit_new(
            EventType.CARDS_PLACED,
            cards=[str(card) for card in cards],
            source=from_pile.name,
            target=target_id.name,
        )
        self._check_conservation()
        return self.source

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _stock_top(self) -> Source:
        index = self.stock.next_active_index()
        return Source(PileId.STOCK, index if index is not None else 0)

    def _begin_carrying(self, pile_id: PileId, index: int) -> None:
        self.source = Source(pile_id, index)
        self.target = pile_id
        self.pick_up()

        taken = [str(card) for card in self.hand]
        logger.debug("cards_taken", extra={"pile": pile_id.name, "index": index, "count": len(taken)})
        self.events.emit_new(EventType.CARDS_TAKEN, cards=taken, pile=pile_id.name, index=index)
        self._check_conservation()

    def _require_empty_hand(self) -> None:
        if self.cards_in_hand():
            self._reject(HandNotEmptyError(len(self.hand)))

    def _require_pickup_pile(self, pile_id: PileId) -> None:
        if pile_id is PileId.HAND:
            self._reject(InvalidPileError(pile_id, "cards cannot be taken from the hand"))
        self._require_empty_hand()

    def _drop_error(self) -> KlondikeError | None:
        """Return the reason the hand cannot be dropped on the target, if any."""
        if self.hand.is_empty:
            return EmptyHandError()
        if self.target is PileId.HAND:
            return InvalidPileError(self.target, "cards cannot be dropped on the hand")
        if self.target == self.source.pile:
            return None

        target = self._piles[self.target]
        if target.kind is PileKind.TABLEAU and not self.hand.is_descending_run():
            return IllegalDropError(self.target, "carried cards are not a face-up alternating run")
        if not target.can_play(self.hand):
            reason = _DROP_RULES.get(target.kind, f"{target.kind.name.lower()} piles do not accept cards")
            return IllegalDropError(self.target, reason)
        return None

    def _reject(self, error: KlondikeError) -> NoReturn:
        logger.warning(
            "table_action_rejected",
            extra={"error": type(error).__name__, "reason": str(error)},
        )
        self.events.emit_new(
            EventType.INVALID_ACTION,
            message=str(error),
            error=type(error).__name__,
        )
        raise error

    def _check_conservation(self) -> None:
        """In debug mode, verify every card is on the table exactly once."""
        if not self.config.debug:
            return
        keys = [card.key for pile in self._piles.values() for card in pile]
        if len(keys) != DECK_SIZE or len(set(keys)) != DECK_SIZE:
            raise RuntimeError(
                f"Card conservation violated: {len(keys)} cards, {len(set(keys))} distinct"
            )
