"""Table engine and state management."""

from klondike.game.events import EventEmitter, EventType, GameEvent
from klondike.game.state import TableState
from klondike.game.engine import Source, Table

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "TableState",
    "Source",
    "Table",
]
