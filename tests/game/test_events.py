"""Tests for the event emitter."""

from klondike.game.events import EventEmitter, EventType, GameEvent


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_type_specific_subscription(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append, EventType.CARDS_DEALT)

        emitter.emit_new(EventType.CARDS_DEALT, count=3)
        emitter.emit_new(EventType.STOCK_RECYCLED, count=24)

        assert [e.event_type for e in received] == [EventType.CARDS_DEALT]
        assert received[0].data == {"count": 3}

    def test_catch_all_subscription(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append)

        emitter.emit_new(EventType.CARDS_DEALT)
        emitter.emit_new(EventType.STOCK_RECYCLED)

        assert len(received) == 2

    def test_unsubscribe(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append, EventType.CARDS_TAKEN)

        assert emitter.unsubscribe(received.append, EventType.CARDS_TAKEN)
        assert not emitter.unsubscribe(received.append, EventType.CARDS_TAKEN)
        emitter.emit_new(EventType.CARDS_TAKEN)
        assert received == []

    def test_history(self):
        emitter = EventEmitter()
        event = emitter.emit_new(EventType.CURSOR_MOVED, pile="WASTE", index=0)

        history = emitter.history
        assert history == [event]
        history.clear()
        assert len(emitter.history) == 1

        emitter.clear_history()
        assert emitter.history == []

    def test_event_str(self):
        event = GameEvent(EventType.CARDS_PLACED, {"target": "TABLEAU1"})
        assert str(event).startswith("CARDS_PLACED")
