"""Tests for the event emitter."""

from core.game.events import EventEmitter, EventRecorder, EventType, MessageCategory


def test_typed_and_catch_all_handlers():
    emitter = EventEmitter()
    typed, everything = [], []
    emitter.subscribe(typed.append, EventType.MESSAGE)
    emitter.subscribe(everything.append)

    emitter.emit_new(EventType.MESSAGE, text="hi", category=MessageCategory.INFO)
    emitter.emit_new(EventType.BET_UPDATED, bet=10)

    assert [e.event_type for e in typed] == [EventType.MESSAGE]
    assert [e.event_type for e in everything] == [EventType.MESSAGE, EventType.BET_UPDATED]


def test_unsubscribe():
    emitter = EventEmitter()
    seen = []
    emitter.subscribe(seen.append)
    emitter.unsubscribe(seen.append)
    emitter.unsubscribe(print, EventType.MESSAGE)
    emitter.emit_new(EventType.BET_UPDATED, bet=10)
    assert seen == []


def test_history_is_bounded():
    emitter = EventEmitter(history_limit=3)
    for bet in range(5):
        emitter.emit_new(EventType.BET_UPDATED, bet=bet)
    assert [e.data["bet"] for e in emitter.history] == [2, 3, 4]
    emitter.clear_history()
    assert emitter.history == []


def test_recorder_drain():
    recorder = EventRecorder()
    emitter = EventEmitter()
    emitter.subscribe(recorder)
    emitter.emit_new(EventType.MESSAGE, text="Place your bet and deal.", category=MessageCategory.NONE)

    assert recorder.messages == [("Place your bet and deal.", MessageCategory.NONE)]
    assert len(recorder.drain()) == 1
    assert recorder.drain() == []
