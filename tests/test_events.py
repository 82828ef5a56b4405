import logging

import pytest

from raisewatch.youtube.events import EventEmitter


def test_listeners_run_in_order():
    emitter = EventEmitter()
    calls = []
    emitter.on("raised", lambda a, b: calls.append(("first", a, b)))
    emitter.on("raised", lambda a, b: calls.append(("second", a, b)))
    assert emitter.emit("raised", 1, 2)
    assert calls == [("first", 1, 2), ("second", 1, 2)]


def test_on_works_as_decorator():
    emitter = EventEmitter()
    seen = []

    @emitter.on("start")
    def on_start():
        seen.append("start")

    emitter.emit("start")
    assert seen == ["start"]


def test_off_removes_listener():
    emitter = EventEmitter()
    calls = []
    listener = emitter.on("end", lambda: calls.append("end"))
    emitter.off("end", listener)
    emitter.off("end", listener)
    assert not emitter.emit("end")
    assert calls == []
    assert emitter.listener_count("end") == 0


def test_unknown_event_rejected():
    emitter = EventEmitter()
    with pytest.raises(ValueError):
        emitter.on("subs", lambda: None)
    with pytest.raises(ValueError):
        emitter.emit("fav")


def test_failing_listener_does_not_stop_others(caplog):
    emitter = EventEmitter()
    calls = []

    def broken():
        raise RuntimeError("listener bug")

    emitter.on("start", broken)
    emitter.on("start", lambda: calls.append("ok"))
    with caplog.at_level(logging.ERROR):
        emitter.emit("start")
    assert calls == ["ok"]
    assert "listener bug" in caplog.text


def test_unhandled_error_is_logged(caplog):
    emitter = EventEmitter()
    with caplog.at_level(logging.WARNING):
        assert not emitter.emit("error", ValueError("nobody listens"))
    assert "nobody listens" in caplog.text
