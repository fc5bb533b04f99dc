import dataclasses

import pytest

from registry.components.events import CLICK, INPUT, KEYDOWN, ComponentEvent, EventEmitter, UIEvent


def test_component_event_payload_is_read_only():
    detail = {"toStep": 1}
    event = ComponentEvent("workflow-navigation", detail)
    detail["toStep"] = 2

    assert event.detail["toStep"] == 1
    assert event.bubbles is True
    assert event.cancelable is False
    with pytest.raises(TypeError):
        event.detail["toStep"] = 3
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.name = "other"


@pytest.mark.parametrize(
    "event,expected",
    [
        (UIEvent(CLICK, target=1), True),
        (UIEvent(KEYDOWN, target=1, key="Enter"), True),
        (UIEvent(KEYDOWN, target=1, key=" "), True),
        (UIEvent(KEYDOWN, target=1, key="Tab"), False),
        (UIEvent(INPUT, target="name", value="x"), False),
    ],
)
def test_activation(event, expected):
    assert event.is_activation is expected


class TestEventEmitter:
    def test_delivery_order(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(lambda event: received.append(("first", event.name)))
        emitter.subscribe(lambda event: received.append(("second", event.name)))

        emitter.emit(ComponentEvent("a"))
        emitter.emit(ComponentEvent("b"))

        assert received == [("first", "a"), ("second", "a"), ("first", "b"), ("second", "b")]

    def test_unsubscribe(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append)
        emitter.subscribe(received.append)
        assert len(emitter) == 1

        emitter.unsubscribe(received.append)
        emitter.emit(ComponentEvent("a"))
        assert received == []

    def test_failing_listener_does_not_stop_delivery(self):
        emitter = EventEmitter()
        received = []

        def broken(event):
            raise RuntimeError("listener bug")

        emitter.subscribe(broken)
        emitter.subscribe(received.append)
        emitter.emit(ComponentEvent("a"))

        assert [event.name for event in received] == ["a"]
