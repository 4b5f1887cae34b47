"""
Tests for EventBus
"""

import asyncio

import pytest

from led_converter.models.events import EventType, FrameChangeEvent, PlayStateChangeEvent
from led_converter.services.event_bus import EventBus


@pytest.fixture
def bus():
    return EventBus()


def test_publish_reaches_matching_type_only(bus):
    frames, states = [], []
    bus.subscribe(EventType.FRAME_CHANGE, lambda e: frames.append(e.index))
    bus.subscribe(EventType.PLAY_STATE_CHANGE, lambda e: states.append(e.playing))

    bus.publish(FrameChangeEvent(index=4))
    assert frames == [4]
    assert states == []


def test_priority_order(bus):
    order = []
    bus.subscribe(EventType.FRAME_CHANGE, lambda e: order.append("low"), priority=1)
    bus.subscribe(EventType.FRAME_CHANGE, lambda e: order.append("high"), priority=10)
    bus.subscribe(EventType.FRAME_CHANGE, lambda e: order.append("mid"), priority=5)

    bus.publish(FrameChangeEvent(index=0))
    assert order == ["high", "mid", "low"]


def test_filter(bus):
    seen = []
    bus.subscribe(EventType.FRAME_CHANGE, lambda e: seen.append(e.index), filter_fn=lambda e: e.index % 2 == 0)
    for i in range(5):
        bus.publish(FrameChangeEvent(index=i))
    assert seen == [0, 2, 4]


def test_unsubscribe(bus):
    seen = []

    def handler(event):
        seen.append(event.index)

    bus.subscribe(EventType.FRAME_CHANGE, handler)
    assert bus.unsubscribe(EventType.FRAME_CHANGE, handler) is True
    assert bus.unsubscribe(EventType.FRAME_CHANGE, handler) is False
    bus.publish(FrameChangeEvent(index=1))
    assert seen == []


def test_handler_may_unsubscribe_itself(bus):
    seen = []
    unsubscribe = None

    def once(event):
        seen.append(event.index)
        unsubscribe()

    unsubscribe = bus.subscribe(EventType.FRAME_CHANGE, once)
    bus.publish(FrameChangeEvent(index=1))
    bus.publish(FrameChangeEvent(index=2))
    assert seen == [1]
    assert bus.handler_count(EventType.FRAME_CHANGE) == 0


def test_failing_handler_isolated(bus):
    seen = []

    def broken(event):
        raise ValueError("boom")

    bus.subscribe(EventType.PLAY_STATE_CHANGE, broken, priority=1)
    bus.subscribe(EventType.PLAY_STATE_CHANGE, lambda e: seen.append(e.playing))

    bus.publish(PlayStateChangeEvent(playing=True))
    assert seen == [True]


def test_clear(bus):
    bus.subscribe(EventType.FRAME_CHANGE, lambda e: None)
    bus.clear()
    assert bus.handler_count(EventType.FRAME_CHANGE) == 0


def test_event_payload():
    event = FrameChangeEvent(index=7)
    assert event.type == EventType.FRAME_CHANGE
    assert event.to_data() == {"index": 7}
    assert event.timestamp > 0


@pytest.mark.asyncio
async def test_async_handler_scheduled_on_loop(bus):
    seen = []

    async def handler(event):
        seen.append(event.index)

    bus.subscribe(EventType.FRAME_CHANGE, handler)
    bus.publish(FrameChangeEvent(index=3))
    await asyncio.sleep(0)
    assert seen == [3]
