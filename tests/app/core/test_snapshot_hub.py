"""Tests for the in-process snapshot hub."""

import asyncio
import threading

from app.core.snapshot_hub import SnapshotHub, conversation_topic


def test_stream_emits_initial_snapshot_then_after_publish():
    hub = SnapshotHub()
    topic = conversation_topic("c1")
    state = {"value": 1}

    async def load():
        return state["value"]

    async def scenario():
        stream = hub.stream(topic, load)
        first = await stream.__anext__()
        state["value"] = 2
        hub.publish(topic)
        second = await asyncio.wait_for(stream.__anext__(), timeout=1)
        await stream.aclose()
        return first, second

    assert asyncio.run(scenario()) == (1, 2)
    assert hub.subscriber_count(topic) == 0


def test_publish_coalesces_and_delivers_latest():
    hub = SnapshotHub()
    topic = "user:u1:conversations"
    state = {"value": 0}

    async def load():
        return state["value"]

    async def scenario():
        stream = hub.stream(topic, load)
        await stream.__anext__()
        for value in (1, 2, 3):
            state["value"] = value
            hub.publish(topic)
        latest = await asyncio.wait_for(stream.__anext__(), timeout=1)
        await stream.aclose()
        return latest

    assert asyncio.run(scenario()) == 3


def test_publish_from_other_thread_wakes_subscriber():
    hub = SnapshotHub()
    topic = "conversation:c2"
    loads = []

    async def load():
        loads.append(1)
        return len(loads)

    async def scenario():
        stream = hub.stream(topic, load)
        await stream.__anext__()
        thread = threading.Thread(target=hub.publish, args=(topic,))
        thread.start()
        thread.join()
        value = await asyncio.wait_for(stream.__anext__(), timeout=1)
        await stream.aclose()
        return value

    assert asyncio.run(scenario()) == 2


def test_publish_on_other_topic_does_not_wake():
    hub = SnapshotHub()

    async def load():
        return "snapshot"

    async def scenario():
        stream = hub.stream("conversation:a", load)
        await stream.__anext__()
        hub.publish("conversation:b")
        try:
            await asyncio.wait_for(stream.__anext__(), timeout=0.05)
            woke = True
        except asyncio.TimeoutError:
            woke = False
        return woke

    assert asyncio.run(scenario()) is False


def test_subscription_close_releases_listener():
    hub = SnapshotHub()

    async def scenario():
        sub = hub.subscribe("t")
        assert hub.subscriber_count("t") == 1
        sub.close()
        sub.close()
        return hub.subscriber_count("t")

    assert asyncio.run(scenario()) == 0
