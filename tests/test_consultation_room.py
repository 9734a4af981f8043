import asyncio
import random

import pytest

from lawconsult.services.consultation_room import (
    LAWYER_REPLY,
    ConsultationRoom,
    RoomRegistry,
    RoomStateError,
    RoomStatus,
    greeting,
)


def make_room(**kwargs):
    kwargs.setdefault("connect_delay", 0)
    kwargs.setdefault("reply_delay", (0, 0))
    kwargs.setdefault("leave_delay", 0)
    kwargs.setdefault("rng", random.Random(7))
    return ConsultationRoom("cons1", "张明华", **kwargs)


async def wait_until(predicate, timeout=1.0):
    async def _poll():
        while not predicate():
            await asyncio.sleep(0.01)

    await asyncio.wait_for(_poll(), timeout)


@pytest.mark.asyncio
async def test_room_connects_with_greeting():
    room = make_room()
    room.start()
    assert room.status == RoomStatus.CONNECTING

    await wait_until(lambda: room.status == RoomStatus.CONNECTED)
    assert [m.sender for m in room.messages] == ["lawyer"]
    assert room.messages[0].content == greeting("张明华")


@pytest.mark.asyncio
async def test_send_before_connected_raises():
    room = make_room(connect_delay=10)
    room.start()
    with pytest.raises(RoomStateError):
        room.send("hello")
    room.close()


@pytest.mark.asyncio
async def test_user_message_gets_a_reply():
    room = make_room()
    room.start()
    await wait_until(lambda: room.status == RoomStatus.CONNECTED)

    sent = room.send("My landlord kept the deposit")
    assert sent.sender == "user"
    await wait_until(lambda: len(room.messages) == 3)
    assert room.messages[-1].sender == "lawyer"
    assert room.messages[-1].content == LAWYER_REPLY
    assert len({m.id for m in room.messages}) == 3


@pytest.mark.asyncio
async def test_blank_message_is_ignored():
    room = make_room()
    room.start()
    await wait_until(lambda: room.status == RoomStatus.CONNECTED)
    assert room.send("   ") is None
    assert len(room.messages) == 1


@pytest.mark.asyncio
async def test_end_cancels_replies_and_leaves():
    left = asyncio.Event()
    room = make_room(reply_delay=(10, 10), on_leave=left.set)
    room.start()
    await wait_until(lambda: room.status == RoomStatus.CONNECTED)
    room.send("question")

    room.end()
    assert room.status == RoomStatus.ENDED
    await asyncio.wait_for(left.wait(), timeout=1)
    assert [m.sender for m in room.messages] == ["lawyer", "user"]
    with pytest.raises(RoomStateError):
        room.send("still there?")


@pytest.mark.asyncio
async def test_end_while_connecting_never_connects():
    room = make_room(connect_delay=0.05)
    room.start()
    room.end()
    await asyncio.sleep(0.1)
    assert room.status == RoomStatus.ENDED
    assert room.messages == []


@pytest.mark.asyncio
async def test_registry_reuses_live_room_and_discards():
    registry = RoomRegistry()
    first = registry.open(make_room(connect_delay=10))
    second = registry.open(make_room())
    assert second is first
    assert len(registry) == 1

    first.end()
    third = registry.open(make_room(connect_delay=10))
    assert third is not first

    registry.close_all()
    assert registry.get("cons1") is None
    assert len(registry) == 0
