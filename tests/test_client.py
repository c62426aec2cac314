from __future__ import annotations

from attrs import define, field
import asyncio
import pytest
import pyguild


@define(slots=True)
class AddEvent(pyguild.BaseEvent):
    a: int = field(repr=True, kw_only=True)
    b: int = field(repr=True, kw_only=True)


@define(slots=True)
class SubtractEvent(pyguild.BaseEvent):
    a: int = field(repr=True, kw_only=True)
    b: int = field(repr=True, kw_only=True)


@pytest.mark.asyncio
async def test_events():
    queue: asyncio.Queue[int] = asyncio.Queue()

    client = pyguild.Client()

    async def on_add(event: AddEvent, /) -> None:
        await queue.put(event.a + event.b)

    async def on_subtract(event: SubtractEvent, /) -> None:
        await queue.put(event.a - event.b)

    client.subscribe(AddEvent, on_add)
    client.subscribe(SubtractEvent, on_subtract)

    await client.dispatch(AddEvent(a=1, b=2))
    await client.dispatch(SubtractEvent(a=13, b=7))

    response = await asyncio.wait_for(queue.get(), timeout=1)
    assert response == 3

    response = await asyncio.wait_for(queue.get(), timeout=1)
    assert response == 6

    subscription = client.wait_for(AddEvent, check=lambda event, /: event.a == 0xDEAD, count=1, timeout=3)
    await client.dispatch(AddEvent(a=0xDEAD, b=11))

    number = await subscription
    assert number.a + number.b == 57016

    subscription = client.wait_for(AddEvent, check=lambda event, /: event.a == 0xBEEF, count=3, timeout=3)

    await client.dispatch(AddEvent(a=0xBEEF, b=11))
    await client.dispatch(AddEvent(a=0xBEEF, b=12))
    await client.dispatch(AddEvent(a=0xBEEF, b=13))

    numbers = [event.b async for event in subscription]

    assert sum(numbers) == 36


@pytest.mark.asyncio
async def test_listen_uses_annotation():
    client = pyguild.Client()
    received = []

    @client.listen()
    async def on_add(event: AddEvent):
        received.append(event.a)

    assert isinstance(on_add, pyguild.EventSubscription)
    assert client.subscriptions_count_for(AddEvent) == 1

    await client.dispatch(AddEvent(a=5, b=0))
    assert received == [5]

    on_add.remove()
    await client.dispatch(AddEvent(a=6, b=0))
    assert received == [5]


@pytest.mark.asyncio
async def test_unsubscribe():
    client = pyguild.Client()

    def callback(event: SubtractEvent) -> None:
        pass

    client.subscribe(SubtractEvent, callback)
    client.subscribe(SubtractEvent, callback)
    assert client.subscriptions_count_for(SubtractEvent) == 2
    assert client.subscriptions_count_for(pyguild.BaseEvent, include_subclasses=True) == 2

    removed = client.unsubscribe(SubtractEvent, callback)
    assert len(removed) == 2
    assert client.subscriptions_for(SubtractEvent) == []


@pytest.mark.asyncio
async def test_user_errors_are_not_propagated():
    errors = []

    class MyClient(pyguild.Client):
        async def on_user_error(self, event: pyguild.BaseEvent) -> None:
            errors.append(event)

    client = MyClient()

    def fail(event: AddEvent) -> None:
        raise RuntimeError('boom')

    client.subscribe(AddEvent, fail)
    event = AddEvent(a=1, b=1)
    await client.dispatch(event)

    assert errors == [event]


@pytest.mark.asyncio
async def test_wait_for_timeout():
    client = pyguild.Client()

    with pytest.raises(asyncio.TimeoutError):
        await client.wait_for(AddEvent, timeout=0.01)

    with pytest.raises(TypeError):
        client.wait_for(AddEvent, count=0)


@pytest.mark.asyncio
async def test_client_properties(client: pyguild.Client):
    state = client.state
    assert client.users is state.users
    assert client.messages is state.messages
    assert client.reactions is state.reactions
    assert isinstance(client.cache, pyguild.MapCache)
    assert client.user is None

    assert client.get_user('u1') is None
    assert client.get_member('s1', 'u1') is None


@pytest.mark.asyncio
async def test_client_without_cache(payloads):
    client = pyguild.Client(cache=None)
    assert client.cache is None

    client.handle_raw(payloads.envelope('ChatMessageCreated', {'serverId': 's1', 'message': payloads.message()}))
    assert client.get_message('m1') is None
    assert client.messages.cache == {}


@pytest.mark.asyncio
async def test_start_feeds_payloads(client: pyguild.Client, payloads):
    async def source():
        yield payloads.envelope('ChatMessageCreated', {'serverId': 's1', 'message': payloads.message('m1')})
        yield payloads.envelope('ChatMessageCreated', {'serverId': 's1', 'message': payloads.message('m2')})

    await client.start(source())

    assert client.messages.has('m1')
    assert client.messages.has('m2')
