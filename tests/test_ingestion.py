from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest
import pyguild


def _welcome(payloads) -> dict:
    return {
        'op': 1,
        'd': {
            'heartbeatIntervalMs': 22500,
            'lastMessageId': 'last',
            'botId': 'b1',
            'user': payloads.user('me', 'Bot', type='bot'),
        },
    }


@pytest.mark.asyncio
async def test_welcome(client: pyguild.Client, payloads):
    ready = client.wait_for(pyguild.ReadyEvent, timeout=1)
    client.handle_raw(_welcome(payloads))

    assert client.user is not None
    assert client.user.id == 'me'
    assert client.user.bot
    assert client.get_user('me') is client.user

    event = await ready
    assert event.me is client.user
    assert event.heartbeat_interval == 22500
    assert event.last_message_id == 'last'


@pytest.mark.asyncio
async def test_message_create_then_update(client: pyguild.Client, payloads):
    client.handle_raw(payloads.envelope('ChatMessageCreated', {'serverId': 's1', 'message': payloads.message()}))

    message = client.get_message('m1')
    assert message is not None
    assert message.content == 'hello'
    created_at = message.created_at

    updated = client.wait_for(pyguild.MessageUpdateEvent, timeout=1)
    client.handle_raw(
        payloads.envelope(
            'ChatMessageUpdated',
            {
                'serverId': 's1',
                'message': payloads.message(content='hi', updatedAt='2024-01-02T00:00:00.000Z'),
            },
        )
    )

    # Same instance is kept and mutated
    assert client.get_message('m1') is message
    assert message.content == 'hi'
    assert message.updated_at == datetime(2024, 1, 2, tzinfo=timezone.utc)
    assert message.created_at == created_at

    event = await updated
    assert event.after is message
    assert event.before is not None
    assert event.before is not message
    assert event.before.content == 'hello'


@pytest.mark.asyncio
async def test_listeners_observe_updated_cache(client: pyguild.Client, payloads):
    seen = []

    @client.on(pyguild.MessageUpdateEvent)
    def on_update(event: pyguild.MessageUpdateEvent) -> None:
        seen.append(client.get_message('m1').content)  # type: ignore

    client.handle_raw(payloads.envelope('ChatMessageCreated', {'message': payloads.message()}))
    client.handle_raw(payloads.envelope('ChatMessageUpdated', {'message': payloads.message(content='one')}))
    client.handle_raw(payloads.envelope('ChatMessageUpdated', {'message': payloads.message(content='two')}))

    for _ in range(5):
        await asyncio.sleep(0)

    # Both listeners run after both updates were applied
    assert seen == ['two', 'two']


@pytest.mark.asyncio
async def test_update_of_unknown_message_creates_it(client: pyguild.Client, payloads):
    client.handle_raw(payloads.envelope('ChatMessageUpdated', {'message': payloads.message('m9', content='late')}))

    message = client.get_message('m9')
    assert message is not None
    assert message.content == 'late'


@pytest.mark.asyncio
async def test_message_delete(client: pyguild.Client, payloads):
    client.handle_raw(payloads.envelope('ChatMessageCreated', {'message': payloads.message()}))
    client.handle_raw(payloads.envelope('ChannelMessageReactionCreated', {'reaction': payloads.reaction()}))

    message = client.get_message('m1')
    assert message is not None
    assert len(message.reactions) == 1

    deleted = client.wait_for(pyguild.MessageDeleteEvent, timeout=1)
    client.handle_raw(
        payloads.envelope(
            'ChatMessageDeleted',
            {
                'serverId': 's1',
                'message': {'id': 'm1', 'channelId': 'c1', 'deletedAt': '2024-01-03T00:00:00.000Z'},
            },
        )
    )

    assert client.get_message('m1') is None
    assert client.reactions.of('m1') == {}
    assert message.deleted is True
    assert message.deleted_at == datetime(2024, 1, 3, tzinfo=timezone.utc)

    event = await deleted
    assert event.message is message
    assert event.server_id == 's1'


@pytest.mark.asyncio
async def test_reactions(client: pyguild.Client, payloads):
    for message_id in ('m1', 'm2'):
        client.handle_raw(payloads.envelope('ChatMessageCreated', {'message': payloads.message(message_id)}))

    client.handle_raw(payloads.envelope('ChannelMessageReactionCreated', {'reaction': payloads.reaction()}))
    client.handle_raw(
        payloads.envelope('ChannelMessageReactionCreated', {'reaction': payloads.reaction(created_by='u2')})
    )
    client.handle_raw(
        payloads.envelope('ChannelMessageReactionCreated', {'reaction': payloads.reaction(message_id='m2')})
    )

    key = pyguild.build_reaction_key('u1', 90001)
    reaction = client.reactions.get('m1', key)
    assert reaction is not None
    assert reaction.emote.id == 90001
    assert reaction is client.reactions.get_for('m1', 'u1', 90001)
    assert set(client.reactions.reactions_of('m1')) == {key, pyguild.build_reaction_key('u2', 90001)}
    assert client.reactions.has('m2', key)

    removed = client.wait_for(pyguild.MessageReactionRemoveEvent, timeout=1)
    client.handle_raw(
        payloads.envelope('ChannelMessageReactionDeleted', {'deletedBy': 'u3', 'reaction': payloads.reaction()})
    )

    assert not client.reactions.has('m1', key)
    assert client.reactions.has('m2', key)

    event = await removed
    assert event.deleted_by_id == 'u3'


@pytest.mark.asyncio
async def test_members(client: pyguild.Client, payloads):
    client.handle_raw(
        payloads.envelope('ServerMemberJoined', {'serverId': 's1', 'member': payloads.member('u1', role_ids=[1])})
    )

    member = client.get_member('s1', 'u1')
    assert member is not None
    assert member.user is client.get_user('u1')
    assert member.display_name == 'Alice'

    client.handle_raw(
        payloads.envelope('ServerMemberUpdated', {'serverId': 's1', 'userInfo': {'id': 'u1', 'nickname': 'Ally'}})
    )
    assert client.get_member('s1', 'u1') is member
    assert member.nickname == 'Ally'
    assert member.display_name == 'Ally'
    assert member.role_ids == [1]

    client.handle_raw(
        payloads.envelope(
            'ServerRolesUpdated',
            {'serverId': 's1', 'memberRoleIds': [{'userId': 'u1', 'roleIds': [2, 3]}, {'userId': 'u9', 'roleIds': [4]}]},
        )
    )
    assert member.role_ids == [2, 3]
    assert client.get_member('s1', 'u9') is None

    client.handle_raw(payloads.envelope('ServerMemberRemoved', {'serverId': 's1', 'userId': 'u1', 'isKick': True}))
    assert client.get_member('s1', 'u1') is None


@pytest.mark.asyncio
async def test_bot_removed_from_server(client: pyguild.Client, payloads):
    client.handle_raw(_welcome(payloads))
    client.handle_raw(payloads.envelope('BotServerMembershipCreated', {'server': payloads.server(), 'createdBy': 'u1'}))
    client.handle_raw(payloads.envelope('ServerMemberJoined', {'serverId': 's1', 'member': payloads.member('u1')}))

    server = client.get_server('s1')
    assert server is not None
    assert set(server.members) == {pyguild.build_member_key('s1', 'u1')}
    assert server.members[pyguild.build_member_key('s1', 'u1')] is client.get_member('s1', 'u1')
    with pytest.raises(TypeError):
        server.members['x'] = None  # type: ignore

    client.handle_raw(payloads.envelope('ServerMemberRemoved', {'serverId': 's1', 'userId': 'me'}))

    assert client.get_server('s1') is None
    assert client.members.of('s1') == {}


@pytest.mark.asyncio
async def test_channels(client: pyguild.Client, payloads):
    client.handle_raw(payloads.envelope('ServerChannelCreated', {'serverId': 's1', 'channel': payloads.channel()}))

    channel = client.get_channel('c1')
    assert channel is not None
    assert channel.name == 'general'
    assert channel.type is pyguild.ChannelType.chat

    updated = client.wait_for(pyguild.ServerChannelUpdateEvent, timeout=1)
    client.handle_raw(
        payloads.envelope('ServerChannelUpdated', {'serverId': 's1', 'channel': payloads.channel(name='random')})
    )
    assert client.get_channel('c1') is channel
    assert channel.name == 'random'

    event = await updated
    assert event.before is not None
    assert event.before.name == 'general'
    assert event.after is channel

    client.handle_raw(payloads.envelope('ServerChannelDeleted', {'serverId': 's1', 'channel': payloads.channel()}))
    assert client.get_channel('c1') is None


@pytest.mark.asyncio
async def test_servers(client: pyguild.Client, payloads):
    client.handle_raw(payloads.envelope('BotServerMembershipCreated', {'server': payloads.server(), 'createdBy': 'u1'}))
    client.handle_raw(payloads.envelope('ServerMemberJoined', {'serverId': 's1', 'member': payloads.member('u1')}))

    server = client.get_server('s1')
    assert server is not None
    assert server.owner is client.get_user('u1')
    assert server.default_channel is None

    left = client.wait_for(pyguild.ServerLeaveEvent, timeout=1)
    client.handle_raw(payloads.envelope('BotServerMembershipDeleted', {'server': payloads.server(), 'createdBy': 'u1'}))

    assert client.get_server('s1') is None
    assert client.get_member('s1', 'u1') is None

    event = await left
    assert event.server is server


@pytest.mark.asyncio
async def test_unknown_event_is_ignored(client: pyguild.Client, payloads):
    client.handle_raw(payloads.envelope('CalendarEventCreated', {}))
    client.handle_raw({'op': 2, 'd': {}})


@pytest.mark.asyncio
async def test_invalid_identity_is_fatal(client: pyguild.Client, payloads):
    with pytest.raises(pyguild.InvalidData):
        client.handle_raw(payloads.envelope('ChatMessageCreated', {'message': payloads.message('')}))


@pytest.mark.asyncio
async def test_handler_errors_go_to_on_library_error(payloads):
    errors = asyncio.Queue()

    class MyClient(pyguild.Client):
        async def on_library_error(self, payload, exc, /) -> None:
            await errors.put((payload, exc))

    client = MyClient()

    # Missing 'channel' key
    payload = payloads.envelope('ServerChannelCreated', {'serverId': 's1'})
    client.handle_raw(payload)

    received, exc = await asyncio.wait_for(errors.get(), timeout=1)
    assert received is payload
    assert isinstance(exc, KeyError)


@pytest.mark.asyncio
async def test_null_deleted_at_still_marks_deleted(client: pyguild.Client, payloads):
    client.handle_raw(payloads.envelope('ChatMessageCreated', {'message': payloads.message()}))
    message = client.get_message('m1')
    assert message is not None

    client.handle_raw(payloads.envelope('ChatMessageUpdated', {'message': payloads.message(deletedAt=None)}))

    assert message.deleted is True
    assert message.deleted_at is None

    client.handle_raw(
        payloads.envelope(
            'ChatMessageDeleted',
            {'message': {'id': 'm1', 'channelId': 'c1', 'deletedAt': None}},
        )
    )
    assert message.deleted is True
    assert client.get_message('m1') is None


@pytest.mark.asyncio
async def test_missing_created_at_is_not_fatal(payloads):
    errors = asyncio.Queue()

    class MyClient(pyguild.Client):
        async def on_library_error(self, payload, exc, /) -> None:
            await errors.put(exc)

    client = MyClient()

    message = payloads.message()
    del message['createdAt']
    client.handle_raw(payloads.envelope('ChatMessageCreated', {'message': message}))

    exc = await asyncio.wait_for(errors.get(), timeout=1)
    assert isinstance(exc, ValueError)
    assert not isinstance(exc, pyguild.InvalidData)
    assert client.get_message('m1') is None

    # The client keeps processing later events
    client.handle_raw(payloads.envelope('ChatMessageCreated', {'message': payloads.message('m2')}))
    assert client.get_message('m2') is not None
