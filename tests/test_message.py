from __future__ import annotations

from datetime import datetime, timezone

import pytest
import pyguild


@pytest.fixture
def message(client: pyguild.Client, payloads) -> pyguild.Message:
    return client.state.parser.parse_message(
        payloads.message(
            mentions={'users': [{'id': 'u2'}], 'roles': [{'id': 591}], 'everyone': True},
            embeds=[{'title': 'Old'}],
        )
    )


def _partial(client: pyguild.Client, payload: dict) -> pyguild.PartialMessage:
    return client.state.parser.parse_partial_message({'id': 'm1', 'channelId': 'c1', **payload})


def test_parse_message(message: pyguild.Message):
    assert message.content == 'hello'
    assert message.type is pyguild.MessageType.default
    assert message.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert message.updated_at is None
    assert message.deleted is False
    assert message.deleted_at is None
    assert message.mentions is not None
    assert message.mentions.users == ['u2']
    assert message.mentions.roles == [591]
    assert message.mentions.everyone
    assert [e.title for e in message.embeds] == ['Old']
    assert not message.is_reply()
    assert not message.is_system()


def test_content_is_always_string(client: pyguild.Client, payloads):
    payload = payloads.message()
    del payload['content']
    message = client.state.parser.parse_message(payload)
    assert message.content == ''


def test_update_with_empty_content(client: pyguild.Client, message: pyguild.Message):
    assert message.locally_update(_partial(client, {'content': ''})) is message
    assert message.content == ''


def test_update_without_content(client: pyguild.Client, message: pyguild.Message):
    message.locally_update(_partial(client, {}))
    assert message.content == 'hello'
    assert message.mentions is not None
    assert message.updated_at is None
    assert [e.title for e in message.embeds] == ['Old']


def test_update_clears_mentions(client: pyguild.Client, message: pyguild.Message):
    message.locally_update(_partial(client, {'mentions': None}))
    assert message.mentions is None


def test_update_updated_at(client: pyguild.Client, message: pyguild.Message):
    message.locally_update(_partial(client, {'updatedAt': '2024-01-02T03:04:05.000Z'}))
    assert message.updated_at == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    message.locally_update(_partial(client, {'updatedAt': None}))
    assert message.updated_at is None


def test_update_replaces_embeds(client: pyguild.Client, message: pyguild.Message):
    message.locally_update(_partial(client, {'embeds': [{'title': 'A'}, {'title': 'B'}]}))
    assert [e.title for e in message.embeds] == ['A', 'B']

    message.locally_update(_partial(client, {'embeds': []}))
    assert message.embeds == []


def test_deleted_is_latched(client: pyguild.Client, message: pyguild.Message):
    message.locally_update(_partial(client, {'deletedAt': '2024-01-03T00:00:00.000Z'}))
    assert message.deleted is True
    assert message.deleted_at == datetime(2024, 1, 3, tzinfo=timezone.utc)

    message.locally_update(_partial(client, {'content': 'edited'}))
    assert message.deleted is True
    assert message.content == 'edited'


def test_author_id_prefers_webhook(client: pyguild.Client, payloads):
    parser = client.state.parser
    assert parser.parse_message(payloads.message()).author_id == 'u1'
    assert parser.parse_message(payloads.message(createdByWebhookId='w1')).author_id == 'w1'


def test_accessors_miss_without_fetching(client: pyguild.Client, message: pyguild.Message):
    http = client.http
    assert message.author is None
    assert message.member is None
    assert message.channel is None
    assert message.server is None
    assert message.reactions == {}
    assert http.calls == []  # type: ignore

    with pytest.raises(pyguild.NoData):
        message.require_channel()


def test_accessors_hit_cache(client: pyguild.Client, payloads, message: pyguild.Message):
    state = client.state
    state.users._add_or_update(payloads.user('u1'), pyguild.cache._USER_REQUEST)
    state.members._add_or_update('s1', payloads.member('u1'), pyguild.cache._USER_REQUEST)
    state.channels._add_or_update(payloads.channel('c1'), pyguild.cache._USER_REQUEST)
    state.servers._add_or_update(payloads.server('s1'), pyguild.cache._USER_REQUEST)

    assert message.author is state.users.get('u1')
    assert message.member is state.members.get_for('s1', 'u1')
    assert message.channel is state.channels.get('c1')
    assert message.require_channel() is message.channel
    assert message.server is state.servers.get('s1')


def test_url(client: pyguild.Client, payloads):
    parser = client.state.parser
    assert parser.parse_message(payloads.message()).url == 'https://www.guilded.gg/chat/c1?messageId=m1'

    message = parser.parse_message(payloads.message(server_id=None))
    assert message.url == ''
    assert message.member is None
    assert message.server is None


@pytest.mark.asyncio
async def test_edit_does_not_mutate(client: pyguild.Client, http, payloads, message: pyguild.Message):
    http.responses['PUT', '/channels/c1/messages/m1'] = {'message': payloads.message(content='new')}

    result = await message.edit('new')

    assert result is message
    assert message.content == 'hello'
    assert http.calls == [('PUT', '/channels/c1/messages/m1', {'content': 'new'})]


@pytest.mark.asyncio
async def test_reply(client: pyguild.Client, http, payloads, message: pyguild.Message):
    http.responses['POST', '/channels/c1/messages'] = {
        'message': payloads.message('m2', content='pong', replyMessageIds=['m1'])
    }

    reply = await message.reply('pong')

    assert reply.id == 'm2'
    assert reply.is_reply()
    assert http.calls == [('POST', '/channels/c1/messages', {'content': 'pong', 'replyMessageIds': ['m1']})]
    # Sent messages are cached only once the event arrives
    assert not client.messages.has('m2')


@pytest.mark.asyncio
async def test_reactions_and_delete(client: pyguild.Client, http, message: pyguild.Message):
    emote = pyguild.Emote(id=90001, name='grinning', url='')

    await message.add_reaction(emote)
    await message.delete_reaction(90001)
    await message.delete()

    assert http.calls == [
        ('PUT', '/channels/c1/messages/m1/emotes/90001', None),
        ('DELETE', '/channels/c1/messages/m1/emotes/90001', None),
        ('DELETE', '/channels/c1/messages/m1', None),
    ]
