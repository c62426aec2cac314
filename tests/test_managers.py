from __future__ import annotations

import pytest
import pyguild
from pyguild import cache as caching


@pytest.mark.asyncio
async def test_fetch_server_stores_result(client: pyguild.Client, http, payloads):
    http.responses['GET', '/servers/s1'] = {'server': payloads.server()}

    server = await client.fetch_server('s1')

    assert server.name == 'Guild'
    assert server.type is pyguild.ServerType.community
    assert client.get_server('s1') is server
    assert http.calls == [('GET', '/servers/s1', None)]


@pytest.mark.asyncio
async def test_fetch_updates_cached_instance(client: pyguild.Client, http, payloads):
    client.servers._add_or_update(payloads.server(), caching._USER_REQUEST)
    server = client.get_server('s1')

    http.responses['GET', '/servers/s1'] = {'server': payloads.server(name='Renamed')}
    fetched = await client.servers.fetch('s1')

    assert fetched is server
    assert server is not None
    assert server.name == 'Renamed'


@pytest.mark.asyncio
async def test_fetch_channel(client: pyguild.Client, http, payloads):
    http.responses['GET', '/channels/c1'] = {'channel': payloads.channel(topic='Talk here')}

    channel = await client.fetch_channel('c1')

    assert channel.topic == 'Talk here'
    assert client.channels.has('c1')


@pytest.mark.asyncio
async def test_fetch_member_stores_user(client: pyguild.Client, http, payloads):
    http.responses['GET', '/servers/s1/members/u1'] = {'member': payloads.member('u1', nickname='Al')}

    member = await client.fetch_member('s1', 'u1')

    assert member.nickname == 'Al'
    assert client.members.get_for('s1', 'u1') is member
    assert client.members.has(pyguild.build_member_key('s1', 'u1'))
    assert member.user is client.get_user('u1')


@pytest.mark.asyncio
async def test_fetch_message(client: pyguild.Client, http, payloads):
    http.responses['GET', '/channels/c1/messages/m1'] = {'message': payloads.message()}

    message = await client.fetch_message('c1', 'm1')

    assert client.get_message('m1') is message


@pytest.mark.asyncio
async def test_send_is_not_cached(client: pyguild.Client, http, payloads):
    http.responses['POST', '/channels/c1/messages'] = {'message': payloads.message('m5', content='sent')}

    message = await client.messages.send('c1', {'content': 'sent', 'isSilent': True})

    assert message.content == 'sent'
    assert not client.messages.has('m5')
    assert http.calls == [('POST', '/channels/c1/messages', {'content': 'sent', 'isSilent': True})]


@pytest.mark.asyncio
async def test_channel_send(client: pyguild.Client, http, payloads):
    http.responses['POST', '/channels/c1/messages'] = {'message': payloads.message('m6', content='yo')}
    channel = client.state.parser.parse_channel(payloads.channel())

    message = await channel.send('yo')

    assert message.id == 'm6'


def test_cache_views_are_read_only(client: pyguild.Client, payloads):
    client.users._add_or_update(payloads.user(), caching._USER_REQUEST)

    view = client.users.cache
    assert set(view) == {'u1'}
    with pytest.raises(TypeError):
        view['u2'] = view['u1']  # type: ignore


def test_managers_without_cache(payloads):
    client = pyguild.Client(cache=None)

    user = client.users._add_or_update(payloads.user(), caching._USER_REQUEST)

    assert user.name == 'Alice'
    assert client.users.get('u1') is None
    assert not client.users.has('u1')
    assert client.members.of('s1') == {}
    assert client.reactions.cache == {}


def test_user_update_keeps_instance(client: pyguild.Client, payloads):
    user = client.users._add_or_update(payloads.user(), caching._USER_REQUEST)
    again = client.users._add_or_update(
        payloads.user(name='Alicia', status={'content': 'busy', 'emoteId': 90001}), caching._USER_REQUEST
    )

    assert again is user
    assert user.name == 'Alicia'
    assert user.status is not None
    assert user.status.content == 'busy'
