from __future__ import annotations

import pyguild
from pyguild import cache as caching


def _message(state: pyguild.State, payloads, message_id: str) -> pyguild.Message:
    return state.parser.parse_message(payloads.message(message_id))


def test_map_cache_evicts_oldest(client: pyguild.Client, payloads):
    cache = pyguild.MapCache(messages_max_size=2)
    ctx = caching._USER_REQUEST

    m1, m2, m3 = (_message(client.state, payloads, i) for i in ('m1', 'm2', 'm3'))

    cache.store_message(m1, ctx)
    cache.store_message(m2, ctx)
    cache.store_message(m3, ctx)

    assert list(cache.get_messages_mapping()) == ['m2', 'm3']
    assert cache.get_message('m1', ctx) is None
    assert cache.get_message('m3', ctx) is m3


def test_map_cache_restore_does_not_evict(client: pyguild.Client, payloads):
    cache = pyguild.MapCache(messages_max_size=2)
    ctx = caching._USER_REQUEST

    m1, m2 = (_message(client.state, payloads, i) for i in ('m1', 'm2'))
    cache.store_message(m1, ctx)
    cache.store_message(m2, ctx)
    cache.store_message(m1, ctx)

    assert set(cache.get_messages_mapping()) == {'m1', 'm2'}


def test_map_cache_zero_size_stores_nothing(client: pyguild.Client, payloads):
    cache = pyguild.MapCache(users_max_size=0)
    user = client.state.parser.parse_user(payloads.user())

    cache.store_user(user, caching._USER_REQUEST)

    assert cache.get_user(user.id, caching._USER_REQUEST) is None


def test_map_cache_evicted_message_drops_reactions(client: pyguild.Client, payloads):
    cache = pyguild.MapCache(messages_max_size=1)
    ctx = caching._USER_REQUEST
    parser = client.state.parser

    cache.store_message(_message(client.state, payloads, 'm1'), ctx)
    cache.store_reaction(parser.parse_reaction(payloads.reaction(message_id='m1')), ctx)
    assert cache.get_reactions_mapping_of('m1', ctx)

    cache.store_message(_message(client.state, payloads, 'm2'), ctx)
    assert cache.get_reactions_mapping_of('m1', ctx) is None


def test_map_cache_reactions_are_scoped_per_message(client: pyguild.Client, payloads):
    cache = pyguild.MapCache()
    ctx = caching._USER_REQUEST
    parser = client.state.parser

    cache.store_message(_message(client.state, payloads, 'm1'), ctx)
    cache.store_message(_message(client.state, payloads, 'm2'), ctx)

    r1 = parser.parse_reaction(payloads.reaction(message_id='m1'))
    r2 = parser.parse_reaction(payloads.reaction(message_id='m2'))
    assert r1.id == r2.id

    cache.store_reaction(r1, ctx)
    cache.store_reaction(r2, ctx)

    assert cache.get_reaction('m1', r1.id, ctx) is r1
    assert cache.get_reaction('m2', r2.id, ctx) is r2

    cache.delete_reaction('m1', r1.id, ctx)
    assert cache.get_reactions_mapping_of('m1', ctx) is None
    assert cache.get_reaction('m2', r2.id, ctx) is r2


def test_map_cache_members_of_server(client: pyguild.Client, payloads):
    cache = pyguild.MapCache()
    ctx = caching._USER_REQUEST
    parser = client.state.parser

    for server_id, user_id in (('s1', 'u1'), ('s1', 'u2'), ('s2', 'u1')):
        cache.store_member(parser.parse_member(server_id, payloads.member(user_id)), ctx)

    assert set(cache.get_members_mapping_of('s1', ctx)) == {'s1:u1', 's1:u2'}

    cache.delete_server_members_of('s1', ctx)
    assert set(cache.get_members_mapping()) == {'s2:u1'}


def test_empty_cache(client: pyguild.Client, payloads):
    cache = pyguild.EmptyCache()
    ctx = caching._USER_REQUEST
    message = _message(client.state, payloads, 'm1')

    cache.store_message(message, ctx)
    assert cache.get_message('m1', ctx) is None
    assert cache.get_messages_mapping() == {}


def test_provide_cache_context_in(payloads):
    seen = []

    class RecordingCache(pyguild.MapCache):
        __slots__ = ()

        def get_channel(self, channel_id, ctx, /):
            seen.append(ctx)
            return super().get_channel(channel_id, ctx)

    client = pyguild.Client(cache=RecordingCache(), provide_cache_context_in=['Message.channel'])
    message = client.state.parser.parse_message(payloads.message())

    assert message.channel is None
    assert message.server is None

    assert len(seen) == 1
    ctx = seen[0]
    assert isinstance(ctx, pyguild.MessageCacheContext)
    assert ctx.type is pyguild.CacheContextType.message
    assert ctx.message is message


def test_map_cache_ignores_reactions_on_uncached_messages(client: pyguild.Client, payloads):
    cache = pyguild.MapCache(messages_max_size=1)
    ctx = caching._USER_REQUEST
    parser = client.state.parser

    cache.store_message(_message(client.state, payloads, 'm1'), ctx)
    cache.store_message(_message(client.state, payloads, 'm2'), ctx)

    for i in range(100):
        cache.store_reaction(parser.parse_reaction(payloads.reaction(message_id=f'old{i}')), ctx)
    cache.store_reaction(parser.parse_reaction(payloads.reaction(message_id='m1')), ctx)

    assert cache.get_reactions_mapping() == {}

    cache.store_reaction(parser.parse_reaction(payloads.reaction(message_id='m2')), ctx)
    assert list(cache.get_reactions_mapping()) == ['m2']
