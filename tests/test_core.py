from __future__ import annotations

import pytest
import pyguild
from pyguild.core import build_key


def test_member_key():
    assert pyguild.build_member_key('s1', 'u1') == 's1:u1'
    assert pyguild.build_member_key('s1', 'u1') == pyguild.build_member_key('s1', 'u1')
    assert pyguild.build_member_key('s1', 'u1') != pyguild.build_member_key('u1', 's1')


def test_reaction_key():
    assert pyguild.build_reaction_key('u1', 90001) == 'u1:90001'
    assert pyguild.build_reaction_key('u1', 1) != pyguild.build_reaction_key('u1', 2)


def test_key_escaping_is_injective():
    # Without escaping, both would be 'a:b:c'
    assert build_key('a:b', 'c') != build_key('a', 'b:c')
    assert build_key('a\\', 'b') != build_key('a', '\\b')
    assert build_key('a:b', 'c') == 'a\\:b:c'


@pytest.mark.parametrize('parts', [('', 'u1'), ('s1', ''), ()])
def test_key_rejects_empty_parts(parts):
    with pytest.raises(ValueError):
        build_key(*parts)


def test_resolve_content_from_string():
    assert pyguild.resolve_content_to_data('hi') == {'content': 'hi'}


def test_resolve_content_from_mapping():
    embed = pyguild.Embed(title='Title', color=0xFF0000)
    content = {'content': None, 'embeds': [embed], 'isSilent': True}

    data = pyguild.resolve_content_to_data(content)

    assert data == {'content': '', 'embeds': [{'title': 'Title', 'color': 0xFF0000}], 'isSilent': True}
    # Input is left untouched
    assert content['content'] is None
    assert content['embeds'] == [embed]


def test_undefined():
    assert not pyguild.UNDEFINED
    assert repr(pyguild.UNDEFINED) == 'UNDEFINED'
    assert pyguild.UNDEFINED != None  # noqa: E711


def test_enums():
    assert pyguild.ChannelType('chat') is pyguild.ChannelType.chat
    assert pyguild.ChannelType.try_value('chat') is pyguild.ChannelType.chat
    assert pyguild.ChannelType.try_value('whiteboard') == 'whiteboard'
    assert isinstance(pyguild.UserType.bot, pyguild.UserType)
    assert [t.value for t in pyguild.UserType] == ['user', 'bot']

    with pytest.raises(ValueError):
        pyguild.ChannelType('whiteboard')


def test_entity_requires_id(client: pyguild.Client):
    with pytest.raises(pyguild.InvalidData):
        pyguild.PartialMessage(state=client.state, id='', channel_id='c1')

    with pytest.raises(pyguild.InvalidData):
        pyguild.PartialMessage(state=client.state, id=None, channel_id='c1')  # type: ignore


def test_member_requires_composite_key(client: pyguild.Client, payloads):
    member = client.state.parser.parse_member('s1', payloads.member('u1'))
    assert member.id == pyguild.build_member_key('s1', 'u1')

    with pytest.raises(pyguild.InvalidData):
        pyguild.Member(
            state=client.state,
            id='u1',
            server_id='s1',
            user_id='u1',
            nickname=None,
            role_ids=[],
            joined_at=member.joined_at,
            is_owner=False,
        )
