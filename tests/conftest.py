from __future__ import annotations

import typing

import pytest
import pyguild


class RecordingHTTPClient(pyguild.HTTPClient):
    """HTTP client that never touches network, and returns canned responses instead."""

    __slots__ = ('calls', 'responses')

    def __init__(self, *, state: pyguild.State) -> None:
        super().__init__('token', state=state, session=lambda _: None)  # type: ignore
        self.calls: list[tuple[str, str, typing.Any]] = []
        self.responses: dict[tuple[str, str], typing.Any] = {}

    async def request(self, route, *, json=pyguild.UNDEFINED, **kwargs) -> typing.Any:
        method = route.route.method
        path = route.build()
        self.calls.append((method, path, None if json is pyguild.UNDEFINED else json))
        return self.responses.get((method, path))


def user_payload(user_id: str = 'u1', name: str = 'Alice', **extra) -> dict[str, typing.Any]:
    return {'id': user_id, 'type': 'user', 'name': name, 'createdAt': '2024-01-01T00:00:00.000Z', **extra}


def message_payload(
    message_id: str = 'm1',
    *,
    channel_id: str = 'c1',
    server_id: typing.Optional[str] = 's1',
    created_by: str = 'u1',
    content: str = 'hello',
    **extra,
) -> dict[str, typing.Any]:
    payload = {
        'id': message_id,
        'type': 'default',
        'channelId': channel_id,
        'content': content,
        'createdAt': '2024-01-01T00:00:00.000Z',
        'createdBy': created_by,
        **extra,
    }
    if server_id is not None:
        payload['serverId'] = server_id
    return payload


def member_payload(user_id: str = 'u1', *, role_ids: typing.Optional[list[int]] = None, **extra) -> dict[str, typing.Any]:
    return {
        'user': user_payload(user_id),
        'roleIds': role_ids or [],
        'joinedAt': '2024-01-02T00:00:00.000Z',
        **extra,
    }


def channel_payload(channel_id: str = 'c1', *, server_id: str = 's1', name: str = 'general', **extra) -> dict[str, typing.Any]:
    return {
        'id': channel_id,
        'type': 'chat',
        'name': name,
        'createdAt': '2024-01-01T00:00:00.000Z',
        'createdBy': 'u1',
        'serverId': server_id,
        'groupId': 'g1',
        **extra,
    }


def server_payload(server_id: str = 's1', *, name: str = 'Guild', **extra) -> dict[str, typing.Any]:
    return {
        'id': server_id,
        'ownerId': 'u1',
        'type': 'community',
        'name': name,
        'createdAt': '2024-01-01T00:00:00.000Z',
        **extra,
    }


def reaction_payload(
    *, message_id: str = 'm1', channel_id: str = 'c1', created_by: str = 'u1', emote_id: int = 90001
) -> dict[str, typing.Any]:
    return {
        'channelId': channel_id,
        'messageId': message_id,
        'createdBy': created_by,
        'emote': {'id': emote_id, 'name': 'grinning', 'url': 'https://img.guildedcdn.com/asset/Emojis/grinning.webp'},
    }


def envelope(t: str, d: dict[str, typing.Any], /) -> dict[str, typing.Any]:
    return {'op': 0, 't': t, 'd': d, 's': 'msg-id'}


class Payloads:
    user = staticmethod(user_payload)
    message = staticmethod(message_payload)
    member = staticmethod(member_payload)
    channel = staticmethod(channel_payload)
    server = staticmethod(server_payload)
    reaction = staticmethod(reaction_payload)
    envelope = staticmethod(envelope)


@pytest.fixture
def payloads() -> type[Payloads]:
    return Payloads


@pytest.fixture
def client() -> pyguild.Client:
    return pyguild.Client(token='token', http=lambda client, state: RecordingHTTPClient(state=state))


@pytest.fixture
def http(client: pyguild.Client) -> RecordingHTTPClient:
    return client.http  # type: ignore
