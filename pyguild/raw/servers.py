from __future__ import annotations

import typing
import typing_extensions

ServerType = typing.Literal[
    'team',
    'organization',
    'community',
    'clan',
    'guild',
    'friends',
    'streaming',
    'other',
]


class Server(typing.TypedDict):
    id: str
    ownerId: str
    type: typing_extensions.NotRequired[ServerType]
    name: str
    url: typing_extensions.NotRequired[str]
    about: typing_extensions.NotRequired[str]
    avatar: typing_extensions.NotRequired[str]
    banner: typing_extensions.NotRequired[str]
    timezone: typing_extensions.NotRequired[str]
    isVerified: typing_extensions.NotRequired[bool]
    defaultChannelId: typing_extensions.NotRequired[str]
    createdAt: str


class ServerResponse(typing.TypedDict):
    server: Server
