from __future__ import annotations

import typing
import typing_extensions

ChannelType = typing.Literal[
    'announcements',
    'chat',
    'calendar',
    'forums',
    'media',
    'docs',
    'voice',
    'list',
    'scheduling',
    'stream',
]


class ServerChannel(typing.TypedDict):
    id: str
    type: ChannelType
    name: str
    topic: typing_extensions.NotRequired[str]
    createdAt: str
    createdBy: str
    updatedAt: typing_extensions.NotRequired[str]
    serverId: str
    parentId: typing_extensions.NotRequired[str]
    categoryId: typing_extensions.NotRequired[int]
    groupId: str
    isPublic: typing_extensions.NotRequired[bool]
    archivedBy: typing_extensions.NotRequired[str]
    archivedAt: typing_extensions.NotRequired[str]


class ServerChannelResponse(typing.TypedDict):
    channel: ServerChannel
