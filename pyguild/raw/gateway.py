from __future__ import annotations

import typing
import typing_extensions

from .channels import ServerChannel
from .messages import ChatMessage, DeletedChatMessage, ChannelMessageReaction
from .server_members import ServerMember, PartialServerMember, ServerMemberRoleIds
from .servers import Server
from .users import User


class ClientWelcomeEvent(typing.TypedDict):
    heartbeatIntervalMs: int
    lastMessageId: typing_extensions.NotRequired[str]
    botId: str
    user: User


class ClientChatMessageCreatedEvent(typing.TypedDict):
    serverId: typing_extensions.NotRequired[str]
    message: ChatMessage


class ClientChatMessageUpdatedEvent(typing.TypedDict):
    serverId: typing_extensions.NotRequired[str]
    message: ChatMessage


class ClientChatMessageDeletedEvent(typing.TypedDict):
    serverId: typing_extensions.NotRequired[str]
    message: DeletedChatMessage


class ClientChannelMessageReactionCreatedEvent(typing.TypedDict):
    serverId: typing_extensions.NotRequired[str]
    reaction: ChannelMessageReaction


class ClientChannelMessageReactionDeletedEvent(typing.TypedDict):
    serverId: typing_extensions.NotRequired[str]
    deletedBy: typing_extensions.NotRequired[str]
    reaction: ChannelMessageReaction


class ClientServerMemberJoinedEvent(typing.TypedDict):
    serverId: str
    member: ServerMember


class ClientServerMemberUpdatedEvent(typing.TypedDict):
    serverId: str
    userInfo: PartialServerMember


class ClientServerMemberRemovedEvent(typing.TypedDict):
    serverId: str
    userId: str
    isKick: typing_extensions.NotRequired[bool]
    isBan: typing_extensions.NotRequired[bool]


class ClientServerRolesUpdatedEvent(typing.TypedDict):
    serverId: str
    memberRoleIds: list[ServerMemberRoleIds]


class ClientServerChannelCreatedEvent(typing.TypedDict):
    serverId: str
    channel: ServerChannel


class ClientServerChannelUpdatedEvent(typing.TypedDict):
    serverId: str
    channel: ServerChannel


class ClientServerChannelDeletedEvent(typing.TypedDict):
    serverId: str
    channel: ServerChannel


class ClientBotServerMembershipCreatedEvent(typing.TypedDict):
    server: Server
    createdBy: str


class ClientBotServerMembershipDeletedEvent(typing.TypedDict):
    server: Server
    createdBy: str


ClientEventData = typing.Union[
    ClientWelcomeEvent,
    ClientChatMessageCreatedEvent,
    ClientChatMessageUpdatedEvent,
    ClientChatMessageDeletedEvent,
    ClientChannelMessageReactionCreatedEvent,
    ClientChannelMessageReactionDeletedEvent,
    ClientServerMemberJoinedEvent,
    ClientServerMemberUpdatedEvent,
    ClientServerMemberRemovedEvent,
    ClientServerRolesUpdatedEvent,
    ClientServerChannelCreatedEvent,
    ClientServerChannelUpdatedEvent,
    ClientServerChannelDeletedEvent,
    ClientBotServerMembershipCreatedEvent,
    ClientBotServerMembershipDeletedEvent,
]


class ClientEvent(typing.TypedDict):
    op: int
    t: typing_extensions.NotRequired[typing.Optional[str]]
    d: ClientEventData
    s: typing_extensions.NotRequired[typing.Optional[str]]
