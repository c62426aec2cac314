from __future__ import annotations

import typing
import typing_extensions

from .embeds import ChatEmbed
from .emotes import Emote

ChatMessageType = typing.Literal['default', 'system']


class MentionedID(typing.TypedDict):
    id: str


class MentionedRoleID(typing.TypedDict):
    id: int


class Mentions(typing.TypedDict):
    users: typing_extensions.NotRequired[list[MentionedID]]
    channels: typing_extensions.NotRequired[list[MentionedID]]
    roles: typing_extensions.NotRequired[list[MentionedRoleID]]
    everyone: typing_extensions.NotRequired[bool]
    here: typing_extensions.NotRequired[bool]


class ChatMessage(typing.TypedDict):
    id: str
    type: ChatMessageType
    serverId: typing_extensions.NotRequired[str]
    groupId: typing_extensions.NotRequired[str]
    channelId: str
    content: typing_extensions.NotRequired[str]
    embeds: typing_extensions.NotRequired[list[ChatEmbed]]
    replyMessageIds: typing_extensions.NotRequired[list[str]]
    isPrivate: typing_extensions.NotRequired[bool]
    isSilent: typing_extensions.NotRequired[bool]
    mentions: typing_extensions.NotRequired[Mentions]
    createdAt: str
    createdBy: str
    createdByWebhookId: typing_extensions.NotRequired[str]
    updatedAt: typing_extensions.NotRequired[typing.Optional[str]]


class PartialChatMessage(typing.TypedDict):
    id: str
    channelId: str
    serverId: typing_extensions.NotRequired[str]
    content: typing_extensions.NotRequired[str]
    embeds: typing_extensions.NotRequired[list[ChatEmbed]]
    mentions: typing_extensions.NotRequired[typing.Optional[Mentions]]
    updatedAt: typing_extensions.NotRequired[typing.Optional[str]]
    deletedAt: typing_extensions.NotRequired[str]


class DeletedChatMessage(typing.TypedDict):
    id: str
    serverId: typing_extensions.NotRequired[str]
    channelId: str
    deletedAt: str
    isPrivate: typing_extensions.NotRequired[bool]


class ChannelMessageReaction(typing.TypedDict):
    channelId: str
    messageId: str
    createdBy: str
    emote: Emote


class ChatMessageContent(typing.TypedDict):
    isPrivate: typing_extensions.NotRequired[bool]
    isSilent: typing_extensions.NotRequired[bool]
    replyMessageIds: typing_extensions.NotRequired[list[str]]
    content: typing_extensions.NotRequired[str]
    embeds: typing_extensions.NotRequired[list[ChatEmbed]]


class ChatMessageResponse(typing.TypedDict):
    message: ChatMessage
