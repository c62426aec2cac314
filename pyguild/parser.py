"""
The MIT License (MIT)

Copyright (c) 2024-present MCausc78

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS
OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
DEALINGS IN THE SOFTWARE.
"""

from __future__ import annotations

import typing

from .channel import PartialChannel, Channel
from .core import UNDEFINED, build_member_key, build_reaction_key
from .embed import EmbedFooter, EmbedMedia, EmbedAuthor, EmbedField, Embed
from .emoji import Emote
from .enums import MessageType, ChannelType, ServerType, UserType
from .events import (
    ReadyEvent,
    MessageCreateEvent,
    MessageUpdateEvent,
    MessageDeleteEvent,
    MessageReactionAddEvent,
    MessageReactionRemoveEvent,
    ServerMemberJoinEvent,
    ServerMemberUpdateEvent,
    ServerMemberRemoveEvent,
    ServerRolesUpdateEvent,
    ServerChannelCreateEvent,
    ServerChannelUpdateEvent,
    ServerChannelDeleteEvent,
    ServerJoinEvent,
    ServerLeaveEvent,
)
from .message import MessageMentions, PartialMessage, Message, MessageReaction
from .server import PartialServer, Server, PartialMember, Member
from .user import UserStatus, PartialUser, User
from .utils import parse_timestamp

if typing.TYPE_CHECKING:
    from datetime import datetime

    from . import raw
    from .state import State


def _required_timestamp(value: typing.Optional[str], what: str, /) -> datetime:
    dt = parse_timestamp(value)
    if dt is None:
        raise ValueError(f'{what} is missing timestamp')
    return dt


class Parser:
    """An factory that produces wrapper objects from raw data.

    Attributes
    ----------
    state: :class:`.State`
        The state the parser is attached to.
    """

    __slots__ = ('state',)

    def __init__(self, *, state: State) -> None:
        self.state: State = state

    def parse_channel(self, payload: raw.ServerChannel, /) -> Channel:
        """Parses a channel object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The channel payload to parse.

        Returns
        -------
        :class:`.Channel`
            The parsed channel object.
        """
        return Channel(
            state=self.state,
            id=payload['id'],
            type=ChannelType(payload['type']),
            name=payload['name'],
            topic=payload.get('topic'),
            created_at=_required_timestamp(payload.get('createdAt'), 'Channel'),
            created_by_id=payload['createdBy'],
            updated_at=parse_timestamp(payload.get('updatedAt')),
            server_id=payload['serverId'],
            parent_id=payload.get('parentId'),
            category_id=payload.get('categoryId'),
            group_id=payload['groupId'],
            is_public=payload.get('isPublic', False),
            archived_by_id=payload.get('archivedBy'),
            archived_at=parse_timestamp(payload.get('archivedAt')),
        )

    def parse_partial_channel(self, payload: raw.ServerChannel, /) -> PartialChannel:
        """Parses a partial channel object from full channel payload.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The channel payload to parse.

        Returns
        -------
        :class:`.PartialChannel`
            The parsed partial channel object.
        """
        return PartialChannel(
            state=self.state,
            id=payload['id'],
            name=payload['name'],
            topic=payload.get('topic'),
            updated_at=parse_timestamp(payload.get('updatedAt')),
            parent_id=payload.get('parentId'),
            category_id=payload.get('categoryId'),
            is_public=payload.get('isPublic', False),
            archived_by_id=payload.get('archivedBy'),
            archived_at=parse_timestamp(payload.get('archivedAt')),
        )

    def parse_embed(self, payload: raw.ChatEmbed, /) -> Embed:
        """Parses a chat embed object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The embed payload to parse.

        Returns
        -------
        :class:`.Embed`
            The parsed embed object.
        """
        footer = payload.get('footer')
        thumbnail = payload.get('thumbnail')
        image = payload.get('image')
        author = payload.get('author')

        return Embed(
            title=payload.get('title'),
            description=payload.get('description'),
            url=payload.get('url'),
            color=payload.get('color'),
            footer=None if footer is None else EmbedFooter(text=footer['text'], icon_url=footer.get('icon_url')),
            timestamp=parse_timestamp(payload.get('timestamp')),
            thumbnail=None if thumbnail is None else EmbedMedia(url=thumbnail['url']),
            image=None if image is None else EmbedMedia(url=image['url']),
            author=None
            if author is None
            else EmbedAuthor(name=author.get('name'), url=author.get('url'), icon_url=author.get('icon_url')),
            fields=[
                EmbedField(name=f['name'], value=f['value'], inline=f.get('inline', False))
                for f in payload.get('fields', ())
            ],
        )

    def parse_emote(self, payload: raw.Emote, /) -> Emote:
        """Parses an emote object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The emote payload to parse.

        Returns
        -------
        :class:`.Emote`
            The parsed emote object.
        """
        return Emote(
            id=payload['id'],
            name=payload['name'],
            url=payload['url'],
            server_id=payload.get('serverId'),
        )

    def parse_member(self, server_id: str, payload: raw.ServerMember, /) -> Member:
        """Parses a member object.

        Parameters
        ----------
        server_id: :class:`str`
            The server's ID the member is in.
        payload: Dict[:class:`str`, Any]
            The member payload to parse.

        Returns
        -------
        :class:`.Member`
            The parsed member object.
        """
        user_id = payload['user']['id']
        return Member(
            state=self.state,
            id=build_member_key(server_id, user_id),
            server_id=server_id,
            user_id=user_id,
            nickname=payload.get('nickname'),
            role_ids=list(payload.get('roleIds', ())),
            joined_at=_required_timestamp(payload.get('joinedAt'), 'Member'),
            is_owner=payload.get('isOwner', False),
        )

    def parse_partial_member(self, server_id: str, payload: raw.ServerMember, /) -> PartialMember:
        """Parses a partial member object from full member payload.

        Parameters
        ----------
        server_id: :class:`str`
            The server's ID the member is in.
        payload: Dict[:class:`str`, Any]
            The member payload to parse.

        Returns
        -------
        :class:`.PartialMember`
            The parsed partial member object.
        """
        user_id = payload['user']['id']
        return PartialMember(
            state=self.state,
            id=build_member_key(server_id, user_id),
            server_id=server_id,
            user_id=user_id,
            nickname=payload.get('nickname'),
            role_ids=list(payload.get('roleIds', ())),
        )

    def parse_mentions(self, payload: raw.Mentions, /) -> MessageMentions:
        """Parses a message mentions object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The mentions payload to parse.

        Returns
        -------
        :class:`.MessageMentions`
            The parsed mentions object.
        """
        return MessageMentions(
            users=[m['id'] for m in payload.get('users', ())],
            channels=[m['id'] for m in payload.get('channels', ())],
            roles=[m['id'] for m in payload.get('roles', ())],
            everyone=payload.get('everyone', False),
            here=payload.get('here', False),
        )

    def parse_message(self, payload: raw.ChatMessage, /) -> Message:
        """Parses a message object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The message payload to parse.

        Returns
        -------
        :class:`.Message`
            The parsed message object.
        """
        mentions = payload.get('mentions')

        return Message(
            state=self.state,
            id=payload['id'],
            channel_id=payload['channelId'],
            server_id=payload.get('serverId'),
            group_id=payload.get('groupId'),
            type=MessageType(payload.get('type', 'default')),
            content=payload.get('content') or '',
            mentions=None if mentions is None else self.parse_mentions(mentions),
            reply_message_ids=list(payload.get('replyMessageIds', ())),
            is_private=payload.get('isPrivate', False),
            is_silent=payload.get('isSilent', False),
            created_by_id=payload['createdBy'],
            created_by_webhook_id=payload.get('createdByWebhookId'),
            created_at=_required_timestamp(payload.get('createdAt'), 'Message'),
            updated_at=parse_timestamp(payload.get('updatedAt')),
            embeds=list(map(self.parse_embed, payload.get('embeds') or ())),
        )

    def parse_partial_message(self, payload: raw.PartialChatMessage, /) -> PartialMessage:
        """Parses a partial message object.

        Only keys present in the payload are set, the rest are left as :data:`.UNDEFINED`.
        A ``mentions`` key with ``null`` value clears mentions.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The message payload to parse.

        Returns
        -------
        :class:`.PartialMessage`
            The parsed partial message object.
        """
        if 'mentions' in payload:
            mentions = payload['mentions']
            mentions = None if mentions is None else self.parse_mentions(mentions)
        else:
            mentions = UNDEFINED

        content = payload.get('content', UNDEFINED)
        if content is None:
            content = ''

        if 'deletedAt' in payload:
            deleted_at = parse_timestamp(payload['deletedAt'])
        else:
            deleted_at = UNDEFINED

        return PartialMessage(
            state=self.state,
            id=payload['id'],
            channel_id=payload['channelId'],
            content=content,
            mentions=mentions,
            updated_at=parse_timestamp(payload['updatedAt']) if 'updatedAt' in payload else UNDEFINED,
            deleted_at=deleted_at,
            embeds=list(map(self.parse_embed, payload['embeds'] or ())) if 'embeds' in payload else UNDEFINED,
        )

    def parse_reaction(self, payload: raw.ChannelMessageReaction, server_id: typing.Optional[str] = None, /) -> MessageReaction:
        """Parses a message reaction object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The reaction payload to parse.
        server_id: Optional[:class:`str`]
            The server's ID the reaction was added in.

        Returns
        -------
        :class:`.MessageReaction`
            The parsed reaction object.
        """
        emote = self.parse_emote(payload['emote'])
        return MessageReaction(
            state=self.state,
            id=build_reaction_key(payload['createdBy'], emote.id),
            channel_id=payload['channelId'],
            message_id=payload['messageId'],
            created_by_id=payload['createdBy'],
            emote=emote,
            server_id=server_id,
        )

    def parse_server(self, payload: raw.Server, /) -> Server:
        """Parses a server object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The server payload to parse.

        Returns
        -------
        :class:`.Server`
            The parsed server object.
        """
        type = payload.get('type')
        return Server(
            state=self.state,
            id=payload['id'],
            owner_id=payload['ownerId'],
            type=None if type is None else ServerType(type),
            name=payload['name'],
            url=payload.get('url'),
            about=payload.get('about'),
            avatar=payload.get('avatar'),
            banner=payload.get('banner'),
            timezone=payload.get('timezone'),
            is_verified=payload.get('isVerified', False),
            default_channel_id=payload.get('defaultChannelId'),
            created_at=_required_timestamp(payload.get('createdAt'), 'Server'),
        )

    def parse_partial_server(self, payload: raw.Server, /) -> PartialServer:
        """Parses a partial server object from full server payload.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The server payload to parse.

        Returns
        -------
        :class:`.PartialServer`
            The parsed partial server object.
        """
        return PartialServer(
            state=self.state,
            id=payload['id'],
            name=payload['name'],
            owner_id=payload['ownerId'],
            about=payload.get('about'),
            avatar=payload.get('avatar'),
            banner=payload.get('banner'),
            default_channel_id=payload.get('defaultChannelId'),
            is_verified=payload.get('isVerified', False),
        )

    def parse_user(self, payload: raw.User, /) -> User:
        """Parses a user object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The user payload to parse.

        Returns
        -------
        :class:`.User`
            The parsed user object.
        """
        status = payload.get('status')
        return User(
            state=self.state,
            id=payload['id'],
            type=UserType(payload.get('type', 'user')),
            name=payload['name'],
            avatar=payload.get('avatar'),
            banner=payload.get('banner'),
            created_at=_required_timestamp(payload.get('createdAt'), 'User'),
            status=None if status is None else self.parse_user_status(status),
        )

    def parse_partial_user(self, payload: raw.User, /) -> PartialUser:
        """Parses a partial user object from full user payload.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The user payload to parse.

        Returns
        -------
        :class:`.PartialUser`
            The parsed partial user object.
        """
        status = payload.get('status')
        return PartialUser(
            state=self.state,
            id=payload['id'],
            name=payload['name'],
            avatar=payload.get('avatar'),
            banner=payload.get('banner'),
            status=None if status is None else self.parse_user_status(status),
        )

    def parse_user_status(self, payload: raw.UserStatus, /) -> UserStatus:
        return UserStatus(content=payload.get('content'), emote_id=payload['emoteId'])

    # Events

    def parse_ready_event(self, payload: raw.ClientWelcomeEvent, /) -> ReadyEvent:
        """Parses a welcome event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.ReadyEvent`
            The parsed ready event object.
        """
        return ReadyEvent(
            state=self.state,
            me=self.parse_user(payload['user']),
            heartbeat_interval=payload['heartbeatIntervalMs'],
            last_message_id=payload.get('lastMessageId'),
            payload=payload['user'],
        )

    def parse_message_create_event(self, payload: raw.ClientChatMessageCreatedEvent, /) -> MessageCreateEvent:
        """Parses a ChatMessageCreated event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.MessageCreateEvent`
            The parsed message create event object.
        """
        return MessageCreateEvent(
            state=self.state,
            message=self.parse_message(payload['message']),
            payload=payload['message'],
        )

    def parse_message_update_event(self, payload: raw.ClientChatMessageUpdatedEvent, /) -> MessageUpdateEvent:
        """Parses a ChatMessageUpdated event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.MessageUpdateEvent`
            The parsed message update event object.
        """
        return MessageUpdateEvent(
            state=self.state,
            message=self.parse_partial_message(payload['message']),
            before=None,
            after=None,
            payload=payload['message'],
        )

    def parse_message_delete_event(self, payload: raw.ClientChatMessageDeletedEvent, /) -> MessageDeleteEvent:
        """Parses a ChatMessageDeleted event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.MessageDeleteEvent`
            The parsed message delete event object.
        """
        message = payload['message']
        return MessageDeleteEvent(
            state=self.state,
            channel_id=message['channelId'],
            message_id=message['id'],
            server_id=message.get('serverId', payload.get('serverId')),
            deleted_at=parse_timestamp(message.get('deletedAt')),
            message=None,
        )

    def parse_message_reaction_add_event(
        self, payload: raw.ClientChannelMessageReactionCreatedEvent, /
    ) -> MessageReactionAddEvent:
        """Parses a ChannelMessageReactionCreated event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.MessageReactionAddEvent`
            The parsed message reaction add event object.
        """
        return MessageReactionAddEvent(
            state=self.state,
            reaction=self.parse_reaction(payload['reaction'], payload.get('serverId')),
        )

    def parse_message_reaction_remove_event(
        self, payload: raw.ClientChannelMessageReactionDeletedEvent, /
    ) -> MessageReactionRemoveEvent:
        """Parses a ChannelMessageReactionDeleted event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.MessageReactionRemoveEvent`
            The parsed message reaction remove event object.
        """
        return MessageReactionRemoveEvent(
            state=self.state,
            reaction=self.parse_reaction(payload['reaction'], payload.get('serverId')),
            deleted_by_id=payload.get('deletedBy'),
        )

    def parse_server_member_join_event(self, payload: raw.ClientServerMemberJoinedEvent, /) -> ServerMemberJoinEvent:
        """Parses a ServerMemberJoined event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.ServerMemberJoinEvent`
            The parsed server member join event object.
        """
        return ServerMemberJoinEvent(
            state=self.state,
            member=self.parse_member(payload['serverId'], payload['member']),
            payload=payload['member'],
        )

    def parse_server_member_update_event(
        self, payload: raw.ClientServerMemberUpdatedEvent, /
    ) -> ServerMemberUpdateEvent:
        """Parses a ServerMemberUpdated event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.ServerMemberUpdateEvent`
            The parsed server member update event object.
        """
        server_id = payload['serverId']
        user_info = payload['userInfo']
        user_id = user_info['id']

        return ServerMemberUpdateEvent(
            state=self.state,
            server_id=server_id,
            member=PartialMember(
                state=self.state,
                id=build_member_key(server_id, user_id),
                server_id=server_id,
                user_id=user_id,
                nickname=user_info.get('nickname', UNDEFINED),
            ),
            before=None,
            after=None,
        )

    def parse_server_member_remove_event(
        self, payload: raw.ClientServerMemberRemovedEvent, /
    ) -> ServerMemberRemoveEvent:
        """Parses a ServerMemberRemoved event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.ServerMemberRemoveEvent`
            The parsed server member remove event object.
        """
        return ServerMemberRemoveEvent(
            state=self.state,
            server_id=payload['serverId'],
            user_id=payload['userId'],
            is_kick=payload.get('isKick', False),
            is_ban=payload.get('isBan', False),
            member=None,
        )

    def parse_server_roles_update_event(self, payload: raw.ClientServerRolesUpdatedEvent, /) -> ServerRolesUpdateEvent:
        """Parses a ServerRolesUpdated event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.ServerRolesUpdateEvent`
            The parsed server roles update event object.
        """
        server_id = payload['serverId']
        return ServerRolesUpdateEvent(
            state=self.state,
            server_id=server_id,
            members=[
                PartialMember(
                    state=self.state,
                    id=build_member_key(server_id, m['userId']),
                    server_id=server_id,
                    user_id=m['userId'],
                    role_ids=list(m['roleIds']),
                )
                for m in payload['memberRoleIds']
            ],
        )

    def parse_server_channel_create_event(
        self, payload: raw.ClientServerChannelCreatedEvent, /
    ) -> ServerChannelCreateEvent:
        """Parses a ServerChannelCreated event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.ServerChannelCreateEvent`
            The parsed server channel create event object.
        """
        return ServerChannelCreateEvent(
            state=self.state,
            channel=self.parse_channel(payload['channel']),
            payload=payload['channel'],
        )

    def parse_server_channel_update_event(
        self, payload: raw.ClientServerChannelUpdatedEvent, /
    ) -> ServerChannelUpdateEvent:
        """Parses a ServerChannelUpdated event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.ServerChannelUpdateEvent`
            The parsed server channel update event object.
        """
        return ServerChannelUpdateEvent(
            state=self.state,
            channel=self.parse_partial_channel(payload['channel']),
            before=None,
            after=None,
            payload=payload['channel'],
        )

    def parse_server_channel_delete_event(
        self, payload: raw.ClientServerChannelDeletedEvent, /
    ) -> ServerChannelDeleteEvent:
        """Parses a ServerChannelDeleted event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.ServerChannelDeleteEvent`
            The parsed server channel delete event object.
        """
        channel = self.parse_channel(payload['channel'])
        return ServerChannelDeleteEvent(
            state=self.state,
            server_id=payload['serverId'],
            channel_id=channel.id,
            channel=channel,
        )

    def parse_server_join_event(self, payload: raw.ClientBotServerMembershipCreatedEvent, /) -> ServerJoinEvent:
        """Parses a BotServerMembershipCreated event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.ServerJoinEvent`
            The parsed server join event object.
        """
        return ServerJoinEvent(
            state=self.state,
            server=self.parse_server(payload['server']),
            created_by_id=payload['createdBy'],
            payload=payload['server'],
        )

    def parse_server_leave_event(self, payload: raw.ClientBotServerMembershipDeletedEvent, /) -> ServerLeaveEvent:
        """Parses a BotServerMembershipDeleted event.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`.ServerLeaveEvent`
            The parsed server leave event object.
        """
        return ServerLeaveEvent(
            state=self.state,
            server=self.parse_server(payload['server']),
            created_by_id=payload['createdBy'],
        )


__all__ = ('Parser',)
