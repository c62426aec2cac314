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

from copy import copy
from datetime import datetime
import logging
import typing

# Due to Pyright being stupid (or attrs), we have to cast everything to typing.Any
from typing import cast as _cast

from attrs import Factory, define, field

from . import cache as caching
from .core import build_member_key
from .message import PartialMessage

if typing.TYPE_CHECKING:
    from . import raw
    from .channel import PartialChannel, Channel
    from .message import Message, MessageReaction
    from .server import Server, PartialMember, Member
    from .state import State
    from .user import User

_L = logging.getLogger(__name__)


@define(slots=True)
class BaseEvent:
    """Base class for all events."""

    def before_dispatch(self) -> None:
        """Called before the cache is updated. Used to capture state of entities before mutation."""
        pass

    def process(self) -> typing.Any:
        """Any: Called to update the cache. Handlers are invoked after this returns."""
        pass


@define(slots=True)
class StateEvent(BaseEvent):
    """Base class for events received from Guilded."""

    state: State = field(repr=False, kw_only=True)
    """:class:`.State`: The state the event was received by."""


@define(slots=True)
class ReadyEvent(StateEvent):
    """Dispatched when Guilded greets the bot after connecting.

    .. warning::
        This event may be dispatched multiple times due to reconnects.
    """

    event_name: typing.ClassVar[typing.Literal['ready']] = 'ready'

    me: User = field(repr=True, kw_only=True)
    """:class:`.User`: The connected bot user."""

    heartbeat_interval: int = field(repr=False, kw_only=True)
    """:class:`int`: The heartbeat interval in milliseconds."""

    last_message_id: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The ID of last event received, used for replaying missed events."""

    payload: raw.User = field(repr=False, kw_only=True, eq=False)
    """Dict[:class:`str`, Any]: The raw bot user."""

    cache_context: caching.UndefinedCacheContext | caching.ReadyEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.ReadyEventCacheContext(
                    type=caching.CacheContextType.ready_event,
                    event=self,
                )
                if 'ReadyEvent' in self.state.provide_cache_context_in
                else caching._READY_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.ReadyEventCacheContext`]: The cache context used."""

    def process(self) -> bool:
        state = self.state
        self.me = state.users._add_or_update(self.payload, self.cache_context)
        state._me = self.me
        return True


@define(slots=True)
class MessageCreateEvent(StateEvent):
    """Dispatched when someone sends message in a channel."""

    event_name: typing.ClassVar[typing.Literal['message_create']] = 'message_create'

    message: Message = field(repr=True, kw_only=True)
    """:class:`.Message`: The message sent. Once processed, this is the cached instance."""

    payload: raw.ChatMessage = field(repr=False, kw_only=True, eq=False)
    """Dict[:class:`str`, Any]: The raw message."""

    cache_context: caching.UndefinedCacheContext | caching.MessageCreateEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.MessageCreateEventCacheContext(
                    type=caching.CacheContextType.message_create_event,
                    event=self,
                )
                if 'MessageCreateEvent' in self.state.provide_cache_context_in
                else caching._MESSAGE_CREATE_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.MessageCreateEventCacheContext`]: The cache context used."""

    def process(self) -> bool:
        self.message = self.state.messages._add_or_update(self.payload, self.cache_context)
        return True


@define(slots=True)
class MessageUpdateEvent(StateEvent):
    """Dispatched when the message is updated."""

    event_name: typing.ClassVar[typing.Literal['message_update']] = 'message_update'

    message: PartialMessage = field(repr=True, kw_only=True)
    """:class:`.PartialMessage`: The fields that were updated."""

    before: typing.Optional[Message] = field(repr=True, kw_only=True)
    """Optional[:class:`.Message`]: The copy of message as it was before being updated, if it was cached."""

    after: typing.Optional[Message] = field(repr=True, kw_only=True)
    """Optional[:class:`.Message`]: The cached message, after update was applied."""

    payload: raw.ChatMessage = field(repr=False, kw_only=True, eq=False)
    """Dict[:class:`str`, Any]: The raw message."""

    cache_context: caching.UndefinedCacheContext | caching.MessageUpdateEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.MessageUpdateEventCacheContext(
                    type=caching.CacheContextType.message_update_event,
                    event=self,
                )
                if 'MessageUpdateEvent' in self.state.provide_cache_context_in
                else caching._MESSAGE_UPDATE_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.MessageUpdateEventCacheContext`]: The cache context used."""

    def before_dispatch(self) -> None:
        before = self.state.messages.get(self.message.id, self.cache_context)
        if before is not None:
            self.before = copy(before)

    def process(self) -> bool:
        self.after = self.state.messages._add_or_update(self.payload, self.cache_context)
        return True


@define(slots=True)
class MessageDeleteEvent(StateEvent):
    """Dispatched when the message is deleted in channel."""

    event_name: typing.ClassVar[typing.Literal['message_delete']] = 'message_delete'

    channel_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The channel's ID the message was in."""

    message_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The deleted message's ID."""

    server_id: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The server's ID the message was in."""

    deleted_at: typing.Optional[datetime] = field(repr=True, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the message was deleted."""

    message: typing.Optional[Message] = field(repr=True, kw_only=True)
    """Optional[:class:`.Message`]: The deleted message object, if it was cached."""

    cache_context: caching.UndefinedCacheContext | caching.MessageDeleteEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.MessageDeleteEventCacheContext(
                    type=caching.CacheContextType.message_delete_event,
                    event=self,
                )
                if 'MessageDeleteEvent' in self.state.provide_cache_context_in
                else caching._MESSAGE_DELETE_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.MessageDeleteEventCacheContext`]: The cache context used."""

    def before_dispatch(self) -> None:
        self.message = self.state.messages.get(self.message_id, self.cache_context)

    def process(self) -> bool:
        message = self.message
        if message is not None:
            message.locally_update(
                PartialMessage(
                    state=self.state,
                    id=self.message_id,
                    channel_id=self.channel_id,
                    deleted_at=self.deleted_at,
                )
            )
        self.state.messages._remove(self.message_id, self.cache_context)
        return message is not None


@define(slots=True)
class MessageReactionAddEvent(StateEvent):
    """Dispatched when someone reacts to message."""

    event_name: typing.ClassVar[typing.Literal['message_reaction_add']] = 'message_reaction_add'

    reaction: MessageReaction = field(repr=True, kw_only=True)
    """:class:`.MessageReaction`: The reaction added."""

    cache_context: caching.UndefinedCacheContext | caching.MessageReactionAddEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.MessageReactionAddEventCacheContext(
                    type=caching.CacheContextType.message_reaction_add_event,
                    event=self,
                )
                if 'MessageReactionAddEvent' in self.state.provide_cache_context_in
                else caching._MESSAGE_REACTION_ADD_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.MessageReactionAddEventCacheContext`]: The cache context used."""

    def process(self) -> bool:
        self.reaction = self.state.reactions._add(self.reaction, self.cache_context)
        return True


@define(slots=True)
class MessageReactionRemoveEvent(StateEvent):
    """Dispatched when someone removes their reaction from message."""

    event_name: typing.ClassVar[typing.Literal['message_reaction_remove']] = 'message_reaction_remove'

    reaction: MessageReaction = field(repr=True, kw_only=True)
    """:class:`.MessageReaction`: The reaction removed."""

    deleted_by_id: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The user's ID who removed the reaction, if it was removed by someone else."""

    cache_context: caching.UndefinedCacheContext | caching.MessageReactionRemoveEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.MessageReactionRemoveEventCacheContext(
                    type=caching.CacheContextType.message_reaction_remove_event,
                    event=self,
                )
                if 'MessageReactionRemoveEvent' in self.state.provide_cache_context_in
                else caching._MESSAGE_REACTION_REMOVE_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.MessageReactionRemoveEventCacheContext`]: The cache context used."""

    def process(self) -> bool:
        removed = self.state.reactions._remove(self.reaction.message_id, self.reaction.id, self.cache_context)
        return removed is not None


@define(slots=True)
class ServerMemberJoinEvent(StateEvent):
    """Dispatched when an user joins a server."""

    event_name: typing.ClassVar[typing.Literal['server_member_join']] = 'server_member_join'

    member: Member = field(repr=True, kw_only=True)
    """:class:`.Member`: The joined member. Once processed, this is the cached instance."""

    payload: raw.ServerMember = field(repr=False, kw_only=True, eq=False)
    """Dict[:class:`str`, Any]: The raw member."""

    cache_context: caching.UndefinedCacheContext | caching.ServerMemberJoinEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.ServerMemberJoinEventCacheContext(
                    type=caching.CacheContextType.server_member_join_event,
                    event=self,
                )
                if 'ServerMemberJoinEvent' in self.state.provide_cache_context_in
                else caching._SERVER_MEMBER_JOIN_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.ServerMemberJoinEventCacheContext`]: The cache context used."""

    def process(self) -> bool:
        state = self.state
        state.users._add_or_update(self.payload['user'], self.cache_context)
        self.member = state.members._add_or_update(self.member.server_id, self.payload, self.cache_context)
        return True


@define(slots=True)
class ServerMemberUpdateEvent(StateEvent):
    """Dispatched when member details are changed."""

    event_name: typing.ClassVar[typing.Literal['server_member_update']] = 'server_member_update'

    server_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The server's ID."""

    member: PartialMember = field(repr=True, kw_only=True)
    """:class:`.PartialMember`: The fields that were updated."""

    before: typing.Optional[Member] = field(repr=True, kw_only=True)
    """Optional[:class:`.Member`]: The copy of member as it was before being updated, if it was cached."""

    after: typing.Optional[Member] = field(repr=True, kw_only=True)
    """Optional[:class:`.Member`]: The cached member, after update was applied."""

    cache_context: caching.UndefinedCacheContext | caching.ServerMemberUpdateEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.ServerMemberUpdateEventCacheContext(
                    type=caching.CacheContextType.server_member_update_event,
                    event=self,
                )
                if 'ServerMemberUpdateEvent' in self.state.provide_cache_context_in
                else caching._SERVER_MEMBER_UPDATE_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.ServerMemberUpdateEventCacheContext`]: The cache context used."""

    def before_dispatch(self) -> None:
        before = self.state.members.get(self.member.id, self.cache_context)
        if before is not None:
            self.before = copy(before)

    def process(self) -> bool:
        member = self.state.members.get(self.member.id, self.cache_context)
        if member is None:
            return False
        self.after = member.locally_update(self.member)
        return True


@define(slots=True)
class ServerMemberRemoveEvent(StateEvent):
    """Dispatched when the member (or bot user) got removed from server."""

    event_name: typing.ClassVar[typing.Literal['server_member_remove']] = 'server_member_remove'

    server_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The server's ID from which the user was removed from."""

    user_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The removed user's ID."""

    is_kick: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether the member was kicked."""

    is_ban: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether the member was banned."""

    member: typing.Optional[Member] = field(repr=True, kw_only=True)
    """Optional[:class:`.Member`]: The removed member object, if it was cached."""

    cache_context: caching.UndefinedCacheContext | caching.ServerMemberRemoveEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.ServerMemberRemoveEventCacheContext(
                    type=caching.CacheContextType.server_member_remove_event,
                    event=self,
                )
                if 'ServerMemberRemoveEvent' in self.state.provide_cache_context_in
                else caching._SERVER_MEMBER_REMOVE_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.ServerMemberRemoveEventCacheContext`]: The cache context used."""

    def before_dispatch(self) -> None:
        self.member = self.state.members.get_for(self.server_id, self.user_id, self.cache_context)

    def process(self) -> bool:
        state = self.state
        me = state.me
        if me is not None and me.id == self.user_id:
            _L.debug('Removed from server %s', self.server_id)
            state.servers._remove(self.server_id, self.cache_context)
            state.members._remove_server(self.server_id, self.cache_context)
            return True
        state.members._remove(build_member_key(self.server_id, self.user_id), self.cache_context)
        return True


@define(slots=True)
class ServerRolesUpdateEvent(StateEvent):
    """Dispatched when roles of server members are changed."""

    event_name: typing.ClassVar[typing.Literal['server_roles_update']] = 'server_roles_update'

    server_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The server's ID."""

    members: list[PartialMember] = field(repr=True, kw_only=True)
    """List[:class:`.PartialMember`]: The members with their new role IDs."""

    updated: list[Member] = field(factory=list, repr=False, kw_only=True)
    """List[:class:`.Member`]: The cached members that were updated."""

    cache_context: caching.UndefinedCacheContext | caching.ServerRolesUpdateEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.ServerRolesUpdateEventCacheContext(
                    type=caching.CacheContextType.server_roles_update_event,
                    event=self,
                )
                if 'ServerRolesUpdateEvent' in self.state.provide_cache_context_in
                else caching._SERVER_ROLES_UPDATE_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.ServerRolesUpdateEventCacheContext`]: The cache context used."""

    def process(self) -> bool:
        members = self.state.members
        for partial in self.members:
            member = members.get(partial.id, self.cache_context)
            if member is not None:
                self.updated.append(member.locally_update(partial))
        return bool(self.updated)


@define(slots=True)
class ServerChannelCreateEvent(StateEvent):
    """Dispatched when the channel is created in server."""

    event_name: typing.ClassVar[typing.Literal['server_channel_create']] = 'server_channel_create'

    channel: Channel = field(repr=True, kw_only=True)
    """:class:`.Channel`: The created channel. Once processed, this is the cached instance."""

    payload: raw.ServerChannel = field(repr=False, kw_only=True, eq=False)
    """Dict[:class:`str`, Any]: The raw channel."""

    cache_context: caching.UndefinedCacheContext | caching.ServerChannelCreateEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.ServerChannelCreateEventCacheContext(
                    type=caching.CacheContextType.server_channel_create_event,
                    event=self,
                )
                if 'ServerChannelCreateEvent' in self.state.provide_cache_context_in
                else caching._SERVER_CHANNEL_CREATE_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.ServerChannelCreateEventCacheContext`]: The cache context used."""

    def process(self) -> bool:
        self.channel = self.state.channels._add_or_update(self.payload, self.cache_context)
        return True


@define(slots=True)
class ServerChannelUpdateEvent(StateEvent):
    """Dispatched when the channel is updated."""

    event_name: typing.ClassVar[typing.Literal['server_channel_update']] = 'server_channel_update'

    channel: PartialChannel = field(repr=True, kw_only=True)
    """:class:`.PartialChannel`: The fields that were updated."""

    before: typing.Optional[Channel] = field(repr=True, kw_only=True)
    """Optional[:class:`.Channel`]: The copy of channel as it was before being updated, if it was cached."""

    after: typing.Optional[Channel] = field(repr=True, kw_only=True)
    """Optional[:class:`.Channel`]: The cached channel, after update was applied."""

    payload: raw.ServerChannel = field(repr=False, kw_only=True, eq=False)
    """Dict[:class:`str`, Any]: The raw channel."""

    cache_context: caching.UndefinedCacheContext | caching.ServerChannelUpdateEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.ServerChannelUpdateEventCacheContext(
                    type=caching.CacheContextType.server_channel_update_event,
                    event=self,
                )
                if 'ServerChannelUpdateEvent' in self.state.provide_cache_context_in
                else caching._SERVER_CHANNEL_UPDATE_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.ServerChannelUpdateEventCacheContext`]: The cache context used."""

    def before_dispatch(self) -> None:
        before = self.state.channels.get(self.channel.id, self.cache_context)
        if before is not None:
            self.before = copy(before)

    def process(self) -> bool:
        self.after = self.state.channels._add_or_update(self.payload, self.cache_context)
        return True


@define(slots=True)
class ServerChannelDeleteEvent(StateEvent):
    """Dispatched when the server channel is deleted."""

    event_name: typing.ClassVar[typing.Literal['server_channel_delete']] = 'server_channel_delete'

    server_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The server's ID the channel was in."""

    channel_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The deleted channel's ID."""

    channel: Channel = field(repr=True, kw_only=True)
    """:class:`.Channel`: The deleted channel object. This is the cached instance, if channel was cached."""

    cache_context: caching.UndefinedCacheContext | caching.ServerChannelDeleteEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.ServerChannelDeleteEventCacheContext(
                    type=caching.CacheContextType.server_channel_delete_event,
                    event=self,
                )
                if 'ServerChannelDeleteEvent' in self.state.provide_cache_context_in
                else caching._SERVER_CHANNEL_DELETE_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.ServerChannelDeleteEventCacheContext`]: The cache context used."""

    def before_dispatch(self) -> None:
        channel = self.state.channels.get(self.channel_id, self.cache_context)
        if channel is not None:
            self.channel = channel

    def process(self) -> bool:
        self.state.channels._remove(self.channel_id, self.cache_context)
        return True


@define(slots=True)
class ServerJoinEvent(StateEvent):
    """Dispatched when the bot was added to a server."""

    event_name: typing.ClassVar[typing.Literal['server_join']] = 'server_join'

    server: Server = field(repr=True, kw_only=True)
    """:class:`.Server`: The joined server. Once processed, this is the cached instance."""

    created_by_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's ID who added the bot."""

    payload: raw.Server = field(repr=False, kw_only=True, eq=False)
    """Dict[:class:`str`, Any]: The raw server."""

    cache_context: caching.UndefinedCacheContext | caching.ServerJoinEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.ServerJoinEventCacheContext(
                    type=caching.CacheContextType.server_join_event,
                    event=self,
                )
                if 'ServerJoinEvent' in self.state.provide_cache_context_in
                else caching._SERVER_JOIN_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.ServerJoinEventCacheContext`]: The cache context used."""

    def process(self) -> bool:
        self.server = self.state.servers._add_or_update(self.payload, self.cache_context)
        return True


@define(slots=True)
class ServerLeaveEvent(StateEvent):
    """Dispatched when the bot was removed from a server."""

    event_name: typing.ClassVar[typing.Literal['server_leave']] = 'server_leave'

    server: Server = field(repr=True, kw_only=True)
    """:class:`.Server`: The left server. This is the cached instance, if server was cached."""

    created_by_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's ID who removed the bot."""

    cache_context: caching.UndefinedCacheContext | caching.ServerLeaveEventCacheContext = field(
        default=Factory(
            lambda self: _cast(
                'typing.Any',
                caching.ServerLeaveEventCacheContext(
                    type=caching.CacheContextType.server_leave_event,
                    event=self,
                )
                if 'ServerLeaveEvent' in self.state.provide_cache_context_in
                else caching._SERVER_LEAVE_EVENT,
            ),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """Union[:class:`.UndefinedCacheContext`, :class:`.ServerLeaveEventCacheContext`]: The cache context used."""

    def before_dispatch(self) -> None:
        server = self.state.servers.get(self.server.id, self.cache_context)
        if server is not None:
            self.server = server

    def process(self) -> bool:
        state = self.state
        state.servers._remove(self.server.id, self.cache_context)
        state.members._remove_server(self.server.id, self.cache_context)
        return True


__all__ = (
    'BaseEvent',
    'StateEvent',
    'ReadyEvent',
    'MessageCreateEvent',
    'MessageUpdateEvent',
    'MessageDeleteEvent',
    'MessageReactionAddEvent',
    'MessageReactionRemoveEvent',
    'ServerMemberJoinEvent',
    'ServerMemberUpdateEvent',
    'ServerMemberRemoveEvent',
    'ServerRolesUpdateEvent',
    'ServerChannelCreateEvent',
    'ServerChannelUpdateEvent',
    'ServerChannelDeleteEvent',
    'ServerJoinEvent',
    'ServerLeaveEvent',
)
