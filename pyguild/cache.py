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

from abc import ABC, abstractmethod
import logging
import typing

from attrs import define, field

from .enums import Enum

if typing.TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .channel import Channel
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
    from .message import Message, MessageReaction
    from .server import Server, Member
    from .user import User

_L = logging.getLogger(__name__)


class CacheContextType(Enum):
    custom = 'CUSTOM'
    undefined = 'UNDEFINED'
    user_request = 'USER_REQUEST'
    library_request = 'LIBRARY_REQUEST'

    channel = 'CHANNEL'
    member = 'MEMBER'
    message = 'MESSAGE'
    server = 'SERVER'

    ready_event = 'ReadyEvent'
    message_create_event = 'MessageCreateEvent'
    message_update_event = 'MessageUpdateEvent'
    message_delete_event = 'MessageDeleteEvent'
    message_reaction_add_event = 'MessageReactionAddEvent'
    message_reaction_remove_event = 'MessageReactionRemoveEvent'
    server_member_join_event = 'ServerMemberJoinEvent'
    server_member_update_event = 'ServerMemberUpdateEvent'
    server_member_remove_event = 'ServerMemberRemoveEvent'
    server_roles_update_event = 'ServerRolesUpdateEvent'
    server_channel_create_event = 'ServerChannelCreateEvent'
    server_channel_update_event = 'ServerChannelUpdateEvent'
    server_channel_delete_event = 'ServerChannelDeleteEvent'
    server_join_event = 'ServerJoinEvent'
    server_leave_event = 'ServerLeaveEvent'


@define(slots=True)
class BaseCacheContext:
    """Represents a cache context."""

    type: CacheContextType = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.CacheContextType`: The context's type."""


@define(slots=True)
class UndefinedCacheContext(BaseCacheContext):
    """Represents a undefined cache context."""


@define(slots=True)
class ChannelCacheContext(BaseCacheContext):
    """Represents a cache context that involves a channel."""

    channel: Channel = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.Channel`: The channel involved."""


@define(slots=True)
class MemberCacheContext(BaseCacheContext):
    """Represents a cache context that involves a member."""

    member: Member = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.Member`: The member involved."""


@define(slots=True)
class MessageCacheContext(BaseCacheContext):
    """Represents a cache context that involves a message."""

    message: Message = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.Message`: The message involved."""


@define(slots=True)
class ServerCacheContext(BaseCacheContext):
    """Represents a cache context that involves a server."""

    server: Server = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.Server`: The server involved."""


@define(slots=True)
class EventCacheContext(BaseCacheContext):
    """Base class for cache contexts created by gateway events."""


@define(slots=True)
class ReadyEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.ReadyEvent`."""

    event: ReadyEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.ReadyEvent`: The event involved."""


@define(slots=True)
class MessageCreateEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.MessageCreateEvent`."""

    event: MessageCreateEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.MessageCreateEvent`: The event involved."""


@define(slots=True)
class MessageUpdateEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.MessageUpdateEvent`."""

    event: MessageUpdateEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.MessageUpdateEvent`: The event involved."""


@define(slots=True)
class MessageDeleteEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.MessageDeleteEvent`."""

    event: MessageDeleteEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.MessageDeleteEvent`: The event involved."""


@define(slots=True)
class MessageReactionAddEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.MessageReactionAddEvent`."""

    event: MessageReactionAddEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.MessageReactionAddEvent`: The event involved."""


@define(slots=True)
class MessageReactionRemoveEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.MessageReactionRemoveEvent`."""

    event: MessageReactionRemoveEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.MessageReactionRemoveEvent`: The event involved."""


@define(slots=True)
class ServerMemberJoinEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.ServerMemberJoinEvent`."""

    event: ServerMemberJoinEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.ServerMemberJoinEvent`: The event involved."""


@define(slots=True)
class ServerMemberUpdateEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.ServerMemberUpdateEvent`."""

    event: ServerMemberUpdateEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.ServerMemberUpdateEvent`: The event involved."""


@define(slots=True)
class ServerMemberRemoveEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.ServerMemberRemoveEvent`."""

    event: ServerMemberRemoveEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.ServerMemberRemoveEvent`: The event involved."""


@define(slots=True)
class ServerRolesUpdateEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.ServerRolesUpdateEvent`."""

    event: ServerRolesUpdateEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.ServerRolesUpdateEvent`: The event involved."""


@define(slots=True)
class ServerChannelCreateEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.ServerChannelCreateEvent`."""

    event: ServerChannelCreateEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.ServerChannelCreateEvent`: The event involved."""


@define(slots=True)
class ServerChannelUpdateEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.ServerChannelUpdateEvent`."""

    event: ServerChannelUpdateEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.ServerChannelUpdateEvent`: The event involved."""


@define(slots=True)
class ServerChannelDeleteEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.ServerChannelDeleteEvent`."""

    event: ServerChannelDeleteEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.ServerChannelDeleteEvent`: The event involved."""


@define(slots=True)
class ServerJoinEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.ServerJoinEvent`."""

    event: ServerJoinEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.ServerJoinEvent`: The event involved."""


@define(slots=True)
class ServerLeaveEventCacheContext(EventCacheContext):
    """Represents a cache context that involves a :class:`.ServerLeaveEvent`."""

    event: ServerLeaveEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.ServerLeaveEvent`: The event involved."""


_UNDEFINED: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(type=CacheContextType.undefined)
_USER_REQUEST: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(type=CacheContextType.user_request)
_LIBRARY_REQUEST: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.library_request
)
_READY_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(type=CacheContextType.ready_event)
_MESSAGE_CREATE_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.message_create_event
)
_MESSAGE_UPDATE_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.message_update_event
)
_MESSAGE_DELETE_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.message_delete_event
)
_MESSAGE_REACTION_ADD_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.message_reaction_add_event
)
_MESSAGE_REACTION_REMOVE_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.message_reaction_remove_event
)
_SERVER_MEMBER_JOIN_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.server_member_join_event
)
_SERVER_MEMBER_UPDATE_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.server_member_update_event
)
_SERVER_MEMBER_REMOVE_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.server_member_remove_event
)
_SERVER_ROLES_UPDATE_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.server_roles_update_event
)
_SERVER_CHANNEL_CREATE_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.server_channel_create_event
)
_SERVER_CHANNEL_UPDATE_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.server_channel_update_event
)
_SERVER_CHANNEL_DELETE_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.server_channel_delete_event
)
_SERVER_JOIN_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.server_join_event
)
_SERVER_LEAVE_EVENT: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.server_leave_event
)

ProvideCacheContextIn = typing.Literal[
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
    'Channel.server',
    'Channel.created_by',
    'Member.user',
    'Member.server',
    'Message.author',
    'Message.member',
    'Message.channel',
    'Message.server',
    'Message.reactions',
    'Server.owner',
    'Server.default_channel',
    'Server.members',
]


class Cache(ABC):
    """An ABC that represents cache.

    .. note::
        This class might not be what you're looking for.
        Head over to :class:`.EmptyCache` and :class:`.MapCache` for implementations.
    """

    __slots__ = ()

    #########
    # Users #
    #########

    @abstractmethod
    def get_user(self, user_id: str, ctx: BaseCacheContext, /) -> typing.Optional[User]:
        """Optional[:class:`.User`]: Retrieves a user using ID.

        Parameters
        ----------
        user_id: :class:`str`
            The user's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    def get_all_users(self, ctx: BaseCacheContext, /) -> Sequence[User]:
        """Sequence[:class:`.User`]: Retrieves all available users as sequence.

        Parameters
        ----------
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        return list(self.get_users_mapping().values())

    @abstractmethod
    def get_users_mapping(self) -> Mapping[str, User]:
        """Mapping[:class:`str`, :class:`.User`]: Retrieves all available users as mapping."""
        ...

    @abstractmethod
    def store_user(self, user: User, ctx: BaseCacheContext, /) -> None:
        """Stores an user.

        Parameters
        ----------
        user: :class:`.User`
            The user to store.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    ###########
    # Servers #
    ###########

    @abstractmethod
    def get_server(self, server_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Server]:
        """Optional[:class:`.Server`]: Retrieves a server using ID.

        Parameters
        ----------
        server_id: :class:`str`
            The server's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    def get_all_servers(self, ctx: BaseCacheContext, /) -> Sequence[Server]:
        """Sequence[:class:`.Server`]: Retrieves all available servers as sequence.

        Parameters
        ----------
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        return list(self.get_servers_mapping().values())

    @abstractmethod
    def get_servers_mapping(self) -> Mapping[str, Server]:
        """Mapping[:class:`str`, :class:`.Server`]: Retrieves all available servers as mapping."""
        ...

    @abstractmethod
    def store_server(self, server: Server, ctx: BaseCacheContext, /) -> None:
        """Stores a server.

        Parameters
        ----------
        server: :class:`.Server`
            The server to store.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    @abstractmethod
    def delete_server(self, server_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Server]:
        """Deletes a server.

        Parameters
        ----------
        server_id: :class:`str`
            The server's ID.
        ctx: :class:`.BaseCacheContext`
            The context.

        Returns
        -------
        Optional[:class:`.Server`]
            The server removed from the cache, if any.
        """
        ...

    ############
    # Channels #
    ############

    @abstractmethod
    def get_channel(self, channel_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Channel]:
        """Optional[:class:`.Channel`]: Retrieves a channel using ID.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    def get_all_channels(self, ctx: BaseCacheContext, /) -> Sequence[Channel]:
        """Sequence[:class:`.Channel`]: Retrieves all available channels as sequence.

        Parameters
        ----------
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        return list(self.get_channels_mapping().values())

    @abstractmethod
    def get_channels_mapping(self) -> Mapping[str, Channel]:
        """Mapping[:class:`str`, :class:`.Channel`]: Retrieves all available channels as mapping."""
        ...

    @abstractmethod
    def store_channel(self, channel: Channel, ctx: BaseCacheContext, /) -> None:
        """Stores a channel.

        Parameters
        ----------
        channel: :class:`.Channel`
            The channel to store.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    @abstractmethod
    def delete_channel(self, channel_id: str, ctx: BaseCacheContext, /) -> None:
        """Deletes a channel.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    ############
    # Messages #
    ############

    @abstractmethod
    def get_message(self, message_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Message]:
        """Optional[:class:`.Message`]: Retrieves a message using ID.

        Parameters
        ----------
        message_id: :class:`str`
            The message's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    def get_all_messages_of(self, channel_id: str, ctx: BaseCacheContext, /) -> Sequence[Message]:
        """Sequence[:class:`.Message`]: Retrieves all cached messages from a channel.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        return [m for m in self.get_messages_mapping().values() if m.channel_id == channel_id]

    @abstractmethod
    def get_messages_mapping(self) -> Mapping[str, Message]:
        """Mapping[:class:`str`, :class:`.Message`]: Retrieves all available messages as mapping."""
        ...

    @abstractmethod
    def store_message(self, message: Message, ctx: BaseCacheContext, /) -> None:
        """Stores a message.

        Parameters
        ----------
        message: :class:`.Message`
            The message to store.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    @abstractmethod
    def delete_message(self, message_id: str, ctx: BaseCacheContext, /) -> None:
        """Deletes a message.

        Parameters
        ----------
        message_id: :class:`str`
            The message's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    ##################
    # Server Members #
    ##################

    @abstractmethod
    def get_member(self, key: str, ctx: BaseCacheContext, /) -> typing.Optional[Member]:
        """Optional[:class:`.Member`]: Retrieves a member using composite key.

        Parameters
        ----------
        key: :class:`str`
            The member key, as built by :func:`.build_member_key`.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    @abstractmethod
    def get_members_mapping(self) -> Mapping[str, Member]:
        """Mapping[:class:`str`, :class:`.Member`]: Retrieves all available members as mapping."""
        ...

    def get_members_mapping_of(self, server_id: str, ctx: BaseCacheContext, /) -> Mapping[str, Member]:
        """Mapping[:class:`str`, :class:`.Member`]: Retrieves all members of a server as mapping.

        Parameters
        ----------
        server_id: :class:`str`
            The server's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        return {k: m for k, m in self.get_members_mapping().items() if m.server_id == server_id}

    @abstractmethod
    def store_member(self, member: Member, ctx: BaseCacheContext, /) -> None:
        """Stores a member.

        Parameters
        ----------
        member: :class:`.Member`
            The member to store.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    @abstractmethod
    def delete_member(self, key: str, ctx: BaseCacheContext, /) -> None:
        """Deletes a member.

        Parameters
        ----------
        key: :class:`str`
            The member key.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    @abstractmethod
    def delete_server_members_of(self, server_id: str, ctx: BaseCacheContext, /) -> None:
        """Deletes all members of a server.

        Parameters
        ----------
        server_id: :class:`str`
            The server's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    #####################
    # Message Reactions #
    #####################

    @abstractmethod
    def get_reaction(self, message_id: str, key: str, ctx: BaseCacheContext, /) -> typing.Optional[MessageReaction]:
        """Optional[:class:`.MessageReaction`]: Retrieves a reaction on message.

        Parameters
        ----------
        message_id: :class:`str`
            The message's ID.
        key: :class:`str`
            The reaction key, as built by :func:`.build_reaction_key`.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    @abstractmethod
    def get_reactions_mapping(self) -> Mapping[str, Mapping[str, MessageReaction]]:
        """Mapping[:class:`str`, Mapping[:class:`str`, :class:`.MessageReaction`]]: Retrieves all available reactions as mapping, keyed by message ID."""
        ...

    @abstractmethod
    def get_reactions_mapping_of(
        self, message_id: str, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[str, MessageReaction]]:
        """Optional[Mapping[:class:`str`, :class:`.MessageReaction`]]: Retrieves all reactions on message as mapping.

        Parameters
        ----------
        message_id: :class:`str`
            The message's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    @abstractmethod
    def store_reaction(self, reaction: MessageReaction, ctx: BaseCacheContext, /) -> None:
        """Stores a reaction. Implementations may ignore reactions on messages they do not hold.

        Parameters
        ----------
        reaction: :class:`.MessageReaction`
            The reaction to store.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    @abstractmethod
    def delete_reaction(self, message_id: str, key: str, ctx: BaseCacheContext, /) -> None:
        """Deletes a reaction from message.

        Parameters
        ----------
        message_id: :class:`str`
            The message's ID.
        key: :class:`str`
            The reaction key.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    @abstractmethod
    def delete_reactions_of(self, message_id: str, ctx: BaseCacheContext, /) -> None:
        """Deletes all reactions from message.

        Parameters
        ----------
        message_id: :class:`str`
            The message's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...


class EmptyCache(Cache):
    """Implementation of cache which doesn't actually store anything."""

    __slots__ = ()

    #########
    # Users #
    #########

    def get_user(self, user_id: str, ctx: BaseCacheContext, /) -> typing.Optional[User]:
        return None

    def get_users_mapping(self) -> Mapping[str, User]:
        return {}

    def store_user(self, user: User, ctx: BaseCacheContext, /) -> None:
        pass

    ###########
    # Servers #
    ###########

    def get_server(self, server_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Server]:
        return None

    def get_servers_mapping(self) -> Mapping[str, Server]:
        return {}

    def store_server(self, server: Server, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_server(self, server_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Server]:
        return None

    ############
    # Channels #
    ############

    def get_channel(self, channel_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Channel]:
        return None

    def get_channels_mapping(self) -> Mapping[str, Channel]:
        return {}

    def store_channel(self, channel: Channel, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_channel(self, channel_id: str, ctx: BaseCacheContext, /) -> None:
        pass

    ############
    # Messages #
    ############

    def get_message(self, message_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Message]:
        return None

    def get_messages_mapping(self) -> Mapping[str, Message]:
        return {}

    def store_message(self, message: Message, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_message(self, message_id: str, ctx: BaseCacheContext, /) -> None:
        pass

    ##################
    # Server Members #
    ##################

    def get_member(self, key: str, ctx: BaseCacheContext, /) -> typing.Optional[Member]:
        return None

    def get_members_mapping(self) -> Mapping[str, Member]:
        return {}

    def store_member(self, member: Member, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_member(self, key: str, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_server_members_of(self, server_id: str, ctx: BaseCacheContext, /) -> None:
        pass

    #####################
    # Message Reactions #
    #####################

    def get_reaction(self, message_id: str, key: str, ctx: BaseCacheContext, /) -> typing.Optional[MessageReaction]:
        return None

    def get_reactions_mapping(self) -> Mapping[str, Mapping[str, MessageReaction]]:
        return {}

    def get_reactions_mapping_of(
        self, message_id: str, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[str, MessageReaction]]:
        return None

    def store_reaction(self, reaction: MessageReaction, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_reaction(self, message_id: str, key: str, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_reactions_of(self, message_id: str, ctx: BaseCacheContext, /) -> None:
        pass


V = typing.TypeVar('V')


def _put0(d: dict[str, V], k: str, max_size: int, /) -> bool:
    if max_size == 0:
        return False
    if max_size > 0 and k not in d:
        while d and len(d) >= max_size:
            evicted = next(iter(d))
            del d[evicted]
            _L.debug('Evicted %s from cache', evicted)
    return True


def _put1(d: dict[str, V], k: str, v: V, max_size: int, /) -> None:
    if _put0(d, k, max_size):
        d[k] = v


class MapCache(Cache):
    """Implementation of :class:`.Cache` ABC based on :class:`dict`'s.

    Parameters of this class accept negative value to represent infinite count.
    When a store is full, the entry that was inserted first is evicted.

    Parameters
    ----------
    channels_max_size: :class:`int`
        How many channels can have cache. Defaults to ``-1``.
    members_max_size: :class:`int`
        How many server members can have cache. Defaults to ``-1``.
    messages_max_size: :class:`int`
        How many messages can have cache. Defaults to ``1000``.
    reactions_max_size: :class:`int`
        How many reactions can have cache per message. Defaults to ``-1``.
    servers_max_size: :class:`int`
        How many servers can have cache. Defaults to ``-1``.
    users_max_size: :class:`int`
        How many users can have cache. Defaults to ``-1``.
    """

    __slots__ = (
        '_channels',
        '_channels_max_size',
        '_members',
        '_members_max_size',
        '_messages',
        '_messages_max_size',
        '_reactions',
        '_reactions_max_size',
        '_servers',
        '_servers_max_size',
        '_users',
        '_users_max_size',
    )

    def __init__(
        self,
        *,
        channels_max_size: int = -1,
        members_max_size: int = -1,
        messages_max_size: int = 1000,
        reactions_max_size: int = -1,
        servers_max_size: int = -1,
        users_max_size: int = -1,
    ) -> None:
        self._channels: dict[str, Channel] = {}
        self._channels_max_size: int = channels_max_size
        self._members: dict[str, Member] = {}
        self._members_max_size: int = members_max_size
        self._messages: dict[str, Message] = {}
        self._messages_max_size: int = messages_max_size
        self._reactions: dict[str, dict[str, MessageReaction]] = {}
        self._reactions_max_size: int = reactions_max_size
        self._servers: dict[str, Server] = {}
        self._servers_max_size: int = servers_max_size
        self._users: dict[str, User] = {}
        self._users_max_size: int = users_max_size

    #########
    # Users #
    #########

    def get_user(self, user_id: str, ctx: BaseCacheContext, /) -> typing.Optional[User]:
        return self._users.get(user_id)

    def get_users_mapping(self) -> Mapping[str, User]:
        return self._users

    def store_user(self, user: User, ctx: BaseCacheContext, /) -> None:
        _put1(self._users, user.id, user, self._users_max_size)

    ###########
    # Servers #
    ###########

    def get_server(self, server_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Server]:
        return self._servers.get(server_id)

    def get_servers_mapping(self) -> Mapping[str, Server]:
        return self._servers

    def store_server(self, server: Server, ctx: BaseCacheContext, /) -> None:
        _put1(self._servers, server.id, server, self._servers_max_size)

    def delete_server(self, server_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Server]:
        return self._servers.pop(server_id, None)

    ############
    # Channels #
    ############

    def get_channel(self, channel_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Channel]:
        return self._channels.get(channel_id)

    def get_channels_mapping(self) -> Mapping[str, Channel]:
        return self._channels

    def store_channel(self, channel: Channel, ctx: BaseCacheContext, /) -> None:
        _put1(self._channels, channel.id, channel, self._channels_max_size)

    def delete_channel(self, channel_id: str, ctx: BaseCacheContext, /) -> None:
        self._channels.pop(channel_id, None)

    ############
    # Messages #
    ############

    def get_message(self, message_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Message]:
        return self._messages.get(message_id)

    def get_messages_mapping(self) -> Mapping[str, Message]:
        return self._messages

    def store_message(self, message: Message, ctx: BaseCacheContext, /) -> None:
        messages = self._messages
        max_size = self._messages_max_size
        if max_size > 0 and message.id not in messages:
            # Reactions of evicted messages go away with them
            while messages and len(messages) >= max_size:
                evicted = next(iter(messages))
                del messages[evicted]
                self._reactions.pop(evicted, None)
                _L.debug('Evicted message %s from cache', evicted)
        _put1(messages, message.id, message, max_size)

    def delete_message(self, message_id: str, ctx: BaseCacheContext, /) -> None:
        self._messages.pop(message_id, None)

    ##################
    # Server Members #
    ##################

    def get_member(self, key: str, ctx: BaseCacheContext, /) -> typing.Optional[Member]:
        return self._members.get(key)

    def get_members_mapping(self) -> Mapping[str, Member]:
        return self._members

    def store_member(self, member: Member, ctx: BaseCacheContext, /) -> None:
        _put1(self._members, member.id, member, self._members_max_size)

    def delete_member(self, key: str, ctx: BaseCacheContext, /) -> None:
        self._members.pop(key, None)

    def delete_server_members_of(self, server_id: str, ctx: BaseCacheContext, /) -> None:
        keys = [k for k, m in self._members.items() if m.server_id == server_id]
        for key in keys:
            del self._members[key]

    #####################
    # Message Reactions #
    #####################

    def get_reaction(self, message_id: str, key: str, ctx: BaseCacheContext, /) -> typing.Optional[MessageReaction]:
        reactions = self._reactions.get(message_id)
        if reactions:
            return reactions.get(key)
        return None

    def get_reactions_mapping(self) -> Mapping[str, Mapping[str, MessageReaction]]:
        return self._reactions

    def get_reactions_mapping_of(
        self, message_id: str, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[str, MessageReaction]]:
        return self._reactions.get(message_id)

    def store_reaction(self, reaction: MessageReaction, ctx: BaseCacheContext, /) -> None:
        if reaction.message_id not in self._messages:
            _L.debug('Not storing reaction %s on uncached message %s', reaction.id, reaction.message_id)
            return
        d = self._reactions.get(reaction.message_id)
        if d is None:
            if self._reactions_max_size == 0:
                return
            self._reactions[reaction.message_id] = {reaction.id: reaction}
        else:
            _put1(d, reaction.id, reaction, self._reactions_max_size)

    def delete_reaction(self, message_id: str, key: str, ctx: BaseCacheContext, /) -> None:
        reactions = self._reactions.get(message_id)
        if reactions:
            reactions.pop(key, None)
            if not reactions:
                del self._reactions[message_id]

    def delete_reactions_of(self, message_id: str, ctx: BaseCacheContext, /) -> None:
        self._reactions.pop(message_id, None)


# re-export internal functions as well for future usage
__all__ = (
    'CacheContextType',
    'BaseCacheContext',
    'UndefinedCacheContext',
    'ChannelCacheContext',
    'MemberCacheContext',
    'MessageCacheContext',
    'ServerCacheContext',
    'EventCacheContext',
    'ReadyEventCacheContext',
    'MessageCreateEventCacheContext',
    'MessageUpdateEventCacheContext',
    'MessageDeleteEventCacheContext',
    'MessageReactionAddEventCacheContext',
    'MessageReactionRemoveEventCacheContext',
    'ServerMemberJoinEventCacheContext',
    'ServerMemberUpdateEventCacheContext',
    'ServerMemberRemoveEventCacheContext',
    'ServerRolesUpdateEventCacheContext',
    'ServerChannelCreateEventCacheContext',
    'ServerChannelUpdateEventCacheContext',
    'ServerChannelDeleteEventCacheContext',
    'ServerJoinEventCacheContext',
    'ServerLeaveEventCacheContext',
    '_UNDEFINED',
    '_USER_REQUEST',
    '_LIBRARY_REQUEST',
    '_READY_EVENT',
    '_MESSAGE_CREATE_EVENT',
    '_MESSAGE_UPDATE_EVENT',
    '_MESSAGE_DELETE_EVENT',
    '_MESSAGE_REACTION_ADD_EVENT',
    '_MESSAGE_REACTION_REMOVE_EVENT',
    '_SERVER_MEMBER_JOIN_EVENT',
    '_SERVER_MEMBER_UPDATE_EVENT',
    '_SERVER_MEMBER_REMOVE_EVENT',
    '_SERVER_ROLES_UPDATE_EVENT',
    '_SERVER_CHANNEL_CREATE_EVENT',
    '_SERVER_CHANNEL_UPDATE_EVENT',
    '_SERVER_CHANNEL_DELETE_EVENT',
    '_SERVER_JOIN_EVENT',
    '_SERVER_LEAVE_EVENT',
    'ProvideCacheContextIn',
    'Cache',
    'EmptyCache',
    '_put0',
    '_put1',
    'MapCache',
)
