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

import logging
from types import MappingProxyType
import typing

from . import cache as caching
from .core import build_member_key, build_reaction_key, resolve_content_to_data

if typing.TYPE_CHECKING:
    from collections.abc import Mapping

    from . import raw
    from .cache import BaseCacheContext, Cache
    from .channel import Channel
    from .core import MessageContent
    from .message import Message, MessageReaction
    from .server import Member, Server
    from .state import State
    from .user import User

_L = logging.getLogger(__name__)

_EMPTY: Mapping[str, typing.Any] = MappingProxyType({})


class BaseManager:
    """Base class for per-type entity caches.

    Managers are the only writers of cached entities. Relationship accessors
    on entities use :meth:`get` and :meth:`has`, which never perform network calls.
    """

    __slots__ = ('state',)

    def __init__(self, *, state: State) -> None:
        self.state: State = state

    @property
    def _cache(self) -> typing.Optional[Cache]:
        return self.state.cache


class UserManager(BaseManager):
    """Manages cached users."""

    __slots__ = ()

    @property
    def cache(self) -> Mapping[str, User]:
        """Mapping[:class:`str`, :class:`.User`]: The read-only view of cached users."""
        cache = self._cache
        if cache is None:
            return _EMPTY
        return MappingProxyType(cache.get_users_mapping())  # type: ignore

    def get(self, user_id: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> typing.Optional[User]:
        """Optional[:class:`.User`]: Retrieves a cached user using ID."""
        cache = self._cache
        if cache is None:
            return None
        return cache.get_user(user_id, ctx)

    def has(self, user_id: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> bool:
        """:class:`bool`: Whether the user is cached."""
        return self.get(user_id, ctx) is not None

    def _add_or_update(self, payload: raw.User, ctx: BaseCacheContext, /) -> User:
        parser = self.state.parser
        existing = self.get(payload['id'], ctx)
        if existing is not None:
            return existing.locally_update(parser.parse_partial_user(payload))
        user = parser.parse_user(payload)
        cache = self._cache
        if cache is not None:
            cache.store_user(user, ctx)
        return user


class ServerManager(BaseManager):
    """Manages cached servers."""

    __slots__ = ()

    @property
    def cache(self) -> Mapping[str, Server]:
        """Mapping[:class:`str`, :class:`.Server`]: The read-only view of cached servers."""
        cache = self._cache
        if cache is None:
            return _EMPTY
        return MappingProxyType(cache.get_servers_mapping())  # type: ignore

    def get(self, server_id: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> typing.Optional[Server]:
        """Optional[:class:`.Server`]: Retrieves a cached server using ID."""
        cache = self._cache
        if cache is None:
            return None
        return cache.get_server(server_id, ctx)

    def has(self, server_id: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> bool:
        """:class:`bool`: Whether the server is cached."""
        return self.get(server_id, ctx) is not None

    async def fetch(self, server_id: str, /) -> Server:
        """|coro|

        Retrieves a server from API and updates cache with it.

        Parameters
        ----------
        server_id: :class:`str`
            The server's ID.

        Raises
        ------
        :class:`NotFound`
            The server does not exist, or you're not in it.

        Returns
        -------
        :class:`.Server`
            The retrieved server.
        """
        payload = await self.state.http.get_server(server_id)
        return self._add_or_update(payload, caching._LIBRARY_REQUEST)

    def _add_or_update(self, payload: raw.Server, ctx: BaseCacheContext, /) -> Server:
        parser = self.state.parser
        existing = self.get(payload['id'], ctx)
        if existing is not None:
            return existing.locally_update(parser.parse_partial_server(payload))
        server = parser.parse_server(payload)
        cache = self._cache
        if cache is not None:
            cache.store_server(server, ctx)
        return server

    def _remove(self, server_id: str, ctx: BaseCacheContext, /) -> typing.Optional[Server]:
        cache = self._cache
        if cache is None:
            return None
        return cache.delete_server(server_id, ctx)


class ChannelManager(BaseManager):
    """Manages cached channels."""

    __slots__ = ()

    @property
    def cache(self) -> Mapping[str, Channel]:
        """Mapping[:class:`str`, :class:`.Channel`]: The read-only view of cached channels."""
        cache = self._cache
        if cache is None:
            return _EMPTY
        return MappingProxyType(cache.get_channels_mapping())  # type: ignore

    def get(self, channel_id: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> typing.Optional[Channel]:
        """Optional[:class:`.Channel`]: Retrieves a cached channel using ID."""
        cache = self._cache
        if cache is None:
            return None
        return cache.get_channel(channel_id, ctx)

    def has(self, channel_id: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> bool:
        """:class:`bool`: Whether the channel is cached."""
        return self.get(channel_id, ctx) is not None

    async def fetch(self, channel_id: str, /) -> Channel:
        """|coro|

        Retrieves a channel from API and updates cache with it.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.

        Returns
        -------
        :class:`.Channel`
            The retrieved channel.
        """
        payload = await self.state.http.get_channel(channel_id)
        return self._add_or_update(payload, caching._LIBRARY_REQUEST)

    def _add_or_update(self, payload: raw.ServerChannel, ctx: BaseCacheContext, /) -> Channel:
        parser = self.state.parser
        existing = self.get(payload['id'], ctx)
        if existing is not None:
            return existing.locally_update(parser.parse_partial_channel(payload))
        channel = parser.parse_channel(payload)
        cache = self._cache
        if cache is not None:
            cache.store_channel(channel, ctx)
        return channel

    def _remove(self, channel_id: str, ctx: BaseCacheContext, /) -> None:
        cache = self._cache
        if cache is not None:
            cache.delete_channel(channel_id, ctx)


class MemberManager(BaseManager):
    """Manages cached server members.

    Members are keyed by :func:`.build_member_key`.
    """

    __slots__ = ()

    @property
    def cache(self) -> Mapping[str, Member]:
        """Mapping[:class:`str`, :class:`.Member`]: The read-only view of cached members."""
        cache = self._cache
        if cache is None:
            return _EMPTY
        return MappingProxyType(cache.get_members_mapping())  # type: ignore

    def get(self, key: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> typing.Optional[Member]:
        """Optional[:class:`.Member`]: Retrieves a cached member using member key."""
        cache = self._cache
        if cache is None:
            return None
        return cache.get_member(key, ctx)

    def get_for(
        self, server_id: str, user_id: str, ctx: BaseCacheContext = caching._USER_REQUEST, /
    ) -> typing.Optional[Member]:
        """Optional[:class:`.Member`]: Retrieves a cached member using server and user IDs."""
        return self.get(build_member_key(server_id, user_id), ctx)

    def has(self, key: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> bool:
        """:class:`bool`: Whether the member is cached."""
        return self.get(key, ctx) is not None

    def of(self, server_id: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> Mapping[str, Member]:
        """Mapping[:class:`str`, :class:`.Member`]: Retrieves all cached members of a server, keyed by member key."""
        cache = self._cache
        if cache is None:
            return _EMPTY
        return MappingProxyType(cache.get_members_mapping_of(server_id, ctx))  # type: ignore

    async def fetch(self, server_id: str, user_id: str, /) -> Member:
        """|coro|

        Retrieves a member from API and updates cache with it. The member's user is cached as well.

        Parameters
        ----------
        server_id: :class:`str`
            The server's ID.
        user_id: :class:`str`
            The user's ID.

        Returns
        -------
        :class:`.Member`
            The retrieved member.
        """
        payload = await self.state.http.get_server_member(server_id, user_id)
        self.state.users._add_or_update(payload['user'], caching._LIBRARY_REQUEST)
        return self._add_or_update(server_id, payload, caching._LIBRARY_REQUEST)

    def _add_or_update(self, server_id: str, payload: raw.ServerMember, ctx: BaseCacheContext, /) -> Member:
        parser = self.state.parser
        existing = self.get_for(server_id, payload['user']['id'], ctx)
        if existing is not None:
            return existing.locally_update(parser.parse_partial_member(server_id, payload))
        member = parser.parse_member(server_id, payload)
        cache = self._cache
        if cache is not None:
            cache.store_member(member, ctx)
        return member

    def _remove(self, key: str, ctx: BaseCacheContext, /) -> None:
        cache = self._cache
        if cache is not None:
            cache.delete_member(key, ctx)

    def _remove_server(self, server_id: str, ctx: BaseCacheContext, /) -> None:
        cache = self._cache
        if cache is not None:
            cache.delete_server_members_of(server_id, ctx)


class MessageManager(BaseManager):
    """Manages cached messages."""

    __slots__ = ()

    @property
    def cache(self) -> Mapping[str, Message]:
        """Mapping[:class:`str`, :class:`.Message`]: The read-only view of cached messages."""
        cache = self._cache
        if cache is None:
            return _EMPTY
        return MappingProxyType(cache.get_messages_mapping())  # type: ignore

    def get(self, message_id: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> typing.Optional[Message]:
        """Optional[:class:`.Message`]: Retrieves a cached message using ID."""
        cache = self._cache
        if cache is None:
            return None
        return cache.get_message(message_id, ctx)

    def has(self, message_id: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> bool:
        """:class:`bool`: Whether the message is cached."""
        return self.get(message_id, ctx) is not None

    async def send(self, channel_id: str, content: MessageContent, /) -> Message:
        """|coro|

        Sends a message to the channel.

        The returned message is not cached; it will be once Guilded sends the creation event.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        content: Union[:class:`str`, :class:`.ChatMessageContent`]
            The message content.

        Returns
        -------
        :class:`.Message`
            The message that was sent.
        """
        payload = await self.state.http.create_message(channel_id, resolve_content_to_data(content))
        return self.state.parser.parse_message(payload)

    async def update(self, channel_id: str, message_id: str, content: MessageContent, /) -> Message:
        """|coro|

        Edits a message. The cached message is left as is.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        message_id: :class:`str`
            The message's ID.
        content: Union[:class:`str`, :class:`.ChatMessageContent`]
            The new content.

        Returns
        -------
        :class:`.Message`
            The newly edited message.
        """
        payload = await self.state.http.update_message(channel_id, message_id, resolve_content_to_data(content))
        return self.state.parser.parse_message(payload)

    async def delete(self, channel_id: str, message_id: str, /) -> None:
        """|coro|

        Deletes a message.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        message_id: :class:`str`
            The message's ID.
        """
        await self.state.http.delete_message(channel_id, message_id)

    async def fetch(self, channel_id: str, message_id: str, /) -> Message:
        """|coro|

        Retrieves a message from API and updates cache with it.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        message_id: :class:`str`
            The message's ID.

        Returns
        -------
        :class:`.Message`
            The retrieved message.
        """
        payload = await self.state.http.get_message(channel_id, message_id)
        return self._add_or_update(payload, caching._LIBRARY_REQUEST)

    def _add_or_update(self, payload: raw.ChatMessage, ctx: BaseCacheContext, /) -> Message:
        parser = self.state.parser
        existing = self.get(payload['id'], ctx)
        if existing is not None:
            return existing.locally_update(parser.parse_partial_message(payload))
        message = parser.parse_message(payload)
        cache = self._cache
        if cache is not None:
            cache.store_message(message, ctx)
        return message

    def _remove(self, message_id: str, ctx: BaseCacheContext, /) -> None:
        cache = self._cache
        if cache is not None:
            cache.delete_message(message_id, ctx)
            cache.delete_reactions_of(message_id, ctx)


class ReactionManager(BaseManager):
    """Manages cached message reactions.

    Reactions are stored per message, keyed by :func:`.build_reaction_key`.
    """

    __slots__ = ()

    @property
    def cache(self) -> Mapping[str, Mapping[str, MessageReaction]]:
        """Mapping[:class:`str`, Mapping[:class:`str`, :class:`.MessageReaction`]]: The read-only view of cached reactions, keyed by message ID."""
        cache = self._cache
        if cache is None:
            return _EMPTY
        return {
            message_id: MappingProxyType(reactions)  # type: ignore
            for message_id, reactions in cache.get_reactions_mapping().items()
        }

    def get(
        self, message_id: str, key: str, ctx: BaseCacheContext = caching._USER_REQUEST, /
    ) -> typing.Optional[MessageReaction]:
        """Optional[:class:`.MessageReaction`]: Retrieves a cached reaction on message using reaction key."""
        cache = self._cache
        if cache is None:
            return None
        return cache.get_reaction(message_id, key, ctx)

    def get_for(
        self, message_id: str, user_id: str, emote_id: int, ctx: BaseCacheContext = caching._USER_REQUEST, /
    ) -> typing.Optional[MessageReaction]:
        """Optional[:class:`.MessageReaction`]: Retrieves a cached reaction on message using user and emote IDs."""
        return self.get(message_id, build_reaction_key(user_id, emote_id), ctx)

    def has(self, message_id: str, key: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> bool:
        """:class:`bool`: Whether the reaction is cached."""
        return self.get(message_id, key, ctx) is not None

    def of(self, message_id: str, ctx: BaseCacheContext = caching._USER_REQUEST, /) -> Mapping[str, MessageReaction]:
        """Mapping[:class:`str`, :class:`.MessageReaction`]: Retrieves all cached reactions on message."""
        cache = self._cache
        if cache is None:
            return _EMPTY
        reactions = cache.get_reactions_mapping_of(message_id, ctx)
        if reactions is None:
            return _EMPTY
        return MappingProxyType(reactions)  # type: ignore

    reactions_of = of

    async def create(self, channel_id: str, message_id: str, emote_id: int, /) -> None:
        """|coro|

        Reacts to a message.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        message_id: :class:`str`
            The message's ID.
        emote_id: :class:`int`
            The emote's ID.
        """
        await self.state.http.add_reaction(channel_id, message_id, emote_id)

    async def delete(self, channel_id: str, message_id: str, emote_id: int, /) -> None:
        """|coro|

        Removes your reaction from a message.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        message_id: :class:`str`
            The message's ID.
        emote_id: :class:`int`
            The emote's ID.
        """
        await self.state.http.remove_reaction(channel_id, message_id, emote_id)

    def _add(self, reaction: MessageReaction, ctx: BaseCacheContext, /) -> MessageReaction:
        existing = self.get(reaction.message_id, reaction.id, ctx)
        if existing is not None:
            _L.debug('Reaction %s on message %s is already cached', reaction.id, reaction.message_id)
            return existing
        cache = self._cache
        if cache is not None:
            cache.store_reaction(reaction, ctx)
        return reaction

    def _remove(self, message_id: str, key: str, ctx: BaseCacheContext, /) -> typing.Optional[MessageReaction]:
        cache = self._cache
        if cache is None:
            return None
        reaction = cache.get_reaction(message_id, key, ctx)
        cache.delete_reaction(message_id, key, ctx)
        return reaction


__all__ = (
    'BaseManager',
    'UserManager',
    'ServerManager',
    'ChannelManager',
    'MemberManager',
    'MessageManager',
    'ReactionManager',
)
