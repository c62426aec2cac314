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

from datetime import datetime
import typing

from attrs import define, field

from . import cache as caching
from .base import Base
from .core import (
    UNDEFINED,
    UndefinedOr,
    build_member_key,
    build_reaction_key,
    resolve_content_to_data,
)
from .emoji import ResolvableEmote, resolve_emote
from .enums import MessageType
from .errors import InvalidData, NoData

if typing.TYPE_CHECKING:
    from collections.abc import Mapping

    from .channel import Channel
    from .core import MessageContent
    from .embed import Embed
    from .emoji import Emote
    from .server import Server, Member
    from .user import User


@define(slots=True)
class MessageMentions:
    """Represents mentions in :class:`.Message`."""

    users: list[str] = field(factory=list, repr=True, kw_only=True)
    """List[:class:`str`]: The IDs of mentioned users."""

    channels: list[str] = field(factory=list, repr=True, kw_only=True)
    """List[:class:`str`]: The IDs of mentioned channels."""

    roles: list[int] = field(factory=list, repr=True, kw_only=True)
    """List[:class:`int`]: The IDs of mentioned roles."""

    everyone: bool = field(default=False, repr=True, kw_only=True)
    """:class:`bool`: Whether ``@everyone`` was mentioned."""

    here: bool = field(default=False, repr=True, kw_only=True)
    """:class:`bool`: Whether ``@here`` was mentioned."""


@define(slots=True)
class PartialMessage(Base):
    """Represents partial message in channel on Guilded.

    Unmodified fields will have :data:`.UNDEFINED` value.
    """

    channel_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The channel's ID the message was sent in."""

    content: UndefinedOr[str] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[:class:`str`]: The new message's content."""

    mentions: UndefinedOr[typing.Optional[MessageMentions]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`.MessageMentions`]]: The new message's mentions. ``None`` clears them."""

    updated_at: UndefinedOr[typing.Optional[datetime]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`~datetime.datetime`]]: When the message was last edited."""

    deleted_at: UndefinedOr[typing.Optional[datetime]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`~datetime.datetime`]]: When the message was deleted. Presence alone marks the message as deleted."""

    embeds: UndefinedOr[list[Embed]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[List[:class:`.Embed`]]: The new message's embeds."""


@define(slots=True)
class Message(Base):
    """Represents a message in channel on Guilded."""

    channel_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The channel's ID the message was sent in."""

    server_id: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The server's ID the message was sent in."""

    group_id: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The group's ID the message was sent in."""

    type: MessageType = field(repr=False, kw_only=True)
    """:class:`.MessageType`: The message's type."""

    content: str = field(repr=True, kw_only=True)
    """:class:`str`: The message's content. Always a string, possibly empty."""

    mentions: typing.Optional[MessageMentions] = field(repr=False, kw_only=True)
    """Optional[:class:`.MessageMentions`]: The message's mentions."""

    reply_message_ids: list[str] = field(repr=False, kw_only=True)
    """List[:class:`str`]: The IDs of messages this message replies to."""

    is_private: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the message is only visible to mentioned users and repliers."""

    is_silent: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the message did not notify mentioned users."""

    created_by_id: str = field(repr=False, kw_only=True)
    """:class:`str`: The user's ID who created this message. For webhook messages, this is a placeholder user ID."""

    created_by_webhook_id: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The webhook's ID who created this message, if any."""

    created_at: datetime = field(repr=False, kw_only=True)
    """:class:`~datetime.datetime`: When the message was created."""

    updated_at: typing.Optional[datetime] = field(repr=False, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the message was last edited."""

    deleted: bool = field(default=False, repr=False, kw_only=True)
    """:class:`bool`: Whether the message was deleted. Once set, this never goes back to ``False``."""

    deleted_at: typing.Optional[datetime] = field(default=None, repr=False, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the message was deleted."""

    embeds: list[Embed] = field(factory=list, repr=False, kw_only=True)
    """List[:class:`.Embed`]: The message's embeds."""

    def __str__(self) -> str:
        return self.content

    def locally_update(self, data: PartialMessage, /) -> Message:
        """Locally updates message with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.

        Only fields that are present in ``data`` are touched. Presence of
        :attr:`PartialMessage.deleted_at` marks the message as deleted for good.

        Parameters
        ----------
        data: :class:`.PartialMessage`
            The data to update message with.

        Returns
        -------
        :class:`.Message`
            This message, for chaining.
        """
        if data.content is not UNDEFINED:
            self.content = data.content
        if data.mentions is not UNDEFINED:
            self.mentions = data.mentions
        if data.updated_at is not UNDEFINED:
            self.updated_at = data.updated_at
        if data.deleted_at is not UNDEFINED:
            self.deleted = True
            if self.deleted_at is None:
                self.deleted_at = data.deleted_at
        if data.embeds is not UNDEFINED:
            self.embeds = list(data.embeds)
        return self

    def _ctx(self, name: caching.ProvideCacheContextIn, /) -> caching.BaseCacheContext:
        if name in self.state.provide_cache_context_in:
            return caching.MessageCacheContext(type=caching.CacheContextType.message, message=self)
        return caching._UNDEFINED

    @property
    def author_id(self) -> str:
        """:class:`str`: The webhook's ID if webhook sent this message, otherwise the user's ID."""
        if self.created_by_webhook_id is not None:
            return self.created_by_webhook_id
        return self.created_by_id

    @property
    def author(self) -> typing.Optional[User]:
        """Optional[:class:`.User`]: The user that sent this message, if cached."""
        return self.state.users.get(self.created_by_id, self._ctx('Message.author'))

    @property
    def member(self) -> typing.Optional[Member]:
        """Optional[:class:`.Member`]: The member that sent this message, if message was sent in server and member is cached."""
        if self.server_id is None:
            return None
        return self.state.members.get(build_member_key(self.server_id, self.author_id), self._ctx('Message.member'))

    @property
    def channel(self) -> typing.Optional[Channel]:
        """Optional[:class:`.Channel`]: The channel the message was sent in, if cached."""
        return self.state.channels.get(self.channel_id, self._ctx('Message.channel'))

    def require_channel(self) -> Channel:
        """:class:`.Channel`: The channel the message was sent in.

        Raises
        ------
        :class:`NoData`
            The channel is not cached.
        """
        channel = self.channel
        if channel is None:
            raise NoData(self.channel_id, 'channel')
        return channel

    @property
    def server(self) -> typing.Optional[Server]:
        """Optional[:class:`.Server`]: The server the message was sent in, if cached."""
        if self.server_id is None:
            return None
        return self.state.servers.get(self.server_id, self._ctx('Message.server'))

    @property
    def reactions(self) -> Mapping[str, MessageReaction]:
        """Mapping[:class:`str`, :class:`.MessageReaction`]: The cached reactions on this message, keyed by reaction key."""
        return self.state.reactions.of(self.id, self._ctx('Message.reactions'))

    @property
    def url(self) -> str:
        """:class:`str`: The message's URL. Empty if the message was not sent in server."""
        if self.server_id is None:
            return ''
        return f'https://www.guilded.gg/chat/{self.channel_id}?messageId={self.id}'

    def is_reply(self) -> bool:
        """:class:`bool`: Whether the message replies to other messages."""
        return bool(self.reply_message_ids)

    def is_system(self) -> bool:
        """:class:`bool`: Whether the message is a system message."""
        return self.type is MessageType.system

    async def edit(self, content: MessageContent, /) -> Message:
        """|coro|

        Edits the message.

        The message itself is not changed: cached message will be updated
        once Guilded sends the update event for it.

        Parameters
        ----------
        content: Union[:class:`str`, :class:`.ChatMessageContent`]
            The new content.

        Raises
        ------
        :class:`Forbidden`
            You cannot edit this message.
        :class:`HTTPException`
            Editing the message failed.

        Returns
        -------
        :class:`.Message`
            This message.
        """
        await self.state.messages.update(self.channel_id, self.id, content)
        return self

    async def send(self, content: MessageContent, /) -> Message:
        """|coro|

        Sends a message to the channel this message was sent in.

        Parameters
        ----------
        content: Union[:class:`str`, :class:`.ChatMessageContent`]
            The message content.

        Returns
        -------
        :class:`.Message`
            The message that was sent.
        """
        return await self.state.messages.send(self.channel_id, content)

    async def reply(self, content: MessageContent, /) -> Message:
        """|coro|

        Replies to this message.

        Parameters
        ----------
        content: Union[:class:`str`, :class:`.ChatMessageContent`]
            The message content.

        Returns
        -------
        :class:`.Message`
            The message that was sent.
        """
        data = resolve_content_to_data(content)
        data['replyMessageIds'] = [self.id]
        return await self.state.messages.send(self.channel_id, data)

    async def add_reaction(self, emote: ResolvableEmote, /) -> None:
        """|coro|

        Reacts to this message.

        Parameters
        ----------
        emote: Union[:class:`.Emote`, :class:`int`]
            The emote to react with.
        """
        await self.state.reactions.create(self.channel_id, self.id, resolve_emote(emote))

    async def delete_reaction(self, emote: ResolvableEmote, /) -> None:
        """|coro|

        Removes your reaction from this message.

        Parameters
        ----------
        emote: Union[:class:`.Emote`, :class:`int`]
            The emote to remove.
        """
        await self.state.reactions.delete(self.channel_id, self.id, resolve_emote(emote))

    async def delete(self) -> None:
        """|coro|

        Deletes the message.

        Raises
        ------
        :class:`Forbidden`
            You cannot delete this message.
        :class:`NotFound`
            The message was already deleted.
        """
        await self.state.messages.delete(self.channel_id, self.id)


@define(slots=True)
class MessageReaction(Base):
    """Represents a reaction on :class:`.Message`.

    Reactions are never updated, only added and removed. The :attr:`.id` is the
    key built with :func:`.build_reaction_key`.
    """

    channel_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The channel's ID the message is in."""

    message_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The message's ID."""

    created_by_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's ID who reacted."""

    emote: Emote = field(repr=True, kw_only=True)
    """:class:`.Emote`: The emote used."""

    server_id: typing.Optional[str] = field(default=None, repr=False, kw_only=True)
    """Optional[:class:`str`]: The server's ID the message is in."""

    def __attrs_post_init__(self) -> None:
        expected = build_reaction_key(self.created_by_id, self.emote.id)
        if self.id != expected:
            raise InvalidData(f'Reaction key mismatch: {self.id!r} != {expected!r}')

    @property
    def message(self) -> typing.Optional[Message]:
        """Optional[:class:`.Message`]: The message reacted to, if cached."""
        return self.state.messages.get(self.message_id)

    @property
    def user(self) -> typing.Optional[User]:
        """Optional[:class:`.User`]: The user who reacted, if cached."""
        return self.state.users.get(self.created_by_id)

    def require_message(self) -> Message:
        """:class:`.Message`: The message reacted to. Raises :class:`NoData` if not cached."""
        message = self.message
        if message is None:
            raise NoData(self.message_id, 'reacted message')
        return message

    async def delete(self) -> None:
        """|coro|

        Removes this reaction. This only works for your own reactions.
        """
        await self.state.reactions.delete(self.channel_id, self.message_id, self.emote.id)


__all__ = (
    'MessageMentions',
    'PartialMessage',
    'Message',
    'MessageReaction',
)
