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
from .core import UNDEFINED, UndefinedOr
from .enums import ChannelType

if typing.TYPE_CHECKING:
    from .core import MessageContent
    from .message import Message
    from .server import Server
    from .user import User


@define(slots=True)
class PartialChannel(Base):
    """Represents a partial channel on Guilded.

    Unmodified fields will have :data:`.UNDEFINED` value.
    """

    name: UndefinedOr[str] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[:class:`str`]: The new channel's name."""

    topic: UndefinedOr[typing.Optional[str]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The new channel's topic."""

    updated_at: UndefinedOr[typing.Optional[datetime]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`~datetime.datetime`]]: When the channel was last updated."""

    parent_id: UndefinedOr[typing.Optional[str]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The new parent channel's ID."""

    category_id: UndefinedOr[typing.Optional[int]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`int`]]: The new category's ID."""

    is_public: UndefinedOr[bool] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[:class:`bool`]: Whether the channel is now public."""

    archived_by_id: UndefinedOr[typing.Optional[str]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The user's ID who archived the channel."""

    archived_at: UndefinedOr[typing.Optional[datetime]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`~datetime.datetime`]]: When the channel was archived."""


@define(slots=True)
class Channel(Base):
    """Represents a channel in Guilded server."""

    type: ChannelType = field(repr=True, kw_only=True)
    """:class:`.ChannelType`: The channel's type."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The channel's name."""

    topic: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The channel's topic."""

    created_at: datetime = field(repr=False, kw_only=True)
    """:class:`~datetime.datetime`: When the channel was created."""

    created_by_id: str = field(repr=False, kw_only=True)
    """:class:`str`: The user's ID who created the channel."""

    updated_at: typing.Optional[datetime] = field(repr=False, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the channel was last updated."""

    server_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The server's ID the channel belongs to."""

    parent_id: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The parent channel's ID, if this is thread."""

    category_id: typing.Optional[int] = field(repr=False, kw_only=True)
    """Optional[:class:`int`]: The category's ID the channel is in."""

    group_id: str = field(repr=False, kw_only=True)
    """:class:`str`: The group's ID the channel is in."""

    is_public: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the channel can be accessed by users who are not server members."""

    archived_by_id: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The user's ID who archived the channel."""

    archived_at: typing.Optional[datetime] = field(repr=False, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the channel was archived."""

    def __str__(self) -> str:
        return self.name

    def locally_update(self, data: PartialChannel, /) -> Channel:
        """Locally updates channel with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.

        Parameters
        ----------
        data: :class:`.PartialChannel`
            The data to update channel with.

        Returns
        -------
        :class:`.Channel`
            This channel, for chaining.
        """
        if data.name is not UNDEFINED:
            self.name = data.name
        if data.topic is not UNDEFINED:
            self.topic = data.topic
        if data.updated_at is not UNDEFINED:
            self.updated_at = data.updated_at
        if data.parent_id is not UNDEFINED:
            self.parent_id = data.parent_id
        if data.category_id is not UNDEFINED:
            self.category_id = data.category_id
        if data.is_public is not UNDEFINED:
            self.is_public = data.is_public
        if data.archived_by_id is not UNDEFINED:
            self.archived_by_id = data.archived_by_id
        if data.archived_at is not UNDEFINED:
            self.archived_at = data.archived_at
        return self

    def _ctx(self, name: caching.ProvideCacheContextIn, /) -> caching.BaseCacheContext:
        if name in self.state.provide_cache_context_in:
            return caching.ChannelCacheContext(type=caching.CacheContextType.channel, channel=self)
        return caching._UNDEFINED

    @property
    def server(self) -> typing.Optional[Server]:
        """Optional[:class:`.Server`]: The server the channel belongs to, if cached."""
        return self.state.servers.get(self.server_id, self._ctx('Channel.server'))

    @property
    def created_by(self) -> typing.Optional[User]:
        """Optional[:class:`.User`]: The user who created the channel, if cached."""
        return self.state.users.get(self.created_by_id, self._ctx('Channel.created_by'))

    @property
    def archived(self) -> bool:
        """:class:`bool`: Whether the channel is archived."""
        return self.archived_at is not None

    async def send(self, content: MessageContent, /) -> Message:
        """|coro|

        Sends a message to this channel.

        Parameters
        ----------
        content: Union[:class:`str`, :class:`.ChatMessageContent`]
            The message content. Strings are sent as message text.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to send messages in this channel.
        :class:`HTTPException`
            Sending the message failed.

        Returns
        -------
        :class:`.Message`
            The message that was sent.
        """
        return await self.state.messages.send(self.id, content)


__all__ = (
    'PartialChannel',
    'Channel',
)
