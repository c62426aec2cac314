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
from .core import UNDEFINED, UndefinedOr, build_member_key
from .enums import ServerType
from .errors import InvalidData

if typing.TYPE_CHECKING:
    from collections.abc import Mapping

    from .channel import Channel
    from .user import User


@define(slots=True)
class PartialServer(Base):
    """Represents a partial server on Guilded.

    Unmodified fields will have :data:`.UNDEFINED` value.
    """

    name: UndefinedOr[str] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[:class:`str`]: The new server's name."""

    owner_id: UndefinedOr[str] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[:class:`str`]: The new server owner's ID."""

    about: UndefinedOr[typing.Optional[str]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The new server's description."""

    avatar: UndefinedOr[typing.Optional[str]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The new server's avatar URL."""

    banner: UndefinedOr[typing.Optional[str]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The new server's banner URL."""

    default_channel_id: UndefinedOr[typing.Optional[str]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The new server's default channel ID."""

    is_verified: UndefinedOr[bool] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[:class:`bool`]: Whether the server is verified."""


@define(slots=True)
class Server(Base):
    """Represents a server on Guilded."""

    owner_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's ID who owns this server."""

    type: typing.Optional[ServerType] = field(repr=True, kw_only=True)
    """Optional[:class:`.ServerType`]: The server's type."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The server's name."""

    url: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The server's vanity URL."""

    about: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The server's description."""

    avatar: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The server's avatar URL."""

    banner: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The server's banner URL."""

    timezone: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The server's timezone."""

    is_verified: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the server is verified."""

    default_channel_id: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The server's default channel ID."""

    created_at: datetime = field(repr=False, kw_only=True)
    """:class:`~datetime.datetime`: When the server was created."""

    def __str__(self) -> str:
        return self.name

    def locally_update(self, data: PartialServer, /) -> Server:
        """Locally updates server with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.

        Parameters
        ----------
        data: :class:`.PartialServer`
            The data to update server with.

        Returns
        -------
        :class:`.Server`
            This server, for chaining.
        """
        if data.name is not UNDEFINED:
            self.name = data.name
        if data.owner_id is not UNDEFINED:
            self.owner_id = data.owner_id
        if data.about is not UNDEFINED:
            self.about = data.about
        if data.avatar is not UNDEFINED:
            self.avatar = data.avatar
        if data.banner is not UNDEFINED:
            self.banner = data.banner
        if data.default_channel_id is not UNDEFINED:
            self.default_channel_id = data.default_channel_id
        if data.is_verified is not UNDEFINED:
            self.is_verified = data.is_verified
        return self

    def _ctx(self, name: caching.ProvideCacheContextIn, /) -> caching.BaseCacheContext:
        if name in self.state.provide_cache_context_in:
            return caching.ServerCacheContext(type=caching.CacheContextType.server, server=self)
        return caching._UNDEFINED

    @property
    def owner(self) -> typing.Optional[User]:
        """Optional[:class:`.User`]: The server owner, if cached."""
        return self.state.users.get(self.owner_id, self._ctx('Server.owner'))

    @property
    def default_channel(self) -> typing.Optional[Channel]:
        """Optional[:class:`.Channel`]: The server's default channel, if cached."""
        if self.default_channel_id is None:
            return None
        return self.state.channels.get(self.default_channel_id, self._ctx('Server.default_channel'))

    @property
    def members(self) -> Mapping[str, Member]:
        """Mapping[:class:`str`, :class:`.Member`]: The read-only view of cached members of this server, keyed by member key."""
        return self.state.members.of(self.id, self._ctx('Server.members'))


@define(slots=True)
class PartialMember(Base):
    """Represents a partial member of :class:`.Server`.

    The :attr:`.id` is the member key, built from server and user IDs.
    Unmodified fields will have :data:`.UNDEFINED` value.
    """

    server_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The server's ID the member is in."""

    user_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's ID."""

    nickname: UndefinedOr[typing.Optional[str]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The new member's nickname."""

    role_ids: UndefinedOr[list[int]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[List[:class:`int`]]: The new member's role IDs."""


@define(slots=True)
class Member(Base):
    """Represents a member of :class:`.Server`.

    A member has no ID of its own; :attr:`.id` holds the key built with :func:`.build_member_key`.
    """

    server_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The server's ID the member is in."""

    user_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's ID."""

    nickname: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The member's nickname."""

    role_ids: list[int] = field(repr=True, kw_only=True)
    """List[:class:`int`]: The member's role IDs."""

    joined_at: datetime = field(repr=False, kw_only=True)
    """:class:`~datetime.datetime`: When the member joined the server."""

    is_owner: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the member owns the server."""

    def __attrs_post_init__(self) -> None:
        expected = build_member_key(self.server_id, self.user_id)
        if self.id != expected:
            raise InvalidData(f'Member key mismatch: {self.id!r} != {expected!r}')

    def locally_update(self, data: PartialMember, /) -> Member:
        """Locally updates member with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.

        Parameters
        ----------
        data: :class:`.PartialMember`
            The data to update member with.

        Returns
        -------
        :class:`.Member`
            This member, for chaining.
        """
        if data.nickname is not UNDEFINED:
            self.nickname = data.nickname
        if data.role_ids is not UNDEFINED:
            self.role_ids = data.role_ids
        return self

    def _ctx(self, name: caching.ProvideCacheContextIn, /) -> caching.BaseCacheContext:
        if name in self.state.provide_cache_context_in:
            return caching.MemberCacheContext(type=caching.CacheContextType.member, member=self)
        return caching._UNDEFINED

    @property
    def user(self) -> typing.Optional[User]:
        """Optional[:class:`.User`]: The user this member represents, if cached."""
        return self.state.users.get(self.user_id, self._ctx('Member.user'))

    @property
    def server(self) -> typing.Optional[Server]:
        """Optional[:class:`.Server`]: The server the member is in, if cached."""
        return self.state.servers.get(self.server_id, self._ctx('Member.server'))

    @property
    def display_name(self) -> typing.Optional[str]:
        """Optional[:class:`str`]: The member's nickname, falling back to user's name if it is cached."""
        if self.nickname is not None:
            return self.nickname
        user = self.user
        if user is None:
            return None
        return user.name


__all__ = (
    'PartialServer',
    'Server',
    'PartialMember',
    'Member',
)
