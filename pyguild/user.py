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

from .base import Base
from .core import UNDEFINED, UndefinedOr
from .enums import UserType


@define(slots=True)
class UserStatus:
    """Represents a custom status of :class:`.User`."""

    content: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The status text."""

    emote_id: int = field(repr=True, kw_only=True)
    """:class:`int`: The emote's ID shown next to the status."""


@define(slots=True)
class PartialUser(Base):
    """Represents a partial user on Guilded.

    Unmodified fields will have :data:`.UNDEFINED` value.
    """

    name: UndefinedOr[str] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[:class:`str`]: The new user's name."""

    avatar: UndefinedOr[typing.Optional[str]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The new user's avatar URL."""

    banner: UndefinedOr[typing.Optional[str]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The new user's banner URL."""

    status: UndefinedOr[typing.Optional[UserStatus]] = field(default=UNDEFINED, repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`.UserStatus`]]: The new user's status."""


@define(slots=True)
class User(Base):
    """Represents a user on Guilded."""

    type: UserType = field(repr=True, kw_only=True)
    """:class:`.UserType`: The user's type."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's name."""

    avatar: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The user's avatar URL."""

    banner: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The user's banner URL."""

    created_at: datetime = field(repr=False, kw_only=True)
    """:class:`~datetime.datetime`: When the user was created."""

    status: typing.Optional[UserStatus] = field(repr=False, kw_only=True)
    """Optional[:class:`.UserStatus`]: The user's status."""

    def __str__(self) -> str:
        return self.name

    def locally_update(self, data: PartialUser, /) -> User:
        """Locally updates user with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.

        Parameters
        ----------
        data: :class:`.PartialUser`
            The data to update user with.

        Returns
        -------
        :class:`.User`
            This user, for chaining.
        """
        if data.name is not UNDEFINED:
            self.name = data.name
        if data.avatar is not UNDEFINED:
            self.avatar = data.avatar
        if data.banner is not UNDEFINED:
            self.banner = data.banner
        if data.status is not UNDEFINED:
            self.status = data.status
        return self

    @property
    def bot(self) -> bool:
        """:class:`bool`: Whether the user is a bot."""
        return self.type is UserType.bot


__all__ = (
    'UserStatus',
    'PartialUser',
    'User',
)
