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

from .managers import (
    UserManager,
    ServerManager,
    ChannelManager,
    MemberManager,
    MessageManager,
    ReactionManager,
)
from .parser import Parser

if typing.TYPE_CHECKING:
    from .cache import ProvideCacheContextIn, Cache
    from .http import HTTPClient
    from .user import User


class State:
    """Represents a manager for all pyguild objects.

    Every cached entity holds a weak reference to this object, and resolves
    related entities through the managers below.

    Attributes
    ----------
    provide_cache_context_in: List[:class:`ProvideCacheContextIn`]
        The methods/properties that do provide cache context.
    parser: :class:`Parser`
        The parser.
    users: :class:`UserManager`
        The cached users.
    servers: :class:`ServerManager`
        The cached servers.
    channels: :class:`ChannelManager`
        The cached channels.
    members: :class:`MemberManager`
        The cached server members.
    messages: :class:`MessageManager`
        The cached messages.
    reactions: :class:`ReactionManager`
        The cached message reactions.
    """

    __slots__ = (
        '__weakref__',
        '_cache',
        'provide_cache_context_in',
        '_http',
        'parser',
        '_me',
        'users',
        'servers',
        'channels',
        'members',
        'messages',
        'reactions',
    )

    def __init__(
        self,
        *,
        cache: Cache | None = None,
        provide_cache_context_in: list[ProvideCacheContextIn] | None = None,
        http: HTTPClient | None = None,
        parser: Parser | None = None,
    ) -> None:
        self._cache = cache
        self.provide_cache_context_in: list[ProvideCacheContextIn] = provide_cache_context_in or []
        self._http = http
        self.parser = parser if parser else Parser(state=self)
        self._me: User | None = None
        self.users: UserManager = UserManager(state=self)
        self.servers: ServerManager = ServerManager(state=self)
        self.channels: ChannelManager = ChannelManager(state=self)
        self.members: MemberManager = MemberManager(state=self)
        self.messages: MessageManager = MessageManager(state=self)
        self.reactions: ReactionManager = ReactionManager(state=self)

    def setup(
        self,
        *,
        cache: Cache | None = None,
        http: HTTPClient | None = None,
        parser: Parser | None = None,
    ) -> State:
        if cache:
            self._cache = cache
        if http:
            self._http = http
        if parser:
            self.parser = parser
        return self

    @property
    def cache(self) -> Cache | None:
        return self._cache

    @property
    def http(self) -> HTTPClient:
        assert self._http, 'State has no HTTP client attached'
        return self._http

    @property
    def me(self) -> User | None:
        """Optional[:class:`User`]: The currently logged in bot user."""
        return self._me


__all__ = ('State',)
