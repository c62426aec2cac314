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
from urllib.parse import quote

HTTPMethod = typing.Literal['GET', 'POST', 'PATCH', 'DELETE', 'PUT']


class CompiledRoute:
    """Represents compiled Guilded API route."""

    __slots__ = ('route', 'args')

    def __init__(self, route: Route, /, **args: typing.Any) -> None:
        self.route: Route = route
        self.args: dict[str, typing.Any] = args

    def __repr__(self) -> str:
        return f'<CompiledRoute route={self.route!r} args={self.args!r}>'

    def __str__(self) -> str:
        return f'CompiledRoute({self.route}, **{self.args!r})'

    def build(self) -> str:
        return self.route.path.format_map({k: quote(str(v), safe='') for k, v in self.args.items()})


class Route:
    """Represents Guilded API route."""

    __slots__ = (
        'method',
        'path',
    )

    def __init__(self, method: HTTPMethod, path: str, /) -> None:
        self.method: HTTPMethod = method
        self.path: str = path

    def __repr__(self) -> str:
        return f'<Route method={self.method!r} path={self.path!r}>'

    def __str__(self) -> str:
        return f'{self.method} {self.path}'

    def compile(self, **args: typing.Any) -> CompiledRoute:
        """Compiles route."""
        return CompiledRoute(self, **args)


GET: typing.Final[HTTPMethod] = 'GET'
POST: typing.Final[HTTPMethod] = 'POST'
PATCH: typing.Final[HTTPMethod] = 'PATCH'
DELETE: typing.Final[HTTPMethod] = 'DELETE'
PUT: typing.Final[HTTPMethod] = 'PUT'

# Channels
CHANNELS_CHANNEL_FETCH: typing.Final[Route] = Route(GET, '/channels/{channel_id}')

# Chat messages
MESSAGES_MESSAGE_SEND: typing.Final[Route] = Route(POST, '/channels/{channel_id}/messages')
MESSAGES_MESSAGE_FETCH: typing.Final[Route] = Route(GET, '/channels/{channel_id}/messages/{message_id}')
MESSAGES_MESSAGE_EDIT: typing.Final[Route] = Route(PUT, '/channels/{channel_id}/messages/{message_id}')
MESSAGES_MESSAGE_DELETE: typing.Final[Route] = Route(DELETE, '/channels/{channel_id}/messages/{message_id}')

# Reactions
REACTIONS_REACTION_ADD: typing.Final[Route] = Route(
    PUT, '/channels/{channel_id}/messages/{message_id}/emotes/{emote_id}'
)
REACTIONS_REACTION_REMOVE: typing.Final[Route] = Route(
    DELETE, '/channels/{channel_id}/messages/{message_id}/emotes/{emote_id}'
)

# Servers
SERVERS_SERVER_FETCH: typing.Final[Route] = Route(GET, '/servers/{server_id}')
SERVERS_MEMBER_FETCH: typing.Final[Route] = Route(GET, '/servers/{server_id}/members/{user_id}')

__all__ = (
    'HTTPMethod',
    'CompiledRoute',
    'Route',
    'GET',
    'POST',
    'PATCH',
    'DELETE',
    'PUT',
    'CHANNELS_CHANNEL_FETCH',
    'MESSAGES_MESSAGE_SEND',
    'MESSAGES_MESSAGE_FETCH',
    'MESSAGES_MESSAGE_EDIT',
    'MESSAGES_MESSAGE_DELETE',
    'REACTIONS_REACTION_ADD',
    'REACTIONS_REACTION_REMOVE',
    'SERVERS_SERVER_FETCH',
    'SERVERS_MEMBER_FETCH',
)
