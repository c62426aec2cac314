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

from inspect import isawaitable
import logging
import typing

import aiohttp
from multidict import CIMultiDict

from . import routes, utils
from .core import (
    UNDEFINED,
    UndefinedOr,
    __version__ as version,
)
from .errors import (
    HTTPException,
    Unauthorized,
    Forbidden,
    NotFound,
    Conflict,
    Ratelimited,
    InternalServerError,
    BadGateway,
)

if typing.TYPE_CHECKING:
    from . import raw
    from .state import State


DEFAULT_HTTP_USER_AGENT = f'pyguild (https://github.com/MCausc78/pyguild, {version})'


_L = logging.getLogger(__name__)
_STATUS_TO_ERRORS = {
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    409: Conflict,
    429: Ratelimited,
    500: InternalServerError,
    502: BadGateway,
}


class HTTPClient:
    """Represents an HTTP client sending HTTP requests to the Guilded API.

    Retrying and ratelimit handling are left to the caller: every non-2xx
    response is raised as :class:`HTTPException` subclass right away.

    Attributes
    ----------
    state: :class:`State`
        The state.
    token: :class:`str`
        The bot token in use.
    user_agent: :class:`str`
        The HTTP user agent used when making requests.
    """

    __slots__ = (
        '_base',
        '_session',
        'state',
        'token',
        'user_agent',
    )

    def __init__(
        self,
        token: typing.Optional[str] = None,
        *,
        base: typing.Optional[str] = None,
        state: State,
        session: typing.Union[utils.MaybeAwaitableFunc[[HTTPClient], aiohttp.ClientSession], aiohttp.ClientSession],
        user_agent: typing.Optional[str] = None,
    ) -> None:
        if base is None:
            base = 'https://www.guilded.gg/api/v1'
        self._base: str = base.rstrip('/')
        self._session: typing.Union[
            utils.MaybeAwaitableFunc[[HTTPClient], aiohttp.ClientSession], aiohttp.ClientSession
        ] = session
        self.state: State = state
        self.token: str = token or ''
        self.user_agent: str = user_agent or DEFAULT_HTTP_USER_AGENT

    @property
    def base(self) -> str:
        """:class:`str`: The base URL used for API requests."""
        return self._base

    def url_for(self, route: routes.CompiledRoute, /) -> str:
        """Returns a URL for route.

        Parameters
        ----------
        route: :class:`~routes.CompiledRoute`
            The route.

        Returns
        -------
        :class:`str`
            The URL for the route.
        """
        return self._base + route.build()

    def with_credentials(self, token: str, /) -> None:
        """Modifies HTTP client credentials.

        Parameters
        ----------
        token: :class:`str`
            The bot token.
        """
        self.token = token

    def add_headers(
        self,
        headers: CIMultiDict[typing.Any],
        route: routes.CompiledRoute,
        /,
        *,
        accept_json: bool = True,
        json_body: bool = False,
        token: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        user_agent: UndefinedOr[typing.Optional[str]] = UNDEFINED,
    ) -> utils.MaybeAwaitable[None]:
        if accept_json:
            headers['Accept'] = 'application/json'

        if json_body:
            headers['Content-type'] = 'application/json'

        if token is UNDEFINED:
            token = self.token

        if token:
            headers['Authorization'] = f'Bearer {token}'

        if user_agent is UNDEFINED:
            user_agent = self.user_agent

        if user_agent is not None:
            headers['User-Agent'] = user_agent

    async def send_request(
        self,
        session: aiohttp.ClientSession,
        /,
        *,
        method: str,
        url: str,
        headers: CIMultiDict[typing.Any],
        **kwargs,
    ) -> aiohttp.ClientResponse:
        return await session.request(
            method,
            url,
            headers=headers,
            **kwargs,
        )

    async def raw_request(
        self,
        route: routes.CompiledRoute,
        *,
        accept_json: bool = True,
        json: UndefinedOr[typing.Any] = UNDEFINED,
        token: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        user_agent: UndefinedOr[str] = UNDEFINED,
        **kwargs,
    ) -> aiohttp.ClientResponse:
        """|coro|

        Perform a HTTP request, with errors handling.

        Parameters
        ----------
        route: :class:`~routes.CompiledRoute`
            The route.
        accept_json: :class:`bool`
            Whether to explicitly receive JSON or not. Defaults to ``True``.
        json: UndefinedOr[typing.Any]
            The JSON payload to pass in.
        token: UndefinedOr[Optional[:class:`str`]]
            The token to use when requesting the route.
        user_agent: UndefinedOr[:class:`str`]
            The user agent to use for HTTP request. Defaults to :attr:`.user_agent`.

        Raises
        ------
        :class:`HTTPException`
            Something went wrong during request.

        Returns
        -------
        :class:`aiohttp.ClientResponse`
            The aiohttp response.
        """
        headers: CIMultiDict[str]

        try:
            headers = CIMultiDict(kwargs.pop('headers'))
        except KeyError:
            headers = CIMultiDict()

        tmp = self.add_headers(
            headers,
            route,
            accept_json=accept_json,
            json_body=json is not UNDEFINED,
            token=token,
            user_agent=user_agent,
        )
        if isawaitable(tmp):
            await tmp

        method = route.route.method
        path = route.build()
        url = self._base + path

        if json is not UNDEFINED:
            kwargs['data'] = utils.to_json(json)

        _L.debug('Sending request to %s %s with %s', method, path, kwargs.get('data'))

        session = self._session
        if callable(session):
            session = await utils.maybe_coroutine(session, self)
            # detect recursion
            if callable(session):
                raise TypeError(f'Expected aiohttp.ClientSession, not {type(session)!r}')
            # Do not call factory on future requests
            self._session = session

        response = await self.send_request(
            session,
            method=method,
            url=url,
            headers=headers,
            **kwargs,
        )

        if response.status >= 400:
            _L.debug('%s %s has returned %s', method, path, response.status)
            data = await utils._json_or_text(response)
            raise _STATUS_TO_ERRORS.get(response.status, HTTPException)(response, data)
        return response

    async def request(
        self,
        route: routes.CompiledRoute,
        *,
        accept_json: bool = True,
        json: UndefinedOr[typing.Any] = UNDEFINED,
        log: bool = True,
        token: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        user_agent: UndefinedOr[str] = UNDEFINED,
        **kwargs,
    ) -> typing.Any:
        """|coro|

        Perform a HTTP request, with errors handling.

        Parameters
        ----------
        route: :class:`~routes.CompiledRoute`
            The route.
        accept_json: :class:`bool`
            Whether to explicitly receive JSON or not. Defaults to ``True``.
        json: UndefinedOr[typing.Any]
            The JSON payload to pass in.
        log: :class:`bool`
            Whether to log successful response or not. Defaults to ``True``.
        token: UndefinedOr[Optional[:class:`str`]]
            The token to use when requesting the route.
        user_agent: UndefinedOr[:class:`str`]
            The user agent to use for HTTP request. Defaults to :attr:`.user_agent`.

        Raises
        ------
        :class:`HTTPException`
            Something went wrong during request.

        Returns
        -------
        typing.Any
            The parsed JSON response.
        """
        response = await self.raw_request(
            route,
            accept_json=accept_json,
            json=json,
            token=token,
            user_agent=user_agent,
            **kwargs,
        )
        result = await utils._json_or_text(response)

        method = response.request_info.method
        url = response.request_info.url
        if log:
            _L.debug('%s %s has received %s %s', method, url, response.status, result)
        else:
            _L.debug('%s %s has received %s [too large response]', method, url, response.status)

        response.close()
        return result

    async def cleanup(self) -> None:
        """|coro|

        Closes the aiohttp session.
        """
        if not callable(self._session):
            await self._session.close()

    # Channels control
    async def get_channel(self, channel_id: str, /) -> raw.ServerChannel:
        """|coro|

        Retrieves a server channel.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.

        Raises
        ------
        :class:`Forbidden`
            You cannot view this channel.
        :class:`NotFound`
            The channel does not exist.

        Returns
        -------
        Dict[:class:`str`, Any]
            The channel payload.
        """
        resp: raw.ServerChannelResponse = await self.request(
            routes.CHANNELS_CHANNEL_FETCH.compile(channel_id=channel_id)
        )
        return resp['channel']

    # Chat messages control
    async def create_message(self, channel_id: str, content: raw.ChatMessageContent, /) -> raw.ChatMessage:
        """|coro|

        Sends a message to the channel.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        content: Dict[:class:`str`, Any]
            The normalized message content.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to send messages in this channel.
        :class:`NotFound`
            The channel does not exist.

        Returns
        -------
        Dict[:class:`str`, Any]
            The message payload.
        """
        resp: raw.ChatMessageResponse = await self.request(
            routes.MESSAGES_MESSAGE_SEND.compile(channel_id=channel_id),
            json=content,
        )
        return resp['message']

    async def get_message(self, channel_id: str, message_id: str, /) -> raw.ChatMessage:
        """|coro|

        Retrieves a message.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        message_id: :class:`str`
            The message's ID.

        Raises
        ------
        :class:`NotFound`
            The message does not exist.

        Returns
        -------
        Dict[:class:`str`, Any]
            The message payload.
        """
        resp: raw.ChatMessageResponse = await self.request(
            routes.MESSAGES_MESSAGE_FETCH.compile(channel_id=channel_id, message_id=message_id)
        )
        return resp['message']

    async def update_message(
        self, channel_id: str, message_id: str, content: raw.ChatMessageContent, /
    ) -> raw.ChatMessage:
        """|coro|

        Edits a message.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        message_id: :class:`str`
            The message's ID.
        content: Dict[:class:`str`, Any]
            The normalized message content.

        Raises
        ------
        :class:`Forbidden`
            You cannot edit messages sent by other users.
        :class:`NotFound`
            The message does not exist.

        Returns
        -------
        Dict[:class:`str`, Any]
            The edited message payload.
        """
        resp: raw.ChatMessageResponse = await self.request(
            routes.MESSAGES_MESSAGE_EDIT.compile(channel_id=channel_id, message_id=message_id),
            json=content,
        )
        return resp['message']

    async def delete_message(self, channel_id: str, message_id: str, /) -> None:
        """|coro|

        Deletes a message.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        message_id: :class:`str`
            The message's ID.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to delete this message.
        :class:`NotFound`
            The message does not exist.
        """
        await self.request(routes.MESSAGES_MESSAGE_DELETE.compile(channel_id=channel_id, message_id=message_id))

    # Reactions control
    async def add_reaction(self, channel_id: str, message_id: str, emote_id: int, /) -> None:
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
        await self.request(
            routes.REACTIONS_REACTION_ADD.compile(channel_id=channel_id, message_id=message_id, emote_id=emote_id)
        )

    async def remove_reaction(self, channel_id: str, message_id: str, emote_id: int, /) -> None:
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
        await self.request(
            routes.REACTIONS_REACTION_REMOVE.compile(channel_id=channel_id, message_id=message_id, emote_id=emote_id)
        )

    # Servers control
    async def get_server(self, server_id: str, /) -> raw.Server:
        """|coro|

        Retrieves a server.

        Parameters
        ----------
        server_id: :class:`str`
            The server's ID.

        Raises
        ------
        :class:`Forbidden`
            You're not in this server.
        :class:`NotFound`
            The server does not exist.

        Returns
        -------
        Dict[:class:`str`, Any]
            The server payload.
        """
        resp: raw.ServerResponse = await self.request(routes.SERVERS_SERVER_FETCH.compile(server_id=server_id))
        return resp['server']

    async def get_server_member(self, server_id: str, user_id: str, /) -> raw.ServerMember:
        """|coro|

        Retrieves a server member.

        Parameters
        ----------
        server_id: :class:`str`
            The server's ID.
        user_id: :class:`str`
            The user's ID.

        Raises
        ------
        :class:`NotFound`
            The member does not exist.

        Returns
        -------
        Dict[:class:`str`, Any]
            The member payload.
        """
        resp: raw.ServerMemberResponse = await self.request(
            routes.SERVERS_MEMBER_FETCH.compile(server_id=server_id, user_id=user_id)
        )
        return resp['member']


__all__ = (
    'DEFAULT_HTTP_USER_AGENT',
    '_STATUS_TO_ERRORS',
    'HTTPClient',
)
