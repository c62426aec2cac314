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
import asyncio
import builtins
from inspect import isawaitable, signature
import logging
import typing

import aiohttp

from . import cache as caching, utils
from .cache import Cache, MapCache
from .core import UNDEFINED, UndefinedOr, build_member_key
from .errors import InvalidData
from .events import BaseEvent
from .http import HTTPClient
from .parser import Parser
from .state import State

if typing.TYPE_CHECKING:
    from collections.abc import AsyncIterable, Callable, Coroutine, Generator
    from types import TracebackType
    from typing_extensions import Self

    from . import raw
    from .cache import ProvideCacheContextIn
    from .channel import Channel
    from .events import (
        MessageCreateEvent,
        MessageDeleteEvent,
        MessageReactionAddEvent,
        MessageReactionRemoveEvent,
        MessageUpdateEvent,
        ReadyEvent,
        ServerChannelCreateEvent,
        ServerChannelDeleteEvent,
        ServerChannelUpdateEvent,
        ServerJoinEvent,
        ServerLeaveEvent,
        ServerMemberJoinEvent,
        ServerMemberRemoveEvent,
        ServerMemberUpdateEvent,
        ServerRolesUpdateEvent,
    )
    from .managers import (
        ChannelManager,
        MemberManager,
        MessageManager,
        ReactionManager,
        ServerManager,
        UserManager,
    )
    from .message import Message
    from .server import Member, Server
    from .user import User


_L = logging.getLogger(__name__)


def _session_factory(_) -> aiohttp.ClientSession:
    return aiohttp.ClientSession()


class EventHandler(ABC):
    """A handler for raw gateway payloads."""

    __slots__ = ()

    @abstractmethod
    def handle_raw(self, payload: raw.ClientEvent, /) -> utils.MaybeAwaitable[None]:
        """Handles a gateway envelope.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The envelope, in ``{"op": ..., "t": ..., "d": ..., "s": ...}`` shape.
        """
        ...


class ClientEventHandler(EventHandler):
    """The default event handler for the client.

    Every payload is parsed into an event, applied to the cache, and then
    handed to :meth:`Client.dispatch`. Cache is always updated before any listener
    gets to run, in the order payloads were passed to :meth:`.handle_raw`.
    """

    __slots__ = ('_client', '_state', 'dispatch', '_handlers')

    def __init__(self, client: Client) -> None:
        self._client = client
        self._state = client._state
        self.dispatch = client.dispatch

        self._handlers: dict[str, Callable[[typing.Any], BaseEvent]] = {
            'ChatMessageCreated': self.handle_chat_message_created,
            'ChatMessageUpdated': self.handle_chat_message_updated,
            'ChatMessageDeleted': self.handle_chat_message_deleted,
            'ChannelMessageReactionCreated': self.handle_channel_message_reaction_created,
            'ChannelMessageReactionDeleted': self.handle_channel_message_reaction_deleted,
            'ServerMemberJoined': self.handle_server_member_joined,
            'ServerMemberUpdated': self.handle_server_member_updated,
            'ServerMemberRemoved': self.handle_server_member_removed,
            'ServerRolesUpdated': self.handle_server_roles_updated,
            'ServerChannelCreated': self.handle_server_channel_created,
            'ServerChannelUpdated': self.handle_server_channel_updated,
            'ServerChannelDeleted': self.handle_server_channel_deleted,
            'BotServerMembershipCreated': self.handle_bot_server_membership_created,
            'BotServerMembershipDeleted': self.handle_bot_server_membership_deleted,
        }

    def handle_welcome(self, data: raw.ClientWelcomeEvent, /) -> ReadyEvent:
        return self._state.parser.parse_ready_event(data)

    def handle_chat_message_created(self, data: raw.ClientChatMessageCreatedEvent, /) -> MessageCreateEvent:
        return self._state.parser.parse_message_create_event(data)

    def handle_chat_message_updated(self, data: raw.ClientChatMessageUpdatedEvent, /) -> MessageUpdateEvent:
        return self._state.parser.parse_message_update_event(data)

    def handle_chat_message_deleted(self, data: raw.ClientChatMessageDeletedEvent, /) -> MessageDeleteEvent:
        return self._state.parser.parse_message_delete_event(data)

    def handle_channel_message_reaction_created(
        self, data: raw.ClientChannelMessageReactionCreatedEvent, /
    ) -> MessageReactionAddEvent:
        return self._state.parser.parse_message_reaction_add_event(data)

    def handle_channel_message_reaction_deleted(
        self, data: raw.ClientChannelMessageReactionDeletedEvent, /
    ) -> MessageReactionRemoveEvent:
        return self._state.parser.parse_message_reaction_remove_event(data)

    def handle_server_member_joined(self, data: raw.ClientServerMemberJoinedEvent, /) -> ServerMemberJoinEvent:
        return self._state.parser.parse_server_member_join_event(data)

    def handle_server_member_updated(self, data: raw.ClientServerMemberUpdatedEvent, /) -> ServerMemberUpdateEvent:
        return self._state.parser.parse_server_member_update_event(data)

    def handle_server_member_removed(self, data: raw.ClientServerMemberRemovedEvent, /) -> ServerMemberRemoveEvent:
        return self._state.parser.parse_server_member_remove_event(data)

    def handle_server_roles_updated(self, data: raw.ClientServerRolesUpdatedEvent, /) -> ServerRolesUpdateEvent:
        return self._state.parser.parse_server_roles_update_event(data)

    def handle_server_channel_created(self, data: raw.ClientServerChannelCreatedEvent, /) -> ServerChannelCreateEvent:
        return self._state.parser.parse_server_channel_create_event(data)

    def handle_server_channel_updated(self, data: raw.ClientServerChannelUpdatedEvent, /) -> ServerChannelUpdateEvent:
        return self._state.parser.parse_server_channel_update_event(data)

    def handle_server_channel_deleted(self, data: raw.ClientServerChannelDeletedEvent, /) -> ServerChannelDeleteEvent:
        return self._state.parser.parse_server_channel_delete_event(data)

    def handle_bot_server_membership_created(
        self, data: raw.ClientBotServerMembershipCreatedEvent, /
    ) -> ServerJoinEvent:
        return self._state.parser.parse_server_join_event(data)

    def handle_bot_server_membership_deleted(
        self, data: raw.ClientBotServerMembershipDeletedEvent, /
    ) -> ServerLeaveEvent:
        return self._state.parser.parse_server_leave_event(data)

    async def _handle_library_error(self, payload: raw.ClientEvent, exc: Exception, name: str, /) -> None:
        try:
            r = self._client.on_library_error(payload, exc)
            if isawaitable(r):
                await r
        except Exception:
            _L.exception('on_library_error (task: %s) raised an exception', name)

    def _apply(self, event: BaseEvent, /) -> None:
        event.before_dispatch()
        event.process()
        self.dispatch(event)

    def handle_raw(self, payload: raw.ClientEvent, /) -> None:
        """Handles a gateway envelope.

        The cache is updated before this method returns; listeners are run later,
        in a separate task.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The envelope.

        Raises
        ------
        :class:`InvalidData`
            The payload violated identity contract, or welcome payload could not be handled.
        """
        op = payload['op']

        if op == 1:
            _L.debug('Handling welcome')
            # Failing to handle welcome is fatal
            self._apply(self.handle_welcome(payload['d']))  # type: ignore
            return

        if op != 0:
            _L.debug('Received unknown opcode: %s. Discarding.', op)
            return

        type = payload.get('t') or ''
        try:
            handler = self._handlers[type]
        except KeyError:
            _L.debug('Received unknown event: %s. Discarding.', type)
            return

        _L.debug('Handling %s', type)
        try:
            self._apply(handler(payload['d']))
        except InvalidData:
            raise
        except Exception as exc:
            _L.exception('%s handler raised an exception', type)

            name = f'pyguild-library-error-{self._client._get_i()}'
            asyncio.create_task(self._handle_library_error(payload, exc, name), name=name)


# OOP in Python sucks.
ClientT = typing.TypeVar('ClientT', bound='Client')
EventT = typing.TypeVar('EventT', bound='BaseEvent')


def _parents_of(type: builtins.type[BaseEvent], /) -> tuple[builtins.type[BaseEvent], ...]:
    """Tuple[Type[:class:`.BaseEvent`], ...]: Returns parents of BaseEvent, including BaseEvent itself."""
    if type is BaseEvent:
        return (BaseEvent,)
    tmp: typing.Any = type.__mro__[:-1]
    return tmp


class EventSubscription(typing.Generic[EventT]):
    """Represents a event subscription.

    Attributes
    ----------
    client: :class:`Client`
        The client that this subscription is tied to.
    id: :class:`int`
        The ID of the subscription.
    callback: MaybeAwaitableFunc[[EventT], None]
        The callback.
    event: Type[EventT]
        The event type this subscription listens to.
    """

    __slots__ = (
        'client',
        'id',
        'callback',
        'event',
    )

    def __init__(
        self,
        *,
        client: Client,
        id: int,
        callback: utils.MaybeAwaitableFunc[[EventT], None],
        event: type[EventT],
    ) -> None:
        self.client: Client = client
        self.id: int = id
        self.callback: utils.MaybeAwaitableFunc[[EventT], None] = callback
        self.event: type[EventT] = event

    def __call__(self, arg: EventT, /) -> utils.MaybeAwaitable[None]:
        return self.callback(arg)

    async def _handle(self, arg: EventT, name: str, /) -> None:
        await self.client._run_callback(self.callback, arg, name)

    def remove(self) -> None:
        """Removes the event subscription."""
        self.client._handlers[self.event][0].pop(self.id, None)


class TemporarySubscription(typing.Generic[EventT]):
    """Represents a temporary event subscription, created by :meth:`Client.wait_for`."""

    __slots__ = (
        'client',
        'id',
        'event',
        'future',
        'check',
        'coro',
    )

    def __init__(
        self,
        *,
        client: Client,
        id: int,
        event: type[EventT],
        future: asyncio.Future[EventT],
        check: Callable[[EventT], utils.MaybeAwaitable[bool]],
        coro: Coroutine[typing.Any, typing.Any, EventT],
    ) -> None:
        self.client: Client = client
        self.id: int = id
        self.event: type[EventT] = event
        self.future: asyncio.Future[EventT] = future
        self.check: Callable[[EventT], utils.MaybeAwaitable[bool]] = check
        self.coro: Coroutine[typing.Any, typing.Any, EventT] = coro

    def __await__(self) -> Generator[typing.Any, typing.Any, EventT]:
        return self.coro.__await__()

    async def _handle(self, arg: EventT, name: str, /) -> bool:
        if self.future.done():
            return True
        try:
            can = self.check(arg)
            if isawaitable(can):
                can = await can

            if can:
                self.future.set_result(arg)
            return bool(can)
        except Exception as exc:
            try:
                self.future.set_exception(exc)
            except asyncio.InvalidStateError:
                pass
            _L.exception('Checker function (task: %s) raised an exception', name)
            return True

    def cancel(self) -> None:
        """Cancels the subscription."""
        self.future.cancel()
        self.client._handlers[self.event][1].pop(self.id, None)


class TemporarySubscriptionListIterator(typing.Generic[EventT]):
    __slots__ = ('subscription',)

    def __init__(self, *, subscription: TemporarySubscriptionList[EventT]) -> None:
        self.subscription: TemporarySubscriptionList[EventT] = subscription

    async def __anext__(self) -> EventT:
        subscription = self.subscription

        if subscription.exception is not None:
            raise subscription.exception

        if subscription.done.is_set() and subscription.queue.empty():
            raise StopAsyncIteration

        while True:
            index = await subscription.queue.get()

            if subscription.exception is not None:
                raise subscription.exception

            if index >= 0:
                break

        return subscription.result[index]


class TemporarySubscriptionList(typing.Generic[EventT]):
    """Represents a temporary subscription on multiple events.

    This can be ``await``'ed to get all events at once, or iterated with ``async for``
    to receive them as they come.
    """

    __slots__ = (
        'client',
        'id',
        'event',
        'done',
        'check',
        'result',
        'exception',
        'expected',
        'queue',
    )

    def __init__(
        self,
        *,
        client: Client,
        expected: int,
        id: int,
        event: type[EventT],
        check: Callable[[EventT], utils.MaybeAwaitable[bool]],
    ) -> None:
        self.client: Client = client
        self.id: int = id
        self.event: type[EventT] = event
        self.done: asyncio.Event = asyncio.Event()
        self.check: Callable[[EventT], utils.MaybeAwaitable[bool]] = check
        self.result: list[EventT] = []
        self.exception: typing.Optional[Exception] = None
        self.expected: int = expected

        self.queue: asyncio.Queue[int] = asyncio.Queue(expected + 1)

    async def wait(self) -> list[EventT]:
        if len(self.result) < self.expected:
            await self.done.wait()

            if self.exception is not None:
                raise self.exception

            if len(self.result) < self.expected:
                raise asyncio.TimeoutError('Timed out waiting.')

        return self.result

    def __await__(self) -> Generator[typing.Any, typing.Any, list[EventT]]:
        return self.wait().__await__()

    def __aiter__(self) -> TemporarySubscriptionListIterator[EventT]:
        return TemporarySubscriptionListIterator(subscription=self)

    async def _handle(self, arg: EventT, name: str, /) -> bool:
        if self.done.is_set():
            return True

        try:
            can = self.check(arg)
            if isawaitable(can):
                can = await can

            if can:
                self.result.append(arg)
                if len(self.result) >= self.expected:
                    self.done.set()
                self.queue.put_nowait(len(self.result) - 1)

            return self.done.is_set()
        except Exception as exc:
            _L.exception('Checker function (task: %s) raised an exception', name)
            self.exception = exc
            self.done.set()
            self.queue.put_nowait(-1)
            return True

    def cancel(self) -> None:
        """Cancels the subscription."""

        self.done.set()
        self.client._handlers[self.event][1].pop(self.id, None)


_DEFAULT_HANDLERS = ({}, {})


class Client:
    """A Guilded client.

    The client holds a :class:`State` with the entity managers, and an event handler
    which turns gateway payloads into cache updates and events. Connecting to the gateway
    is up to you: pass received payloads to :meth:`.handle_raw`, or an async iterable of them
    to :meth:`.start`.

    Parameters
    ----------
    token: :class:`str`
        The bot token.
    cache: Union[Callable[[:class:`Client`, :class:`State`], Optional[:class:`Cache`]], Optional[:class:`Cache`]]
        The cache to use. Pass ``None`` to disable caching. Defaults to :class:`MapCache`.
    http_base: Optional[:class:`str`]
        The base URL of the Guilded API.
    http: Optional[Callable[[:class:`Client`, :class:`State`], :class:`HTTPClient`]]
        The HTTP client factory.
    parser: Optional[Callable[[:class:`Client`, :class:`State`], :class:`Parser`]]
        The parser factory.
    handler: Optional[Callable[[:class:`Client`], :class:`EventHandler`]]
        The event handler factory. Defaults to :class:`ClientEventHandler`.
    state: Optional[Union[Callable[[:class:`Client`], :class:`State`], :class:`State`]]
        The state to use. If passed, the cache, HTTP and parser parameters are ignored.
    provide_cache_context_in: Optional[List[:class:`ProvideCacheContextIn`]]
        The methods/properties that do provide rich cache context.
    """

    __slots__ = (
        '_handler',
        '_handlers',
        '_i',
        '_state',
        '_token',
        '_types',
        'closed',
        'extra',
    )

    def __init__(
        self,
        *,
        token: str = '',
        cache: typing.Union[
            Callable[[Client, State], UndefinedOr[typing.Optional[Cache]]], UndefinedOr[typing.Optional[Cache]]
        ] = UNDEFINED,
        http_base: typing.Optional[str] = None,
        http: typing.Optional[Callable[[Client, State], HTTPClient]] = None,
        parser: typing.Optional[Callable[[Client, State], Parser]] = None,
        handler: typing.Optional[Callable[[Client], EventHandler]] = None,
        state: typing.Optional[typing.Union[Callable[[Client], State], State]] = None,
        provide_cache_context_in: typing.Optional[list[ProvideCacheContextIn]] = None,
    ) -> None:
        self.closed: bool = True
        # {Type[BaseEvent]: Tuple[{ID: EventSubscription}, {ID: TemporarySubscription | TemporarySubscriptionList}]}
        self._handlers: dict[
            type[BaseEvent],
            tuple[
                dict[int, EventSubscription[BaseEvent]],
                dict[int, typing.Union[TemporarySubscription[BaseEvent], TemporarySubscriptionList[BaseEvent]]],
            ],
        ] = {}
        # {Type[BaseEvent]: Tuple[Type[BaseEvent], ...]}
        self._types: dict[type[BaseEvent], tuple[type[BaseEvent], ...]] = {}
        self._i = 0

        self.extra = {}
        if state:
            if callable(state):
                self._state: State = state(self)
            else:
                self._state = state
        else:
            state = State(provide_cache_context_in=provide_cache_context_in)

            if callable(cache):
                cr = cache(self, state)
            else:
                cr = cache
            c = MapCache() if cr is UNDEFINED else cr

            if parser:
                state.setup(parser=parser(self, state))
            state.setup(
                cache=c,
                http=(
                    http(self, state)
                    if http
                    else HTTPClient(
                        token,
                        base=http_base,
                        session=_session_factory,
                        state=state,
                    )
                ),
            )
            self._state = state
        self._token: str = token
        self._handler: EventHandler = handler(self) if handler else ClientEventHandler(self)

    def _get_i(self) -> int:
        self._i += 1
        return self._i

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: typing.Optional[type[BaseException]],
        exc_value: typing.Optional[BaseException],
        traceback: typing.Optional[TracebackType],
        /,
    ) -> None:
        await self.close()

    async def on_user_error(self, event: BaseEvent) -> None:
        """Handles user errors that came from handlers.
        You can get current exception being raised via :func:`sys.exc_info`.

        By default, this logs exception.
        """
        _L.exception(
            'One of %s handlers raised an exception',
            event.__class__.__name__,
        )

    async def on_library_error(self, payload: raw.ClientEvent, exc: Exception, /) -> None:
        """Handles library errors. By default, this logs exception.

        .. note::
            This won't be called for :class:`InvalidData` or welcome payload failures, as they are fatal.
        """

        _L.exception('%s handler raised an exception', payload.get('t'), exc_info=exc)

    async def _run_callback(
        self, callback: Callable[[EventT], utils.MaybeAwaitable[None]], arg: EventT, name: str, /
    ) -> None:
        try:
            r = callback(arg)
            if isawaitable(r):
                await r
        except Exception:
            try:
                r = self.on_user_error(arg)
                if isawaitable(r):
                    await r
            except Exception:
                _L.exception('on_user_error (task: %s) raised an exception', name)

    async def _dispatch(self, types: tuple[type[BaseEvent], ...], event: BaseEvent, name: str, /) -> None:
        for type in types:
            handlers, temporary_handlers = self._handlers.get(type, _DEFAULT_HANDLERS)
            if _L.isEnabledFor(logging.DEBUG):
                _L.debug(
                    'Dispatching %s (%i handlers, originating from %s)',
                    type.__name__,
                    len(handlers),
                    event.__class__.__name__,
                )

            finished = []
            for handler in list(temporary_handlers.values()):
                if await handler._handle(event, name):
                    finished.append(handler.id)

            for id in finished:
                temporary_handlers.pop(id, None)

            for handler in list(handlers.values()):
                await handler._handle(event, name)

            event_name: typing.Optional[str] = getattr(type, 'event_name', None)
            if event_name:
                handler = getattr(self, 'on_' + event_name, None)
                if handler:
                    await self._run_callback(handler, event, name)

        handler = getattr(self, 'on_event', None)
        if handler:
            await self._run_callback(handler, event, name)

    def dispatch(self, event: BaseEvent, /) -> asyncio.Task[None]:
        """Dispatches a event.

        The event is not processed: by the time events received from Guilded
        are dispatched, the cache already reflects them.

        Examples
        --------

        Dispatch a event when someone sends silent message: ::

            from attrs import define, field
            import pyguild

            # ...


            @define(slots=True)
            class SilentMessageEvent(pyguild.BaseEvent):
                message: pyguild.Message = field(repr=True, kw_only=True)


            @client.on(pyguild.MessageCreateEvent)
            async def on_message_create(event):
                message = event.message
                if message.is_silent:
                    # Block until event gets fully handled.
                    await client.dispatch(SilentMessageEvent(message=message))

        Parameters
        ----------
        event: :class:`.BaseEvent`
            The event to dispatch.

        Returns
        -------
        :class:`asyncio.Task`
            The asyncio task.
        """

        et = builtins.type(event)
        try:
            types = self._types[et]
        except KeyError:
            types = self._types[et] = _parents_of(et)

        name = f'pyguild-dispatch-{self._get_i()}'
        return asyncio.create_task(self._dispatch(types, event, name), name=name)

    def handle_raw(self, payload: raw.ClientEvent, /) -> utils.MaybeAwaitable[None]:
        """Passes a gateway envelope to the event handler.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The envelope.
        """
        return self._handler.handle_raw(payload)

    def subscribe(
        self,
        event: type[EventT],
        /,
        callback: utils.MaybeAwaitableFunc[[EventT], None],
    ) -> EventSubscription[EventT]:
        """Subscribes to event.

        Parameters
        ----------
        event: Type[EventT]
            The type of the event.
        callback: MaybeAwaitableFunc[[EventT], None]
            The callback for the event.
        """
        sub: EventSubscription[EventT] = EventSubscription(
            client=self,
            id=self._get_i(),
            callback=callback,
            event=event,
        )

        # The actual generic of value type is same as key
        try:
            self._handlers[event][0][sub.id] = sub  # type: ignore
        except KeyError:
            self._handlers[event] = ({sub.id: sub}, {})  # type: ignore
        return sub

    def unsubscribe(
        self,
        event: type[EventT],
        callback: utils.MaybeAwaitableFunc[[EventT], None],
        /,
    ) -> list[EventSubscription[EventT]]:
        """Removes all subscriptions to event with given callback.

        Returns
        -------
        List[EventSubscription[EventT]]
            The removed subscriptions.
        """
        try:
            subscriptions = self._handlers[event][0]
        except KeyError:
            return []

        removed = [k for k, subscription in subscriptions.items() if subscription.callback == callback]
        return [subscriptions.pop(k) for k in removed]  # type: ignore

    def listen(
        self,
        event: typing.Optional[type[EventT]] = None,
        /,
    ) -> Callable[
        [utils.MaybeAwaitableFunc[[EventT], None]],
        EventSubscription[EventT],
    ]:
        """Register an event listener.

        There is alias called :meth:`on`.

        Examples
        --------

        Ping Pong: ::

            @client.listen()
            async def on_message_create(event: pyguild.MessageCreateEvent):
                message = event.message
                if message.content == '!ping':
                    await message.reply('pong!')


            # It returns :class:`EventSubscription`, so you can do ``on_message_create.remove()``

        Parameters
        ----------
        event: Optional[Type[EventT]]
            The event to listen to. If not provided, it is taken from annotation of first parameter.
        """

        def decorator(callback: utils.MaybeAwaitableFunc[[EventT], None], /) -> EventSubscription[EventT]:
            tmp = event

            if tmp is None:
                fs = signature(callback)

                typ = list(fs.parameters.values())[0]

                if typ.annotation is typ.empty:
                    raise TypeError('Cannot use listen() without event annotation type')

                try:
                    globalns = utils.unwrap_function(callback).__globals__
                except AttributeError:
                    globalns = {}

                tmp = utils.evaluate_annotation(typ.annotation, globalns, globalns, {})

            return self.subscribe(tmp, callback)  # type: ignore

        return decorator

    on = listen

    @typing.overload
    def wait_for(  # pyright: ignore[reportOverlappingOverload]
        self,
        event: type[EventT],
        /,
        *,
        check: typing.Optional[Callable[[EventT], utils.MaybeAwaitable[bool]]] = None,
        count: typing.Literal[1] = 1,
        timeout: typing.Optional[float] = None,
    ) -> TemporarySubscription[EventT]: ...

    @typing.overload
    def wait_for(
        self,
        event: type[EventT],
        /,
        *,
        check: typing.Optional[Callable[[EventT], utils.MaybeAwaitable[bool]]] = None,
        count: int = 1,
        timeout: typing.Optional[float] = None,
    ) -> TemporarySubscriptionList[EventT]: ...

    def wait_for(
        self,
        event: type[EventT],
        /,
        *,
        check: typing.Optional[Callable[[EventT], utils.MaybeAwaitable[bool]]] = None,
        count: int = 1,
        timeout: typing.Optional[float] = None,
    ) -> typing.Union[TemporarySubscription[EventT], TemporarySubscriptionList[EventT]]:
        """|coro|

        Waits for an event to be dispatched.

        This could be used to wait for a user to reply to a message,
        or to react to a message, or to edit a message in a self-contained
        way.

        The ``timeout`` parameter is passed onto :func:`asyncio.wait_for`. By default,
        it does not timeout. Note that this does propagate the
        :exc:`asyncio.TimeoutError` for you in case of timeout and is provided for
        ease of use.

        Examples
        --------

        Waiting for a user reply: ::

            @client.on(pyguild.MessageCreateEvent)
            async def on_message_create(event):
                message = event.message
                if message.content.startswith('$greet'):
                    await message.send('Say hello!')

                    def check(event):
                        return event.message.content == 'hello' and event.message.channel_id == message.channel_id

                    event = await client.wait_for(pyguild.MessageCreateEvent, check=check)
                    await message.send(f'Hello {event.message.author}!')

        Parameters
        ------------
        event: Type[EventT]
            The event to wait for.
        check: Optional[Callable[[EventT], MaybeAwaitable[:class:`bool`]]]
            A predicate to check what to wait for.
        count: :class:`int`
            The number of events to wait for. Defaults to ``1``.
        timeout: Optional[:class:`float`]
            The number of seconds to wait before timing out and raising
            :exc:`asyncio.TimeoutError`. Only used when ``count`` is ``1``.

        Raises
        -------
        TypeError
            If ``count`` parameter was negative or zero.
        asyncio.TimeoutError
            If a timeout is provided and it was reached.

        Returns
        --------
        Union[:class:`TemporarySubscription`, :class:`TemporarySubscriptionList`]
            The subscription. This can be ``await``'ed.
        """

        if count <= 0:
            raise TypeError('Cannot wait for zero events')

        if check is None:
            check = lambda _, /: True

        sub: typing.Union[TemporarySubscription[EventT], TemporarySubscriptionList[EventT]]
        if count > 1:
            sub = TemporarySubscriptionList(
                client=self,
                expected=count,
                id=self._get_i(),
                event=event,
                check=check,
            )
        else:
            future = asyncio.get_running_loop().create_future()
            sub = TemporarySubscription(
                client=self,
                id=self._get_i(),
                event=event,
                future=future,
                check=check,
                coro=asyncio.wait_for(future, timeout=timeout),
            )

        try:
            self._handlers[event][1][sub.id] = sub  # type: ignore
        except KeyError:
            self._handlers[event] = ({}, {sub.id: sub})  # type: ignore
        return sub

    def all_subscriptions(self) -> list[EventSubscription[BaseEvent]]:
        """List[EventSubscription[:class:`BaseEvent`]]: Returns all event subscriptions."""
        ret = []
        for v in self._handlers.values():
            ret.extend(v[0].values())
        return ret

    def subscriptions_for(
        self, event: type[EventT], /, *, include_subclasses: bool = False
    ) -> list[EventSubscription[EventT]]:
        """List[EventSubscription[EventT]]: Returns the subscriptions for event.

        Parameters
        ----------
        event: Type[EventT]
            The event to get subscriptions to.
        include_subclasses: :class:`bool`
            Whether to include subclassed events. Defaults to ``False``.
        """
        if include_subclasses:
            ret = []
            for k, v in self._handlers.items():
                if issubclass(k, event):
                    ret.extend(v[0].values())
            return ret

        try:
            return list(self._handlers[event][0].values())  # type: ignore
        except KeyError:
            return []

    def subscriptions_count_for(self, event: type[EventT], /, *, include_subclasses: bool = False) -> int:
        """:class:`int`: Returns the subscription count for event.

        Parameters
        ----------
        event: Type[EventT]
            The event to get subscription count to.
        include_subclasses: :class:`bool`
            Whether to include subclassed events. Defaults to ``False``.
        """
        if include_subclasses:
            return sum(len(v[0]) for k, v in self._handlers.items() if issubclass(k, event))

        try:
            return len(self._handlers[event][0])
        except KeyError:
            return 0

    @property
    def state(self) -> State:
        """:class:`State`: The state of the client."""
        return self._state

    @property
    def http(self) -> HTTPClient:
        """:class:`HTTPClient`: The HTTP client."""
        return self._state.http

    @property
    def cache(self) -> typing.Optional[Cache]:
        """Optional[:class:`Cache`]: The cache, if any."""
        return self._state.cache

    @property
    def handler(self) -> EventHandler:
        """:class:`EventHandler`: The event handler."""
        return self._handler

    @property
    def users(self) -> UserManager:
        """:class:`UserManager`: The users manager."""
        return self._state.users

    @property
    def servers(self) -> ServerManager:
        """:class:`ServerManager`: The servers manager."""
        return self._state.servers

    @property
    def channels(self) -> ChannelManager:
        """:class:`ChannelManager`: The channels manager."""
        return self._state.channels

    @property
    def members(self) -> MemberManager:
        """:class:`MemberManager`: The server members manager."""
        return self._state.members

    @property
    def messages(self) -> MessageManager:
        """:class:`MessageManager`: The messages manager."""
        return self._state.messages

    @property
    def reactions(self) -> ReactionManager:
        """:class:`ReactionManager`: The message reactions manager."""
        return self._state.reactions

    @property
    def me(self) -> typing.Optional[User]:
        """Optional[:class:`User`]: The bot user. ``None`` if welcome payload was not received yet."""
        return self._state.me

    @property
    def user(self) -> typing.Optional[User]:
        """Optional[:class:`User`]: The bot user. ``None`` if welcome payload was not received yet.

        Alias to :attr:`.me`.
        """
        return self._state.me

    def get_user(self, user_id: str, /) -> typing.Optional[User]:
        """Retrieves a user from cache.

        Parameters
        ----------
        user_id: :class:`str`
            The user ID.

        Returns
        -------
        Optional[:class:`User`]
            The user or ``None`` if not found.
        """
        return self._state.users.get(user_id, caching._USER_REQUEST)

    def get_server(self, server_id: str, /) -> typing.Optional[Server]:
        """Optional[:class:`Server`]: Retrieves a server from cache."""
        return self._state.servers.get(server_id, caching._USER_REQUEST)

    def get_channel(self, channel_id: str, /) -> typing.Optional[Channel]:
        """Optional[:class:`Channel`]: Retrieves a channel from cache."""
        return self._state.channels.get(channel_id, caching._USER_REQUEST)

    def get_message(self, message_id: str, /) -> typing.Optional[Message]:
        """Optional[:class:`Message`]: Retrieves a message from cache."""
        return self._state.messages.get(message_id, caching._USER_REQUEST)

    def get_member(self, server_id: str, user_id: str, /) -> typing.Optional[Member]:
        """Retrieves a server member from cache.

        Parameters
        ----------
        server_id: :class:`str`
            The server ID.
        user_id: :class:`str`
            The user ID.

        Returns
        -------
        Optional[:class:`Member`]
            The member or ``None`` if not found.
        """
        return self._state.members.get(build_member_key(server_id, user_id), caching._USER_REQUEST)

    async def fetch_server(self, server_id: str, /) -> Server:
        """|coro|

        Fetches a server. The result is stored in cache.
        """
        return await self._state.servers.fetch(server_id)

    async def fetch_channel(self, channel_id: str, /) -> Channel:
        """|coro|

        Fetches a channel. The result is stored in cache.
        """
        return await self._state.channels.fetch(channel_id)

    async def fetch_member(self, server_id: str, user_id: str, /) -> Member:
        """|coro|

        Fetches a server member. The member and its user are stored in cache.
        """
        return await self._state.members.fetch(server_id, user_id)

    async def fetch_message(self, channel_id: str, message_id: str, /) -> Message:
        """|coro|

        Fetches a message. The result is stored in cache.
        """
        return await self._state.messages.fetch(channel_id, message_id)

    async def start(self, source: AsyncIterable[raw.ClientEvent], /) -> None:
        """|coro|

        Feeds gateway envelopes from ``source`` into the client until it is exhausted
        or :meth:`.close` is called.

        Parameters
        ----------
        source: AsyncIterable[Dict[:class:`str`, Any]]
            The gateway envelopes, typically produced by a websocket reader.
        """
        self.closed = False
        async for payload in source:
            r = self.handle_raw(payload)
            if isawaitable(r):
                await r
            if self.closed:
                break

    async def close(self, *, http: bool = True) -> None:
        """|coro|

        Closes all HTTP sessions.
        """

        self.closed = True
        if http:
            await self.http.cleanup()

    def run(
        self,
        source: AsyncIterable[raw.ClientEvent],
        /,
        *,
        token: str = '',
        log_handler: UndefinedOr[typing.Optional[logging.Handler]] = UNDEFINED,
        log_formatter: UndefinedOr[logging.Formatter] = UNDEFINED,
        log_level: UndefinedOr[int] = UNDEFINED,
        root_logger: bool = False,
        asyncio_debug: bool = False,
        cleanup: bool = True,
    ) -> None:
        """A blocking call that abstracts away the event loop
        initialisation from you.

        If you want more control over the event loop then this
        function should not be used. Use :meth:`.start` coroutine.

        This function also sets up the logging library to make it easier
        for beginners to know what is going on with the library. For more
        advanced users, this can be disabled by passing ``None`` to
        the ``log_handler`` parameter.

        Parameters
        -----------
        source: AsyncIterable[Dict[:class:`str`, Any]]
            The gateway envelopes to feed.
        token: :class:`str`
            The token to use for HTTP requests. Defaults to token passed in constructor.
        log_handler: Optional[:class:`logging.Handler`]
            The log handler to use for the library's logger. If this is ``None``
            then the library will not set up anything logging related.

            The default log handler if not provided is :class:`logging.StreamHandler`.
        log_formatter: :class:`logging.Formatter`
            The formatter to use with the given log handler. If not provided then it
            defaults to a color based logging formatter (if available).
        log_level: :class:`int`
            The default log level for the library's logger. Defaults to ``logging.INFO``.
        root_logger: :class:`bool`
            Whether to set up the root logger rather than the library logger.
            Defaults to ``False``.
        asyncio_debug: :class:`bool`
            Whether to run with asyncio debug mode enabled or not.
            Defaults to ``False``.
        cleanup: :class:`bool`
            Whether to close aiohttp sessions or not. Defaults to ``True``.
        """

        if token:
            self.http.with_credentials(token)
        elif not self._token:
            raise TypeError('No token was provided')

        async def runner():
            try:
                await self.start(source)
            finally:
                if cleanup:
                    await self.close()

        if log_handler is not None:
            utils.setup_logging(
                handler=log_handler,
                formatter=log_formatter,
                level=log_level,
                root=root_logger,
            )

        try:
            asyncio.run(runner(), debug=asyncio_debug)
        except KeyboardInterrupt:
            return

    if typing.TYPE_CHECKING:

        def on_event(self, arg: BaseEvent, /) -> utils.MaybeAwaitable[None]: ...

        def on_ready(self, arg: ReadyEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_message_create(self, arg: MessageCreateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_message_update(self, arg: MessageUpdateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_message_delete(self, arg: MessageDeleteEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_message_reaction_add(self, arg: MessageReactionAddEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_message_reaction_remove(self, arg: MessageReactionRemoveEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_member_join(self, arg: ServerMemberJoinEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_member_update(self, arg: ServerMemberUpdateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_member_remove(self, arg: ServerMemberRemoveEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_roles_update(self, arg: ServerRolesUpdateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_channel_create(self, arg: ServerChannelCreateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_channel_update(self, arg: ServerChannelUpdateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_channel_delete(self, arg: ServerChannelDeleteEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_join(self, arg: ServerJoinEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_leave(self, arg: ServerLeaveEvent, /) -> utils.MaybeAwaitable[None]: ...


listen = Client.listen

__all__ = (
    'EventHandler',
    'ClientEventHandler',
    'EventSubscription',
    'TemporarySubscription',
    'TemporarySubscriptionListIterator',
    'TemporarySubscriptionList',
    'Client',
    'listen',
)
