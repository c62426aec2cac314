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

from collections.abc import Mapping
from enum import Enum
import typing


class _Sentinel(Enum):
    """The library sentinels."""

    undefined = 'UNDEFINED'

    def __bool__(self) -> typing.Literal[False]:
        return False

    def __repr__(self) -> typing.Literal['UNDEFINED']:
        return self.value

    def __eq__(self, other: object, /) -> bool:
        return self is other

    def __hash__(self) -> int:
        return hash(self.value)


Undefined: typing.TypeAlias = typing.Literal[_Sentinel.undefined]
UNDEFINED: Undefined = _Sentinel.undefined


T = typing.TypeVar('T')
UndefinedOr = Undefined | T


class HasID(typing.Protocol):
    id: str


U = typing.TypeVar('U', bound='HasID')
IDOr = str | U


def resolve_id(resolvable: IDOr[U], /) -> str:
    if isinstance(resolvable, str):
        return resolvable
    return resolvable.id


KEY_SEPARATOR: typing.Final[str] = ':'


def _escape_key_part(part: str, /) -> str:
    return part.replace('\\', '\\\\').replace(KEY_SEPARATOR, '\\' + KEY_SEPARATOR)


def build_key(*parts: typing.Union[str, int]) -> str:
    """Builds a cache key out of multiple identity parts.

    Each part is escaped so that the separator cannot appear unescaped inside it,
    which makes distinct tuples of parts always produce distinct keys.

    Parameters
    ----------
    \\*parts: Union[:class:`str`, :class:`int`]
        The identity parts.

    Raises
    ------
    ValueError
        If no parts were given, or any part is empty.

    Returns
    -------
    :class:`str`
        The key.
    """
    if not parts:
        raise ValueError('Cannot build key without parts')

    result = []
    for part in parts:
        if isinstance(part, bool) or not isinstance(part, (str, int)):
            raise ValueError(f'Key part must be str or int, not {type(part).__name__}')
        s = str(part)
        if not s:
            raise ValueError('Key part cannot be empty')
        result.append(_escape_key_part(s))
    return KEY_SEPARATOR.join(result)


def build_member_key(server_id: str, user_id: str, /) -> str:
    """:class:`str`: Builds the cache key of a server member.

    Parameters
    ----------
    server_id: :class:`str`
        The server's ID.
    user_id: :class:`str`
        The user's ID.
    """
    return build_key(server_id, user_id)


def build_reaction_key(created_by: str, emote_id: int, /) -> str:
    """:class:`str`: Builds the cache key of a message reaction.

    Parameters
    ----------
    created_by: :class:`str`
        The ID of user who reacted.
    emote_id: :class:`int`
        The emote's ID.
    """
    return build_key(created_by, emote_id)


MessageContent = typing.Union[str, Mapping[str, typing.Any]]


def resolve_content_to_data(content: MessageContent, /) -> dict[str, typing.Any]:
    """Normalizes message content into the payload sent to the API.

    Plain strings become ``{'content': ...}``. Mappings are copied, a missing or
    ``None`` content becomes an empty string, and embed objects are serialized
    with their ``to_dict`` method.

    Parameters
    ----------
    content: Union[:class:`str`, Mapping[:class:`str`, Any]]
        The content to normalize.

    Returns
    -------
    Dict[:class:`str`, Any]
        The normalized payload.
    """
    if isinstance(content, str):
        return {'content': content}

    data = dict(content)
    if data.get('content') is None:
        data['content'] = ''

    embeds = data.get('embeds')
    if embeds is not None:
        data['embeds'] = [e.to_dict() if hasattr(e, 'to_dict') else dict(e) for e in embeds]

    reply_message_ids = data.get('replyMessageIds')
    if reply_message_ids is not None:
        data['replyMessageIds'] = list(reply_message_ids)

    return data


__version__: str = '0.1.0'

__all__ = (
    'Undefined',
    'UNDEFINED',
    'T',
    'UndefinedOr',
    'HasID',
    'IDOr',
    'resolve_id',
    'KEY_SEPARATOR',
    'build_key',
    'build_member_key',
    'build_reaction_key',
    'MessageContent',
    'resolve_content_to_data',
    '__version__',
)
