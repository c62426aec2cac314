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

from attrs import define, field


@define(slots=True, frozen=True)
class Emote:
    """Represents an emote on Guilded.

    Emotes are plain values: they are not cached, and two emotes with same ID are equal.
    """

    id: int = field(repr=True, kw_only=True)
    """:class:`int`: The emote's ID."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The emote's name."""

    url: str = field(repr=False, kw_only=True)
    """:class:`str`: The URL to the emote image."""

    server_id: typing.Optional[str] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`str`]: The server's ID the emote was created in, if it is custom emote."""

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object, /) -> bool:
        return self is other or isinstance(other, Emote) and self.id == other.id

    def __str__(self) -> str:
        return f':{self.name}:'

    @property
    def is_custom(self) -> bool:
        """:class:`bool`: Whether the emote was uploaded to a server."""
        return self.server_id is not None


ResolvableEmote = typing.Union[Emote, int]


def resolve_emote(resolvable: ResolvableEmote, /) -> int:
    """:class:`int`: Resolves an emote's ID from parameter."""
    if isinstance(resolvable, Emote):
        return resolvable.id
    return resolvable


__all__ = ('Emote', 'ResolvableEmote', 'resolve_emote')
