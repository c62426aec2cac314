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

if typing.TYPE_CHECKING:
    from . import raw


@define(slots=True)
class EmbedFooter:
    """Represents a footer of :class:`.Embed`."""

    text: str = field(repr=True, kw_only=True)
    """:class:`str`: The footer's text."""

    icon_url: typing.Optional[str] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`str`]: The URL of small image to display to the left of footer text."""

    def to_dict(self) -> raw.ChatEmbedFooter:
        payload: raw.ChatEmbedFooter = {'text': self.text}
        if self.icon_url is not None:
            payload['icon_url'] = self.icon_url
        return payload


@define(slots=True)
class EmbedMedia:
    """Represents an image or thumbnail of :class:`.Embed`."""

    url: str = field(repr=True, kw_only=True)
    """:class:`str`: The URL of the media."""

    def to_dict(self) -> raw.ChatEmbedMedia:
        return {'url': self.url}


@define(slots=True)
class EmbedAuthor:
    """Represents an author of :class:`.Embed`."""

    name: typing.Optional[str] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`str`]: The name of the author."""

    url: typing.Optional[str] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`str`]: The URL to linkify the author's name with."""

    icon_url: typing.Optional[str] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`str`]: The URL of small image to display to the left of author's name."""

    def to_dict(self) -> raw.ChatEmbedAuthor:
        payload: raw.ChatEmbedAuthor = {}
        if self.name is not None:
            payload['name'] = self.name
        if self.url is not None:
            payload['url'] = self.url
        if self.icon_url is not None:
            payload['icon_url'] = self.icon_url
        return payload


@define(slots=True)
class EmbedField:
    """Represents a field of :class:`.Embed`."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The field's header."""

    value: str = field(repr=True, kw_only=True)
    """:class:`str`: The field's content."""

    inline: bool = field(default=False, repr=True, kw_only=True)
    """:class:`bool`: Whether the field should wrap beside other inline fields."""

    def to_dict(self) -> raw.ChatEmbedField:
        payload: raw.ChatEmbedField = {'name': self.name, 'value': self.value}
        if self.inline:
            payload['inline'] = True
        return payload


@define(slots=True)
class Embed:
    """Represents a rich chat embed.

    Embeds are replaced wholesale when the message is updated, they are never
    mutated in place by the library.
    """

    title: typing.Optional[str] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`str`]: The main header of the embed."""

    description: typing.Optional[str] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`str`]: The subtext of the embed."""

    url: typing.Optional[str] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`str`]: The URL to linkify the title with."""

    color: typing.Optional[int] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`int`]: The integer color of the embed's left border."""

    footer: typing.Optional[EmbedFooter] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.EmbedFooter`]: The embed footer."""

    timestamp: typing.Optional[datetime] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: The timestamp to put in the footer."""

    thumbnail: typing.Optional[EmbedMedia] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.EmbedMedia`]: The image shown to the right of the main content."""

    image: typing.Optional[EmbedMedia] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.EmbedMedia`]: The image shown below the main content."""

    author: typing.Optional[EmbedAuthor] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.EmbedAuthor`]: The embed author."""

    fields: list[EmbedField] = field(factory=list, repr=True, kw_only=True)
    """List[:class:`.EmbedField`]: The embed fields."""

    def to_dict(self) -> raw.ChatEmbed:
        """Dict[:class:`str`, Any]: Converts the embed into the payload accepted by the API."""
        payload: raw.ChatEmbed = {}
        if self.title is not None:
            payload['title'] = self.title
        if self.description is not None:
            payload['description'] = self.description
        if self.url is not None:
            payload['url'] = self.url
        if self.color is not None:
            payload['color'] = self.color
        if self.footer is not None:
            payload['footer'] = self.footer.to_dict()
        if self.timestamp is not None:
            payload['timestamp'] = self.timestamp.isoformat()
        if self.thumbnail is not None:
            payload['thumbnail'] = self.thumbnail.to_dict()
        if self.image is not None:
            payload['image'] = self.image.to_dict()
        if self.author is not None:
            payload['author'] = self.author.to_dict()
        if self.fields:
            payload['fields'] = [f.to_dict() for f in self.fields]
        return payload


__all__ = (
    'EmbedFooter',
    'EmbedMedia',
    'EmbedAuthor',
    'EmbedField',
    'Embed',
)
