from __future__ import annotations

import typing
import typing_extensions


class ChatEmbedFooter(typing.TypedDict):
    icon_url: typing_extensions.NotRequired[str]
    text: str


class ChatEmbedMedia(typing.TypedDict):
    url: str


class ChatEmbedAuthor(typing.TypedDict):
    name: typing_extensions.NotRequired[str]
    url: typing_extensions.NotRequired[str]
    icon_url: typing_extensions.NotRequired[str]


class ChatEmbedField(typing.TypedDict):
    name: str
    value: str
    inline: typing_extensions.NotRequired[bool]


class ChatEmbed(typing.TypedDict):
    title: typing_extensions.NotRequired[str]
    description: typing_extensions.NotRequired[str]
    url: typing_extensions.NotRequired[str]
    color: typing_extensions.NotRequired[int]
    footer: typing_extensions.NotRequired[ChatEmbedFooter]
    timestamp: typing_extensions.NotRequired[str]
    thumbnail: typing_extensions.NotRequired[ChatEmbedMedia]
    image: typing_extensions.NotRequired[ChatEmbedMedia]
    author: typing_extensions.NotRequired[ChatEmbedAuthor]
    fields: typing_extensions.NotRequired[list[ChatEmbedField]]
