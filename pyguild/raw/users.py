from __future__ import annotations

import typing
import typing_extensions

UserType = typing.Literal['user', 'bot']


class UserStatus(typing.TypedDict):
    content: typing_extensions.NotRequired[str]
    emoteId: int


class User(typing.TypedDict):
    id: str
    type: typing_extensions.NotRequired[UserType]
    name: str
    avatar: typing_extensions.NotRequired[str]
    banner: typing_extensions.NotRequired[str]
    createdAt: str
    status: typing_extensions.NotRequired[UserStatus]


class UserSummary(typing.TypedDict):
    id: str
    type: typing_extensions.NotRequired[UserType]
    name: str
    avatar: typing_extensions.NotRequired[str]
