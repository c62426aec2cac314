from __future__ import annotations

import typing
import typing_extensions

from .users import User


class ServerMember(typing.TypedDict):
    user: User
    roleIds: list[int]
    nickname: typing_extensions.NotRequired[str]
    joinedAt: str
    isOwner: typing_extensions.NotRequired[bool]


class PartialServerMember(typing.TypedDict):
    id: str
    nickname: typing_extensions.NotRequired[typing.Optional[str]]


class ServerMemberRoleIds(typing.TypedDict):
    userId: str
    roleIds: list[int]


class ServerMemberResponse(typing.TypedDict):
    member: ServerMember
