from __future__ import annotations

import typing
import typing_extensions


class Emote(typing.TypedDict):
    id: int
    name: str
    url: str
    serverId: typing_extensions.NotRequired[str]
