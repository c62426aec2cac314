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
import weakref

from attrs import define, field

from .errors import InvalidData, PyguildError

if typing.TYPE_CHECKING:
    from attrs import Attribute

    from .state import State


def _validate_id(instance: Base, attribute: Attribute[str], value: typing.Any, /) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidData(f'{instance.__class__.__name__} requires non-empty string ID, got {value!r}')


@define(slots=True)
class Base:
    """The base class for all cached Guilded entities.

    The entity holds only a weak reference to its :class:`.State`, so cached
    entities never keep the client alive on their own.
    """

    _state_ref: weakref.ReferenceType[State] = field(
        repr=False,
        kw_only=True,
        alias='state',
        converter=weakref.ref,
        eq=False,
    )

    id: str = field(repr=True, kw_only=True, validator=_validate_id)
    """:class:`str`: The ID of the entity. For entities identified by multiple fields, this is the composite key."""

    @property
    def state(self) -> State:
        """:class:`.State`: The state that controls this entity."""
        state = self._state_ref()
        if state is None:
            raise PyguildError(f'State of {self.__class__.__name__} {self.id} is no longer alive')
        return state

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object, /) -> bool:
        return self is other or isinstance(other, self.__class__) and self.id == other.id


__all__ = ('Base',)
