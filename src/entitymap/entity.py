"""
The entity contract the marshaller relies on.

An entity is anything that can list its field names, return a value per
field, and build a new instance of itself from a field mapping. ``Record``
is a dict-backed implementation for callers without an entity model of
their own.
"""
from collections.abc import Mapping
from typing import Any, Protocol, Self, runtime_checkable

from libb import attrdict

__all__ = ['Entity', 'Record']


@runtime_checkable
class Entity(Protocol):

    def fields(self) -> list[str]:
        ...

    def __getitem__(self, field: str) -> Any:
        ...

    def make(self, data: Mapping[str, Any]) -> Self:
        ...


class Record(attrdict):
    """Dictionary entity with attribute access.

    >>> r = Record(name='x', active=True)
    >>> r.fields()
    ['name', 'active']
    >>> r.make({'name': 'y'}).name
    'y'
    """

    def fields(self) -> list[str]:
        return list(self.keys())

    def make(self, data: Mapping[str, Any]) -> Self:
        return type(self)(data)
