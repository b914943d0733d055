"""
Entity marshalling: whole entities to storable rows and back.

Each field is encoded with the codec for its column type. Type hint codes
produced by the string codec are collected into a map that is stored as
JSON in a reserved column of the row (``seneca`` by default). On read, the
hint map is parsed first and drives decoding of each column.
"""
import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd
from entitymap.entity import Entity
from entitymap.options import OMIT_FALSY, MapperOptions
from entitymap.registry import CodecRegistry
from entitymap.schema import table_name_of, type_name_for

logger = logging.getLogger(__name__)

__all__ = [
    'EntityMapper',
    'to_row',
    'from_row',
    'hint_map',
]

Row = dict[str, Any]


class EntityMapper:
    """Converts entities to rows and rows to entities.

    Stateless apart from its options and registry, so one instance can be
    shared freely.
    """

    def __init__(self, options: MapperOptions | None = None,
                 registry: CodecRegistry | None = None) -> None:
        self.options = options or MapperOptions()
        self.registry = registry or CodecRegistry.get_instance()

    def _codec(self, table_spec: Any, field: str):
        type_name = None
        table_name = table_name_of(table_spec)
        if table_name:
            type_name = self.registry.config.get_type_for_column(table_name, field)
        if type_name is None:
            type_name = type_name_for(table_spec, field)
        return self.registry.get_codec(type_name)

    def _is_empty(self, value: Any) -> bool:
        if value is None:
            return True
        if pd.api.types.is_list_like(value):
            return False
        if isinstance(value, str):
            return self.options.omit == OMIT_FALSY and not value
        if pd.api.types.is_scalar(value) and pd.isna(value):
            return True
        if self.options.omit == OMIT_FALSY:
            return not value
        return False

    def hint_map(self, row: Mapping[str, Any] | None) -> dict[str, str]:
        """Parse the type hint column of a row.

        A missing or empty hint column yields an empty map. Malformed hint
        text is logged and also yields an empty map.
        """
        if not row:
            return {}
        hints = row.get(self.options.hint_column)
        if not hints:
            return {}
        try:
            parsed = json.loads(hints)
        except (TypeError, ValueError):
            logger.warning(f'Ignoring malformed type hints: {hints!r}')
            return {}
        if not isinstance(parsed, dict):
            logger.warning(f'Ignoring type hints that are not an object: {hints!r}')
            return {}
        return parsed

    def to_row(self, entity: Entity | None, table_spec: Any) -> Row | None:
        """Create a storable row from an entity.

        Fields whose encoded value is empty (per ``options.omit``) are left
        out. Arrays and mappings are never empty; NaN and NA always are. The hint column is added only when some field needed a hint.
        """
        if entity is None:
            return None

        row: Row = {}
        types: dict[str, str] = {}

        for field in entity.fields():
            mapped = self._codec(table_spec, field).encode(entity[field])
            if self._is_empty(mapped.value):
                continue
            row[field] = mapped.value
            hint = mapped.get('type')
            if hint:
                types[field] = hint

        if types:
            row[self.options.hint_column] = json.dumps(types, separators=(',', ':'))

        return row

    def from_row(self, entity: Entity | None, row: Mapping[str, Any] | None,
                 table_spec: Any) -> Entity | None:
        """Create a new entity from a stored row.

        ``entity`` supplies the constructor (its ``make`` method); its own
        field values are not used.
        """
        if entity is None or row is None:
            return None

        hints = self.hint_map(row)
        data = {}
        for field, value in row.items():
            if field == self.options.hint_column:
                continue
            data[field] = self._codec(table_spec, field).decode(value, hints.get(field))

        return entity.make(data)

    def to_rows(self, entities: Iterable[Entity], table_spec: Any) -> list[Row]:
        """Convert several entities, dropping the None results."""
        rows = (self.to_row(entity, table_spec) for entity in entities)
        return [row for row in rows if row is not None]

    def from_rows(self, entity: Entity, rows: Iterable[Mapping[str, Any]],
                  table_spec: Any) -> list[Entity]:
        """Convert several rows into entities built from ``entity``."""
        return [self.from_row(entity, row, table_spec) for row in rows]


def to_row(entity: Entity | None, table_spec: Any,
           options: MapperOptions | None = None) -> Row | None:
    """Create a storable row from an entity.

    >>> from entitymap.entity import Record
    >>> spec = {'columns': {'active': {'type_name': 'NVARCHAR'}, 'name': {'type_name': 'NVARCHAR'}}}
    >>> to_row(Record(active=True, name='x'), spec)
    {'active': 'true', 'name': 'x', 'seneca': '{"active":"b"}'}
    """
    return EntityMapper(options).to_row(entity, table_spec)


def from_row(entity: Entity | None, row: Mapping[str, Any] | None,
             table_spec: Any, options: MapperOptions | None = None) -> Entity | None:
    """Create a new entity from a stored row.
    """
    return EntityMapper(options).from_row(entity, row, table_spec)


def hint_map(row: Mapping[str, Any] | None,
             options: MapperOptions | None = None) -> dict[str, str]:
    """Parse the type hint column of a row."""
    return EntityMapper(options).hint_map(row)
